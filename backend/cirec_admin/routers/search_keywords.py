"""Search keyword suggestion endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..auth import get_current_admin
from ..database import allocate_id, get_db
from ..envelope import ok
from ..models import SearchKeyword
from ..schemas import FlagUpdate, SearchKeywordIn, SearchKeywordOut, SearchKeywordUpdate

router = APIRouter(prefix="/search-keywords", tags=["search-keywords"], dependencies=[Depends(get_current_admin)])


def _to_out(keyword: SearchKeyword) -> SearchKeywordOut:
    return SearchKeywordOut(
        id=keyword.id,
        user_keyword=keyword.user_keyword,
        suggested_keyword=keyword.suggested_keyword,
        enabled=bool(keyword.display),
    )


def _get_keyword_or_404(db: Session, keyword_id: int) -> SearchKeyword:
    keyword = db.query(SearchKeyword).filter(SearchKeyword.id == keyword_id).first()
    if not keyword:
        raise HTTPException(status_code=404, detail="Search keyword not found")
    return keyword


@router.get("")
def list_keywords(db: Session = Depends(get_db)):
    keywords = db.query(SearchKeyword).order_by(SearchKeyword.user_keyword).all()
    return ok([_to_out(keyword) for keyword in keywords])


@router.post("", status_code=201)
def create_keyword(payload: SearchKeywordIn, db: Session = Depends(get_db)):
    user_keyword = payload.user_keyword.strip()
    exists = db.query(SearchKeyword.id).filter(SearchKeyword.user_keyword == user_keyword).first()
    if exists:
        raise HTTPException(status_code=409, detail="Search keyword already exists")
    keyword = SearchKeyword(
        id=allocate_id(db, SearchKeyword.id),
        user_keyword=user_keyword,
        suggested_keyword=payload.suggested_keyword.strip(),
        display=payload.enabled,
    )
    db.add(keyword)
    db.commit()
    db.refresh(keyword)
    return ok(_to_out(keyword), message="Search keyword added successfully")


@router.put("/{keyword_id}")
def update_keyword(keyword_id: int, payload: SearchKeywordUpdate, db: Session = Depends(get_db)):
    keyword = _get_keyword_or_404(db, keyword_id)
    keyword.suggested_keyword = payload.suggested_keyword.strip()
    keyword.display = payload.enabled
    db.commit()
    db.refresh(keyword)
    return ok(_to_out(keyword), message="Search keyword updated successfully")


@router.patch("/{keyword_id}/display")
def update_keyword_display(keyword_id: int, payload: FlagUpdate, db: Session = Depends(get_db)):
    keyword = _get_keyword_or_404(db, keyword_id)
    keyword.display = payload.value
    db.commit()
    return ok(_to_out(keyword), message="Search keyword status updated successfully")


@router.delete("/{keyword_id}")
def delete_keyword(keyword_id: int, db: Session = Depends(get_db)):
    keyword = _get_keyword_or_404(db, keyword_id)
    db.delete(keyword)
    db.commit()
    return ok(message="Search keyword deleted successfully")
