"""Static page content endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..auth import get_current_admin
from ..database import allocate_id, get_db
from ..envelope import ok
from ..models import Page, PageBlock
from ..schemas import PageBlockOut, PageBlocksUpdate, PageOut
from ..services.article_sections import sanitize_text

router = APIRouter(prefix="/pages", tags=["pages"], dependencies=[Depends(get_current_admin)])


def _get_page_or_404(db: Session, page_id: int) -> Page:
    page = db.query(Page).filter(Page.id == page_id).first()
    if not page:
        raise HTTPException(status_code=404, detail="Page not found")
    return page


def _page_blocks(db: Session, page_id: int) -> list[PageBlockOut]:
    blocks = db.query(PageBlock).filter(PageBlock.page_id == page_id).order_by(PageBlock.id).all()
    return [PageBlockOut.model_validate(block) for block in blocks]


@router.get("")
def list_pages(db: Session = Depends(get_db)):
    return ok([PageOut.model_validate(page) for page in db.query(Page).order_by(Page.name).all()])


@router.get("/{page_id}/contents")
def list_page_contents(page_id: int, db: Session = Depends(get_db)):
    _get_page_or_404(db, page_id)
    return ok(_page_blocks(db, page_id))


@router.put("/{page_id}/contents")
def update_page_contents(page_id: int, payload: PageBlocksUpdate, db: Session = Depends(get_db)):
    """Save every submitted block of a page in one transaction."""
    _get_page_or_404(db, page_id)
    ids = [block.id for block in payload.blocks]
    blocks = {
        block.id: block
        for block in db.query(PageBlock).filter(PageBlock.page_id == page_id, PageBlock.id.in_(ids)).all()
    }
    missing = [block_id for block_id in ids if block_id not in blocks]
    if missing:
        raise HTTPException(status_code=404, detail=f"Content blocks not found: {missing}")
    for update in payload.blocks:
        blocks[update.id].content = sanitize_text(update.content)
    db.commit()
    return ok(_page_blocks(db, page_id), message="Page content updated successfully")


@router.post("/{page_id}/contents", status_code=201)
def add_page_content(page_id: int, db: Session = Depends(get_db)):
    """Append an empty content block to a page."""
    _get_page_or_404(db, page_id)
    block = PageBlock(id=allocate_id(db, PageBlock.id), page_id=page_id, content="")
    db.add(block)
    db.commit()
    db.refresh(block)
    return ok(PageBlockOut.model_validate(block), message="Content block added successfully")


@router.delete("/{page_id}/contents/{block_id}")
def delete_page_content(page_id: int, block_id: int, db: Session = Depends(get_db)):
    block = db.query(PageBlock).filter(PageBlock.id == block_id, PageBlock.page_id == page_id).first()
    if not block:
        raise HTTPException(status_code=404, detail="Content block not found")
    db.delete(block)
    db.commit()
    return ok(message="Content block deleted successfully")
