"""Article endpoints."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..auth import get_current_admin
from ..config import Settings, get_settings
from ..database import get_db
from ..envelope import ok
from ..schemas import ArticleCreate, ArticleOut, ArticleUpdate, BulkDeleteRequest, FlagUpdate
from ..use_cases.publishing import (
    bulk_delete_articles_use_case,
    create_articles_use_case,
    delete_article_use_case,
    get_article_use_case,
    list_articles_use_case,
    set_article_scrolling_use_case,
    update_article_use_case,
)

router = APIRouter(prefix="/articles", tags=["articles"], dependencies=[Depends(get_current_admin)])


@router.get("")
def list_articles(
    page: int = Query(1, ge=1),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return ok(list_articles_use_case(db=db, page=page, limit=limit))


@router.post("", status_code=201)
def create_articles(
    payload: ArticleCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Store one article per <h4> section of the submitted body."""
    articles = create_articles_use_case(db=db, settings=settings, content=payload.content, raw_date=payload.date)
    return ok(
        [ArticleOut.model_validate(article) for article in articles],
        message=f"{len(articles)} articles added successfully",
    )


@router.post("/bulk-delete")
def bulk_delete_articles(payload: BulkDeleteRequest, db: Session = Depends(get_db)):
    deleted = bulk_delete_articles_use_case(db=db, article_ids=payload.ids)
    return ok({"deleted": deleted}, message=f"{deleted} articles deleted successfully")


@router.get("/{article_id}")
def get_article(article_id: int, db: Session = Depends(get_db)):
    return ok(ArticleOut.model_validate(get_article_use_case(db=db, article_id=article_id)))


@router.put("/{article_id}")
def update_article(article_id: int, payload: ArticleUpdate, db: Session = Depends(get_db)):
    article = update_article_use_case(db=db, article_id=article_id, title=payload.title, content=payload.content)
    return ok(ArticleOut.model_validate(article), message="Article updated successfully")


@router.patch("/{article_id}/scrolling")
def update_article_scrolling(article_id: int, payload: FlagUpdate, db: Session = Depends(get_db)):
    article = set_article_scrolling_use_case(db=db, article_id=article_id, scrolling=payload.value)
    return ok(ArticleOut.model_validate(article), message="Scrolling status updated successfully")


@router.delete("/{article_id}")
def delete_article(article_id: int, db: Session = Depends(get_db)):
    delete_article_use_case(db=db, article_id=article_id)
    return ok(message="Article deleted successfully")
