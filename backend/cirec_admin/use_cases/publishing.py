"""Periodical publishing use-cases: PDF news series, web issues and articles."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import BinaryIO

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import Settings
from ..database import allocate_id
from ..domain_errors import DomainError
from ..models import Article, CisNews, MonthlyNews, WebIssue
from ..schemas import ArticleListPage, ArticleOut, IssueInitialData, WebIssueOut
from ..services.article_sections import sanitize_text, split_sections
from ..services.issue_numbering import (
    MONTH_LABELS,
    issue_number,
    issue_title,
    pdf_filename,
    validate_month,
    validate_year,
)
from ..storage import FileStorage
from .entitlements import utc_now

logger = logging.getLogger(__name__)

_PDF_EXTENSION = ".pdf"


@dataclass(frozen=True)
class PdfSeries:
    """A periodical published as one PDF per (month, year)."""

    name: str
    model: type
    directory: Path
    epoch_year: int
    max_upload_size: int
    min_year: int
    max_year: int

    def storage(self) -> FileStorage:
        return FileStorage(self.directory, max_size=self.max_upload_size)


def monthly_news_series(settings: Settings) -> PdfSeries:
    return PdfSeries(
        name="monthly news",
        model=MonthlyNews,
        directory=settings.news_pdf_dir,
        epoch_year=settings.MONTHLY_NEWS_EPOCH_YEAR,
        max_upload_size=settings.MAX_PDF_UPLOAD_SIZE,
        min_year=settings.PERIODICAL_MIN_YEAR,
        max_year=settings.PERIODICAL_MAX_YEAR,
    )


def cis_news_series(settings: Settings) -> PdfSeries:
    return PdfSeries(
        name="CIS news",
        model=CisNews,
        directory=settings.cis_news_pdf_dir,
        epoch_year=settings.CIS_NEWS_EPOCH_YEAR,
        max_upload_size=settings.MAX_CIS_PDF_UPLOAD_SIZE,
        min_year=settings.PERIODICAL_MIN_YEAR,
        max_year=settings.PERIODICAL_MAX_YEAR,
    )


def _validate_period(month: int, year: int, *, min_year: int, max_year: int) -> None:
    try:
        validate_month(month)
        validate_year(year, min_year=min_year, max_year=max_year)
    except ValueError as exc:
        raise DomainError(code="INVALID_PERIOD", http_status=400, message=str(exc)) from exc


def _require_pdf(filename: str | None) -> None:
    if not filename or Path(filename).suffix.lower() != _PDF_EXTENSION:
        raise DomainError(code="INVALID_FILE_TYPE", http_status=400, message="Please upload a PDF file")


def _duplicate_period(series_name: str, month: int, year: int) -> DomainError:
    return DomainError(
        code="PERIODICAL_EXISTS",
        http_status=409,
        message=f"An issue of {series_name} already exists for {month:02d}/{year}. Use update instead.",
        details={"month": month, "year": year},
    )


# PDF series


def list_periodicals_use_case(*, db: Session, series: PdfSeries) -> list:
    model = series.model
    return db.query(model).order_by(model.year, model.month).all()


def get_periodical_use_case(*, db: Session, series: PdfSeries, item_id: int):
    model = series.model
    item = db.query(model).filter(model.id == item_id).first()
    if item is None:
        raise DomainError(code="PERIODICAL_NOT_FOUND", http_status=404, message="Issue not found")
    return item


def _find_period(db: Session, model, month: int, year: int, *, exclude_id: int | None = None):
    query = db.query(model).filter(model.month == month, model.year == year)
    if exclude_id is not None:
        query = query.filter(model.id != exclude_id)
    return query.first()


def create_periodical_use_case(
    *,
    db: Session,
    series: PdfSeries,
    month: int,
    year: int,
    for_sample: bool,
    upload: BinaryIO,
    upload_filename: str | None,
):
    """Store the PDF under its canonical name and insert the issue row."""
    _validate_period(month, year, min_year=series.min_year, max_year=series.max_year)
    _require_pdf(upload_filename)
    model = series.model
    if _find_period(db, model, month, year) is not None:
        raise _duplicate_period(series.name, month, year)

    number = issue_number(month, year, series.epoch_year)
    filename = pdf_filename(month, year)
    storage = series.storage()
    storage.write(filename, upload)

    item = model(
        id=allocate_id(db, model.id),
        title=issue_title(number),
        issue_no=number,
        pdf_link=filename,
        for_sample=for_sample,
        month=month,
        year=year,
        created_at=utc_now(),
    )
    db.add(item)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        storage.delete(filename)
        raise
    db.refresh(item)
    logger.info("Published %s issue %s (%s)", series.name, number, filename)
    return item


def update_periodical_use_case(
    *,
    db: Session,
    series: PdfSeries,
    item_id: int,
    month: int,
    year: int,
    for_sample: bool,
    upload: BinaryIO | None = None,
    upload_filename: str | None = None,
):
    """Re-number an issue and optionally replace its PDF.

    The stored file always follows the canonical name of the issue period:
    without an upload, a period change renames the existing file.
    """
    item = get_periodical_use_case(db=db, series=series, item_id=item_id)
    _validate_period(month, year, min_year=series.min_year, max_year=series.max_year)
    model = series.model
    if _find_period(db, model, month, year, exclude_id=item_id) is not None:
        raise _duplicate_period(series.name, month, year)
    if upload is not None:
        _require_pdf(upload_filename)

    storage = series.storage()
    previous_link = item.pdf_link
    new_link = pdf_filename(month, year)
    renamed = False
    if upload is not None:
        storage.write(new_link, upload)
    elif previous_link and previous_link != new_link:
        renamed = storage.rename(previous_link, new_link)

    number = issue_number(month, year, series.epoch_year)
    item.pdf_link = new_link
    item.title = issue_title(number)
    item.issue_no = number
    item.for_sample = for_sample
    item.month = month
    item.year = year
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        if upload is not None and new_link != previous_link:
            storage.delete(new_link)
        elif renamed:
            storage.rename(new_link, previous_link)
        raise
    db.refresh(item)

    if upload is not None and previous_link and previous_link != new_link:
        storage.delete(previous_link)
    return item


def set_periodical_sample_use_case(*, db: Session, series: PdfSeries, item_id: int, for_sample: bool):
    item = get_periodical_use_case(db=db, series=series, item_id=item_id)
    item.for_sample = for_sample
    db.commit()
    db.refresh(item)
    return item


def delete_periodical_use_case(*, db: Session, series: PdfSeries, item_id: int) -> None:
    """Delete the row; a file that cannot be removed only produces a warning."""
    item = get_periodical_use_case(db=db, series=series, item_id=item_id)
    filename = item.pdf_link
    db.delete(item)
    db.commit()
    if filename:
        series.storage().delete(filename)


# Web issues


def issue_initial_data(settings: Settings, today: date | None = None) -> IssueInitialData:
    current = today or date.today()
    return IssueInitialData(
        years=list(range(settings.PERIODICAL_MIN_YEAR, settings.PERIODICAL_MAX_YEAR + 1)),
        months=list(MONTH_LABELS),
        current_year=current.year,
        current_month=current.month,
    )


def get_web_issue_use_case(*, db: Session, year: int, month: int) -> WebIssueOut:
    issue = db.query(WebIssue).filter(WebIssue.year == year, WebIssue.month == month).first()
    if issue is None:
        return WebIssueOut(month=month, year=year)
    return WebIssueOut.model_validate(issue)


def create_web_issue_use_case(*, db: Session, settings: Settings, month: int, year: int, content: str) -> WebIssue:
    _validate_period(month, year, min_year=settings.PERIODICAL_MIN_YEAR, max_year=settings.PERIODICAL_MAX_YEAR)
    if _find_period(db, WebIssue, month, year) is not None:
        raise _duplicate_period("web issues", month, year)

    number = issue_number(month, year, settings.ISSUE_EPOCH_YEAR)
    issue = WebIssue(
        id=allocate_id(db, WebIssue.id),
        title=issue_title(number),
        issue_no=number,
        content=sanitize_text(content),
        month=month,
        year=year,
        created_at=utc_now(),
    )
    db.add(issue)
    db.commit()
    db.refresh(issue)
    return issue


def update_web_issue_use_case(*, db: Session, year: int, month: int, content: str) -> WebIssue:
    issue = db.query(WebIssue).filter(WebIssue.year == year, WebIssue.month == month).first()
    if issue is None:
        raise DomainError(code="ISSUE_NOT_FOUND", http_status=404, message="Issue not found")
    issue.content = sanitize_text(content)
    db.commit()
    db.refresh(issue)
    return issue


# Articles


def parse_article_date(raw: str) -> tuple[int, int]:
    """Return (month, year) of an ``MM/DD/YYYY`` date."""
    try:
        parsed = datetime.strptime(raw.strip(), "%m/%d/%Y")
    except ValueError as exc:
        raise DomainError(
            code="INVALID_DATE",
            http_status=400,
            message="Date must be in MM/DD/YYYY format",
        ) from exc
    return parsed.month, parsed.year


def create_articles_use_case(*, db: Session, settings: Settings, content: str, raw_date: str) -> list[Article]:
    """Split a submission on its ``<h4>`` headings and store one article per section."""
    month, year = parse_article_date(raw_date)
    _validate_period(month, year, min_year=settings.PERIODICAL_MIN_YEAR, max_year=settings.PERIODICAL_MAX_YEAR)

    sections = split_sections(content)
    if not sections:
        raise DomainError(
            code="NO_ARTICLE_SECTIONS",
            http_status=400,
            message="No articles found. Each article must start with an <h4> title.",
        )
    if _find_period(db, Article, month, year) is not None:
        raise _duplicate_period("articles", month, year)

    number = issue_number(month, year, settings.ARTICLE_EPOCH_YEAR)
    first_id = allocate_id(db, Article.id)
    created_at = utc_now()
    articles = [
        Article(
            id=first_id + offset,
            title=section.title,
            content=section.content,
            issue_no=number,
            month=month,
            year=year,
            created_at=created_at,
            scrolling=False,
        )
        for offset, section in enumerate(sections)
    ]
    db.add_all(articles)
    db.commit()
    logger.info("Stored %s articles for issue %s", len(articles), number)
    return articles


def list_articles_use_case(*, db: Session, page: int, limit: int) -> ArticleListPage:
    total = db.query(Article).count()
    rows = (
        db.query(Article)
        .order_by(Article.issue_no.desc(), Article.id)
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return ArticleListPage(
        articles=[ArticleOut.model_validate(row) for row in rows],
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit) if total else 0,
    )


def get_article_use_case(*, db: Session, article_id: int) -> Article:
    article = db.query(Article).filter(Article.id == article_id).first()
    if article is None:
        raise DomainError(code="ARTICLE_NOT_FOUND", http_status=404, message="Article not found")
    return article


def update_article_use_case(*, db: Session, article_id: int, title: str, content: str) -> Article:
    article = get_article_use_case(db=db, article_id=article_id)
    article.title = sanitize_text(title)
    article.content = sanitize_text(content)
    db.commit()
    db.refresh(article)
    return article


def set_article_scrolling_use_case(*, db: Session, article_id: int, scrolling: bool) -> Article:
    article = get_article_use_case(db=db, article_id=article_id)
    article.scrolling = scrolling
    db.commit()
    db.refresh(article)
    return article


def delete_article_use_case(*, db: Session, article_id: int) -> None:
    article = get_article_use_case(db=db, article_id=article_id)
    db.delete(article)
    db.commit()


def bulk_delete_articles_use_case(*, db: Session, article_ids: list[int]) -> int:
    deleted = db.query(Article).filter(Article.id.in_(article_ids)).delete(synchronize_session=False)
    if not deleted:
        db.rollback()
        raise DomainError(code="ARTICLE_NOT_FOUND", http_status=404, message="No matching articles found")
    db.commit()
    return deleted
