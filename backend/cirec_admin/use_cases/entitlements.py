"""Subscriber entitlement queries and edits."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..domain_errors import DomainError
from ..models import (
    ExtraCopiesGrant,
    MonthlyNewsGrant,
    SearchAccessGrant,
    StatsAccessGrant,
    Subscriber,
)
from ..schemas import (
    AccessDetails,
    AccessSummary,
    AccessUpdateRequest,
    AccessWindow,
    AdditionalCopiesAccess,
    OtherReportsAccess,
)
from ..services.access_durations import (
    end_after_months,
    end_after_years,
    search_access_months,
    user_type_label,
)
from ..services.flags import NO, YES, encode_flag

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Naive UTC timestamp, the way grant dates are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def load_subscriber(db: Session, subscriber_id: int) -> Subscriber:
    subscriber = db.query(Subscriber).filter(Subscriber.id == subscriber_id).first()
    if subscriber is None:
        raise DomainError(
            code="SUBSCRIBER_NOT_FOUND",
            http_status=404,
            message="User not found",
        )
    return subscriber


def _current_window(db: Session, model, username: str, now: datetime) -> AccessWindow:
    # MAX(end) keeps working when legacy data holds several open rows.
    count, end_date = (
        db.query(func.count(model.id), func.max(model.end_date))
        .filter(model.username == username, model.end_date >= now)
        .one()
    )
    return AccessWindow(has_access=count > 0, end_date=end_date)


def _additional_copies(db: Session, username: str) -> AdditionalCopiesAccess:
    count, copies = (
        db.query(func.count(ExtraCopiesGrant.id), func.max(ExtraCopiesGrant.copies))
        .filter(ExtraCopiesGrant.username == username)
        .one()
    )
    emails = [
        row[0]
        for row in db.query(ExtraCopiesGrant.email)
        .filter(ExtraCopiesGrant.username == username)
        .order_by(ExtraCopiesGrant.id)
        .all()
    ]
    return AdditionalCopiesAccess(has_access=count > 0, copies=int(copies or 0), emails=emails)


def _has_addon(db: Session, column, username: str) -> bool:
    count = (
        db.query(func.count(StatsAccessGrant.id))
        .filter(StatsAccessGrant.username == username, column == YES)
        .scalar()
    )
    return bool(count)


def get_access_summary_use_case(
    *,
    db: Session,
    subscriber_id: int,
    now: datetime | None = None,
) -> AccessSummary:
    """Current access windows of one subscriber across every grant category."""
    subscriber = load_subscriber(db, subscriber_id)
    username = subscriber.username
    at = now or utc_now()

    try:
        details = AccessDetails(
            monthly_news=_current_window(db, MonthlyNewsGrant, username, at),
            additional_copies=_additional_copies(db, username),
            search_engine_access=_current_window(db, SearchAccessGrant, username, at),
            statistical_database_access=_current_window(db, StatsAccessGrant, username, at),
            other_reports=OtherReportsAccess(
                central_european_olefins=_has_addon(db, StatsAccessGrant.central_european, username),
                polish_chemical_production=_has_addon(db, StatsAccessGrant.polish_chemical, username),
            ),
        )
    except SQLAlchemyError as exc:
        logger.exception("Failed to read access info for subscriber %s", subscriber_id)
        raise DomainError(
            code="ACCESS_QUERY_FAILED",
            http_status=500,
            message="Failed to get user access info",
        ) from exc

    return AccessSummary(
        user_id=subscriber.id,
        username=username,
        user_type=user_type_label(subscriber.type),
        access=details,
    )


def _apply_monthly_news(db: Session, username: str, request: AccessUpdateRequest, now: datetime) -> None:
    if request.remove_mnews:
        db.query(MonthlyNewsGrant).filter(MonthlyNewsGrant.username == username).delete(synchronize_session=False)
    elif request.mnews_access:
        db.add(
            MonthlyNewsGrant(
                username=username,
                start_date=now,
                end_date=end_after_years(now, request.mnews_duration),
            )
        )


def _apply_additional_copies(db: Session, username: str, request: AccessUpdateRequest) -> None:
    if request.remove_additional_copies:
        db.query(ExtraCopiesGrant).filter(ExtraCopiesGrant.username == username).delete(synchronize_session=False)
    elif request.additional_copies_access and request.additional_copies_emails:
        db.query(ExtraCopiesGrant).filter(ExtraCopiesGrant.username == username).delete(synchronize_session=False)
        copies = request.additional_copies_count or 1
        for email in request.additional_copies_emails:
            db.add(ExtraCopiesGrant(username=username, email=email, copies=copies))


def _apply_search_access(db: Session, username: str, request: AccessUpdateRequest, now: datetime) -> None:
    if request.remove_sea:
        db.query(SearchAccessGrant).filter(SearchAccessGrant.username == username).delete(synchronize_session=False)
    elif request.sea_access:
        db.add(
            SearchAccessGrant(
                username=username,
                start_date=now,
                end_date=end_after_months(now, search_access_months(request.sea_duration)),
            )
        )


def _apply_stats_access(db: Session, username: str, request: AccessUpdateRequest, now: datetime) -> None:
    if request.remove_sda:
        db.query(StatsAccessGrant).filter(StatsAccessGrant.username == username).delete(synchronize_session=False)
    elif request.sda_access:
        db.add(
            StatsAccessGrant(
                username=username,
                start_date=now,
                end_date=end_after_years(now, request.sda_duration),
                central_european=encode_flag(request.central_european_report, yes=YES, no=NO),
                polish_chemical=encode_flag(request.polish_chemical_report, yes=YES, no=NO),
            )
        )


def _apply_other_reports(db: Session, username: str, request: AccessUpdateRequest) -> None:
    # Add-on reports live on the statistical access rows.
    if request.remove_other_reports:
        values = {StatsAccessGrant.central_european: NO, StatsAccessGrant.polish_chemical: NO}
    elif request.other_reports_access:
        values = {
            StatsAccessGrant.central_european: encode_flag(request.central_european_report, yes=YES, no=NO),
            StatsAccessGrant.polish_chemical: encode_flag(request.polish_chemical_report, yes=YES, no=NO),
        }
    else:
        return
    db.flush()
    db.query(StatsAccessGrant).filter(StatsAccessGrant.username == username).update(
        values,
        synchronize_session=False,
    )


def update_access_use_case(
    *,
    db: Session,
    subscriber_id: int,
    request: AccessUpdateRequest,
    now: datetime | None = None,
) -> None:
    """Apply every category edit of ``request`` as one unit of work."""
    subscriber = load_subscriber(db, subscriber_id)
    username = subscriber.username
    at = now or utc_now()

    try:
        _apply_monthly_news(db, username, request, at)
        _apply_additional_copies(db, username, request)
        _apply_search_access(db, username, request, at)
        _apply_stats_access(db, username, request, at)
        _apply_other_reports(db, username, request)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to update access for subscriber %s", subscriber_id)
        raise DomainError(
            code="ACCESS_UPDATE_FAILED",
            http_status=500,
            message="Failed to update user access",
        ) from exc
    logger.info("Access updated for subscriber %s", username)
