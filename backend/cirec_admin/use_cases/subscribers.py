"""Subscriber administration use-cases."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..auth import get_password_hash
from ..database import allocate_id
from ..domain_errors import DomainError
from ..models import GRANT_MODELS, Subscriber
from ..schemas import SubscriberBase, SubscriberCreate, SubscriberOut, SubscriberUpdate
from ..services.flags import decode_flag, encode_flag
from .entitlements import load_subscriber, utc_now

logger = logging.getLogger(__name__)


def _duplicate_username(username: str) -> DomainError:
    return DomainError(
        code="DUPLICATE_USERNAME",
        http_status=409,
        message="Username already exists",
        details={"username": username},
    )


def to_subscriber_out(subscriber: Subscriber) -> SubscriberOut:
    full_name = " ".join(
        part for part in (subscriber.title, subscriber.first_name, subscriber.last_name) if part
    )
    active = decode_flag(subscriber.status)
    return SubscriberOut(
        id=subscriber.id,
        title=subscriber.title,
        first_name=subscriber.first_name,
        last_name=subscriber.last_name,
        company=subscriber.company,
        department=subscriber.department,
        address1=subscriber.address1,
        address2=subscriber.address2,
        country_id=subscriber.country_id,
        phone=subscriber.phone,
        sector_interest=subscriber.sector_interest,
        email=subscriber.email,
        username=subscriber.username,
        type=subscriber.type,
        status=active,
        payment_amount=float(subscriber.payment or 0),
        date=subscriber.joined_at,
        full_name=full_name,
        paid=decode_flag(subscriber.paid),
        is_new=not active,
    )


def _apply_profile(subscriber: Subscriber, payload: SubscriberBase) -> None:
    subscriber.title = payload.title
    subscriber.first_name = payload.first_name
    subscriber.last_name = payload.last_name
    subscriber.company = payload.company
    subscriber.department = payload.department
    subscriber.address1 = payload.address1
    subscriber.address2 = payload.address2
    subscriber.country_id = payload.country_id
    subscriber.phone = payload.phone
    subscriber.sector_interest = payload.sector_interest
    subscriber.email = payload.email
    subscriber.username = payload.username
    subscriber.type = (payload.type or "N").upper()
    subscriber.status = encode_flag(payload.status)
    subscriber.payment = payload.payment_amount
    subscriber.paid = encode_flag(payload.paid)


def _username_taken(db: Session, username: str, *, exclude_id: int | None = None) -> bool:
    query = db.query(Subscriber.id).filter(Subscriber.username == username)
    if exclude_id is not None:
        query = query.filter(Subscriber.id != exclude_id)
    return query.first() is not None


def list_subscribers_use_case(*, db: Session) -> list[SubscriberOut]:
    subscribers = (
        db.query(Subscriber)
        .order_by(Subscriber.joined_at.desc(), Subscriber.first_name)
        .all()
    )
    return [to_subscriber_out(subscriber) for subscriber in subscribers]


def create_subscriber_use_case(*, db: Session, payload: SubscriberCreate) -> Subscriber:
    if _username_taken(db, payload.username):
        raise _duplicate_username(payload.username)

    subscriber = Subscriber(
        id=allocate_id(db, Subscriber.id),
        password_hash=get_password_hash(payload.password),
        joined_at=utc_now(),
    )
    _apply_profile(subscriber, payload)
    db.add(subscriber)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise _duplicate_username(payload.username) from exc
    db.refresh(subscriber)
    logger.info("Subscriber %s created", subscriber.username)
    return subscriber


def update_subscriber_use_case(*, db: Session, subscriber_id: int, payload: SubscriberUpdate) -> Subscriber:
    """Update profile fields; a username change is carried over to every grant table."""
    subscriber = load_subscriber(db, subscriber_id)
    if _username_taken(db, payload.username, exclude_id=subscriber_id):
        raise _duplicate_username(payload.username)

    old_username = subscriber.username
    if payload.username != old_username:
        for model in GRANT_MODELS:
            db.query(model).filter(model.username == old_username).update(
                {model.username: payload.username},
                synchronize_session=False,
            )

    _apply_profile(subscriber, payload)
    if payload.password:
        subscriber.password_hash = get_password_hash(payload.password)

    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise _duplicate_username(payload.username) from exc
    db.refresh(subscriber)
    return subscriber


def set_subscriber_status_use_case(*, db: Session, subscriber_id: int, active: bool) -> Subscriber:
    subscriber = load_subscriber(db, subscriber_id)
    subscriber.status = encode_flag(active)
    db.commit()
    db.refresh(subscriber)
    return subscriber


def set_subscriber_payment_use_case(
    *,
    db: Session,
    subscriber_id: int,
    paid: bool,
    amount: float | None = None,
) -> Subscriber:
    subscriber = load_subscriber(db, subscriber_id)
    subscriber.paid = encode_flag(paid)
    if amount is not None:
        subscriber.payment = amount
    db.commit()
    db.refresh(subscriber)
    return subscriber


def delete_subscriber_use_case(*, db: Session, subscriber_id: int) -> None:
    """Delete a subscriber and every grant row keyed by their username."""
    subscriber = load_subscriber(db, subscriber_id)
    username = subscriber.username
    try:
        for model in GRANT_MODELS:
            db.query(model).filter(model.username == username).delete(synchronize_session=False)
        db.delete(subscriber)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info("Subscriber %s deleted", username)
