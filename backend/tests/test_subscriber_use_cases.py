from __future__ import annotations

from datetime import datetime

import pytest

from cirec_admin.auth import verify_password
from cirec_admin.domain_errors import DomainError
from cirec_admin.models import ExtraCopiesGrant, MonthlyNewsGrant, SeatGrant, StatsAccessGrant, Subscriber
from cirec_admin.schemas import SubscriberCreate, SubscriberUpdate
from cirec_admin.use_cases.entitlements import get_access_summary_use_case
from cirec_admin.use_cases.subscribers import (
    create_subscriber_use_case,
    delete_subscriber_use_case,
    list_subscribers_use_case,
    set_subscriber_payment_use_case,
    set_subscriber_status_use_case,
    to_subscriber_out,
    update_subscriber_use_case,
)

FAR_FUTURE = datetime(2099, 1, 1)


def _payload(**overrides) -> dict:
    data = {
        "title": "Mr",
        "first_name": "Adam",
        "last_name": "Nowak",
        "company": "Orlen",
        "username": "anowak",
        "type": "s",
        "status": True,
        "password": "initial-pass",
    }
    data.update(overrides)
    return data


def _grant_everything(db_session, username: str) -> None:
    db_session.add_all(
        [
            MonthlyNewsGrant(username=username, start_date=datetime(2024, 1, 1), end_date=FAR_FUTURE),
            ExtraCopiesGrant(username=username, email="copy@example.com", copies=1),
            StatsAccessGrant(
                username=username,
                start_date=datetime(2024, 1, 1),
                end_date=FAR_FUTURE,
                central_european="Y",
                polish_chemical="N",
            ),
            SeatGrant(username=username, email="seat@example.com"),
        ]
    )
    db_session.commit()


def test_create_subscriber_hashes_password_and_allocates_id(db_session, subscriber) -> None:
    created = create_subscriber_use_case(db=db_session, payload=SubscriberCreate(**_payload()))

    assert created.id == subscriber.id + 1
    assert created.type == "S"
    assert created.status == "1"
    assert created.password_hash != "initial-pass"
    assert verify_password("initial-pass", created.password_hash)


def test_create_subscriber_with_taken_username_conflicts(db_session, subscriber) -> None:
    with pytest.raises(DomainError) as exc:
        create_subscriber_use_case(db=db_session, payload=SubscriberCreate(**_payload(username="jdoe")))

    assert exc.value.code == "DUPLICATE_USERNAME"
    assert exc.value.http_status == 409
    assert db_session.query(Subscriber).count() == 1


def test_subscriber_out_derives_display_fields(db_session, subscriber) -> None:
    out = to_subscriber_out(subscriber)

    assert out.full_name == "Ms Jane Doe"
    assert out.status is True
    assert out.is_new is False
    assert out.paid is False
    assert "password" not in out.model_dump(by_alias=True)
    assert "passwordHash" not in out.model_dump(by_alias=True)


def test_list_subscribers_returns_every_row(db_session, subscriber) -> None:
    create_subscriber_use_case(db=db_session, payload=SubscriberCreate(**_payload()))

    usernames = {row.username for row in list_subscribers_use_case(db=db_session)}

    assert usernames == {"jdoe", "anowak"}


def test_rename_carries_grants_to_new_username(db_session, subscriber) -> None:
    _grant_everything(db_session, "jdoe")

    payload = SubscriberUpdate(**_payload(username="jane.doe", password=None))
    update_subscriber_use_case(db=db_session, subscriber_id=subscriber.id, payload=payload)

    for model in (MonthlyNewsGrant, ExtraCopiesGrant, StatsAccessGrant, SeatGrant):
        assert db_session.query(model).filter(model.username == "jdoe").count() == 0
        assert db_session.query(model).filter(model.username == "jane.doe").count() == 1
    summary = get_access_summary_use_case(db=db_session, subscriber_id=subscriber.id)
    assert summary.username == "jane.doe"
    assert summary.access.monthly_news.has_access is True
    assert summary.access.other_reports.central_european_olefins is True


def test_update_without_password_keeps_existing_hash(db_session, subscriber) -> None:
    payload = SubscriberUpdate(**_payload(username="jdoe", password=None))

    updated = update_subscriber_use_case(db=db_session, subscriber_id=subscriber.id, payload=payload)

    assert updated.password_hash == "unused"
    assert updated.first_name == "Adam"


def test_update_to_taken_username_conflicts(db_session, subscriber) -> None:
    create_subscriber_use_case(db=db_session, payload=SubscriberCreate(**_payload()))

    with pytest.raises(DomainError) as exc:
        update_subscriber_use_case(
            db=db_session,
            subscriber_id=subscriber.id,
            payload=SubscriberUpdate(**_payload(username="anowak", password=None)),
        )

    assert exc.value.http_status == 409


def test_status_and_payment_toggles(db_session, subscriber) -> None:
    set_subscriber_status_use_case(db=db_session, subscriber_id=subscriber.id, active=False)
    paid = set_subscriber_payment_use_case(db=db_session, subscriber_id=subscriber.id, paid=True, amount=250.0)

    assert paid.status == "0"
    assert paid.paid == "1"
    assert paid.payment == 250.0
    assert to_subscriber_out(paid).is_new is True


def test_delete_removes_subscriber_and_all_grants(db_session, subscriber) -> None:
    _grant_everything(db_session, "jdoe")
    subscriber_id = subscriber.id

    delete_subscriber_use_case(db=db_session, subscriber_id=subscriber_id)

    assert db_session.query(Subscriber).count() == 0
    for model in (MonthlyNewsGrant, ExtraCopiesGrant, StatsAccessGrant, SeatGrant):
        assert db_session.query(model).count() == 0
    with pytest.raises(DomainError) as exc:
        get_access_summary_use_case(db=db_session, subscriber_id=subscriber_id)
    assert exc.value.http_status == 404


def test_delete_unknown_subscriber_is_not_found(db_session) -> None:
    with pytest.raises(DomainError) as exc:
        delete_subscriber_use_case(db=db_session, subscriber_id=77)

    assert exc.value.code == "SUBSCRIBER_NOT_FOUND"
