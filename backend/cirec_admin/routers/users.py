"""Subscriber administration and entitlement endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth import get_current_admin
from ..database import get_db
from ..envelope import ok
from ..schemas import AccessUpdateRequest, PaymentUpdate, StatusUpdate, SubscriberCreate, SubscriberUpdate
from ..use_cases.entitlements import get_access_summary_use_case, load_subscriber, update_access_use_case
from ..use_cases.subscribers import (
    create_subscriber_use_case,
    delete_subscriber_use_case,
    list_subscribers_use_case,
    set_subscriber_payment_use_case,
    set_subscriber_status_use_case,
    to_subscriber_out,
    update_subscriber_use_case,
)

router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(get_current_admin)])


@router.get("")
def list_users(db: Session = Depends(get_db)):
    """List subscribers, newest first."""
    return ok(list_subscribers_use_case(db=db))


@router.get("/{user_id}")
def get_user(user_id: int, db: Session = Depends(get_db)):
    return ok(to_subscriber_out(load_subscriber(db, user_id)))


@router.post("", status_code=201)
def create_user(payload: SubscriberCreate, db: Session = Depends(get_db)):
    subscriber = create_subscriber_use_case(db=db, payload=payload)
    return ok({"id": subscriber.id}, message="User created successfully")


@router.put("/{user_id}")
def update_user(user_id: int, payload: SubscriberUpdate, db: Session = Depends(get_db)):
    subscriber = update_subscriber_use_case(db=db, subscriber_id=user_id, payload=payload)
    return ok(to_subscriber_out(subscriber), message="User updated successfully")


@router.put("/{user_id}/status")
def update_user_status(user_id: int, payload: StatusUpdate, db: Session = Depends(get_db)):
    set_subscriber_status_use_case(db=db, subscriber_id=user_id, active=payload.status)
    return ok(message="User status updated successfully")


@router.put("/{user_id}/payment")
def update_user_payment(user_id: int, payload: PaymentUpdate, db: Session = Depends(get_db)):
    set_subscriber_payment_use_case(
        db=db,
        subscriber_id=user_id,
        paid=payload.paid,
        amount=payload.payment_amount,
    )
    return ok(message="Payment status updated successfully")


@router.delete("/{user_id}")
def delete_user(user_id: int, db: Session = Depends(get_db)):
    """Delete a subscriber together with all of their grants."""
    delete_subscriber_use_case(db=db, subscriber_id=user_id)
    return ok(message="User deleted successfully")


@router.get("/{user_id}/access")
def get_user_access(user_id: int, db: Session = Depends(get_db)):
    return ok(get_access_summary_use_case(db=db, subscriber_id=user_id))


@router.put("/{user_id}/access")
def update_user_access(user_id: int, payload: AccessUpdateRequest, db: Session = Depends(get_db)):
    update_access_use_case(db=db, subscriber_id=user_id, request=payload)
    return ok(message="User access updated successfully")
