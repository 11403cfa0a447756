"""Contact form submission endpoints."""
import math

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..auth import get_current_admin
from ..database import get_db
from ..envelope import ok
from ..models import ContactSubmission
from ..schemas import ContactOut, ContactPage

router = APIRouter(prefix="/contacts", tags=["contacts"], dependencies=[Depends(get_current_admin)])


@router.get("")
def list_contacts(db: Session = Depends(get_db)):
    contacts = db.query(ContactSubmission).order_by(ContactSubmission.id.desc()).all()
    return ok([ContactOut.model_validate(contact) for contact in contacts])


@router.get("/paginated")
def list_contacts_paginated(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    total = db.query(ContactSubmission).count()
    contacts = (
        db.query(ContactSubmission)
        .order_by(ContactSubmission.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return ok(
        ContactPage(
            contacts=[ContactOut.model_validate(contact) for contact in contacts],
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit) if total else 0,
        )
    )


@router.delete("/{contact_id}")
def delete_contact(contact_id: int, db: Session = Depends(get_db)):
    deleted = (
        db.query(ContactSubmission)
        .filter(ContactSubmission.id == contact_id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        raise HTTPException(status_code=404, detail="Contact not found")
    db.commit()
    return ok(message="Contact deleted successfully")
