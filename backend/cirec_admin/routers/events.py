"""Event endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..auth import get_current_admin
from ..database import allocate_id, get_db
from ..envelope import ok
from ..models import Event
from ..schemas import EventIn, EventOut, FlagUpdate

router = APIRouter(prefix="/events", tags=["events"], dependencies=[Depends(get_current_admin)])


def _all_events(db: Session) -> list[EventOut]:
    return [EventOut.model_validate(event) for event in db.query(Event).order_by(Event.id.desc()).all()]


def _get_event_or_404(db: Session, event_id: int) -> Event:
    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.get("")
def list_events(db: Session = Depends(get_db)):
    return ok(_all_events(db))


@router.get("/{event_id}")
def get_event(event_id: int, db: Session = Depends(get_db)):
    return ok(EventOut.model_validate(_get_event_or_404(db, event_id)))


@router.post("", status_code=201)
def create_event(payload: EventIn, db: Session = Depends(get_db)):
    event = Event(id=allocate_id(db, Event.id), **payload.model_dump())
    db.add(event)
    db.commit()
    db.refresh(event)
    return ok(EventOut.model_validate(event), message="Event added successfully")


@router.put("/{event_id}")
def update_event(event_id: int, payload: EventIn, db: Session = Depends(get_db)):
    event = _get_event_or_404(db, event_id)
    for field, value in payload.model_dump().items():
        setattr(event, field, value)
    db.commit()
    db.refresh(event)
    return ok(EventOut.model_validate(event), message="Event updated successfully")


@router.patch("/{event_id}/display")
def update_event_display(event_id: int, payload: FlagUpdate, db: Session = Depends(get_db)):
    """Toggle visibility and return the refreshed list."""
    event = _get_event_or_404(db, event_id)
    event.display = payload.value
    db.commit()
    return ok(_all_events(db), message="Event display status updated successfully")


@router.delete("/{event_id}")
def delete_event(event_id: int, db: Session = Depends(get_db)):
    event = _get_event_or_404(db, event_id)
    db.delete(event)
    db.commit()
    return ok(_all_events(db), message="Event deleted successfully")
