"""Link endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..auth import get_current_admin
from ..database import allocate_id, get_db
from ..envelope import ok
from ..models import Link
from ..schemas import FlagUpdate, LinkIn, LinkOut

router = APIRouter(prefix="/links", tags=["links"], dependencies=[Depends(get_current_admin)])


def _get_link_or_404(db: Session, link_id: int) -> Link:
    link = db.query(Link).filter(Link.id == link_id).first()
    if not link:
        raise HTTPException(status_code=404, detail="Link not found")
    return link


@router.get("")
def list_links(db: Session = Depends(get_db)):
    return ok([LinkOut.model_validate(link) for link in db.query(Link).order_by(Link.id).all()])


@router.get("/{link_id}")
def get_link(link_id: int, db: Session = Depends(get_db)):
    return ok(LinkOut.model_validate(_get_link_or_404(db, link_id)))


@router.post("", status_code=201)
def create_link(payload: LinkIn, db: Session = Depends(get_db)):
    link = Link(id=allocate_id(db, Link.id), **payload.model_dump())
    db.add(link)
    db.commit()
    db.refresh(link)
    return ok(LinkOut.model_validate(link), message="Link added successfully")


@router.put("/{link_id}")
def update_link(link_id: int, payload: LinkIn, db: Session = Depends(get_db)):
    link = _get_link_or_404(db, link_id)
    for field, value in payload.model_dump().items():
        setattr(link, field, value)
    db.commit()
    db.refresh(link)
    return ok(LinkOut.model_validate(link), message="Link updated successfully")


@router.patch("/{link_id}/display")
def update_link_display(link_id: int, payload: FlagUpdate, db: Session = Depends(get_db)):
    link = _get_link_or_404(db, link_id)
    link.display = payload.value
    db.commit()
    return ok(message="Link display status updated successfully")


@router.delete("/{link_id}")
def delete_link(link_id: int, db: Session = Depends(get_db)):
    link = _get_link_or_404(db, link_id)
    db.delete(link)
    db.commit()
    return ok(message="Link deleted successfully")
