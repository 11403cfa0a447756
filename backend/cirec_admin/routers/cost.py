"""Registration price management endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..auth import get_current_admin
from ..database import get_db
from ..envelope import ok
from ..models import RegistrationOption, RegistrationPrice
from ..schemas import PriceUpdate, RegistrationOptionOut, RegistrationPriceOut

router = APIRouter(prefix="/cost-management", tags=["cost-management"], dependencies=[Depends(get_current_admin)])


def _get_price_or_404(db: Session, price_id: int) -> RegistrationPrice:
    price = db.query(RegistrationPrice).filter(RegistrationPrice.id == price_id).first()
    if not price:
        raise HTTPException(status_code=404, detail="Price not found")
    return price


@router.get("/options")
def list_options(db: Session = Depends(get_db)):
    options = db.query(RegistrationOption).order_by(RegistrationOption.id).all()
    return ok([RegistrationOptionOut.model_validate(option) for option in options])


@router.get("/options/{option_id}/prices")
def list_option_prices(option_id: int, db: Session = Depends(get_db)):
    prices = (
        db.query(RegistrationPrice)
        .filter(RegistrationPrice.option_id == option_id)
        .order_by(RegistrationPrice.id)
        .all()
    )
    return ok([RegistrationPriceOut.model_validate(price) for price in prices])


@router.get("/prices/{price_id}")
def get_price(price_id: int, db: Session = Depends(get_db)):
    return ok(RegistrationPriceOut.model_validate(_get_price_or_404(db, price_id)))


@router.put("/prices/{price_id}")
def update_price(price_id: int, payload: PriceUpdate, db: Session = Depends(get_db)):
    price = _get_price_or_404(db, price_id)
    price.price = payload.price
    db.commit()
    db.refresh(price)
    return ok(RegistrationPriceOut.model_validate(price), message="Price updated successfully")
