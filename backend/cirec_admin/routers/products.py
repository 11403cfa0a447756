"""Report product endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..auth import get_current_admin
from ..database import allocate_id, get_db
from ..envelope import ok
from ..models import ReportProduct
from ..schemas import FlagUpdate, ProductCreate, ProductOut

router = APIRouter(prefix="/products", tags=["products"], dependencies=[Depends(get_current_admin)])


@router.get("")
def list_products(db: Session = Depends(get_db)):
    products = db.query(ReportProduct).order_by(ReportProduct.name).all()
    return ok([ProductOut.model_validate(product) for product in products])


@router.patch("/{product_id}/display")
def update_product_display(product_id: int, payload: FlagUpdate, db: Session = Depends(get_db)):
    updated = (
        db.query(ReportProduct)
        .filter(ReportProduct.id == product_id)
        .update({ReportProduct.display: payload.value}, synchronize_session=False)
    )
    if not updated:
        raise HTTPException(status_code=404, detail="Product not found")
    db.commit()
    return ok(message="Product display status updated successfully")


@router.post("", status_code=201)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    """Add a product that is visible straight away."""
    product = ReportProduct(id=allocate_id(db, ReportProduct.id), name=payload.name.strip(), display=True)
    db.add(product)
    db.commit()
    db.refresh(product)
    return ok(ProductOut.model_validate(product), message="Product added successfully")
