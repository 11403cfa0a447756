"""Report company and country endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..auth import get_current_admin
from ..database import allocate_id, get_db
from ..envelope import ok
from ..models import Country, ReportCompany
from ..schemas import CompanyCreate, CompanyOut, CountryOut, FlagUpdate

router = APIRouter(tags=["companies"], dependencies=[Depends(get_current_admin)])


@router.get("/companies")
def list_companies(db: Session = Depends(get_db)):
    companies = db.query(ReportCompany).order_by(ReportCompany.name).all()
    return ok([CompanyOut.model_validate(company) for company in companies])


@router.patch("/companies/{company_id}/display")
def update_company_display(company_id: int, payload: FlagUpdate, db: Session = Depends(get_db)):
    company = db.query(ReportCompany).filter(ReportCompany.id == company_id).first()
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    company.display = payload.value
    db.commit()
    return ok(message="Company display status updated successfully")


@router.post("/companies", status_code=201)
def create_company(payload: CompanyCreate, db: Session = Depends(get_db)):
    company = ReportCompany(
        id=allocate_id(db, ReportCompany.id),
        name=payload.name.strip(),
        location=payload.location,
        country_id=payload.country_id,
        display=True,
    )
    db.add(company)
    db.commit()
    db.refresh(company)
    return ok(CompanyOut.model_validate(company), message="Company added successfully")


@router.get("/countries")
def list_countries(db: Session = Depends(get_db)):
    countries = db.query(Country).order_by(Country.name).all()
    return ok([CountryOut.model_validate(country) for country in countries])
