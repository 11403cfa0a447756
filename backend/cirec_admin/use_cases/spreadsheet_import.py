"""Report spreadsheet import.

The sheet is parsed completely before the database is touched. Clearing the
destination tables and inserting the staged rows then happen in a single
transaction, so a failed import leaves the previous data in place.
"""
from __future__ import annotations

import logging
import zipfile
from io import BytesIO

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..database import allocate_id
from ..domain_errors import DomainError
from ..models import (
    Capacity,
    CompanyDescription,
    Country,
    ExtendedCapacity,
    ExtendedCompanyDescription,
    ExtendedPeriod,
    GrossFinance,
    NetFinance,
    PolishChemical,
    ProductionPeriod,
    ReportCompany,
    ReportProduct,
    TurnoverFinance,
)
from ..schemas import ImportResult
from ..services.sheet_layouts import (
    FINANCE_KINDS,
    NEEDS_COMPANIES,
    NEEDS_PRODUCTS,
    ImportKind,
    ParsedSheet,
    Row,
    parse_import_kind,
    parse_sheet,
)

logger = logging.getLogger(__name__)

_FINANCE_MODELS = {
    ImportKind.GROSS_FINANCE: GrossFinance,
    ImportKind.NET_FINANCE: NetFinance,
    ImportKind.TURNOVER_FINANCE: TurnoverFinance,
}


def read_first_sheet(content: bytes) -> list[Row]:
    """Cell values of the first worksheet, row by row."""
    try:
        workbook = load_workbook(BytesIO(content), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, ValueError, OSError) as exc:
        raise DomainError(
            code="INVALID_WORKBOOK",
            http_status=400,
            message="Uploaded file is not a readable Excel workbook",
        ) from exc
    try:
        if not workbook.worksheets:
            return []
        return [tuple(row) for row in workbook.worksheets[0].iter_rows(values_only=True)]
    finally:
        workbook.close()


def _check_preconditions(db: Session, kind: ImportKind) -> None:
    if kind in NEEDS_PRODUCTS and db.query(ReportProduct.id).first() is None:
        raise DomainError(
            code="IMPORT_PRECONDITION_FAILED",
            http_status=400,
            message="Products must be imported before this import type",
            details={"importType": kind.value, "missing": "products"},
        )
    if kind in NEEDS_COMPANIES and db.query(ReportCompany.id).first() is None:
        raise DomainError(
            code="IMPORT_PRECONDITION_FAILED",
            http_status=400,
            message="Companies must be imported before this import type",
            details={"importType": kind.value, "missing": "companies"},
        )


def _product_index(db: Session) -> dict[str, int]:
    index: dict[str, int] = {}
    for product_id, name in db.query(ReportProduct.id, ReportProduct.name).order_by(ReportProduct.id):
        index.setdefault((name or "").strip(), product_id)
    return index


def _company_index(db: Session) -> dict[tuple[str, str], int]:
    index: dict[tuple[str, str], int] = {}
    rows = db.query(ReportCompany.id, ReportCompany.name, ReportCompany.location).order_by(ReportCompany.id)
    for company_id, name, location in rows:
        index.setdefault(((name or "").strip(), (location or "").strip()), company_id)
    return index


def _country_index(db: Session) -> dict[str, int]:
    return {(name or "").strip().lower(): country_id for country_id, name in db.query(Country.id, Country.name)}


def _clear(db: Session, *models) -> None:
    for model in models:
        db.query(model).delete(synchronize_session=False)


def _replace_products(db: Session, parsed: ParsedSheet) -> int:
    _clear(db, ReportProduct)
    first_id = allocate_id(db, ReportProduct.id)
    db.add_all(
        ReportProduct(id=first_id + offset, name=row.name, group=row.group, display=False)
        for offset, row in enumerate(parsed.products)
    )
    return len(parsed.products)


def _replace_companies(db: Session, parsed: ParsedSheet) -> int:
    countries = _country_index(db)
    _clear(db, ReportCompany)
    first_id = allocate_id(db, ReportCompany.id)
    db.add_all(
        ReportCompany(
            id=first_id + offset,
            name=row.name,
            location=row.location,
            country_id=countries.get(row.country_name.lower(), 0),
            display=False,
        )
        for offset, row in enumerate(parsed.companies)
    )
    return len(parsed.companies)


def _replace_period(db: Session, parsed: ParsedSheet) -> int:
    _clear(db, ProductionPeriod)
    first_id = allocate_id(db, ProductionPeriod.id)
    db.add_all(
        ProductionPeriod(
            id=first_id + offset,
            year=fact.year,
            quarter=fact.quarter,
            product_id=fact.product_id,
            company_id=fact.company_id,
            amount=fact.amount,
        )
        for offset, fact in enumerate(parsed.facts)
    )
    return len(parsed.facts)


def _replace_capacity(db: Session, parsed: ParsedSheet, *, extended: bool) -> int:
    capacity_model = ExtendedCapacity if extended else Capacity
    description_model = ExtendedCompanyDescription if extended else CompanyDescription
    if extended:
        _clear(db, capacity_model, description_model, ExtendedPeriod)
    else:
        _clear(db, capacity_model, description_model)

    first_id = allocate_id(db, capacity_model.id)
    db.add_all(
        capacity_model(
            id=first_id + offset,
            year=fact.year,
            quarter=fact.quarter,
            product_id=fact.product_id,
            company_id=fact.company_id,
            amount=fact.amount,
        )
        for offset, fact in enumerate(parsed.facts)
    )
    first_description_id = allocate_id(db, description_model.id)
    db.add_all(
        description_model(
            id=first_description_id + offset,
            company_id=row.company_id,
            product_id=row.product_id,
            start_date=row.start_date,
            technology=row.technology,
            feedstock=row.feedstock,
        )
        for offset, row in enumerate(parsed.descriptions)
    )
    if extended:
        first_period_id = allocate_id(db, ExtendedPeriod.id)
        db.add_all(
            ExtendedPeriod(
                id=first_period_id + offset,
                year=fact.year,
                quarter=fact.quarter,
                product_id=fact.product_id,
                company_id=fact.company_id,
                amount=fact.amount,
            )
            for offset, fact in enumerate(parsed.facts)
        )
    return len(parsed.facts)


def _replace_finance(db: Session, parsed: ParsedSheet) -> int:
    model = _FINANCE_MODELS[parsed.kind]
    _clear(db, model)
    first_id = allocate_id(db, model.id)
    db.add_all(
        model(
            id=first_id + offset,
            year=fact.year,
            quarter=fact.quarter,
            company_id=fact.company_id,
            amount=fact.amount,
        )
        for offset, fact in enumerate(parsed.facts)
    )
    return len(parsed.facts)


def _replace_polish_chemical(db: Session, parsed: ParsedSheet) -> int:
    _clear(db, PolishChemical)
    first_id = allocate_id(db, PolishChemical.id)
    db.add_all(
        PolishChemical(
            id=first_id + offset,
            year=fact.year,
            quarter=fact.quarter,
            product_id=fact.product_id,
            amount=fact.amount,
        )
        for offset, fact in enumerate(parsed.facts)
    )
    return len(parsed.facts)


def _replace_destination(db: Session, parsed: ParsedSheet) -> int:
    kind = parsed.kind
    if kind is ImportKind.PRODUCTS:
        return _replace_products(db, parsed)
    if kind is ImportKind.COMPANIES:
        return _replace_companies(db, parsed)
    if kind is ImportKind.PERIOD:
        return _replace_period(db, parsed)
    if kind is ImportKind.CAPACITY:
        return _replace_capacity(db, parsed, extended=False)
    if kind is ImportKind.EXTENDED_CAPACITY:
        return _replace_capacity(db, parsed, extended=True)
    if kind in FINANCE_KINDS:
        return _replace_finance(db, parsed)
    return _replace_polish_chemical(db, parsed)


def import_workbook_use_case(*, db: Session, import_type: str, content: bytes) -> ImportResult:
    """Replace the destination tables of ``import_type`` with the workbook contents."""
    try:
        kind = parse_import_kind(import_type)
    except ValueError as exc:
        raise DomainError(code="UNKNOWN_IMPORT_TYPE", http_status=400, message=str(exc)) from exc

    _check_preconditions(db, kind)
    rows = read_first_sheet(content)

    products = _product_index(db)
    companies = _company_index(db)
    try:
        parsed = parse_sheet(
            kind,
            rows,
            find_product=lambda name: products.get(name.strip()),
            find_company=lambda name, location: companies.get((name.strip(), location.strip())),
        )
    except ValueError as exc:
        raise DomainError(code="INVALID_SHEET_LAYOUT", http_status=400, message=str(exc)) from exc

    try:
        imported = _replace_destination(db, parsed)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Import of type %s failed, destination left unchanged", kind.value)
        raise DomainError(
            code="IMPORT_FAILED",
            http_status=500,
            message="Failed to import data",
        ) from exc

    if parsed.skipped_rows:
        logger.info("Import type %s skipped %s unresolved rows", kind.value, parsed.skipped_rows)
    return ImportResult(
        rows_imported=imported,
        message=f"Successfully imported {imported} records",
    )
