"""Positional parsing of report spreadsheets into staged fact rows.

Each import kind has its own sheet layout. Reference sheets (products,
companies) are header-keyed. Fact sheets are scanned row by row: a sentinel
row ("Product"/"Producer") opens a block and carries the quarter labels from a
fixed column offset, following rows are data rows until "Total". Lookups of
products and companies are injected so parsing stays free of database access.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

PRODUCT_SENTINEL = "Product"
PRODUCER_SENTINEL = "Producer"
TOTAL_SENTINEL = "Total"

PERIOD_HEADER_OFFSET = 3
CAPACITY_HEADER_OFFSET = 6
FINANCE_HEADER_OFFSET = 2
POLISH_CHEMICAL_HEADER_OFFSET = 2

DEFAULT_PRODUCT_GROUP = "z"
_LAST_CENTURY_YEARS = {"97", "98", "99"}

Row = Sequence[Any]
ProductLookup = Callable[[str], "int | None"]
CompanyLookup = Callable[[str, str], "int | None"]


class ImportKind(str, Enum):
    PRODUCTS = "1"
    COMPANIES = "2"
    PERIOD = "3"
    CAPACITY = "4"
    EXTENDED_CAPACITY = "41"
    GROSS_FINANCE = "5"
    NET_FINANCE = "6"
    TURNOVER_FINANCE = "7"
    POLISH_CHEMICAL = "8"


FINANCE_KINDS = frozenset({ImportKind.GROSS_FINANCE, ImportKind.NET_FINANCE, ImportKind.TURNOVER_FINANCE})
CAPACITY_KINDS = frozenset({ImportKind.CAPACITY, ImportKind.EXTENDED_CAPACITY})
NEEDS_PRODUCTS = frozenset({ImportKind.PERIOD, ImportKind.POLISH_CHEMICAL} | CAPACITY_KINDS)
NEEDS_COMPANIES = frozenset({ImportKind.PERIOD} | CAPACITY_KINDS | FINANCE_KINDS)


def parse_import_kind(raw: str | int | None) -> ImportKind:
    try:
        return ImportKind(str(raw).strip())
    except ValueError:
        raise ValueError(f"Unknown import type: {raw}") from None


@dataclass(frozen=True)
class PeriodLabel:
    quarter: str
    year: int


@dataclass(frozen=True)
class ProductRow:
    name: str
    group: str = DEFAULT_PRODUCT_GROUP


@dataclass(frozen=True)
class CompanyRow:
    name: str
    location: str
    country_name: str


@dataclass(frozen=True)
class FactRow:
    quarter: str
    year: int
    amount: float
    product_id: int | None = None
    company_id: int | None = None


@dataclass(frozen=True)
class CompanyDescriptionRow:
    company_id: int
    product_id: int
    start_date: str
    technology: str
    feedstock: str


@dataclass
class ParsedSheet:
    kind: ImportKind
    products: list[ProductRow] = field(default_factory=list)
    companies: list[CompanyRow] = field(default_factory=list)
    facts: list[FactRow] = field(default_factory=list)
    descriptions: list[CompanyDescriptionRow] = field(default_factory=list)
    skipped_rows: int = 0


def cell(row: Row, index: int) -> Any:
    if index < len(row):
        return row[index]
    return None


def cell_text(row: Row, index: int) -> str:
    value = cell(row, index)
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def cell_amount(value: Any) -> float:
    """Numeric value of a cell; blanks and non-numeric text count as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        amount = float(value)
    else:
        try:
            amount = float(str(value).strip().replace(",", ""))
        except ValueError:
            return 0.0
    return amount if math.isfinite(amount) else 0.0


def decode_period_label(label: Any) -> PeriodLabel | None:
    """Decode ``Q1-98`` style labels; two-digit years 97-99 are 19xx, the rest 20xx."""
    if label is None:
        return None
    text = str(label).strip()
    if len(text) < 5:
        return None
    quarter, two_digit_year = text[0:2], text[3:5]
    if not two_digit_year.isdigit():
        return None
    century = 1900 if two_digit_year in _LAST_CENTURY_YEARS else 2000
    return PeriodLabel(quarter=quarter, year=century + int(two_digit_year))


def header_columns(row: Row, offset: int) -> list[tuple[int, PeriodLabel]]:
    columns: list[tuple[int, PeriodLabel]] = []
    for index in range(offset, len(row)):
        label = decode_period_label(row[index])
        if label is not None:
            columns.append((index, label))
    return columns


def _is_data_row(first_cell: str) -> bool:
    return bool(first_cell) and first_cell != TOTAL_SENTINEL


def _emit_facts(
    row: Row,
    columns: list[tuple[int, PeriodLabel]],
    *,
    product_id: int | None = None,
    company_id: int | None = None,
) -> list[FactRow]:
    return [
        FactRow(
            quarter=label.quarter,
            year=label.year,
            amount=cell_amount(cell(row, index)),
            product_id=product_id,
            company_id=company_id,
        )
        for index, label in columns
    ]


def _header_index(header: Row, name: str) -> int | None:
    for index, value in enumerate(header):
        if value is not None and str(value).strip() == name:
            return index
    return None


def parse_products(rows: Iterable[Row]) -> ParsedSheet:
    parsed = ParsedSheet(kind=ImportKind.PRODUCTS)
    iterator = iter(rows)
    header = next(iterator, None)
    name_index = _header_index(header or (), PRODUCT_SENTINEL)
    if name_index is None:
        raise ValueError("Products sheet has no 'Product' column")
    group_index = _header_index(header, "Group")

    for row in iterator:
        name = cell_text(row, name_index)
        if not name or name == PRODUCT_SENTINEL:
            parsed.skipped_rows += 1
            continue
        group = cell_text(row, group_index) if group_index is not None else ""
        parsed.products.append(ProductRow(name=name, group=group or DEFAULT_PRODUCT_GROUP))
    return parsed


def parse_companies(rows: Iterable[Row]) -> ParsedSheet:
    parsed = ParsedSheet(kind=ImportKind.COMPANIES)
    iterator = iter(rows)
    header = next(iterator, None)
    name_index = _header_index(header or (), PRODUCER_SENTINEL)
    if name_index is None:
        raise ValueError("Companies sheet has no 'Producer' column")
    location_index = _header_index(header, "Location")
    country_index = _header_index(header, "Country")

    for row in iterator:
        name = cell_text(row, name_index)
        if not name or name == PRODUCER_SENTINEL:
            parsed.skipped_rows += 1
            continue
        parsed.companies.append(
            CompanyRow(
                name=name,
                location=cell_text(row, location_index) if location_index is not None else "",
                country_name=cell_text(row, country_index) if country_index is not None else "",
            )
        )
    return parsed


def parse_period(rows: Iterable[Row], *, find_product: ProductLookup, find_company: CompanyLookup) -> ParsedSheet:
    """Production per product block: company in col 0, location in col 2."""
    parsed = ParsedSheet(kind=ImportKind.PERIOD)
    product_id: int | None = None
    columns: list[tuple[int, PeriodLabel]] | None = None

    for row in rows:
        first = cell_text(row, 0)
        if first == PRODUCT_SENTINEL:
            product_id = find_product(cell_text(row, 1))
            continue
        if first == PRODUCER_SENTINEL:
            columns = header_columns(row, PERIOD_HEADER_OFFSET)
            continue
        if columns is None or not _is_data_row(first):
            continue
        company_id = find_company(first, cell_text(row, 2))
        if product_id is None or company_id is None:
            parsed.skipped_rows += 1
            continue
        parsed.facts.extend(_emit_facts(row, columns, product_id=product_id, company_id=company_id))
    return parsed


def parse_capacity(
    rows: Iterable[Row],
    *,
    find_product: ProductLookup,
    find_company: CompanyLookup,
    kind: ImportKind = ImportKind.CAPACITY,
) -> ParsedSheet:
    """Capacity per product block: company/location in cols 0-1, plant description in cols 3-5."""
    parsed = ParsedSheet(kind=kind)
    product_id: int | None = None
    columns: list[tuple[int, PeriodLabel]] | None = None

    for row in rows:
        first = cell_text(row, 0)
        if first == PRODUCT_SENTINEL:
            product_id = find_product(cell_text(row, 1))
            continue
        if first == PRODUCER_SENTINEL:
            columns = header_columns(row, CAPACITY_HEADER_OFFSET)
            continue
        if columns is None or not _is_data_row(first):
            continue
        company_id = find_company(first, cell_text(row, 1))
        if product_id is None or company_id is None:
            parsed.skipped_rows += 1
            continue
        parsed.facts.extend(_emit_facts(row, columns, product_id=product_id, company_id=company_id))
        parsed.descriptions.append(
            CompanyDescriptionRow(
                company_id=company_id,
                product_id=product_id,
                start_date=cell_text(row, 3),
                technology=cell_text(row, 4),
                feedstock=cell_text(row, 5),
            )
        )
    return parsed


def parse_finance(rows: Iterable[Row], *, find_company: CompanyLookup, kind: ImportKind) -> ParsedSheet:
    """Finance sheets carry their quarter labels on the very first row."""
    parsed = ParsedSheet(kind=kind)
    iterator = iter(rows)
    header = next(iterator, None)
    if header is None:
        return parsed
    columns = header_columns(header, FINANCE_HEADER_OFFSET)

    for row in iterator:
        first = cell_text(row, 0)
        if not _is_data_row(first):
            continue
        company_id = find_company(first, cell_text(row, 1))
        if company_id is None:
            parsed.skipped_rows += 1
            continue
        parsed.facts.extend(_emit_facts(row, columns, company_id=company_id))
    return parsed


def parse_polish_chemical(rows: Iterable[Row], *, find_product: ProductLookup) -> ParsedSheet:
    parsed = ParsedSheet(kind=ImportKind.POLISH_CHEMICAL)
    columns: list[tuple[int, PeriodLabel]] | None = None

    for row in rows:
        first = cell_text(row, 0)
        if columns is None:
            if first == PRODUCT_SENTINEL:
                columns = header_columns(row, POLISH_CHEMICAL_HEADER_OFFSET)
            continue
        if not _is_data_row(first) or first == PRODUCT_SENTINEL:
            continue
        product_id = find_product(first)
        if product_id is None:
            parsed.skipped_rows += 1
            continue
        parsed.facts.extend(_emit_facts(row, columns, product_id=product_id))
    return parsed


def parse_sheet(
    kind: ImportKind,
    rows: Iterable[Row],
    *,
    find_product: ProductLookup,
    find_company: CompanyLookup,
) -> ParsedSheet:
    if kind is ImportKind.PRODUCTS:
        return parse_products(rows)
    if kind is ImportKind.COMPANIES:
        return parse_companies(rows)
    if kind is ImportKind.PERIOD:
        return parse_period(rows, find_product=find_product, find_company=find_company)
    if kind in CAPACITY_KINDS:
        return parse_capacity(rows, find_product=find_product, find_company=find_company, kind=kind)
    if kind in FINANCE_KINDS:
        return parse_finance(rows, find_company=find_company, kind=kind)
    return parse_polish_chemical(rows, find_product=find_product)
