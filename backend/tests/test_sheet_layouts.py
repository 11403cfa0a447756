import pytest

from cirec_admin.services.sheet_layouts import (
    ImportKind,
    PeriodLabel,
    cell_amount,
    decode_period_label,
    header_columns,
    parse_capacity,
    parse_companies,
    parse_finance,
    parse_import_kind,
    parse_period,
    parse_polish_chemical,
    parse_products,
)

PRODUCTS = {"Methanol": 1, "Ethylene": 2}
COMPANIES = {("Azot", "Grodno"): 10, ("Orlen", "Plock"): 11}


def _find_product(name: str):
    return PRODUCTS.get(name)


def _find_company(name: str, location: str):
    return COMPANIES.get((name, location))


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("Q1-98", PeriodLabel("Q1", 1998)),
        ("Q4-97", PeriodLabel("Q4", 1997)),
        ("Q1-23", PeriodLabel("Q1", 2023)),
        ("Q2-00", PeriodLabel("Q2", 2000)),
        ("Q3-96", PeriodLabel("Q3", 2096)),
    ],
)
def test_two_digit_years_decode_by_century_rule(label: str, expected: PeriodLabel) -> None:
    assert decode_period_label(label) == expected


@pytest.mark.parametrize("label", [None, "", "Q1", "Total", "Q1-xx"])
def test_undecodable_labels_are_ignored(label) -> None:
    assert decode_period_label(label) is None


def test_header_columns_start_at_offset_and_skip_blank_labels() -> None:
    row = ("Producer", "Location", None, "Q1-98", None, "Q2-98")

    assert header_columns(row, 3) == [(3, PeriodLabel("Q1", 1998)), (5, PeriodLabel("Q2", 1998))]


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (12, 12.0),
        (3.5, 3.5),
        ("7", 7.0),
        ("1,250.5", 1250.5),
        ("n/a", 0.0),
        (None, 0.0),
        (True, 0.0),
        ("nan", 0.0),
        ("inf", 0.0),
        ("-Infinity", 0.0),
        (float("nan"), 0.0),
    ],
)
def test_cell_amount_defaults_non_numeric_to_zero(value, expected: float) -> None:
    assert cell_amount(value) == expected


def test_import_kind_codes() -> None:
    assert parse_import_kind("41") is ImportKind.EXTENDED_CAPACITY
    assert parse_import_kind(8) is ImportKind.POLISH_CHEMICAL
    with pytest.raises(ValueError, match="Unknown import type"):
        parse_import_kind("9")


def test_products_sheet_skips_blank_and_repeated_header_rows() -> None:
    rows = [
        ("Product", "Group"),
        ("Methanol", "A"),
        (None, None),
        ("Product", "Group"),
        ("Ethylene", None),
    ]

    parsed = parse_products(rows)

    assert [(row.name, row.group) for row in parsed.products] == [("Methanol", "A"), ("Ethylene", "z")]
    assert parsed.skipped_rows == 2


def test_products_sheet_requires_product_column() -> None:
    with pytest.raises(ValueError, match="'Product'"):
        parse_products([("Name", "Group"), ("Methanol", "A")])


def test_companies_sheet_reads_header_keyed_columns() -> None:
    rows = [
        ("Country", "Producer", "Location"),
        ("Poland", "Orlen", "Plock"),
        ("Belarus", "Azot", None),
    ]

    parsed = parse_companies(rows)

    assert [(c.name, c.location, c.country_name) for c in parsed.companies] == [
        ("Orlen", "Plock", "Poland"),
        ("Azot", "", "Belarus"),
    ]


def test_capacity_sheet_skips_only_unresolved_company_rows() -> None:
    rows = [
        ("Capacity report",),
        ("Product", "Methanol"),
        ("Producer", "Location", None, "Start", "Technology", "Feedstock", "Q1-98", "Q2-23"),
        ("Azot", "Grodno", None, "1990", "ICI", "Gas", 100, "n/a"),
        ("Unknown", "Nowhere", None, None, None, None, 5, 5),
        ("Orlen", "Plock", None, "2001", "Lurgi", "Oil", 50, 60),
        ("Total", None, None, None, None, None, 150, 65),
    ]

    parsed = parse_capacity(rows, find_product=_find_product, find_company=_find_company)

    assert parsed.skipped_rows == 1
    assert [(f.company_id, f.quarter, f.year, f.amount) for f in parsed.facts] == [
        (10, "Q1", 1998, 100.0),
        (10, "Q2", 2023, 0.0),
        (11, "Q1", 1998, 50.0),
        (11, "Q2", 2023, 60.0),
    ]
    assert {fact.product_id for fact in parsed.facts} == {1}
    assert [(d.company_id, d.start_date, d.technology, d.feedstock) for d in parsed.descriptions] == [
        (10, "1990", "ICI", "Gas"),
        (11, "2001", "Lurgi", "Oil"),
    ]


def test_capacity_rows_under_unknown_product_are_skipped() -> None:
    rows = [
        ("Product", "Unobtainium"),
        ("Producer", "Location", None, None, None, None, "Q1-20"),
        ("Azot", "Grodno", None, None, None, None, 1),
        ("Product", "Ethylene"),
        ("Producer", "Location", None, None, None, None, "Q1-21"),
        ("Orlen", "Plock", None, None, None, None, 2),
    ]

    parsed = parse_capacity(rows, find_product=_find_product, find_company=_find_company)

    assert [(f.product_id, f.company_id, f.year) for f in parsed.facts] == [(2, 11, 2021)]
    assert parsed.skipped_rows == 1


def test_period_sheet_reads_location_from_third_column() -> None:
    rows = [
        ("Product", "Ethylene"),
        ("Producer", None, "Location", "Q3-99", "Q4-99"),
        ("Orlen", "ignored", "Plock", 7, 8),
        ("Orlen", "ignored", "Gdansk", 1, 1),
        ("Total", None, None, 7, 8),
    ]

    parsed = parse_period(rows, find_product=_find_product, find_company=_find_company)

    assert [(f.product_id, f.company_id, f.quarter, f.year, f.amount) for f in parsed.facts] == [
        (2, 11, "Q3", 1999, 7.0),
        (2, 11, "Q4", 1999, 8.0),
    ]
    assert parsed.skipped_rows == 1


def test_finance_sheet_header_is_first_row() -> None:
    rows = [
        ("Producer", "Location", "Q1-22", "Q2-22"),
        ("Orlen", "Plock", 10, "x"),
        (" ", None, 3, 3),
        ("Total", None, 10, 0),
    ]

    parsed = parse_finance(rows, find_company=_find_company, kind=ImportKind.NET_FINANCE)

    assert parsed.kind is ImportKind.NET_FINANCE
    assert [(f.company_id, f.quarter, f.year, f.amount) for f in parsed.facts] == [
        (11, "Q1", 2022, 10.0),
        (11, "Q2", 2022, 0.0),
    ]


def test_polish_chemical_sheet_waits_for_product_header() -> None:
    rows = [
        ("Polish chemical production", None, "Q4-20"),
        ("Methanol", None, 99),
        ("Product", None, "Q1-21", "Q2-21"),
        (" Methanol ", None, 1.5, 2),
        ("Unknown", None, 1, 1),
        ("Total", None, 1, 1),
    ]

    parsed = parse_polish_chemical(rows, find_product=_find_product)

    assert [(f.product_id, f.quarter, f.year, f.amount) for f in parsed.facts] == [
        (1, "Q1", 2021, 1.5),
        (1, "Q2", 2021, 2.0),
    ]
    assert parsed.skipped_rows == 1
