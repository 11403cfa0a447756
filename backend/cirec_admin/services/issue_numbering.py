"""Issue numbering and canonical file naming for periodical series."""

from __future__ import annotations

MONTH_LABELS: tuple[str, ...] = (
    "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
    "JUL", "AUG", "SEP", "OCT", "NOV", "DEC",
)


def validate_month(month: int) -> int:
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    return month


def validate_year(year: int, *, min_year: int, max_year: int) -> int:
    if not min_year <= year <= max_year:
        raise ValueError(f"Year must be between {min_year} and {max_year}, got {year}")
    return year


def issue_number(month: int, year: int, epoch_year: int) -> int:
    """Issue 1 is January of the epoch year; earlier years fall back to the month."""
    validate_month(month)
    if year > epoch_year:
        return (year - epoch_year) * 12 + month
    return month


def issue_title(number: int) -> str:
    return f"Issue no {number}"


def month_label(month: int) -> str:
    return MONTH_LABELS[validate_month(month) - 1]


def pdf_filename(month: int, year: int) -> str:
    """Canonical ``MM-MON YYYY.pdf`` name, e.g. ``06-JUN 2023.pdf``."""
    return f"{month:02d}-{month_label(month)} {year}.pdf"
