from datetime import date, datetime
from utils.constants import DATE_FORMAT


def current_year_month() -> tuple[int, int]:
    d = date.today()
    return d.year, d.month


def parse_date(date_str: str) -> date | None:
    """Parse a date string in YYYY-MM-DD format, returning None on failure."""
    if not date_str:
        return None
    for fmt in ("%Y-%m-%d", "%Y/%m/%d", "%Y.%m.%d"):
        try:
            return datetime.strptime(date_str.strip(), fmt).date()
        except ValueError:
            continue
    return None


def normalize_date(date_str: str) -> str | None:
    """Return the YYYY-MM-DD form of any accepted input, or None."""
    d = parse_date(date_str)
    return format_date(d) if d else None


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def month_label(year: int, month: int) -> str:
    """(2024, 1) -> 'Jan 2024'."""
    return date(year, month, 1).strftime("%b %Y")


def friendly_month(year: int, month: int) -> str:
    """(2026, 2) -> 'February 2026'."""
    return date(year, month, 1).strftime("%B %Y")
