import numbers
from datetime import date, datetime

import pandas as pd

from app.config import DATE_FORMAT, DATETIME_FORMAT


def parse_iso_date(s) -> date | None:
    s = (s or "").strip() if isinstance(s, str) else ""
    if not s:
        return None
    try:
        return date.fromisoformat(s[:10])
    except ValueError:
        return None


# Day 0 of Google Sheets date serials
SHEETS_EPOCH = pd.Timestamp("1899-12-30")


def cell_to_timestamp(value):
    """
    Sheet cell to Timestamp. Accepts datetimes, serial day counts
    (unformatted reads) and ISO 8601 text; anything else is NaT.
    Locale-formatted text such as "05/01/2024" is not guessed at.
    """
    if isinstance(value, bool) or value is None:
        return pd.NaT
    if isinstance(value, (datetime, date)):
        return pd.Timestamp(value)
    if isinstance(value, numbers.Real):
        if pd.isna(value):
            return pd.NaT
        return (SHEETS_EPOCH + pd.Timedelta(days=value)).round("ms")
    if isinstance(value, str) and value.strip():
        try:
            return pd.to_datetime(value.strip(), format="ISO8601")
        except (ValueError, OverflowError):
            return pd.NaT
    return pd.NaT


def to_timestamps(values: pd.Series) -> pd.Series:
    """Coerce a column to datetimes; anything unparseable becomes NaT."""
    return pd.to_datetime(values.map(cell_to_timestamp))


def is_datetime_value(value) -> bool:
    return isinstance(value, (datetime, date)) and not pd.isna(value)


def format_date(value) -> str:
    return value.strftime(DATE_FORMAT)


def format_datetime(value) -> str:
    if isinstance(value, datetime):
        return value.strftime(DATETIME_FORMAT)
    return value.strftime(DATE_FORMAT)
