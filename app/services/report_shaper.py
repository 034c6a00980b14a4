import logging

import pandas as pd

from app.config import (
    COL_CLASS_COUNTS,
    COL_MODULE,
    COL_NAME,
    COL_SESSION_START,
    REPORT_DATE_HEADER,
    REPORT_DROPPED_COLUMNS,
    REPORT_SERIAL_HEADER,
)
from app.models.sessions import ClassBreakdownEntry, ClassSession
from app.utils.class_counts import parse_class_counts
from app.utils.dates import format_date, format_datetime, is_datetime_value

logger = logging.getLogger(__name__)


# -----------------------------
# Report 1: all sessions
# -----------------------------
def report_columns(columns) -> list[tuple[str, str]]:
    """(source column, report header) pairs, in sheet order."""
    kept = []
    for col in columns:
        if col in REPORT_DROPPED_COLUMNS:
            continue
        if col == COL_SESSION_START:
            kept.append((col, REPORT_DATE_HEADER))
        else:
            kept.append((col, col))
    return kept


def _date_cell(value):
    return format_date(value) if is_datetime_value(value) else value


def _format_cell(value, is_date_column: bool):
    if is_date_column:
        return _date_cell(value)
    if is_datetime_value(value):
        return format_datetime(value)
    return value


def build_sessions_report(df: pd.DataFrame, columns=None) -> tuple[list[str], list[list]]:
    """
    Returns (headers, rows). Serial numbers follow the order of `df`,
    not the sheet row numbers.
    """
    kept = report_columns(columns if columns is not None else df.columns)
    headers = [REPORT_SERIAL_HEADER] + [h for _, h in kept]
    source_cols = [c for c, _ in kept]
    date_flags = [c == COL_SESSION_START for c in source_cols]

    rows = []
    for serial, values in enumerate(df[source_cols].itertuples(index=False, name=None), start=1):
        row = [serial]
        for value, is_date_column in zip(values, date_flags):
            row.append(_format_cell(value, is_date_column))
        rows.append(row)
    return headers, rows


# -----------------------------
# Report 2: class breakdown for one school
# -----------------------------
def build_class_breakdown(
    df: pd.DataFrame,
    school_name: str,
    catalog: dict[str, list[str]],
) -> list[ClassBreakdownEntry]:
    if school_name not in catalog:
        return []

    # One entry per known class, catalog order; duplicates share one entry
    breakdown: dict[str, ClassBreakdownEntry] = {}
    for class_name in catalog[school_name]:
        breakdown.setdefault(class_name, ClassBreakdownEntry(class_name=class_name))

    for _, r in df.iterrows():
        module = r.get(COL_MODULE, "")
        coordinator = r.get(COL_NAME, "")
        session_date = _date_cell(r.get(COL_SESSION_START, ""))

        for class_name, students in parse_class_counts(r.get(COL_CLASS_COUNTS, "")):
            entry = breakdown.get(class_name)
            if entry is None:
                logger.debug("Class %r is not listed for %s; dropped", class_name, school_name)
                continue
            entry.sessions.append(
                ClassSession(
                    module=module,
                    date=session_date,
                    coordinator=coordinator,
                    students=students,
                )
            )

    return list(breakdown.values())
