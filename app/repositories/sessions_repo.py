# app/repositories/sessions_repo.py
import logging

import pandas as pd

from app.config import (
    COL_SESSION_END,
    COL_SESSION_START,
    COL_TIMESTAMP,
    TRACKER_HEADERS,
    TRACKER_TAB,
)
from app.errors import SourceError, SourceMissing
from app.models.results import ReadResult
from app.models.sessions import SessionRecord
from app.services.sheets_source import SheetsSource
from app.utils.dates import to_timestamps

logger = logging.getLogger(__name__)

DATE_COLUMNS = (COL_TIMESTAMP, COL_SESSION_START, COL_SESSION_END)


def sessions_df_from_values(values: list[list]) -> pd.DataFrame:
    """
    Build the sessions frame from raw Tracker values (header row first).
    Date columns hold Timestamps where the cell parses, the raw text otherwise.
    """
    if len(values) <= 1:
        headers = values[0] if values else TRACKER_HEADERS
        df = pd.DataFrame(columns=headers)
    else:
        headers = values[0]
        width = len(headers)
        rows = [(list(r) + [""] * width)[:width] for r in values[1:]]
        df = pd.DataFrame(rows, columns=headers)

    # Ensure all columns exist
    for c in TRACKER_HEADERS:
        if c not in df.columns:
            df[c] = ""

    for c in DATE_COLUMNS:
        if df.empty:
            continue
        raw = df[c]
        parsed = to_timestamps(raw)
        df[c] = parsed.astype(object).where(parsed.notna(), raw)

    return df


def load_sessions_df(source: SheetsSource) -> ReadResult:
    try:
        values = source.read_table(TRACKER_TAB, unformatted=True)
    except SourceMissing as exc:
        logger.warning("Sheet '%s' was not found.", TRACKER_TAB)
        return ReadResult.failed(str(exc), sessions_df_from_values([]))
    except SourceError as exc:
        logger.error("Error reading sheet '%s': %s", TRACKER_TAB, exc.cause)
        return ReadResult.failed(str(exc), sessions_df_from_values([]))

    if len(values) <= 1:
        logger.info("Sheet '%s' has no session rows.", TRACKER_TAB)
    return ReadResult(data=sessions_df_from_values(values))


def append_session(source: SheetsSource, record: SessionRecord) -> None:
    """Raises StorageWriteError when the row cannot be written."""
    source.ensure_headers(TRACKER_TAB, TRACKER_HEADERS)
    source.append_row(TRACKER_TAB, record.to_row())
