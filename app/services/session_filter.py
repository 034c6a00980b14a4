import pandas as pd

from app.config import COL_NAME, COL_SCHOOL, COL_SESSION_START, END_DATE_PADDING_MS
from app.models.sessions import FilterCriteria
from app.utils.dates import to_timestamps


def filter_by_coordinator(df: pd.DataFrame, criteria: FilterCriteria) -> pd.DataFrame:
    if not criteria.coordinator_selected:
        return df
    # Exact match: no trimming, case-sensitive
    return df[df[COL_NAME] == criteria.coordinator_name]


def filter_by_school(df: pd.DataFrame, criteria: FilterCriteria) -> pd.DataFrame:
    if not criteria.school_selected:
        return df
    return df[df[COL_SCHOOL] == criteria.school_name]


def filter_by_date_range(df: pd.DataFrame, criteria: FilterCriteria) -> pd.DataFrame:
    """
    Keeps sessions starting in [start_date 00:00, end_date 00:00 + 24h].
    Rows whose start time does not parse are dropped once any bound is set.
    """
    if not criteria.has_date_range or df.empty:
        return df

    starts = to_timestamps(df[COL_SESSION_START])
    mask = pd.Series(True, index=df.index)
    if criteria.start_date is not None:
        mask &= starts >= pd.Timestamp(criteria.start_date)
    if criteria.end_date is not None:
        end = pd.Timestamp(criteria.end_date) + pd.Timedelta(milliseconds=END_DATE_PADDING_MS)
        mask &= starts <= end
    return df[mask]


def apply_filters(df: pd.DataFrame, criteria: FilterCriteria) -> pd.DataFrame:
    """Coordinator, then school, then date range. Each stage only narrows; row order is kept."""
    out = filter_by_coordinator(df, criteria)
    out = filter_by_school(out, criteria)
    out = filter_by_date_range(out, criteria)
    return out
