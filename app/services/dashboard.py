import logging
from dataclasses import dataclass, field
from typing import Optional

import pandas as pd

from app.config import ALL_COORDINATORS, ALL_SCHOOLS
from app.models.sessions import FilterCriteria, SessionRecord
from app.repositories.lookups_repo import (
    load_coordinators,
    load_modules,
    load_school_catalog,
    school_names,
)
from app.repositories.sessions_repo import append_session, load_sessions_df
from app.services.report_shaper import build_class_breakdown, build_sessions_report
from app.services.session_filter import apply_filters
from app.services.sheets_source import SheetsSource
from app.errors import StorageWriteError

logger = logging.getLogger(__name__)

SAVE_OK = "Data saved successfully"


@dataclass
class DashboardReport:
    report1: list[list]
    report1_headers: list[str]
    report2: Optional[list]          # None unless one school is selected
    filter_values: dict
    errors: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "report1": self.report1,
            "report1Headers": self.report1_headers,
            "report2": (
                [e.to_dict() for e in self.report2] if self.report2 is not None else None
            ),
            "filterValues": self.filter_values,
            "errors": self.errors,
        }


def run_dashboard_query(
    sessions_df: pd.DataFrame,
    catalog: dict[str, list[str]],
    criteria: FilterCriteria,
    filter_values: Optional[dict] = None,
) -> DashboardReport:
    """Filter, then shape both reports. Inputs are not modified."""
    filtered = apply_filters(sessions_df, criteria)
    headers, rows = build_sessions_report(filtered, sessions_df.columns)

    report2 = None
    if criteria.school_selected:
        report2 = build_class_breakdown(filtered, criteria.school_name, catalog)

    return DashboardReport(
        report1=rows,
        report1_headers=headers,
        report2=report2,
        filter_values=filter_values if filter_values is not None else criteria.to_dict(),
    )


# -----------------------------
# Request handlers (Streamlit calls these; results are JSON-serializable)
# -----------------------------
def get_filtered_data(source: SheetsSource, filters: dict) -> dict:
    criteria = FilterCriteria.from_dict(filters)
    sessions = load_sessions_df(source)

    catalog = {}
    schools_error = None
    if criteria.school_selected:
        schools = load_school_catalog(source)
        catalog, schools_error = schools.data, schools.error

    report = run_dashboard_query(sessions.data, catalog, criteria, filter_values=filters)
    report.errors = {"sessions": sessions.error, "schools": schools_error}
    logger.info(
        "Dashboard query %s -> %d session(s)", criteria.to_dict(), len(report.report1)
    )
    return report.to_dict()


def get_dashboard_filter_data(source: SheetsSource) -> dict:
    coordinators = load_coordinators(source)
    schools = load_school_catalog(source)
    modules = load_modules(source)

    return {
        "coordinators": [ALL_COORDINATORS, *coordinators.data],
        "schools": [ALL_SCHOOLS, *school_names(schools.data)],
        "modules": modules.data,
    }


def get_form_options(source: SheetsSource) -> dict:
    """Everything the session form needs, with per-source error messages."""
    schools = load_school_catalog(source)
    coordinators = load_coordinators(source)
    modules = load_modules(source)

    return {
        "schoolData": schools.data,
        "coordinatorData": coordinators.data,
        "moduleData": modules.data,
        "errors": {
            "coordinators": coordinators.error,
            "modules": modules.error,
            "schools": schools.error,
        },
    }


def process_form(source: SheetsSource, form_data: dict) -> str:
    """Append one session row. StorageWriteError propagates to the caller."""
    record = SessionRecord.from_form(form_data)
    try:
        append_session(source, record)
    except StorageWriteError as exc:
        logger.error("Error processing form: %s", exc.cause)
        raise

    logger.info(
        "Session logged: %s at %s (%s)",
        record.coordinator_name,
        record.school_name,
        record.session_start,
    )
    return SAVE_OK
