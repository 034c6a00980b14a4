import logging

from app.config import COORDINATORS_TAB, MODULES_TAB, SCHOOLS_TAB
from app.errors import SourceError, SourceMissing
from app.models.results import ReadResult
from app.services.sheets_source import SheetsSource

logger = logging.getLogger(__name__)

# -----------------------------
# Sheet helpers for lookup tabs (Coordinators, Modules, Schools)
# -----------------------------

def _is_blank(value) -> bool:
    return value is None or str(value).strip() == ""


def column_values(values: list[list], column: int | str = 0, skip_header: bool = True) -> list:
    """
    Non-blank values of one column, in row order.
    `column` is a 0-based index or a header name looked up in the first row.
    """
    if not values:
        return []

    if isinstance(column, str):
        try:
            idx = values[0].index(column)
        except ValueError:
            return []
    else:
        idx = column

    rows = values[1:] if skip_header else values
    out = []
    for row in rows:
        if idx >= len(row):
            continue
        cell = row[idx]
        if _is_blank(cell):
            continue
        out.append(cell)
    return out


def extract_column(
    source: SheetsSource,
    tab_name: str,
    column: int | str = 0,
    skip_header: bool = True,
) -> ReadResult:
    try:
        values = source.read_table(tab_name)
    except SourceMissing as exc:
        logger.warning("Sheet '%s' was not found.", tab_name)
        return ReadResult.failed(str(exc), [])
    except SourceError as exc:
        logger.error("Error reading sheet '%s': %s", tab_name, exc.cause)
        return ReadResult.failed(str(exc), [])

    data = column_values(values, column, skip_header)
    if not data:
        logger.info("Sheet '%s' has no data entries.", tab_name)
    return ReadResult(data=data)


def load_coordinators(source: SheetsSource) -> ReadResult:
    return extract_column(source, COORDINATORS_TAB)


def load_modules(source: SheetsSource) -> ReadResult:
    return extract_column(source, MODULES_TAB)


def build_school_catalog(values: list[list]) -> dict[str, list[str]]:
    """
    Schools tab is wide: row 0 holds one school per column, the cells below
    hold that school's classes. Blank cells are dropped; a school with no
    classes is kept with an empty list.
    """
    if not values or all(_is_blank(c) for c in values[0]):
        return {}

    headers = values[0]
    catalog: dict[str, list[str]] = {}
    for col, header in enumerate(headers):
        school = str(header).strip() if header is not None else ""
        if not school:
            continue
        classes = [str(c).strip() for c in column_values(values, col, skip_header=True)]
        catalog[school] = classes
    return catalog


def load_school_catalog(source: SheetsSource) -> ReadResult:
    try:
        values = source.read_table(SCHOOLS_TAB)
    except SourceMissing as exc:
        logger.warning("The '%s' sheet was not found.", SCHOOLS_TAB)
        return ReadResult.failed(
            f"The '{SCHOOLS_TAB}' worksheet is missing. Please create a sheet named '{SCHOOLS_TAB}'.",
            {},
        )
    except SourceError as exc:
        logger.error("Error reading school data: %s", exc.cause)
        return ReadResult.failed(f"Failed to load school data: {exc.cause}", {})

    catalog = build_school_catalog(values)
    if not catalog:
        logger.info("The '%s' sheet is empty or only contains empty headers.", SCHOOLS_TAB)
    return ReadResult(data=catalog)


def school_names(catalog: dict[str, list[str]]) -> list[str]:
    return list(catalog.keys())
