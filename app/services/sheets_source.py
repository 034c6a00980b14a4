# app/services/sheets_source.py
import logging

import gspread
from google.auth.exceptions import GoogleAuthError
from gspread.exceptions import GSpreadException, WorksheetNotFound
from gspread.utils import DateTimeOption, ValueRenderOption

from app.errors import SheetsError, SourceError, SourceMissing, StorageWriteError

logger = logging.getLogger(__name__)


class SheetsSource:
    """
    Tabular access to one spreadsheet: read a whole tab, append a row.

    The spreadsheet is passed in; this class never looks up credentials
    or the sheet id itself.
    """

    def __init__(self, spreadsheet):
        self.spreadsheet = spreadsheet
        self._ws_cache = {}

    @classmethod
    def open(cls, client: gspread.Client, sheet_id: str) -> "SheetsSource":
        return cls(client.open_by_key(sheet_id))

    def worksheet(self, tab_name: str):
        if tab_name in self._ws_cache:
            return self._ws_cache[tab_name]

        try:
            ws = self.spreadsheet.worksheet(tab_name)  # metadata read (expensive)
        except WorksheetNotFound as exc:
            raise SourceMissing(tab_name) from exc
        except (GSpreadException, GoogleAuthError, OSError) as exc:
            raise SourceError(tab_name, exc) from exc

        logger.debug("Opened worksheet %s", tab_name)
        self._ws_cache[tab_name] = ws
        return ws

    def read_table(self, tab_name: str, unformatted: bool = False) -> list[list]:
        """
        All rows up to the last one holding data, header row included.
        With `unformatted`, numbers come back as numbers and date cells as
        serial day counts instead of text in the sheet locale.
        """
        ws = self.worksheet(tab_name)
        try:
            if unformatted:
                return ws.get_all_values(
                    value_render_option=ValueRenderOption.unformatted,
                    date_time_render_option=DateTimeOption.serial_number,
                )
            return ws.get_all_values()
        except (GSpreadException, GoogleAuthError, OSError) as exc:
            raise SourceError(tab_name, exc) from exc

    def ensure_headers(self, tab_name: str, headers: list[str]) -> None:
        """Write the header row into an empty tab. Existing rows are left alone."""
        try:
            ws = self.worksheet(tab_name)
            if not ws.row_values(1):
                ws.update(values=[headers], range_name="A1")
        except (SheetsError, GSpreadException, GoogleAuthError, OSError) as exc:
            raise StorageWriteError(tab_name, exc) from exc

    def append_row(self, tab_name: str, values: list) -> None:
        try:
            ws = self.worksheet(tab_name)
            ws.append_row(values, value_input_option="RAW")
        except (SheetsError, GSpreadException, GoogleAuthError, OSError) as exc:
            raise StorageWriteError(tab_name, exc) from exc
