from datetime import datetime

import pandas as pd
import pytest
from google.auth.exceptions import TransportError
from gspread.utils import DateTimeOption, ValueRenderOption

from app.config import TRACKER_HEADERS
from app.errors import StorageWriteError
from app.models.sessions import SessionRecord
from app.repositories.sessions_repo import append_session, load_sessions_df, sessions_df_from_values
from app.services.sheets_source import SheetsSource
from fakes import FakeSpreadsheet, FakeWorksheet


def _record():
    return SessionRecord.create(
        coordinator_name=" A ",
        session_start=datetime(2024, 1, 5, 10, 0),
        session_end="2024-01-05T11:00",
        module="Fractions",
        school_name="X",
        class_counts="6a: 20",
        learning_outcomes="Halves",
        challenges_faced="",
        now=datetime(2024, 1, 5, 12, 30, 0),
    )


def test_sessions_df_parses_date_columns(tracker_values):
    df = sessions_df_from_values(tracker_values)
    assert list(df.columns) == TRACKER_HEADERS
    assert len(df) == 3
    assert df.loc[0, "Session Start Time"] == pd.Timestamp("2024-01-05 10:00:00")
    assert df.loc[0, "Name"] == "A"


def test_sessions_df_pads_short_rows_and_adds_missing_columns():
    values = [["Name", "Session Start Time"], ["A"], ["B", "bad date"]]
    df = sessions_df_from_values(values)
    assert set(TRACKER_HEADERS) <= set(df.columns)
    assert df["Session Start Time"].tolist() == ["", "bad date"]
    assert df["Module"].tolist() == ["", ""]


def test_sessions_df_header_only():
    df = sessions_df_from_values([TRACKER_HEADERS])
    assert df.empty
    assert list(df.columns) == TRACKER_HEADERS


def test_load_sessions_missing_tracker():
    result = load_sessions_df(SheetsSource(FakeSpreadsheet({})))
    assert result.unavailable
    assert result.data.empty
    assert list(result.data.columns) == TRACKER_HEADERS


def test_record_row_matches_tracker_headers():
    row = _record().to_row()
    assert len(row) == len(TRACKER_HEADERS)
    assert row[:4] == ["2024-01-05 12:30:00", "A", "2024-01-05 10:00:00", "2024-01-05 11:00"]


def test_append_session_writes_headers_into_empty_tracker():
    ws = FakeWorksheet([])
    append_session(SheetsSource(FakeSpreadsheet({"Tracker": ws})), _record())
    assert ws.values[0] == TRACKER_HEADERS
    assert ws.values[1][1] == "A"
    assert ws.appended[0][1] == "RAW"


def test_append_session_leaves_existing_headers(tracker_values):
    ws = FakeWorksheet(tracker_values)
    append_session(SheetsSource(FakeSpreadsheet({"Tracker": ws})), _record())
    assert ws.values[0] == TRACKER_HEADERS
    assert len(ws.values) == len(tracker_values) + 1


def test_append_session_missing_tracker_raises():
    with pytest.raises(StorageWriteError, match="^Server error: Sheet 'Tracker' is missing"):
        append_session(SheetsSource(FakeSpreadsheet({})), _record())


def test_append_session_failure_raises():
    source = SheetsSource(FakeSpreadsheet({"Tracker": FakeWorksheet(fail=True)}))
    with pytest.raises(StorageWriteError, match="quota exceeded"):
        append_session(source, _record())


def test_sessions_df_converts_serial_dates():
    # 45296 is 2024-01-05 in sheet serial days; .41666... is 10:00
    values = [TRACKER_HEADERS, [45296.5, "A", 45296 + 10 / 24, 45296 + 11 / 24, "M", "X", "6a: 1", "", ""]]
    df = sessions_df_from_values(values)
    assert df.loc[0, "Session Start Time"] == pd.Timestamp("2024-01-05 10:00:00")
    assert df.loc[0, "Session End Time"] == pd.Timestamp("2024-01-05 11:00:00")
    assert df.loc[0, "Timestamp"] == pd.Timestamp("2024-01-05 12:00:00")


def test_sessions_df_leaves_locale_text_alone():
    values = [
        TRACKER_HEADERS,
        ["", "A", "05/01/2024 10:00:00", "", "M", "X", "", "", ""],
        ["", "B", "13/01/2024 10:00:00", "", "M", "X", "", "", ""],
    ]
    df = sessions_df_from_values(values)
    assert df["Session Start Time"].tolist() == ["05/01/2024 10:00:00", "13/01/2024 10:00:00"]


def test_load_sessions_reads_unformatted_values(tracker_values):
    ws = FakeWorksheet(tracker_values)
    load_sessions_df(SheetsSource(FakeSpreadsheet({"Tracker": ws})))
    assert ws.read_options == {
        "value_render_option": ValueRenderOption.unformatted,
        "date_time_render_option": DateTimeOption.serial_number,
    }


def test_load_sessions_auth_failure_is_unavailable():
    ws = FakeWorksheet(fail=TransportError("token refresh failed"))
    result = load_sessions_df(SheetsSource(FakeSpreadsheet({"Tracker": ws})))
    assert result.unavailable
    assert "token refresh failed" in result.error
    assert result.data.empty
