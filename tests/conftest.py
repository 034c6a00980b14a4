import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
for p in (ROOT, ROOT / "tests"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from app.config import TRACKER_HEADERS
from app.services.sheets_source import SheetsSource
from fakes import FakeSpreadsheet, FakeWorksheet


@pytest.fixture
def tracker_values():
    return [
        TRACKER_HEADERS,
        ["2024-01-05 12:00:00", "A", "2024-01-05 10:00:00", "2024-01-05 11:00:00",
         "Fractions", "X", "6a: 20, 7b: 15", "Learned halves", "None"],
        ["2024-01-06 12:00:00", "B", "2024-01-06 09:00:00", "2024-01-06 10:00:00",
         "Decimals", "Y", "p: 10", "", ""],
        ["2024-01-08 12:00:00", "A", "2024-01-08 09:30:00", "2024-01-08 10:30:00",
         "Decimals", "X", "7b: 12, 9z: 3", "", "Projector broke"],
    ]


@pytest.fixture
def schools_values():
    return [
        ["X", "Y", "", "Z"],
        ["6a", "p", "", ""],
        ["7b", "", "", ""],
    ]


@pytest.fixture
def spreadsheet(tracker_values, schools_values):
    return FakeSpreadsheet(
        {
            "Tracker": FakeWorksheet(tracker_values),
            "Schools": FakeWorksheet(schools_values),
            "Coordinators": FakeWorksheet([["Coordinator"], ["A"], ["  "], ["B"]]),
            "Modules": FakeWorksheet([["Module"], ["Fractions"], ["Decimals"], [""]]),
        }
    )


@pytest.fixture
def source(spreadsheet):
    return SheetsSource(spreadsheet)
