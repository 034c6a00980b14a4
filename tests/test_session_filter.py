from datetime import date

import pandas as pd

from app.config import ALL_COORDINATORS, ALL_SCHOOLS, COL_NAME, COL_SCHOOL, COL_SESSION_START, TRACKER_HEADERS
from app.models.sessions import FilterCriteria
from app.services.session_filter import apply_filters


def _df(rows):
    """rows: (coordinator, school, session start)"""
    records = []
    for name, school, start in rows:
        r = {h: "" for h in TRACKER_HEADERS}
        r[COL_NAME] = name
        r[COL_SCHOOL] = school
        r[COL_SESSION_START] = pd.Timestamp(start) if start else ""
        records.append(r)
    return pd.DataFrame(records, columns=TRACKER_HEADERS)


def _names(df):
    return df[COL_NAME].tolist()


def test_no_criteria_returns_input_unchanged():
    df = _df([("B", "Y", "2024-01-02"), ("A", "X", "2024-01-01")])
    out = apply_filters(df, FilterCriteria())
    pd.testing.assert_frame_equal(out, df)


def test_sentinels_mean_no_filter():
    df = _df([("B", "Y", "2024-01-02"), ("A", "X", "2024-01-01")])
    out = apply_filters(df, FilterCriteria(coordinator_name=ALL_COORDINATORS, school_name=ALL_SCHOOLS))
    assert _names(out) == ["B", "A"]


def test_unknown_coordinator_gives_empty_result():
    df = _df([("A", "X", "2024-01-01"), ("B", "Y", "2024-01-02")])
    assert apply_filters(df, FilterCriteria(coordinator_name="Nobody")).empty


def test_coordinator_match_is_exact():
    df = _df([("A", "X", "2024-01-01"), ("a", "X", "2024-01-01"), ("A ", "X", "2024-01-01")])
    out = apply_filters(df, FilterCriteria(coordinator_name="A"))
    assert _names(out) == ["A"]


def test_school_filter_keeps_order():
    df = _df([("C", "X", "2024-01-03"), ("B", "Y", "2024-01-02"), ("A", "X", "2024-01-01")])
    out = apply_filters(df, FilterCriteria(school_name="X"))
    assert _names(out) == ["C", "A"]


def test_start_bound_is_inclusive_at_midnight():
    df = _df([
        ("exact", "X", "2024-01-05 00:00:00"),
        ("before", "X", "2024-01-04 23:59:59.999"),
    ])
    out = apply_filters(df, FilterCriteria(start_date=date(2024, 1, 5)))
    assert _names(out) == ["exact"]


def test_end_bound_covers_whole_day_plus_midnight():
    df = _df([
        ("late", "X", "2024-01-07 23:59:59"),
        ("next-midnight", "X", "2024-01-08 00:00:00"),
        ("one-ms-after", "X", "2024-01-08 00:00:00.001"),
    ])
    out = apply_filters(df, FilterCriteria(end_date=date(2024, 1, 7)))
    assert _names(out) == ["late", "next-midnight"]


def test_unparseable_start_dropped_only_with_date_range():
    df = _df([("A", "X", None), ("B", "X", "2024-01-05 09:00")])
    df.loc[0, COL_SESSION_START] = "sometime"
    assert _names(apply_filters(df, FilterCriteria())) == ["A", "B"]
    assert _names(apply_filters(df, FilterCriteria(start_date=date(2024, 1, 1)))) == ["B"]


def test_filters_compose():
    df = _df([
        ("A", "X", "2024-01-05 10:00"),
        ("A", "Y", "2024-01-05 10:00"),
        ("A", "X", "2024-02-05 10:00"),
        ("B", "X", "2024-01-05 10:00"),
    ])
    criteria = FilterCriteria(
        coordinator_name="A",
        school_name="X",
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 31),
    )
    out = apply_filters(df, criteria)
    assert len(out) == 1
    assert out.index.tolist() == [0]
