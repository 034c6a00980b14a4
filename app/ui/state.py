# app/ui/state.py
import uuid
import streamlit as st

# Centralize keys to avoid typos across files
KEY_COUNT_ROWS = "class_count_rows"
KEY_DO_RESET = "_do_reset"
KEY_FLASH = "_flash_message"

KEY_COORDINATOR = "coordinator"
KEY_MODULE = "module"
KEY_SCHOOL = "school"
KEY_SESSION_DATE = "session_date"
KEY_START_TIME = "start_time"
KEY_END_TIME = "end_time"
KEY_OUTCOMES = "learning_outcomes"
KEY_CHALLENGES = "challenges_faced"

def _new_count_row(class_name: str = "", count: int = 0) -> dict:
    return {"row_id": str(uuid.uuid4()), "class_name": class_name, "count": int(count)}

def init_state_if_missing() -> None:
    """Call at the top of the page before rendering widgets."""
    if KEY_COUNT_ROWS not in st.session_state:
        st.session_state[KEY_COUNT_ROWS] = [_new_count_row()]

def add_count_row() -> None:
    st.session_state[KEY_COUNT_ROWS].append(_new_count_row())

def remove_count_row(row_id: str) -> None:
    st.session_state[KEY_COUNT_ROWS] = [
        r for r in st.session_state[KEY_COUNT_ROWS] if r["row_id"] != row_id
    ]
    if not st.session_state[KEY_COUNT_ROWS]:
        st.session_state[KEY_COUNT_ROWS] = [_new_count_row()]

def mark_reset() -> None:
    st.session_state[KEY_DO_RESET] = True

def apply_reset_if_marked() -> None:
    """
    'Reset on next run': call at the very top of the page BEFORE creating
    widgets. Coordinator, school and date are kept for the next entry.
    """
    if st.session_state.get(KEY_DO_RESET):
        st.session_state[KEY_MODULE] = None
        st.session_state[KEY_OUTCOMES] = ""
        st.session_state[KEY_CHALLENGES] = ""
        st.session_state[KEY_COUNT_ROWS] = [_new_count_row()]
        st.session_state[KEY_DO_RESET] = False

# -----------------------------
# Dashboard result cache: Sheets is read only when this says so
# -----------------------------
KEY_DASHBOARD_RESULT = "dashboard_cache"
KEY_DASHBOARD_FILTERS = "dashboard_filters_cache"
KEY_DASHBOARD_READY = "dashboard_cache_ready"

def dashboard_cache_stale(filters: dict, refresh: bool = False) -> bool:
    return (
        refresh
        or not st.session_state.get(KEY_DASHBOARD_READY)
        or st.session_state.get(KEY_DASHBOARD_FILTERS) != filters
    )

def store_dashboard_result(filters: dict, result: dict) -> None:
    st.session_state[KEY_DASHBOARD_RESULT] = result
    st.session_state[KEY_DASHBOARD_FILTERS] = dict(filters)
    st.session_state[KEY_DASHBOARD_READY] = True

def invalidate_dashboard_cache() -> None:
    """After a write, so the next dashboard run reloads from Sheets ONCE."""
    st.session_state[KEY_DASHBOARD_READY] = False

def set_flash(message: str) -> None:
    st.session_state[KEY_FLASH] = message

def pop_flash() -> str | None:
    return st.session_state.pop(KEY_FLASH, None)
