import pandas as pd
import streamlit as st
from datetime import datetime, date, time

from app.errors import StorageWriteError
from app.services.gsheets_client import get_sheets_source
from app.services.dashboard import (
    get_dashboard_filter_data,
    get_filtered_data,
    get_form_options,
    process_form,
)
from app.utils.class_counts import format_class_counts
from app.utils.logging_setup import configure_logging
from app.ui.state import (
    KEY_COUNT_ROWS,
    KEY_COORDINATOR,
    KEY_MODULE,
    KEY_SCHOOL,
    KEY_SESSION_DATE,
    KEY_START_TIME,
    KEY_END_TIME,
    KEY_OUTCOMES,
    KEY_CHALLENGES,
    KEY_DASHBOARD_RESULT,
    init_state_if_missing,
    add_count_row,
    remove_count_row,
    mark_reset,
    apply_reset_if_marked,
    dashboard_cache_stale,
    store_dashboard_result,
    invalidate_dashboard_cache,
    set_flash,
    pop_flash)

logger = configure_logging()

st.set_page_config(page_title="Session Tracker", layout="wide")


def refresh_form_cache(source):
    st.session_state["form_options_cache"] = get_form_options(source)
    st.session_state["form_cache_ready"] = True

def refresh_filter_cache(source):
    st.session_state["filter_options_cache"] = get_dashboard_filter_data(source)
    st.session_state["filter_cache_ready"] = True

def refresh_dashboard_cache(source, filters: dict):
    # Call Sheets ONLY here; other reruns reuse the cached result
    store_dashboard_result(filters, get_filtered_data(source, filters))

def _show_read_errors(errors: dict) -> None:
    for what, message in errors.items():
        if message:
            st.warning(f"{what.capitalize()}: {message}")


try:
    source = get_sheets_source()
except Exception as e:  # credentials, sheet id or network
    logger.exception("Could not open the spreadsheet")
    st.error(f"Could not open the spreadsheet: {e}")
    st.stop()


# -----------------------------
# Streamlit UI
# -----------------------------
tab_entry, tab_dashboard = st.tabs(["Log Session", "Dashboard"])

with tab_entry:
    init_state_if_missing()
    apply_reset_if_marked()

    flash = pop_flash()
    if flash:
        st.success(flash)

    if not st.session_state.get("form_cache_ready"):
        refresh_form_cache(source)
    options = st.session_state["form_options_cache"]
    _show_read_errors(options["errors"])

    school_data = options["schoolData"]

    c1, c2 = st.columns(2)
    with c1:
        coordinator = st.selectbox("Coordinator", options["coordinatorData"], index=None, key=KEY_COORDINATOR)
        school = st.selectbox("School", list(school_data.keys()), index=None, key=KEY_SCHOOL)
    with c2:
        module = st.selectbox("Module", options["moduleData"], index=None, key=KEY_MODULE)
        session_date = st.date_input("Session date", value=date.today(), key=KEY_SESSION_DATE)

    t1, t2 = st.columns(2)
    with t1:
        start_time = st.time_input("Start time", value=time(9, 0), key=KEY_START_TIME)
    with t2:
        end_time = st.time_input("End time", value=time(10, 0), key=KEY_END_TIME)

    st.markdown("**Classes** (class + number of students)")

    b1, b2, _ = st.columns([1, 3, 7])
    with b1:
        st.button("Add", on_click=add_count_row, key="add_class_btn")
    with b2:
        st.button("Reset", on_click=mark_reset, key="reset_all_btn")

    classes = school_data.get(school, []) if school else []
    for row in st.session_state[KEY_COUNT_ROWS]:
        rid = row["row_id"]
        col1, col2, col3 = st.columns([2, 2, 1])

        with col1:
            if classes:
                class_name = st.selectbox(
                    "Class",
                    classes,
                    index=classes.index(row["class_name"]) if row["class_name"] in classes else 0,
                    key=f"class_{rid}",
                    label_visibility="collapsed",
                )
            else:
                class_name = st.text_input(
                    "Class",
                    value=row["class_name"],
                    key=f"class_{rid}",
                    label_visibility="collapsed",
                )

        with col2:
            count = st.number_input(
                "Students",
                min_value=0,
                max_value=500,
                value=int(row["count"]),
                step=1,
                key=f"count_{rid}",
                label_visibility="collapsed",
            )

        with col3:
            st.button("Remove", on_click=remove_count_row, args=(rid,), key=f"remove_{rid}")

        row["class_name"] = class_name
        row["count"] = int(count)

    learning_outcomes = st.text_area("Learning outcomes", key=KEY_OUTCOMES)
    challenges_faced = st.text_area("Challenges faced", key=KEY_CHALLENGES)

    if st.button("Submit", type="primary", key="submit_session_btn"):
        class_counts = format_class_counts(
            (r["class_name"], r["count"]) for r in st.session_state[KEY_COUNT_ROWS]
        )
        if not coordinator or not school or not module:
            st.error("Coordinator, school and module are required.")
        elif end_time <= start_time:
            st.error("End time must be after start time.")
        elif not class_counts:
            st.error("Please add at least one class.")
        else:
            payload = {
                "name": coordinator,
                "sessionStartTime": datetime.combine(session_date, start_time),
                "sessionEndTime": datetime.combine(session_date, end_time),
                "module": module,
                "schoolName": school,
                "classCounts": class_counts,
                "learningOutcomes": learning_outcomes,
                "challengesFaced": challenges_faced,
            }
            try:
                message = process_form(source, payload)
            except StorageWriteError as e:
                st.error(str(e))
            else:
                # Shown on the next run, after the rerun below
                set_flash(message)
                invalidate_dashboard_cache()
                mark_reset()
                st.rerun()


with tab_dashboard:
    st.header("Session Data Dashboard")

    refresh = st.button("Refresh", key="refresh_dashboard_btn")
    if refresh or not st.session_state.get("filter_cache_ready"):
        refresh_filter_cache(source)
    filter_options = st.session_state["filter_options_cache"]

    f1, f2, f3, f4 = st.columns(4)
    with f1:
        name = st.selectbox("Coordinator", filter_options["coordinators"], key="filter_name")
    with f2:
        school_filter = st.selectbox("School", filter_options["schools"], key="filter_school")
    with f3:
        start_date = st.date_input("From", value=None, key="filter_start")
    with f4:
        end_date = st.date_input("To", value=None, key="filter_end")

    if start_date is not None and end_date is not None and end_date < start_date:
        st.error("End date must be on/after start date.")
        st.stop()

    filters = {
        "name": name,
        "school": school_filter,
        "startDate": start_date.isoformat() if start_date else None,
        "endDate": end_date.isoformat() if end_date else None,
    }
    if dashboard_cache_stale(filters, refresh):
        refresh_dashboard_cache(source, filters)
    result = st.session_state[KEY_DASHBOARD_RESULT]
    _show_read_errors(result["errors"])

    st.subheader(f"All Sessions ({len(result['report1'])})")
    if result["report1"]:
        st.dataframe(
            pd.DataFrame(result["report1"], columns=result["report1Headers"]),
            use_container_width=True,
            hide_index=True,
        )
    else:
        st.info("No sessions match these filters.")

    if result["report2"] is not None:
        st.subheader(f"Class Breakdown: {school_filter}")
        if not result["report2"]:
            st.info("No classes are listed for this school.")
        for entry in result["report2"]:
            sessions = entry["sessions"]
            total = sum(s["students"] for s in sessions)
            with st.expander(f"{entry['className']} ({len(sessions)} sessions, {total} students)"):
                if sessions:
                    st.dataframe(pd.DataFrame(sessions), use_container_width=True, hide_index=True)
                else:
                    st.caption("No sessions recorded.")
