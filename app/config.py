import os

# app/config.py

TRACKER_TAB = "Tracker"
SCHOOLS_TAB = "Schools"
COORDINATORS_TAB = "Coordinators"
MODULES_TAB = "Modules"

COL_TIMESTAMP = "Timestamp"
COL_NAME = "Name"
COL_SESSION_START = "Session Start Time"
COL_SESSION_END = "Session End Time"
COL_MODULE = "Module"
COL_SCHOOL = "School Name"
COL_CLASS_COUNTS = "Class_Student_Counts"
COL_LEARNING_OUTCOMES = "Learning Outcomes"
COL_CHALLENGES = "Challenges Faced"

TRACKER_HEADERS = [
    COL_TIMESTAMP,            # server-generated on submit
    COL_NAME,                 # coordinator
    COL_SESSION_START,
    COL_SESSION_END,
    COL_MODULE,
    COL_SCHOOL,
    COL_CLASS_COUNTS,         # "6a: 20, 7b: 15"
    COL_LEARNING_OUTCOMES,
    COL_CHALLENGES,
]

# Report 1 drops these and renames the session start column
REPORT_DROPPED_COLUMNS = (COL_TIMESTAMP, COL_SESSION_END)
REPORT_DATE_HEADER = "Date"
REPORT_SERIAL_HEADER = "S No"

ALL_COORDINATORS = "All Coordinators"
ALL_SCHOOLS = "All Schools"

# Added to the end date so the whole end day is covered
END_DATE_PADDING_MS = 86_400_000

DATE_FORMAT = "%m/%d/%Y"
DATETIME_FORMAT = "%m/%d/%Y, %I:%M:%S %p"
SHEET_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

APP_TIMEZONE = os.getenv("APP_TIMEZONE", "Asia/Kolkata")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
