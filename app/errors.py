# app/errors.py


class SheetsError(Exception):
    """Base class for spreadsheet access failures."""


class SourceMissing(SheetsError):
    def __init__(self, tab_name: str):
        self.tab_name = tab_name
        super().__init__(f"Sheet '{tab_name}' is missing.")


class SourceError(SheetsError):
    def __init__(self, tab_name: str, cause: Exception):
        self.tab_name = tab_name
        self.cause = cause
        super().__init__(f"Failed to load data from '{tab_name}': {cause}")


class StorageWriteError(SheetsError):
    """Append failed. The message is meant to be shown to the user."""

    def __init__(self, tab_name: str, cause: Exception):
        self.tab_name = tab_name
        self.cause = cause
        super().__init__(f"Server error: {cause}")
