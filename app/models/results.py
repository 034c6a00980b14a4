from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ReadResult:
    """
    Outcome of a read from the spreadsheet.

    `error` is set only when the sheet was missing or the read failed;
    an empty sheet gives empty `data` and no error.
    """
    data: Any
    error: Optional[str] = None

    @property
    def unavailable(self) -> bool:
        return self.error is not None

    @staticmethod
    def failed(message: str, empty: Any) -> "ReadResult":
        return ReadResult(data=empty, error=message)
