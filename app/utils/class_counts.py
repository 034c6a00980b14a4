import logging
import re
from typing import Iterable

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"[^0-9]")


def parse_class_counts(expr) -> list[tuple[str, int]]:
    """
    Parse the per-class attendance string written by the session form.
    Format: "<class>: <count>, <class>: <count>"
    Examples: "6a: 20, 7b: 15" -> [("6a", 20), ("7b", 15)]
              "6a:abc"         -> [("6a", 0)]
              "garbage"        -> []

    Non-digit characters in the count are stripped; an empty count is 0.
    Segments that do not split into exactly two non-empty parts are skipped.
    A class listed twice keeps its first position and its last count.
    """
    if not isinstance(expr, str) or not expr.strip():
        return []

    counts: dict[str, int] = {}
    for segment in expr.split(","):
        parts = [p.strip() for p in segment.split(":")]
        if len(parts) != 2 or not parts[0] or not parts[1]:
            logger.debug("Skipping malformed class count segment %r", segment)
            continue
        digits = _NON_DIGITS.sub("", parts[1])
        counts[parts[0]] = int(digits) if digits else 0

    return list(counts.items())


def format_class_counts(pairs: Iterable[tuple[str, int]]) -> str:
    """Inverse of parse_class_counts for form submission. Blank classes are dropped."""
    out = []
    for class_name, count in pairs:
        class_name = str(class_name or "").strip()
        if not class_name:
            continue
        out.append(f"{class_name}: {int(count or 0)}")
    return ", ".join(out)
