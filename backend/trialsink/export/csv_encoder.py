"""
CSV encoder - deterministic CSV text from heterogeneous trial records.

Format:
- Header row: sorted union of every flattened record's keys, comma-joined
- One row per record, absent keys emitted as empty cells
- String cells containing a comma, double quote or newline are wrapped in
  double quotes with inner quotes doubled; nothing else is quoted
- Booleans rendered as true/false; numbers the way JavaScript prints them
  (512.0 → 512, NaN, Infinity); other scalars via str()
- Rows joined with LF, no trailing newline

Same key set → same column order on every run.
"""
import math
from typing import Any, Dict, List, Sequence

from trialsink.export.flatten import flatten_record, js_number

SEPARATOR = ","
LINE_TERMINATOR = "\n"
_NEEDS_QUOTING = (",", '"', "\n")


def format_cell(value: Any) -> str:
    """Render one flattened value as a CSV cell."""
    if isinstance(value, str):
        if any(ch in value for ch in _NEEDS_QUOTING):
            return '"' + value.replace('"', '""') + '"'
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return str(js_number(value))
    return str(value)


def collect_headers(rows: Sequence[Dict[str, Any]]) -> List[str]:
    """Sorted, de-duplicated union of all row keys."""
    return sorted(set().union(*(row.keys() for row in rows)))


def encode_csv(records: Any) -> str:
    """
    Encode trial records as CSV text.

    Args:
        records: List (or tuple) of records; anything else encodes to ""

    Returns:
        CSV document, or "" for empty/non-sequence input
    """
    if not isinstance(records, (list, tuple)) or len(records) == 0:
        return ""

    rows = [flatten_record(record) for record in records]
    headers = collect_headers(rows)

    lines = [SEPARATOR.join(headers)]
    for row in rows:
        lines.append(SEPARATOR.join(format_cell(row.get(header, "")) for header in headers))

    return LINE_TERMINATOR.join(lines)
