"""
Record flattening for tabular export.

Rules (applied per key, in the record's insertion order):
- None → "" (empty cell)
- Nested mapping → flattened recursively under "{prefix}_{key}" and merged in
- List/tuple → compact JSON text (never expanded into per-element columns),
  with integral floats written as integers: [1.0, 2.5] → "[1,2.5]"
- Anything else → kept as-is

Merging is right-biased: when two paths produce the same column name, the one
visited later wins. For {"a": {"b": 1}, "a_b": 2} the result is {"a_b": 2};
for {"a_b": 2, "a": {"b": 1}} it is {"a_b": 1}.

Idempotent: flatten_record(flatten_record(x)) == flatten_record(x)
"""
import json
import math
from collections.abc import Mapping
from typing import Any, Dict

# Beyond this JavaScript switches integral numbers to exponent notation.
_JS_EXPONENT_THRESHOLD = 1e21


def js_number(value: float) -> Any:
    """
    Narrow a float to what a JavaScript number would print as.

    Integral floats become ints (512.0 → 512); everything else is returned unchanged.
    """
    if math.isfinite(value) and value.is_integer() and abs(value) < _JS_EXPONENT_THRESHOLD:
        return int(value)
    return value


def json_ready(value: Any) -> Any:
    """Recursively apply js_number to floats; NaN and infinities become None."""
    if isinstance(value, float):
        return js_number(value) if math.isfinite(value) else None
    if isinstance(value, Mapping):
        return {key: json_ready(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [json_ready(item) for item in value]
    return value


def to_json_text(value: Any) -> str:
    """Compact JSON encoding (no spaces after separators, non-ASCII kept, 1.0 written as 1)."""
    return json.dumps(json_ready(value), separators=(",", ":"), ensure_ascii=False)


def flatten_record(record: Any, prefix: str = "") -> Dict[str, Any]:
    """
    Collapse a nested record into a single-level dict.

    Args:
        record: Mapping to flatten (non-mappings have no keys and flatten to {})
        prefix: Column prefix for nested keys

    Returns:
        Dict of column name → scalar or JSON text

    Examples:
        flatten_record({"rt": 512, "stim": {"color": "red"}})
            → {"rt": 512, "stim_color": "red"}
        flatten_record({"responses": [1, 2]}) → {"responses": "[1,2]"}
        flatten_record({"missing": None}) → {"missing": ""}
    """
    flattened: Dict[str, Any] = {}

    if not isinstance(record, Mapping):
        return flattened

    for key, value in record.items():
        new_key = f"{prefix}_{key}" if prefix else str(key)

        if value is None:
            flattened[new_key] = ""
        elif isinstance(value, Mapping):
            flattened.update(flatten_record(value, new_key))
        elif isinstance(value, (list, tuple)):
            flattened[new_key] = to_json_text(value)
        else:
            flattened[new_key] = value

    return flattened
