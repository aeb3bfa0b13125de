"""
Export module for flattening records and generating CSV text.
"""
from trialsink.export.flatten import flatten_record, to_json_text
from trialsink.export.csv_encoder import encode_csv, format_cell, collect_headers

__all__ = [
    "flatten_record",
    "to_json_text",
    "encode_csv",
    "format_cell",
    "collect_headers",
]
