from .specs import (
    parse_pasted_specs,
    parse_spreadsheet,
    parse_specs_upload,
    extract_specs,
    specs_to_csv,
)

__all__ = [
    "parse_pasted_specs",
    "parse_spreadsheet",
    "parse_specs_upload",
    "extract_specs",
    "specs_to_csv",
]
