"""Output formatters for ffprint."""

from .default import format_summary
from .json import format_json, format_json_list, to_dict
from .quiet import format_hash, format_hash_list

__all__ = [
    "format_summary",
    "format_json",
    "format_json_list",
    "format_hash",
    "format_hash_list",
    "to_dict",
]
