"""
JSON reporting utilities.
"""

from __future__ import annotations

import json
from typing import Any

from model_inspect.observability import to_dict


def to_json_dict(record: Any) -> Any:
    """Convert an inspection record to a JSON-serializable value.

    Absent optional fields (``details``, ``error``, derived GGUF fields) are
    left out rather than written as ``null``.
    """
    return to_dict(record, drop_none=True)


def write_json(record: Any, path: str) -> None:
    """Write a record to a file as pretty JSON."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(to_json_dict(record), f, indent=2, ensure_ascii=False)
