"""
Observability helpers: parse timers and record → dict conversion.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, fields, is_dataclass
from enum import Enum
from typing import Any

from loguru import logger


@dataclass
class Timer:
    """Context manager measuring a duration in milliseconds.

    When ``subject`` is given the duration is logged at DEBUG on exit.
    """

    name: str
    subject: str | None = None
    start: float = 0.0
    duration_ms: float = 0.0

    def __enter__(self) -> "Timer":
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.duration_ms = (time.perf_counter() - self.start) * 1000.0
        if self.subject is not None:
            logger.debug(
                "{name} of {subject} took {ms:.2f}ms",
                name=self.name,
                subject=self.subject,
                ms=self.duration_ms,
            )


def to_dict(obj: Any, *, drop_none: bool = False) -> Any:
    """Recursively convert dataclasses (and enums) into JSON-ready values.

    Args:
        obj: Record, container or scalar to convert.
        drop_none: Leave out dataclass fields whose value is ``None`` so that
            absent optional fields (``details``, ``error``) do not appear.
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        out = {}
        for f in fields(obj):
            v = getattr(obj, f.name)
            if v is None and drop_none:
                continue
            out[f.name] = to_dict(v, drop_none=drop_none)
        return out
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (list, tuple)):
        return [to_dict(x, drop_none=drop_none) for x in obj]
    if isinstance(obj, dict):
        return {k: to_dict(v, drop_none=drop_none) for k, v in obj.items()}
    return obj
