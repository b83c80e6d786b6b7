"""
Display helpers for byte sizes and parameter counts.
"""
from __future__ import annotations

_SIZE_UNITS = (("GB", 1024**3), ("MB", 1024**2), ("KB", 1024))
_PARAM_UNITS = (("T", 1e12), ("B", 1e9), ("M", 1e6), ("K", 1e3))


def format_size(n_bytes: int) -> str:
    """Render a byte count in the largest fitting unit, e.g. ``"1.50 KB"``."""
    for unit, factor in _SIZE_UNITS:
        if n_bytes >= factor:
            return f"{n_bytes / factor:.2f} {unit}"
    return f"{n_bytes} B"


def format_parameters(n_params: int) -> str:
    """Abbreviate a parameter count, e.g. ``7241732096`` -> ``"7.2B"``."""
    for unit, factor in _PARAM_UNITS:
        if n_params >= factor:
            return f"{n_params / factor:.1f}{unit}"
    return str(n_params)
