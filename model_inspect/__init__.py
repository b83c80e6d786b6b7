# model_inspect/__init__.py
"""
model_inspect
=============

Header-only metadata extraction for Safetensors and GGUF model files: format
detection, tensor tables, typed GGUF key/value metadata, directory listing,
comparison and search, with rich console and agent tool-call front ends.
"""
from __future__ import annotations

from importlib.metadata import version as _pkg_version

__all__ = ["__version__"]

try:
    # Read version dynamically from installed package metadata
    __version__: str = _pkg_version("model-inspect")
except Exception:  # pragma: no cover - fallback for development environments
    __version__ = "0.0.0-dev"
