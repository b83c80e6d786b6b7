"""
Exceptions shared by the model format parsers.
"""

from __future__ import annotations


class ModelFormatError(Exception):
    """Raised when a model file does not match the structure of its format.

    Caught at the single-file boundary and reported on ``ModelInfo.error``.
    """
