# model_inspect/model_formats/gguf/gguf.py
"""
GGUF shared structures and exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Optional, Union

from model_inspect.model_formats.errors import ModelFormatError


class GGUFValueType(IntEnum):
    """Type tags of GGUF metadata values."""

    UINT8 = 0
    INT8 = 1
    UINT16 = 2
    INT16 = 3
    UINT32 = 4
    INT32 = 5
    FLOAT32 = 6
    BOOL = 7
    STRING = 8
    ARRAY = 9
    UINT64 = 10
    INT64 = 11
    FLOAT64 = 12


# Decoded value: scalars, strings, nested lists for arrays, or a placeholder
# string for arrays too large to materialize.
GGUFValue = Union[int, float, bool, str, List["GGUFValue"]]


@dataclass
class GGUFMetadata:
    path: str
    size: int
    version: int
    tensor_count: int
    metadata_kv_count: int
    architecture: Optional[str] = None
    quantization: Optional[str] = None
    context_length: Optional[int] = None
    embedding_length: Optional[int] = None
    parameters: Optional[int] = None  # estimate, see gguf_rules.estimate_parameters
    metadata: Dict[str, GGUFValue] = field(default_factory=dict)


class GGUFParseError(ModelFormatError):
    """Raised when a GGUF file is malformed."""
