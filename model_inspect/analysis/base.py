"""
Result records for model inspection.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from model_inspect.model_formats.gguf.gguf import GGUFMetadata
from model_inspect.model_formats.safetensors.safetensors import SafetensorsMetadata

ModelDetails = Union[SafetensorsMetadata, GGUFMetadata]


class ModelFormat(str, Enum):
    SAFETENSORS = "safetensors"
    GGUF = "gguf"
    UNKNOWN = "unknown"


@dataclass
class ModelInfo:
    """Inspection result for one file.

    ``details`` holds the format-specific record; it is ``None`` for unknown
    formats and whenever ``error`` is set.
    """

    path: str
    name: str
    format: ModelFormat
    size: int
    size_formatted: str
    details: Optional[ModelDetails] = None
    error: Optional[str] = None

    @property
    def gguf(self) -> Optional[GGUFMetadata]:
        return self.details if isinstance(self.details, GGUFMetadata) else None

    @property
    def safetensors(self) -> Optional[SafetensorsMetadata]:
        return self.details if isinstance(self.details, SafetensorsMetadata) else None


@dataclass
class ModelListResult:
    directory: str
    models: List[ModelInfo] = field(default_factory=list)
    total_count: int = 0
    total_size: int = 0
    total_size_formatted: str = "0 B"


@dataclass
class ModelComparison:
    """Side-by-side summary of two inspected files."""

    first: ModelInfo
    second: ModelInfo
    size_diff: int  # first.size - second.size
    size_diff_pct: Optional[float]  # relative to second.size; None if it is empty
    same_format: bool
    architecture_match: Optional[bool] = None  # only when both are GGUF with a value
    quantization_match: Optional[bool] = None
