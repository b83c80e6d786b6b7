"""
SafeTensors analyzer: JSON header + tensor table.
"""

from __future__ import annotations

from model_inspect.analysis.analyzer import Analyzer
from model_inspect.analysis.base import ModelFormat
from model_inspect.io.file_reader import PositionedFile
from model_inspect.model_formats.safetensors.safetensors import (
    SafetensorsMetadata,
    parse_safetensors,
)


class SafeTensorsAnalyzer(Analyzer):
    """Analyzer implementation for SafeTensors files."""

    format = ModelFormat.SAFETENSORS

    def _parse(self, f: PositionedFile) -> SafetensorsMetadata:
        return parse_safetensors(f)
