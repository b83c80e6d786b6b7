"""
GGUF analyzer: versioned header, typed metadata and derived fields.
"""

from __future__ import annotations

from loguru import logger

from model_inspect.analysis.analyzer import Analyzer
from model_inspect.analysis.base import ModelFormat
from model_inspect.io.file_reader import PositionedFile
from model_inspect.model_formats.gguf.gguf import GGUFMetadata
from model_inspect.model_formats.gguf.gguf_versions import MAX_KV_PAIRS, parse_gguf


class GGUFAnalyzer(Analyzer):
    """Analyzer implementation for GGUF files."""

    format = ModelFormat.GGUF

    def _parse(self, f: PositionedFile) -> GGUFMetadata:
        meta = parse_gguf(f)
        expected = min(meta.metadata_kv_count, MAX_KV_PAIRS)
        if len(meta.metadata) < expected:
            logger.info(
                "{path}: decoded {n} of {expected} GGUF metadata pairs",
                path=self.path,
                n=len(meta.metadata),
                expected=expected,
            )
        return meta
