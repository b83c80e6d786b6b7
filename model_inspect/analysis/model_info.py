"""
Single-file inspection: extension dispatch and the error boundary.
"""
from __future__ import annotations

import os
from typing import Dict, Type

from loguru import logger

from model_inspect.analysis.analyzer import Analyzer
from model_inspect.analysis.base import ModelFormat, ModelInfo
from model_inspect.analysis.gguf_analyzer import GGUFAnalyzer
from model_inspect.analysis.safetensors_analyzer import SafeTensorsAnalyzer
from model_inspect.formatting import format_size

ANALYZERS: Dict[str, Type[Analyzer]] = {
    ".safetensors": SafeTensorsAnalyzer,
    ".gguf": GGUFAnalyzer,
}


def is_model_file(name: str) -> bool:
    return os.path.splitext(name)[1].lower() in ANALYZERS


def get_model_info(path: str) -> ModelInfo:
    """Inspect one file.

    The initial ``stat`` is not guarded: a missing or unreadable path raises
    ``OSError``. Anything that goes wrong while parsing is reported on
    ``ModelInfo.error`` instead, with ``format`` still set from the extension.
    """
    st = os.stat(path)
    ext = os.path.splitext(path)[1].lower()
    analyzer_cls = ANALYZERS.get(ext)

    info = ModelInfo(
        path=path,
        name=os.path.basename(path),
        format=analyzer_cls.format if analyzer_cls else ModelFormat.UNKNOWN,
        size=st.st_size,
        size_formatted=format_size(st.st_size),
    )
    if analyzer_cls is None:
        return info

    try:
        info.details = analyzer_cls(path).run()
    except Exception as e:
        logger.warning("Failed to parse {path}: {error}", path=path, error=e)
        info.error = str(e) or type(e).__name__
    return info
