"""
Directory-level operations built on ``get_model_info``: list, compare, search.
"""
from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from typing import Iterator, List, Optional

from loguru import logger

from model_inspect.analysis.base import ModelComparison, ModelInfo, ModelListResult
from model_inspect.analysis.model_info import get_model_info, is_model_file
from model_inspect.formatting import format_size


def iter_model_paths(directory: str, recursive: bool = True) -> Iterator[str]:
    """Yield paths of model files below ``directory``.

    The top-level directory must be readable; unreadable subdirectories are
    skipped with a warning.
    """
    with os.scandir(directory) as it:
        entries = list(it)
    for entry in entries:
        try:
            if entry.is_dir(follow_symlinks=False):
                if recursive:
                    yield from iter_model_paths(entry.path, recursive)
            elif entry.is_file() and is_model_file(entry.name):
                yield entry.path
        except OSError as e:
            logger.warning("Skipping {path}: {error}", path=entry.path, error=e)


def _inspect_scanned(path: str) -> Optional[ModelInfo]:
    try:
        return get_model_info(path)
    except OSError as e:
        # File disappeared or became unreadable between scan and stat.
        logger.warning("Skipping {path}: {error}", path=path, error=e)
        return None


def list_models(directory: str, recursive: bool = True, workers: Optional[int] = None) -> ModelListResult:
    """Inspect every ``.safetensors`` / ``.gguf`` file below ``directory``.

    Args:
        directory: Directory to scan.
        recursive: Descend into subdirectories.
        workers: Thread count for inspection; ``None`` or 1 inspects serially.
    """
    paths = list(iter_model_paths(directory, recursive))
    logger.debug("Found {n} model files in {dir}", n=len(paths), dir=directory)

    if workers and workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(_inspect_scanned, paths))
    else:
        results = [_inspect_scanned(p) for p in paths]

    models = sorted((m for m in results if m is not None), key=lambda m: m.name)
    total_size = sum(m.size for m in models)
    return ModelListResult(
        directory=directory,
        models=models,
        total_count=len(models),
        total_size=total_size,
        total_size_formatted=format_size(total_size),
    )


def _match(a: Optional[str], b: Optional[str]) -> Optional[bool]:
    if a is None or b is None:
        return None
    return a == b


def compare_models(path1: str, path2: str) -> ModelComparison:
    """Inspect two files and summarize how they differ."""
    first = get_model_info(path1)
    second = get_model_info(path2)

    size_diff = first.size - second.size
    size_diff_pct = (size_diff / second.size * 100.0) if second.size else None

    comparison = ModelComparison(
        first=first,
        second=second,
        size_diff=size_diff,
        size_diff_pct=size_diff_pct,
        same_format=first.format == second.format,
    )
    g1, g2 = first.gguf, second.gguf
    if g1 is not None and g2 is not None:
        comparison.architecture_match = _match(g1.architecture, g2.architecture)
        comparison.quantization_match = _match(g1.quantization, g2.quantization)
    return comparison


def _matches_query(model: ModelInfo, query: str) -> bool:
    if query in model.name.lower():
        return True
    gguf = model.gguf
    if gguf is None:
        return False
    return any(v is not None and query in v.lower() for v in (gguf.architecture, gguf.quantization))


def search_models(directory: str, query: str, workers: Optional[int] = None) -> List[ModelInfo]:
    """Recursively list ``directory`` and keep models whose name, GGUF
    architecture or quantization contains ``query`` (case-insensitive)."""
    needle = query.lower()
    listing = list_models(directory, recursive=True, workers=workers)
    return [m for m in listing.models if _matches_query(m, needle)]
