"""
Derived GGUF fields.

Best-effort lookups over the decoded key/value dictionary. GGUF namespaces
hyper-parameters by architecture (``qwen2.context_length``); many converters
only ever write the ``llama.*`` spelling, which serves as the fallback.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

ARCHITECTURE_KEY = "general.architecture"
FALLBACK_ARCHITECTURE = "llama"

CONTEXT_LENGTH = "context_length"
EMBEDDING_LENGTH = "embedding_length"
BLOCK_COUNT = "block_count"


def derive_architecture(metadata: Mapping[str, Any]) -> Optional[str]:
    value = metadata.get(ARCHITECTURE_KEY)
    return value if isinstance(value, str) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def arch_field(metadata: Mapping[str, Any], architecture: Optional[str], name: str) -> Optional[int]:
    """Look up ``<architecture>.<name>``, falling back to ``llama.<name>``.

    The fallback applies only when the architecture-specific key is absent.
    """
    if architecture is not None:
        key = f"{architecture}.{name}"
        if key in metadata:
            return _as_int(metadata[key])
    return _as_int(metadata.get(f"{FALLBACK_ARCHITECTURE}.{name}"))


def estimate_parameters(embedding_length: Optional[int], block_count: Optional[int]) -> Optional[int]:
    """Rough transformer parameter count: ``embedding² × blocks × 4``.

    This is an estimate (attention and MLP weights only, fixed MLP ratio), not
    a count of the stored tensors. Kept stable so reported figures do not
    change between releases.
    """
    if not embedding_length or not block_count:
        return None
    return embedding_length * embedding_length * block_count * 4
