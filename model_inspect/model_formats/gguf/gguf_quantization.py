# model_inspect/model_formats/gguf/gguf_quantization.py
"""
Quantization label guessing for GGUF files.

GGUF stores a per-tensor GGML type but no single authoritative "file
quantization" label, and the labels users search for (``Q4_K_M``, ``IQ3_XS``)
live in the filename by convention. The guess therefore scans the filename
only; first match in precedence order wins.
"""
from __future__ import annotations

import os
from typing import Optional, Tuple

QUANTIZATION_PATTERNS: Tuple[str, ...] = (
    "q2_k",
    "q3_k",
    "q4_k",
    "q4_0",
    "q4_1",
    "q5_k",
    "q5_0",
    "q5_1",
    "q6_k",
    "q8_0",
    "q8_1",
    "f16",
    "f32",
    "bf16",
    "iq2",
    "iq3",
    "iq4",
)


def guess_quantization(path: str) -> Optional[str]:
    """Return the upper-cased first known quantization pattern in the file name."""
    filename = os.path.basename(path).lower()
    for pattern in QUANTIZATION_PATTERNS:
        if pattern in filename:
            return pattern.upper()
    return None
