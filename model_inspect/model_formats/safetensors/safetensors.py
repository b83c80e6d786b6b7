"""
Pure-Python SafeTensors header parser.

Layout: an 8-byte little-endian u64 header length, then that many bytes of
UTF-8 JSON. Every top-level key except ``__metadata__`` describes one tensor
as ``{"dtype", "shape", "data_offsets"}``. Tensor data is never read.
"""

from __future__ import annotations

import json
import math
import struct
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from model_inspect.io.file_reader import PositionedFile
from model_inspect.model_formats.errors import ModelFormatError

HEADER_LENGTH_FMT = "<Q"
HEADER_LENGTH_SIZE = struct.calcsize(HEADER_LENGTH_FMT)
MAX_HEADER_SIZE = 100 * 1024 * 1024
METADATA_KEY = "__metadata__"


class SafeTensorsParseError(ModelFormatError):
    """Raised when a SafeTensors file is malformed."""


@dataclass
class SafetensorsTensor:
    name: str
    dtype: str
    shape: List[int]

    @property
    def n_elements(self) -> int:
        """Product of the dimensions; a scalar (empty shape) counts as 1."""
        return math.prod(self.shape)


@dataclass
class SafetensorsMetadata:
    path: str
    size: int
    header_size: int
    metadata: Optional[Any] = None
    tensors: List[SafetensorsTensor] = field(default_factory=list)
    tensor_count: int = 0
    parameters: int = 0


def _read_header_json(f: PositionedFile) -> tuple[int, Dict[str, Any]]:
    raw_len = f.read_at(0, HEADER_LENGTH_SIZE)
    if len(raw_len) < HEADER_LENGTH_SIZE:
        raise SafeTensorsParseError("File too small for safetensors header")
    header_size = struct.unpack(HEADER_LENGTH_FMT, raw_len)[0]
    if header_size > MAX_HEADER_SIZE:
        raise SafeTensorsParseError(f"Header size too large: {header_size}")

    raw = f.read_at(HEADER_LENGTH_SIZE, header_size)
    if len(raw) < header_size:
        raise SafeTensorsParseError("Header extends beyond EOF")
    try:
        header = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SafeTensorsParseError(f"Invalid JSON header: {e}") from e
    if not isinstance(header, dict):
        raise SafeTensorsParseError("Header is not a JSON object")
    return header_size, header


def _tensor_from_entry(name: str, meta: Any) -> SafetensorsTensor:
    if not isinstance(meta, dict):
        raise SafeTensorsParseError(f"Invalid tensor meta for {name}")
    shape = meta.get("shape")
    if not isinstance(shape, list) or not all(
        isinstance(d, int) and not isinstance(d, bool) and d >= 0 for d in shape
    ):
        raise SafeTensorsParseError(f"Invalid shape for {name}")
    dtype = meta.get("dtype")
    if not isinstance(dtype, str) or not dtype:
        raise SafeTensorsParseError(f"Missing/invalid dtype for {name}")
    return SafetensorsTensor(name=name, dtype=dtype, shape=list(shape))


def parse_safetensors(f: PositionedFile) -> SafetensorsMetadata:
    """Parse the header and tensor table of an opened SafeTensors file."""
    header_size, header = _read_header_json(f)

    metadata: Optional[Any] = None
    tensors: List[SafetensorsTensor] = []
    for name, meta in header.items():
        if name == METADATA_KEY:
            metadata = meta
            continue
        tensors.append(_tensor_from_entry(name, meta))

    return SafetensorsMetadata(
        path=f.path,
        size=f.size,
        header_size=header_size,
        metadata=metadata,
        tensors=tensors,
        tensor_count=len(tensors),
        parameters=sum(t.n_elements for t in tensors),
    )
