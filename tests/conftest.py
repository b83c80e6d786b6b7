"""
Builders for synthetic Safetensors and GGUF files.
"""
from __future__ import annotations

import json
import struct
from pathlib import Path
from typing import Any, Iterable, Optional, Tuple

import pytest

T_UINT8, T_INT8, T_UINT16, T_INT16, T_UINT32, T_INT32, T_FLOAT32 = range(7)
T_BOOL, T_STRING, T_ARRAY, T_UINT64, T_INT64, T_FLOAT64 = range(7, 13)

_SCALAR_FMT = {
    T_UINT8: "<B",
    T_INT8: "<b",
    T_UINT16: "<H",
    T_INT16: "<h",
    T_UINT32: "<I",
    T_INT32: "<i",
    T_FLOAT32: "<f",
    T_BOOL: "<B",
    T_UINT64: "<Q",
    T_INT64: "<q",
    T_FLOAT64: "<d",
}


def gguf_string(s: str) -> bytes:
    raw = s.encode("utf-8")
    return struct.pack("<Q", len(raw)) + raw


def gguf_value(vtype: int, value: Any) -> bytes:
    if vtype == T_STRING:
        return gguf_string(value)
    if vtype == T_ARRAY:
        elem_type, items = value
        out = struct.pack("<IQ", elem_type, len(items))
        return out + b"".join(gguf_value(elem_type, v) for v in items)
    return struct.pack(_SCALAR_FMT[vtype], value)


def gguf_kv(key: str, vtype: int, value: Any) -> bytes:
    return gguf_string(key) + struct.pack("<I", vtype) + gguf_value(vtype, value)


def gguf_bytes(
    kvs: Iterable[Tuple[str, int, Any]] = (),
    *,
    version: int = 3,
    magic: bytes = b"GGUF",
    tensor_count: int = 0,
    kv_count: Optional[int] = None,
    trailer: bytes = b"",
) -> bytes:
    kvs = list(kvs)
    count = len(kvs) if kv_count is None else kv_count
    body = b"".join(gguf_kv(k, t, v) for k, t, v in kvs)
    return magic + struct.pack("<IQQ", version, tensor_count, count) + body + trailer


def safetensors_bytes(header: dict, data: bytes = b"") -> bytes:
    raw = json.dumps(header).encode("utf-8")
    return struct.pack("<Q", len(raw)) + raw + data


@pytest.fixture
def write_file(tmp_path: Path):
    """Write bytes to ``tmp_path / name`` and return the path as a string."""

    def _write(name: str, data: bytes) -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return str(path)

    return _write


@pytest.fixture
def llama_gguf(write_file) -> str:
    return write_file(
        "tiny-llama.Q4_K_M.gguf",
        gguf_bytes(
            [
                ("general.architecture", T_STRING, "llama"),
                ("general.name", T_STRING, "tiny"),
                ("llama.context_length", T_UINT32, 4096),
                ("llama.embedding_length", T_UINT32, 4096),
                ("llama.block_count", T_UINT32, 32),
                ("tokenizer.ggml.scores", T_ARRAY, (T_FLOAT32, [0.0, 0.5, -1.0])),
            ],
            tensor_count=291,
        ),
    )
