"""Tests for the SafeTensors header parser."""
from __future__ import annotations

import struct

import pytest
from conftest import safetensors_bytes

from model_inspect.io.file_reader import LocalFileSource
from model_inspect.model_formats.safetensors.safetensors import (
    MAX_HEADER_SIZE,
    SafeTensorsParseError,
    parse_safetensors,
)


def _parse(path: str):
    with LocalFileSource(path).open() as f:
        return parse_safetensors(f)


def test_parameters_sum_shape_products(write_file):
    header = {
        "a": {"dtype": "F32", "shape": [2, 3], "data_offsets": [0, 24]},
        "b": {"dtype": "F32", "shape": [], "data_offsets": [24, 28]},
        "c": {"dtype": "F32", "shape": [4], "data_offsets": [28, 44]},
    }
    path = write_file("m.safetensors", safetensors_bytes(header, b"\x00" * 44))

    st = _parse(path)

    assert st.parameters == 11
    assert st.tensor_count == 3
    assert [t.name for t in st.tensors] == ["a", "b", "c"]
    assert st.tensors[0].shape == [2, 3]
    assert st.tensors[1].n_elements == 1


def test_metadata_key_is_not_a_tensor(write_file):
    header = {
        "__metadata__": {"format": "pt", "modelspec.title": "demo"},
        "w": {"dtype": "BF16", "shape": [8, 8], "data_offsets": [0, 128]},
    }
    path = write_file("m.safetensors", safetensors_bytes(header))

    st = _parse(path)

    assert st.metadata == {"format": "pt", "modelspec.title": "demo"}
    assert st.tensor_count == 1
    assert st.tensors[0].dtype == "BF16"
    assert st.parameters == 64


def test_header_size_and_file_size_reported(write_file):
    data = safetensors_bytes({}, b"\x01" * 10)
    path = write_file("empty.safetensors", data)

    st = _parse(path)

    assert st.header_size == len(data) - 8 - 10
    assert st.size == len(data)
    assert st.metadata is None
    assert st.tensors == []
    assert st.parameters == 0


def test_oversized_header_rejected(write_file):
    path = write_file("big.safetensors", struct.pack("<Q", MAX_HEADER_SIZE + 1) + b"{}")

    with pytest.raises(SafeTensorsParseError, match="too large"):
        _parse(path)


def test_header_beyond_eof(write_file):
    path = write_file("short.safetensors", struct.pack("<Q", 1000) + b'{"a": 1')

    with pytest.raises(SafeTensorsParseError, match="beyond EOF"):
        _parse(path)


def test_file_shorter_than_length_prefix(write_file):
    path = write_file("tiny.safetensors", b"\x01\x02")

    with pytest.raises(SafeTensorsParseError, match="too small"):
        _parse(path)


@pytest.mark.parametrize(
    "raw",
    [b"not json at all", b"\xff\xfe\xfd", b"[1, 2, 3]"],
)
def test_invalid_header_json(write_file, raw):
    path = write_file("bad.safetensors", struct.pack("<Q", len(raw)) + raw)

    with pytest.raises(SafeTensorsParseError):
        _parse(path)


def test_invalid_shape_rejected(write_file):
    header = {"w": {"dtype": "F32", "shape": [2, -1], "data_offsets": [0, 0]}}
    path = write_file("neg.safetensors", safetensors_bytes(header))

    with pytest.raises(SafeTensorsParseError, match="Invalid shape for w"):
        _parse(path)


@pytest.mark.parametrize("meta", [{"shape": [2]}, {"dtype": "", "shape": [2]}, {"dtype": 4, "shape": [2]}])
def test_missing_or_invalid_dtype_rejected(write_file, meta):
    path = write_file("nodtype.safetensors", safetensors_bytes({"w": meta}))

    with pytest.raises(SafeTensorsParseError, match="dtype for w"):
        _parse(path)
