"""
Sequential little-endian reader for the GGUF key/value section.

A ``GGUFReader`` owns one open file and one cursor. Each parse builds its own
reader, so concurrent inspections never share a position.
"""

from __future__ import annotations

import struct
from typing import Dict, List

from model_inspect.io.file_reader import PositionedFile

from .gguf import GGUFParseError, GGUFValue, GGUFValueType

MAX_STRING_LENGTH = 10 * 1024 * 1024
MAX_ARRAY_ITEMS = 100_000
MAX_ARRAY_DEPTH = 64

# Fixed-width value types and their struct formats.
SCALAR_FORMATS: Dict[GGUFValueType, str] = {
    GGUFValueType.UINT8: "<B",
    GGUFValueType.INT8: "<b",
    GGUFValueType.UINT16: "<H",
    GGUFValueType.INT16: "<h",
    GGUFValueType.UINT32: "<I",
    GGUFValueType.INT32: "<i",
    GGUFValueType.FLOAT32: "<f",
    GGUFValueType.BOOL: "<B",
    GGUFValueType.UINT64: "<Q",
    GGUFValueType.INT64: "<q",
    GGUFValueType.FLOAT64: "<d",
}

SCALAR_SIZES: Dict[GGUFValueType, int] = {t: struct.calcsize(fmt) for t, fmt in SCALAR_FORMATS.items()}


def array_placeholder(count: int) -> str:
    return f"[array of {count} items]"


class GGUFReader:
    """Cursor over a ``PositionedFile``; all reads are little-endian."""

    def __init__(self, f: PositionedFile, offset: int = 0):
        self._f = f
        self.offset = offset

    @property
    def remaining(self) -> int:
        return max(self._f.size - self.offset, 0)

    def read_bytes(self, n: int) -> bytes:
        data = self._f.read_at(self.offset, n)
        if len(data) < n:
            raise GGUFParseError(f"Read beyond EOF at offset {self.offset} (wanted {n} bytes)")
        self.offset += n
        return data

    def skip(self, n: int) -> None:
        """Advance the cursor without reading; a later read reports EOF."""
        self.offset += n

    def _unpack(self, fmt: str) -> int | float:
        return struct.unpack(fmt, self.read_bytes(struct.calcsize(fmt)))[0]

    def read_u32(self) -> int:
        return int(self._unpack("<I"))

    def read_u64(self) -> int:
        return int(self._unpack("<Q"))

    def read_type(self) -> GGUFValueType:
        tag = self.read_u32()
        try:
            return GGUFValueType(tag)
        except ValueError:
            raise GGUFParseError(f"Unknown GGUF type: {tag}") from None

    def _read_string_length(self) -> int:
        length = self.read_u64()
        if length > MAX_STRING_LENGTH:
            raise GGUFParseError(f"String too long: {length} bytes")
        return length

    def read_string(self) -> str:
        raw = self.read_bytes(self._read_string_length())
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise GGUFParseError(f"Invalid UTF-8 string at offset {self.offset - len(raw)}") from e

    def read_value(self, vtype: GGUFValueType, depth: int = 0) -> GGUFValue:
        """Decode one value of the given type, recursing into arrays.

        ``depth`` counts enclosing arrays; nesting past ``MAX_ARRAY_DEPTH``
        is rejected.
        """
        if vtype == GGUFValueType.STRING:
            return self.read_string()
        if vtype == GGUFValueType.ARRAY:
            return self._read_array(depth + 1)
        value = self._unpack(SCALAR_FORMATS[vtype])
        if vtype == GGUFValueType.BOOL:
            return value != 0
        return value

    def _check_depth(self, depth: int) -> None:
        if depth > MAX_ARRAY_DEPTH:
            raise GGUFParseError(f"Arrays nested deeper than {MAX_ARRAY_DEPTH} levels at offset {self.offset}")

    def _read_array(self, depth: int) -> GGUFValue:
        self._check_depth(depth)
        elem_type = self.read_type()
        count = self.read_u64()
        if count > MAX_ARRAY_ITEMS:
            self._skip_values(elem_type, count, depth)
            return array_placeholder(count)
        items: List[GGUFValue] = []
        for _ in range(count):
            items.append(self.read_value(elem_type, depth))
        return items

    def _skip_values(self, elem_type: GGUFValueType, count: int, depth: int) -> None:
        """Move past ``count`` values of ``elem_type`` without decoding them."""
        if elem_type in SCALAR_SIZES:
            self.skip(SCALAR_SIZES[elem_type] * count)
            return
        # Every string or nested array costs at least 8 bytes of header, which
        # bounds the walk below by the file size.
        if count * 8 > self.remaining:
            raise GGUFParseError(f"Array of {count} items extends beyond EOF")
        for _ in range(count):
            if elem_type == GGUFValueType.STRING:
                self.skip(self._read_string_length())
            else:
                self._check_depth(depth + 1)
                inner_type = self.read_type()
                self._skip_values(inner_type, self.read_u64(), depth + 1)
