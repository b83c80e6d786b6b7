"""
Positioned-read local file access.

Model files are routinely tens of gigabytes; parsers only ever touch the
header region, so reads are explicit ``(offset, length)`` requests against
one buffered handle instead of a full read.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import BinaryIO, Optional


@dataclass
class LocalFileSource:
    """Local file source for header-only inspection.

    Attributes:
        path: Path to the local file.
    """

    path: str

    def open(self) -> "PositionedFile":
        """Open the file read-only for positioned reads."""
        return PositionedFile(self.path)


class PositionedFile:
    """Context manager owning one read-only handle to a file."""

    __slots__ = ("_fh", "size", "path")

    def __init__(self, path: str):
        self.path = path
        self._fh: Optional[BinaryIO] = None
        self.size: int = 0

    def __enter__(self) -> "PositionedFile":
        self._fh = open(self.path, "rb")
        self.size = os.fstat(self._fh.fileno()).st_size
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def read_at(self, offset: int, length: int) -> bytes:
        """Read up to ``length`` bytes at ``offset``.

        Returns fewer bytes than requested only when EOF is reached.
        """
        if self._fh is None:
            raise RuntimeError("PositionedFile is not entered")
        if length <= 0 or offset >= self.size:
            return b""
        self._fh.seek(offset)
        chunks = []
        remaining = length
        while remaining > 0:
            chunk = self._fh.read(remaining)
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)
