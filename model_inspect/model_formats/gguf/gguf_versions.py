"""
Version-checked GGUF header and key/value parsing (v2/v3, little-endian).

Header: ``b"GGUF"`` magic, u32 version, u64 tensor count, u64 KV count, then
the KV pairs. Tensor infos and tensor data that follow are not read.
"""

from __future__ import annotations

from typing import Dict

from loguru import logger

from model_inspect.io.file_reader import PositionedFile

from .gguf import GGUFMetadata, GGUFParseError, GGUFValue
from .gguf_quantization import guess_quantization
from .gguf_reader import GGUFReader
from .gguf_rules import (
    BLOCK_COUNT,
    CONTEXT_LENGTH,
    EMBEDDING_LENGTH,
    arch_field,
    derive_architecture,
    estimate_parameters,
)

GGUF_MAGIC = b"GGUF"
SUPPORTED_VERSIONS = (2, 3)
MAX_KV_PAIRS = 500


def _read_header(reader: GGUFReader) -> tuple[int, int, int]:
    magic = reader.read_bytes(4)
    if magic != GGUF_MAGIC:
        raise GGUFParseError(f"Invalid GGUF magic: {magic!r}")
    version = reader.read_u32()
    if version not in SUPPORTED_VERSIONS:
        raise GGUFParseError(f"Unsupported GGUF version: {version}")
    tensor_count = reader.read_u64()
    kv_count = reader.read_u64()
    return version, tensor_count, kv_count


def read_kv_pairs(reader: GGUFReader, kv_count: int, *, path: str = "") -> Dict[str, GGUFValue]:
    """Decode up to ``MAX_KV_PAIRS`` pairs, stopping at the first malformed one.

    A partial dictionary is a valid result: metadata conventions keep
    evolving and a single unreadable value should not hide the rest.
    """
    metadata: Dict[str, GGUFValue] = {}
    for index in range(min(kv_count, MAX_KV_PAIRS)):
        try:
            key = reader.read_string()
            value = reader.read_value(reader.read_type())
        except GGUFParseError as e:
            logger.debug(
                "Stopped reading GGUF metadata of {path} at pair {index}/{total}: {error}",
                path=path,
                index=index,
                total=kv_count,
                error=e,
            )
            break
        metadata[key] = value
    return metadata


def parse_gguf(f: PositionedFile) -> GGUFMetadata:
    """Parse header, metadata and derived fields of an opened GGUF file."""
    reader = GGUFReader(f)
    version, tensor_count, kv_count = _read_header(reader)
    metadata = read_kv_pairs(reader, kv_count, path=f.path)

    architecture = derive_architecture(metadata)
    embedding_length = arch_field(metadata, architecture, EMBEDDING_LENGTH)
    block_count = arch_field(metadata, architecture, BLOCK_COUNT)

    return GGUFMetadata(
        path=f.path,
        size=f.size,
        version=version,
        tensor_count=tensor_count,
        metadata_kv_count=kv_count,
        architecture=architecture,
        quantization=guess_quantization(f.path),
        context_length=arch_field(metadata, architecture, CONTEXT_LENGTH),
        embedding_length=embedding_length,
        parameters=estimate_parameters(embedding_length, block_count),
        metadata=metadata,
    )
