"""
Plain-text rendering of inspection results, used as tool-call payloads.
"""
from __future__ import annotations

from typing import Any, List, Optional

from model_inspect.analysis.base import ModelComparison, ModelFormat, ModelInfo, ModelListResult
from model_inspect.formatting import format_parameters, format_size

DEFAULT_TENSOR_LIMIT = 20
DEFAULT_METADATA_LIMIT = 30


def _truncate(value: Any, limit: int) -> Any:
    if isinstance(value, str) and len(value) > limit:
        return value[:limit] + "..."
    return value


def preview_gguf_value(value: Any) -> str:
    if isinstance(value, str):
        return str(_truncate(value, 80))
    if isinstance(value, list):
        if len(value) > 5:
            head = ", ".join(str(v) for v in value[:5])
            return f"[{head}, ... ({len(value)} items)]"
        return "[" + ", ".join(str(v) for v in value) + "]"
    return str(value)


def render_info(
    info: ModelInfo,
    *,
    tensors: bool = False,
    metadata: bool = False,
    limit: Optional[int] = None,
) -> str:
    """Render a single-file inspection.

    Args:
        info: Inspection result.
        tensors: List Safetensors tensors (first ``limit``, default 20).
        metadata: List GGUF metadata keys (first ``limit``, default 30).
        limit: Override for the number of tensors / keys shown.
    """
    lines: List[str] = [
        f"Model: {info.name}",
        f"Format: {info.format.value.upper()}",
        f"Size: {info.size_formatted}",
    ]
    if info.error:
        lines.append(f"Error: {info.error}")
        return "\n".join(lines)

    st = info.safetensors
    if st is not None:
        lines.append(f"Header Size: {format_size(st.header_size)}")
        lines.append(f"Tensors: {st.tensor_count}")
        if st.parameters:
            lines.append(f"Parameters: {format_parameters(st.parameters)}")
        if isinstance(st.metadata, dict) and st.metadata:
            lines.append("")
            lines.append("Metadata:")
            for key, value in st.metadata.items():
                lines.append(f"  {key}: {_truncate(value, 100)}")
        if tensors and st.tensors:
            show = min(len(st.tensors), limit or DEFAULT_TENSOR_LIMIT)
            lines.append("")
            lines.append(f"Tensors ({st.tensor_count} total):")
            for t in st.tensors[:show]:
                lines.append(f"  {t.name}: {t.dtype} [{', '.join(str(d) for d in t.shape)}]")
            if len(st.tensors) > show:
                lines.append(f"  ... and {len(st.tensors) - show} more")

    gguf = info.gguf
    if gguf is not None:
        lines.append(f"Version: GGUFv{gguf.version}")
        lines.append(f"Tensors: {gguf.tensor_count}")
        if gguf.architecture:
            lines.append(f"Architecture: {gguf.architecture}")
        if gguf.quantization:
            lines.append(f"Quantization: {gguf.quantization}")
        if gguf.context_length:
            lines.append(f"Context Length: {gguf.context_length:,}")
        if gguf.embedding_length:
            lines.append(f"Embedding Dim: {gguf.embedding_length}")
        if gguf.parameters:
            lines.append(f"Parameters: ~{format_parameters(gguf.parameters)}")
        if metadata:
            keys = list(gguf.metadata)[: limit or DEFAULT_METADATA_LIMIT]
            lines.append("")
            lines.append(f"Metadata ({gguf.metadata_kv_count} keys):")
            for key in keys:
                lines.append(f"  {key}: {preview_gguf_value(gguf.metadata[key])}")
            if len(gguf.metadata) > len(keys):
                lines.append(f"  ... and {len(gguf.metadata) - len(keys)} more")

    return "\n".join(lines)


def render_list(result: ModelListResult) -> str:
    lines = [
        f"Directory: {result.directory}",
        f"Models: {result.total_count}",
        f"Total Size: {result.total_size_formatted}",
        "",
    ]
    if not result.models:
        lines.append("No models found.")
        return "\n".join(lines)

    gguf = [m for m in result.models if m.format == ModelFormat.GGUF]
    safetensors = [m for m in result.models if m.format == ModelFormat.SAFETENSORS]

    if gguf:
        lines.append(f"GGUF Models ({len(gguf)}):")
        for m in gguf:
            d = m.gguf
            quant = f" [{d.quantization}]" if d and d.quantization else ""
            arch = f" ({d.architecture})" if d and d.architecture else ""
            err = f" ! {m.error}" if m.error else ""
            lines.append(f"  {m.name}{quant}{arch} - {m.size_formatted}{err}")
        lines.append("")

    if safetensors:
        lines.append(f"Safetensors Models ({len(safetensors)}):")
        for m in safetensors:
            d = m.safetensors
            params = f" (~{format_parameters(d.parameters)})" if d and d.parameters else ""
            err = f" ! {m.error}" if m.error else ""
            lines.append(f"  {m.name}{params} - {m.size_formatted}{err}")

    return "\n".join(lines)


def _same_or_different(label: str, a: Optional[str], b: Optional[str], match: Optional[bool]) -> Optional[str]:
    if match is None:
        return None
    if match:
        return f"  {label}: Same ({a})"
    return f"  {label}: Different ({a} vs {b})"


def render_comparison(cmp: ModelComparison) -> str:
    first, second = cmp.first, cmp.second
    lines = ["Model Comparison", ""]
    for idx, m in ((1, first), (2, second)):
        lines.append(f"Model {idx}: {m.name}")
        lines.append(f"  Format: {m.format.value.upper()}")
        lines.append(f"  Size: {m.size_formatted}")
        lines.append("")
    lines.append("Comparison:")

    pct = f"{cmp.size_diff_pct:+.1f}%" if cmp.size_diff_pct is not None else "n/a"
    if cmp.size_diff > 0:
        lines.append(f"  Size: Model 1 is {format_size(abs(cmp.size_diff))} larger ({pct})")
    elif cmp.size_diff < 0:
        lines.append(f"  Size: Model 1 is {format_size(abs(cmp.size_diff))} smaller ({pct})")
    else:
        lines.append("  Size: Identical")

    if not cmp.same_format:
        lines.append(f"  Format: Different ({first.format.value} vs {second.format.value})")

    g1, g2 = first.gguf, second.gguf
    if g1 is not None and g2 is not None:
        for line in (
            _same_or_different("Architecture", g1.architecture, g2.architecture, cmp.architecture_match),
            _same_or_different("Quantization", g1.quantization, g2.quantization, cmp.quantization_match),
        ):
            if line:
                lines.append(line)

    return "\n".join(lines)


def render_search(query: str, matches: List[ModelInfo]) -> str:
    if not matches:
        return f'No models found matching "{query}"'
    lines = [f'Found {len(matches)} models matching "{query}":', ""]
    for m in matches:
        d = m.gguf
        extra = f" ({d.architecture})" if d and d.architecture else ""
        lines.append(f"  {m.name}{extra} - {m.size_formatted}")
        lines.append(f"    {m.path}")
    return "\n".join(lines)
