"""
Console reporting functions for inspection results.
"""
from __future__ import annotations

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from model_inspect.analysis.base import ModelComparison, ModelInfo, ModelListResult
from model_inspect.formatting import format_parameters, format_size
from model_inspect.reporting.text_reporter import (
    DEFAULT_METADATA_LIMIT,
    DEFAULT_TENSOR_LIMIT,
    preview_gguf_value,
)

console = Console()

STATUS_STYLES = {
    "OK": "[green]OK[/green]",
    "ERROR": "[bold red]ERROR[/bold red]",
}


def _status(info: ModelInfo) -> str:
    return STATUS_STYLES["ERROR"] if info.error else STATUS_STYLES["OK"]


def _render_summary(info: ModelInfo) -> None:
    """Render the high-level summary table for one file."""
    t = Table(title="Model Summary", box=box.SIMPLE_HEAVY)
    t.add_column("Field", style="bold")
    t.add_column("Value")
    t.add_row("Path", escape(info.path))
    t.add_row("Format", info.format.value)
    t.add_row("Size", f"{info.size_formatted} ({info.size} bytes)")

    st = info.safetensors
    if st is not None:
        t.add_row("Header Size", format_size(st.header_size))
        t.add_row("Tensors", str(st.tensor_count))
        t.add_row("Parameters", format_parameters(st.parameters))

    gguf = info.gguf
    if gguf is not None:
        t.add_row("Version", f"GGUFv{gguf.version}")
        t.add_row("Tensors", str(gguf.tensor_count))
        t.add_row("Metadata Keys", f"{len(gguf.metadata)} / {gguf.metadata_kv_count}")
        for label, value in (
            ("Architecture", gguf.architecture),
            ("Quantization", gguf.quantization),
            ("Context Length", f"{gguf.context_length:,}" if gguf.context_length else None),
            ("Embedding Dim", gguf.embedding_length),
            ("Parameters (est.)", f"~{format_parameters(gguf.parameters)}" if gguf.parameters else None),
        ):
            if value is not None:
                t.add_row(label, escape(str(value)))

    if info.error:
        t.add_row("Error", f"[red]{escape(info.error)}[/red]")
    console.print(t)


def _render_tensor_table(info: ModelInfo, limit: int) -> None:
    st = info.safetensors
    if st is None or not st.tensors:
        return
    table = Table(
        title=f"Tensors ({st.tensor_count} total)",
        box=box.ROUNDED,
        show_lines=False,
        title_style="bold magenta",
    )
    table.add_column("Index", justify="right", style="dim")
    table.add_column("Tensor Name", style="cyan", no_wrap=True)
    table.add_column("DType", justify="left", style="yellow")
    table.add_column("Shape", justify="left", style="green")
    table.add_column("Elements", justify="right", style="white")

    for index, t in enumerate(st.tensors[:limit], start=1):
        table.add_row(str(index), escape(t.name), escape(t.dtype), str(t.shape), f"{t.n_elements:,}")
    console.print(table)
    if len(st.tensors) > limit:
        console.print(f"[dim]... and {len(st.tensors) - limit} more[/dim]")


def _render_metadata_table(info: ModelInfo, limit: int) -> None:
    table = Table(title="Metadata", box=box.ROUNDED, show_lines=False, title_style="bold magenta")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    gguf, st = info.gguf, info.safetensors
    if gguf is not None:
        items = [(k, preview_gguf_value(v)) for k, v in gguf.metadata.items()]
    elif st is not None and isinstance(st.metadata, dict):
        items = [(k, str(v)) for k, v in st.metadata.items()]
    else:
        return
    if not items:
        return

    for key, value in items[:limit]:
        table.add_row(escape(key), escape(value))
    console.print(table)
    if len(items) > limit:
        console.print(f"[dim]... and {len(items) - limit} more[/dim]")


def render_info(
    info: ModelInfo, *, tensors: bool = False, metadata: bool = False, limit: Optional[int] = None
) -> None:
    """Render a single-file inspection."""
    console.print(Panel(f"[bold]{escape(info.name)}[/bold]  {_status(info)}", style="bold cyan", expand=False))
    _render_summary(info)
    if tensors:
        _render_tensor_table(info, limit or DEFAULT_TENSOR_LIMIT)
    if metadata:
        _render_metadata_table(info, limit or DEFAULT_METADATA_LIMIT)


def _render_models_table(title: str, models: List[ModelInfo], *, show_path: bool = False) -> None:
    table = Table(title=title, box=box.ROUNDED, show_lines=False, title_style="bold magenta")
    table.add_column("Status", justify="center", width=8)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Format", style="yellow")
    table.add_column("Size", justify="right", style="white")
    table.add_column("Architecture", style="green")
    table.add_column("Quant", style="green")
    table.add_column("Parameters", justify="right", style="white")
    if show_path:
        table.add_column("Path", style="dim")

    for m in models:
        arch = quant = params = ""
        if m.gguf is not None:
            arch = m.gguf.architecture or ""
            quant = m.gguf.quantization or ""
            params = f"~{format_parameters(m.gguf.parameters)}" if m.gguf.parameters else ""
        elif m.safetensors is not None:
            params = format_parameters(m.safetensors.parameters)
        row = [_status(m), escape(m.name), m.format.value, m.size_formatted, escape(arch), quant, params]
        if show_path:
            row.append(escape(m.path))
        table.add_row(*row)
    console.print(table)

    for m in models:
        if m.error:
            console.print(f"[red]{escape(m.name)}:[/red] {escape(m.error)}")


def render_list(result: ModelListResult) -> None:
    t = Table(title="Model Listing", box=box.SIMPLE_HEAVY)
    t.add_column("Field", style="bold")
    t.add_column("Value")
    t.add_row("Directory", escape(result.directory))
    t.add_row("Models", str(result.total_count))
    t.add_row("Total Size", result.total_size_formatted)
    console.print(t)
    if not result.models:
        console.print("[dim]No models found.[/dim]")
        return
    _render_models_table("Models", result.models)


def render_comparison(cmp: ModelComparison) -> None:
    table = Table(title="Model Comparison", box=box.HEAVY_HEAD, title_style="bold green")
    table.add_column("Field", style="bold")
    table.add_column("Model 1", style="cyan")
    table.add_column("Model 2", style="cyan")
    first, second = cmp.first, cmp.second
    table.add_row("Name", escape(first.name), escape(second.name))
    table.add_row("Format", first.format.value, second.format.value)
    table.add_row("Size", first.size_formatted, second.size_formatted)
    g1, g2 = first.gguf, second.gguf
    if g1 is not None and g2 is not None:
        table.add_row("Architecture", escape(g1.architecture or "-"), escape(g2.architecture or "-"))
        table.add_row("Quantization", g1.quantization or "-", g2.quantization or "-")
    console.print(table)

    if cmp.size_diff == 0:
        console.print("Size: [green]Identical[/green]")
    else:
        word = "larger" if cmp.size_diff > 0 else "smaller"
        pct = f" ({cmp.size_diff_pct:+.1f}%)" if cmp.size_diff_pct is not None else ""
        console.print(f"Size: Model 1 is {format_size(abs(cmp.size_diff))} {word}{pct}")
    for label, match in (
        ("Format", cmp.same_format),
        ("Architecture", cmp.architecture_match),
        ("Quantization", cmp.quantization_match),
    ):
        if match is not None:
            console.print(f"{label}: {'[green]Same[/green]' if match else '[yellow]Different[/yellow]'}")


def render_search(query: str, matches: List[ModelInfo]) -> None:
    if not matches:
        console.print(f'[yellow]No models found matching "{escape(query)}"[/yellow]')
        return
    _render_models_table(f'{len(matches)} models matching "{escape(query)}"', matches, show_path=True)
