"""
cli.py

Rich console CLI:
- info:    inspect one .gguf or .safetensors file
- list:    list model files in a directory
- compare: compare two model files
- search:  find models by name, architecture or quantization
- version: show the package version.
"""
from __future__ import annotations

import argparse
import os
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape

from model_inspect import __version__
from model_inspect.analysis.catalog import compare_models, list_models, search_models
from model_inspect.analysis.model_info import get_model_info
from model_inspect.logging import configure_logging
from model_inspect.reporting import console as console_reporter
from model_inspect.reporting.json_reporter import write_json

console = Console()


def _add_common(sp: argparse.ArgumentParser) -> None:
    sp.add_argument("--debug", action="store_true", help="Enable debug logging")
    sp.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    sp.add_argument(
        "--json-out", type=str, default=None, help="Write the result as JSON to this path"
    )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="model-inspect",
        description="Header-only Safetensors & GGUF metadata inspection.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    sub = p.add_subparsers(dest="cmd", title="Available Commands", metavar="<command>")

    sp_info = sub.add_parser("info", help="Inspect a single model file")
    sp_info.add_argument("path", help="Path to model file (.gguf | .safetensors)")
    sp_info.add_argument("--tensors", action="store_true", help="Show the tensor table (Safetensors)")
    sp_info.add_argument("--metadata", action="store_true", help="Show the metadata table")
    sp_info.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Max tensors / metadata keys to show (defaults: 20 tensors, 30 keys)",
    )
    _add_common(sp_info)

    sp_list = sub.add_parser("list", help="List model files in a directory")
    sp_list.add_argument("path", help="Directory to scan")
    sp_list.add_argument(
        "--no-recursive", dest="recursive", action="store_false", help="Do not descend into subdirectories"
    )
    sp_list.add_argument("--workers", type=int, default=None, help="Inspect files on N threads")
    _add_common(sp_list)

    sp_cmp = sub.add_parser("compare", help="Compare two model files")
    sp_cmp.add_argument("path1", help="First model file")
    sp_cmp.add_argument("path2", help="Second model file")
    _add_common(sp_cmp)

    sp_search = sub.add_parser("search", help="Search models by name, architecture or quantization")
    sp_search.add_argument("path", help="Directory to scan (recursively)")
    sp_search.add_argument("query", help="Case-insensitive substring")
    sp_search.add_argument("--workers", type=int, default=None, help="Inspect files on N threads")
    _add_common(sp_search)

    sub.add_parser("version", help="Show the version of model-inspect")

    return p


def _missing(*paths: str) -> Optional[str]:
    for path in paths:
        if not os.path.exists(path):
            return path
    return None


def _emit_json(result: Any, path: Optional[str]) -> None:
    if path:
        write_json(result, path)
        console.print(f"[dim]Wrote JSON report → {escape(path)}[/dim]")


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.cmd:
        parser.print_help()
        return 0

    if args.cmd == "version":
        console.print(f"model-inspect version {__version__}")
        return 0

    configure_logging(debug=args.debug, quiet=args.quiet)

    paths = (args.path1, args.path2) if args.cmd == "compare" else (args.path,)
    missing = _missing(*paths)
    if missing is not None:
        console.print(f"[red]Path not found:[/red] {escape(missing)}")
        return 2

    if args.cmd == "info":
        info = get_model_info(args.path)
        console_reporter.render_info(info, tensors=args.tensors, metadata=args.metadata, limit=args.limit)
        _emit_json(info, args.json_out)
        return 1 if info.error else 0

    if args.cmd in ("list", "search") and not os.path.isdir(args.path):
        console.print(f"[red]Not a directory:[/red] {escape(args.path)}")
        return 2

    if args.cmd == "list":
        result = list_models(args.path, recursive=args.recursive, workers=args.workers)
        console_reporter.render_list(result)
        _emit_json(result, args.json_out)
        return 0

    if args.cmd == "compare":
        cmp = compare_models(args.path1, args.path2)
        console_reporter.render_comparison(cmp)
        _emit_json(cmp, args.json_out)
        return 0

    if args.cmd == "search":
        matches = search_models(args.path, args.query, workers=args.workers)
        console_reporter.render_search(args.query, matches)
        _emit_json(matches, args.json_out)
        return 0

    parser.print_help()
    return 1
