"""
Agent-facing ``model_tool``: dispatch a tool-call argument mapping to an
inspection operation and render the result as text.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping

from loguru import logger

from model_inspect.analysis.catalog import compare_models, list_models, search_models
from model_inspect.analysis.model_info import get_model_info
from model_inspect.reporting import text_reporter

TOOL_NAME = "model_tool"
OPERATIONS = ("info", "list", "compare", "search")

MODEL_TOOL_SCHEMA: Dict[str, Any] = {
    "name": TOOL_NAME,
    "description": (
        "AI model metadata inspection - Safetensors and GGUF formats. Reads headers, "
        "metadata and tensor info without loading the model. Operations: 'info' (one "
        "model), 'list' (models in a directory), 'compare' (two models), 'search' "
        "(by name, architecture or quantization)."
    ),
    "inputSchema": {
        "type": "object",
        "properties": {
            "operation": {"type": "string", "enum": list(OPERATIONS), "description": "Model operation to perform"},
            "path": {"type": "string", "description": "Path to model file or directory"},
            "path1": {"type": "string", "description": "First model path (for compare)"},
            "path2": {"type": "string", "description": "Second model path (for compare)"},
            "query": {"type": "string", "description": "Search query (for search)"},
            "recursive": {"type": "boolean", "description": "Scan subdirectories (for list, default: true)"},
            "tensors": {"type": "boolean", "description": "Include tensor list (Safetensors info)"},
            "metadata": {"type": "boolean", "description": "Include full metadata (GGUF info)"},
            "limit": {"type": "number", "description": "Max tensors/metadata keys to show"},
        },
        "required": ["operation"],
    },
}


class ToolArgumentError(ValueError):
    """Raised for a missing argument or an unknown operation."""


@dataclass
class ToolResult:
    """Tool response envelope: text payload plus error flag."""

    text: str
    is_error: bool = False


def _require(args: Mapping[str, Any], *names: str) -> None:
    missing = [n for n in names if not args.get(n)]
    if missing:
        raise ToolArgumentError(f"{' and '.join(names)} {'is' if len(names) == 1 else 'are'} required")


def _info(args: Mapping[str, Any]) -> str:
    _require(args, "path")
    info = get_model_info(args["path"])
    limit = args.get("limit")
    return text_reporter.render_info(
        info,
        tensors=bool(args.get("tensors")),
        metadata=bool(args.get("metadata")),
        limit=int(limit) if limit else None,
    )


def _list(args: Mapping[str, Any]) -> str:
    _require(args, "path")
    result = list_models(args["path"], recursive=args.get("recursive", True) is not False)
    return text_reporter.render_list(result)


def _compare(args: Mapping[str, Any]) -> str:
    _require(args, "path1", "path2")
    return text_reporter.render_comparison(compare_models(args["path1"], args["path2"]))


def _search(args: Mapping[str, Any]) -> str:
    _require(args, "path", "query")
    query = str(args["query"])
    return text_reporter.render_search(query, search_models(args["path"], query))


HANDLERS: Dict[str, Callable[[Mapping[str, Any]], str]] = {
    "info": _info,
    "list": _list,
    "compare": _compare,
    "search": _search,
}


def execute_model_operation(args: Mapping[str, Any]) -> str:
    """Run one ``model_tool`` call and return its text payload.

    Raises:
        ToolArgumentError: Missing arguments or unknown operation.
        OSError: A path does not exist or cannot be read.
    """
    operation = args.get("operation")
    handler = HANDLERS.get(operation)  # type: ignore[arg-type]
    if handler is None:
        raise ToolArgumentError(
            f"Unknown model operation: {operation}. Available: {', '.join(OPERATIONS)}"
        )
    logger.debug("model_tool {op} {args}", op=operation, args=dict(args))
    return handler(args)


def run_model_tool(args: Mapping[str, Any]) -> ToolResult:
    """Wrap ``execute_model_operation`` in the tool response envelope."""
    try:
        return ToolResult(text=execute_model_operation(args))
    except (ToolArgumentError, OSError) as e:
        logger.warning("model_tool failed: {error}", error=e)
        return ToolResult(text=f"Error: {e}", is_error=True)
