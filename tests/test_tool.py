"""Tests for the model_tool dispatcher and its text payloads."""
from __future__ import annotations

import pytest
from conftest import T_ARRAY, T_INT32, T_STRING, gguf_bytes, safetensors_bytes

from model_inspect.tool import (
    MODEL_TOOL_SCHEMA,
    ToolArgumentError,
    execute_model_operation,
    run_model_tool,
)


def test_info_gguf_summary(llama_gguf):
    text = execute_model_operation({"operation": "info", "path": llama_gguf})

    assert "Model: tiny-llama.Q4_K_M.gguf" in text
    assert "Format: GGUF" in text
    assert "Version: GGUFv3" in text
    assert "Architecture: llama" in text
    assert "Quantization: Q4_K" in text
    assert "Context Length: 4,096" in text
    assert "Parameters: ~2.1B" in text
    assert "Metadata (" not in text


def test_info_gguf_metadata_listing(write_file):
    kvs = [("general.architecture", T_STRING, "llama"), ("ids", T_ARRAY, (T_INT32, list(range(8))))]
    kvs += [(f"k{i}", T_STRING, "x" * 100) for i in range(3)]
    path = write_file("m.gguf", gguf_bytes(kvs))

    text = execute_model_operation({"operation": "info", "path": path, "metadata": True, "limit": 3})

    assert "Metadata (5 keys):" in text
    assert "  ids: [0, 1, 2, 3, 4, ... (8 items)]" in text
    assert "  k0: " + "x" * 80 + "..." in text
    assert "  ... and 2 more" in text


def test_info_safetensors_tensors(write_file):
    header = {"__metadata__": {"format": "pt"}}
    header.update({f"t{i}": {"dtype": "F32", "shape": [2, 2], "data_offsets": [0, 16]} for i in range(4)})
    path = write_file("m.safetensors", safetensors_bytes(header))

    text = execute_model_operation({"operation": "info", "path": path, "tensors": True, "limit": 2})

    assert "Tensors: 4" in text
    assert "Parameters: 16" in text
    assert "  format: pt" in text
    assert "Tensors (4 total):" in text
    assert "  t0: F32 [2, 2]" in text
    assert "  ... and 2 more" in text


def test_info_reports_parse_error(write_file):
    path = write_file("bad.gguf", b"XXXX\x03\x00\x00\x00")

    text = execute_model_operation({"operation": "info", "path": path})

    assert text.splitlines()[-1].startswith("Error: Invalid GGUF magic")


def test_list_groups_formats(tmp_path, write_file, llama_gguf):
    write_file("w.safetensors", safetensors_bytes({"w": {"dtype": "F32", "shape": [10], "data_offsets": [0, 40]}}))

    text = execute_model_operation({"operation": "list", "path": str(tmp_path)})

    assert "Models: 2" in text
    assert "GGUF Models (1):" in text
    assert "  tiny-llama.Q4_K_M.gguf [Q4_K] (llama) - " in text
    assert "Safetensors Models (1):" in text
    assert "  w.safetensors (~10) - " in text


def test_list_empty_directory(tmp_path):
    text = execute_model_operation({"operation": "list", "path": str(tmp_path)})

    assert text.endswith("No models found.")


def test_compare_and_search(tmp_path, write_file, llama_gguf):
    other = write_file("tiny-llama.Q8_0.gguf", gguf_bytes([("general.architecture", T_STRING, "llama")]))

    cmp_text = execute_model_operation({"operation": "compare", "path1": llama_gguf, "path2": other})
    assert "Architecture: Same (llama)" in cmp_text
    assert "Quantization: Different (Q4_K vs Q8_0)" in cmp_text
    assert "Model 1 is" in cmp_text and "larger (+" in cmp_text

    search_text = execute_model_operation({"operation": "search", "path": str(tmp_path), "query": "q8"})
    assert search_text.startswith('Found 1 models matching "q8":')
    assert other in search_text

    none_text = execute_model_operation({"operation": "search", "path": str(tmp_path), "query": "gemma"})
    assert none_text == 'No models found matching "gemma"'


@pytest.mark.parametrize(
    "args, message",
    [
        ({"operation": "info"}, "path is required"),
        ({"operation": "compare", "path1": "a"}, "path1 and path2 are required"),
        ({"operation": "search", "path": "."}, "path and query are required"),
        ({"operation": "explode"}, "Unknown model operation: explode"),
    ],
)
def test_argument_errors(args, message):
    with pytest.raises(ToolArgumentError, match=message):
        execute_model_operation(args)


def test_run_model_tool_envelope(tmp_path, llama_gguf):
    ok = run_model_tool({"operation": "info", "path": llama_gguf})
    assert not ok.is_error

    missing = run_model_tool({"operation": "info", "path": str(tmp_path / "missing.gguf")})
    assert missing.is_error
    assert missing.text.startswith("Error:")

    bad = run_model_tool({})
    assert bad.is_error


def test_schema_lists_operations():
    assert MODEL_TOOL_SCHEMA["inputSchema"]["properties"]["operation"]["enum"] == [
        "info",
        "list",
        "compare",
        "search",
    ]
