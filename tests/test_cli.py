"""Tests for the console CLI and JSON output."""
from __future__ import annotations

import json

from conftest import T_STRING, gguf_bytes, safetensors_bytes

from model_inspect.cli import main


def test_version(capsys):
    assert main(["version"]) == 0
    assert "model-inspect version" in capsys.readouterr().out


def test_info_writes_json(tmp_path, llama_gguf):
    out = tmp_path / "report.json"

    assert main(["info", llama_gguf, "--metadata", "--quiet", "--json-out", str(out)]) == 0

    report = json.loads(out.read_text(encoding="utf-8"))
    assert report["format"] == "gguf"
    assert report["details"]["architecture"] == "llama"
    assert report["details"]["metadata"]["llama.block_count"] == 32
    assert "error" not in report


def test_info_parse_error_exit_code(write_file):
    path = write_file("bad.safetensors", b"\xff" * 16)

    assert main(["info", path, "--quiet"]) == 1


def test_missing_path(tmp_path, capsys):
    assert main(["info", str(tmp_path / "nope.gguf"), "--quiet"]) == 2
    assert "Path not found" in capsys.readouterr().out


def test_list_and_search(tmp_path, write_file, llama_gguf):
    write_file("w.safetensors", safetensors_bytes({}))
    out = tmp_path / "list.json"

    assert main(["list", str(tmp_path), "--quiet", "--json-out", str(out)]) == 0
    listing = json.loads(out.read_text(encoding="utf-8"))
    assert listing["total_count"] == 2
    assert [m["name"] for m in listing["models"]] == ["tiny-llama.Q4_K_M.gguf", "w.safetensors"]

    assert main(["search", str(tmp_path), "llama", "--quiet"]) == 0


def test_list_rejects_file(llama_gguf):
    assert main(["list", llama_gguf, "--quiet"]) == 2


def test_compare(write_file, llama_gguf):
    other = write_file("other.safetensors", safetensors_bytes({}))

    assert main(["compare", llama_gguf, other, "--quiet"]) == 0


def test_info_renders_markup_like_metadata(write_file):
    path = write_file(
        "chat[v2].gguf",
        gguf_bytes([("tokenizer.chat_template", T_STRING, "[INST] {{ prompt }} [/INST]")]),
    )

    assert main(["info", path, "--metadata", "--quiet"]) == 0
