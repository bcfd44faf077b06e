"""Tests for the ``logz`` command line."""

import io
import json
import sys
from pathlib import Path

import pytest

from logz.__main__ import main
from logz.config import Settings
from logz.exit_codes import ExitCode


@pytest.fixture
def cfg(monkeypatch):
    for key in Settings.__dataclass_fields__:
        monkeypatch.delenv(f"LOGZ_{key}", raising=False)
    return Settings()


@pytest.fixture
def rows_file(tmp_path):
    path = tmp_path / "rows.json"
    path.write_text(
        json.dumps(
            {
                "columns": ["Query", "Duration"],
                "rows": [
                    {"cells": ["select a, b from t", "0.001"], "duration": 0.001},
                    {"cells": ["select <x>", "0.05"], "duration": 0.05},
                    {"cells": ["update t", "3"], "error": True},
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


def test_render_writes_sortable_page(rows_file, tmp_path, cfg, parse_html):
    out = tmp_path / "out" / "page.html"
    rc = main(["render", str(rows_file), "--output", str(out)], cfg=cfg)
    assert rc == ExitCode.SUCCESS
    doc = parse_html(out.read_bytes())
    assert doc.balanced, doc.errors
    assert doc.table_classes == ["gridtable"]
    # header row + three body rows
    assert doc.row_classes == [None, "low", "medium", "error"]
    assert "select &lt;x&gt;" in out.read_text(encoding="utf-8")


def test_render_wrap_flag(rows_file, tmp_path, cfg, parse_html):
    out = tmp_path / "page.html"
    assert main(["render", str(rows_file), "--output", str(out), "--wrap"], cfg=cfg) == 0
    doc = parse_html(out.read_bytes())
    assert doc.cells[0] == "select a,\u200b b from t"


def test_render_uses_default_columns(tmp_path, cfg, parse_html):
    src = tmp_path / "rows.json"
    src.write_text('{"rows": [{"cells": ["1", "2"]}]}', encoding="utf-8")
    out = tmp_path / "page.html"
    cfg.DEFAULT_COLUMNS = ["A", "B"]
    assert main(["render", str(src), "--output", str(out)], cfg=cfg) == 0
    doc = parse_html(out.read_bytes())
    assert doc.opened["th"] == 2


def test_render_missing_file(tmp_path, cfg, capsys):
    rc = main(["render", str(tmp_path / "nope.json")], cfg=cfg)
    assert rc == ExitCode.ERROR
    assert "error: cannot read" in capsys.readouterr().err


def test_render_invalid_document(tmp_path, cfg, capsys):
    src = tmp_path / "bad.json"
    src.write_text('{"rows": [{"cells": ["x"], "level": "critical"}]}', encoding="utf-8")
    rc = main(["render", str(src), "--output", str(tmp_path / "o.html")], cfg=cfg)
    assert rc == ExitCode.VIOLATION
    assert "invalid table document" in capsys.readouterr().err
    assert not (tmp_path / "o.html").exists()


def test_render_invalid_json(tmp_path, cfg):
    src = tmp_path / "bad.json"
    src.write_text("{not json", encoding="utf-8")
    assert main(["render", str(src)], cfg=cfg) == ExitCode.VIOLATION


def test_wrap_command(cfg, capsysbinary):
    assert main(["wrap", "f(a,b)"], cfg=cfg) == ExitCode.SUCCESS
    assert capsysbinary.readouterr().out == "f(a,\u200bb)\u200b\n".encode("utf-8")


def test_no_command_prints_help(cfg, capsys):
    assert main([], cfg=cfg) == ExitCode.ERROR
    assert "render" in capsys.readouterr().err


def test_wrap_writes_utf8_whatever_the_stdout_encoding(cfg, monkeypatch):
    raw = io.BytesIO()
    monkeypatch.setattr(sys, "stdout", io.TextIOWrapper(raw, encoding="ascii"))
    assert main(["wrap", "a,b"], cfg=cfg) == ExitCode.SUCCESS
    assert raw.getvalue() == "a,\u200bb\n".encode("utf-8")


def _broken_pipe(data):
    raise BrokenPipeError(32, "Broken pipe")


def test_wrap_broken_stdout(cfg, monkeypatch, capsys):
    monkeypatch.setattr("logz.__main__._write_stdout", _broken_pipe)
    assert main(["wrap", "a,b"], cfg=cfg) == ExitCode.ERROR
    assert "error: cannot write to stdout" in capsys.readouterr().err


def test_render_to_broken_stdout(rows_file, cfg, monkeypatch, capsys):
    monkeypatch.setattr("logz.__main__._write_stdout", _broken_pipe)
    assert main(["render", str(rows_file)], cfg=cfg) == ExitCode.ERROR
    assert "error: cannot write page to stdout" in capsys.readouterr().err


def test_render_output_is_a_directory(rows_file, tmp_path, cfg, capsys):
    rc = main(["render", str(rows_file), "--output", str(tmp_path)], cfg=cfg)
    assert rc == ExitCode.ERROR
    assert "error: cannot write" in capsys.readouterr().err


def test_render_output_device_full(rows_file, tmp_path, cfg, monkeypatch, capsys):
    def _full(self, data):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(Path, "write_bytes", _full)
    rc = main(["render", str(rows_file), "--output", str(tmp_path / "page.html")], cfg=cfg)
    assert rc == ExitCode.ERROR
    assert "No space left on device" in capsys.readouterr().err


def test_unknown_log_level(cfg, capsys):
    cfg.LOG_LEVEL = "loud"
    assert main(["wrap", "x"], cfg=cfg) == ExitCode.ERROR
    assert "error: unknown log level: 'loud'" in capsys.readouterr().err


def test_log_level_from_env(monkeypatch, capsysbinary):
    monkeypatch.setenv("LOGZ_LOG_LEVEL", "debug")
    assert main(["wrap", "x"], cfg=Settings()) == ExitCode.SUCCESS
    assert capsysbinary.readouterr().out == b"x\n"
