"""Tests for CLI module."""

import json
from unittest.mock import patch

import pytest

from mdplayscript.cli import main


def _run(*argv):
    with patch("sys.argv", ["mdplayscript", *argv]):
        main()


# --- convert ---

def test_convert_to_stdout(play_file, capsys):
    _run("convert", play_file)
    out = capsys.readouterr().out
    assert out.startswith("<html>\n")
    assert '<h5 id="Figaro-0">' in out
    assert '<h5 id="Susanna-0">' in out
    assert '<h5 id="Figaro-1">' in out
    assert '<span class="direction">tying her hat</span>' in out
    assert "<h1>Act I</h1>" in out


def test_convert_to_file(play_file, tmp_path, capsys):
    output = tmp_path / "public" / "figaro.html"
    _run("convert", play_file, "-o", str(output), "-t", "Le Mariage de Figaro", "--authors", "Beaumarchais")
    page = output.read_text(encoding="utf-8")
    assert '<h1 class="title">Le Mariage de Figaro</h1>' in page
    assert '<span class="author">Beaumarchais</span>' in page
    out = capsys.readouterr().out
    assert f"Wrote {output}" in out
    assert "Converted 3 speeches by 2 characters" in out


def test_convert_japanese_stylesheet(play_file, capsys):
    _run("convert", play_file, "-l", "ja")
    assert 'href="./play_ja.css"' in capsys.readouterr().out


def test_convert_uses_sidecar_options(play_file, tmp_path, capsys):
    (tmp_path / "figaro.playscript.json").write_text(json.dumps({"speech_class": "line"}))
    _run("convert", play_file)
    assert '<div class="line">' in capsys.readouterr().out


def test_convert_explicit_config(play_file, tmp_path, capsys):
    config = tmp_path / "options.json"
    config.write_text(json.dumps({"heading_level": 3}))
    _run("convert", play_file, "-c", str(config))
    assert '<h3 id="Figaro-0">' in capsys.readouterr().out


def test_convert_missing_config(play_file, tmp_path):
    with pytest.raises(SystemExit):
        _run("convert", play_file, "-c", str(tmp_path / "nope.json"))


def test_convert_invalid_config(play_file, tmp_path, capsys):
    config = tmp_path / "options.json"
    config.write_text(json.dumps({"heading_level": 9}))
    with pytest.raises(SystemExit):
        _run("convert", play_file, "-c", str(config))
    assert "Error: Invalid options file" in capsys.readouterr().err


def test_convert_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit):
        _run("convert", str(tmp_path / "missing.md"))
    assert "Error: File not found" in capsys.readouterr().err


def test_convert_empty_file(tmp_path, capsys):
    path = tmp_path / "empty.md"
    path.write_text("   \n")
    with pytest.raises(SystemExit):
        _run("convert", str(path))
    assert "Error: File is empty" in capsys.readouterr().err


# --- tokens ---

def test_tokens_dump(play_file, capsys):
    _run("tokens", play_file, "-n", "3")
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    assert [json.loads(line)["kind"] for line in lines] == ["block_start", "text", "block_end"]
    assert json.loads(lines[1])["content"] == "Act I"


def test_tokens_filtered(play_file, capsys):
    _run("tokens", play_file, "--filtered")
    tokens = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    ids = [t["attrs"]["id"] for t in tokens if "id" in t["attrs"]]
    assert ids == ["Figaro-0", "Susanna-0", "Figaro-1"]


# --- routing ---

def test_no_command_prints_help(capsys):
    _run()
    assert "usage: mdplayscript" in capsys.readouterr().out


def test_version(capsys):
    with pytest.raises(SystemExit):
        _run("--version")
    assert "0.1.0" in capsys.readouterr().out


def test_verbose_logs_directives(tmp_path, capsys, caplog):
    path = tmp_path / "play.md"
    path.write_text("<!-- playscript-off -->\n\nA> Hi\n")
    with caplog.at_level("DEBUG"):
        _run("-v", "convert", str(path))
    assert "Directive playscript-off" in caplog.text
    assert "<p>A&gt; Hi</p>" in capsys.readouterr().out
