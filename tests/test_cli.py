"""Tests for the command line front end."""

import io
import json

import pytest

from toon_codec.cli import main


@pytest.fixture
def json_file(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(json.dumps({"items": [{"x": 1}, {"x": 2}], "name": "Ann"}), encoding="utf-8")
    return path


def test_cli_encode(json_file, capsys):
    assert main(["encode", str(json_file)]) == 0
    assert capsys.readouterr().out == "items[2]{x}:\n  1\n  2\nname: Ann\n"


def test_cli_encode_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("[1, 2, 3]"))
    assert main(["encode"]) == 0
    assert capsys.readouterr().out == "[3]: 1,2,3\n"


def test_cli_decode(tmp_path, capsys):
    path = tmp_path / "data.toon"
    path.write_text("name: Ann\nage: 30", encoding="utf-8")
    assert main(["decode", str(path)]) == 0
    assert json.loads(capsys.readouterr().out) == {"name": "Ann", "age": 30}


def test_cli_decode_strict_failure(tmp_path):
    path = tmp_path / "bad.toon"
    path.write_text("a: 1\n%%%", encoding="utf-8")
    assert main(["decode", "--strict", str(path)]) == 1


def test_cli_stats(json_file, capsys):
    assert main(["stats", str(json_file)]) == 0
    out = capsys.readouterr().out
    assert "savings_percent:" in out
    assert "verified: true" in out


def test_cli_export(json_file, tmp_path, capsys):
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    assert main(["export", str(json_file), "--format", "md", "--output-dir", str(out_dir)]) == 0
    written = list(out_dir.iterdir())
    assert len(written) == 1
    assert written[0].suffix == ".md"
    assert "items[2]{x}:" in written[0].read_text(encoding="utf-8")


def test_cli_invalid_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    assert main(["encode", str(path)]) == 1


def test_cli_missing_file(tmp_path):
    assert main(["encode", str(tmp_path / "missing.json")]) == 1
