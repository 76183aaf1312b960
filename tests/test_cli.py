from __future__ import annotations

import json
from pathlib import Path

from conftest import IES_SAMPLE, LDT_SAMPLE

from luxconvert.cli import main
from luxconvert.parser.ldt_parser import parse_ldt_bytes


def _write(tmp_path: Path, name: str, text: str) -> Path:
    p = tmp_path / name
    p.write_bytes(text.encode("latin-1"))
    return p


def test_detect(tmp_path, capsys):
    p = _write(tmp_path, "sample.ies", IES_SAMPLE)
    assert main(["detect", str(p)]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Format: ies (confidence 0.95, version LM-63-2002)")


def test_detect_unknown_content(tmp_path, capsys):
    p = _write(tmp_path, "notes.txt", "hello world\n")
    assert main(["detect", str(p)]) == 3
    assert "UNKNOWN_FORMAT" in capsys.readouterr().out


def test_convert_with_explicit_output(tmp_path, capsys):
    p = _write(tmp_path, "sample.ies", IES_SAMPLE)
    out_path = tmp_path / "out" / "converted.ldt"
    rc = main(["convert", str(p), "--to", "ldt", "--out", str(out_path), "--set", "manufacturer=Other Co"])
    assert rc == 0
    ldt = parse_ldt_bytes(out_path.read_bytes())
    assert ldt.header.company == "Other Co"
    out = capsys.readouterr().out
    assert "Converted ies -> ldt" in out
    assert f"Saved: {out_path.resolve()}" in out
    assert "[WARN] ldt: horizontal angle increment" in out


def test_convert_default_output_path(tmp_path):
    p = _write(tmp_path, "sample.ldt", LDT_SAMPLE)
    assert main(["convert", str(p), "--to", "IES"]) == 0
    assert (tmp_path / "sample.ies").read_bytes().startswith(b"IESNA:LM-63-2002")


def test_convert_dot_decimal_and_precision(tmp_path):
    p = _write(tmp_path, "sample.ies", IES_SAMPLE)
    out_path = tmp_path / "dot.ldt"
    assert main(["convert", str(p), "--to", "ldt", "--out", str(out_path), "--dot-decimal", "--precision", "1"]) == 0
    text = out_path.read_text(encoding="latin-1")
    assert "100.0\r\n" in text
    assert "100,0" not in text


def test_convert_missing_file(tmp_path, capsys):
    assert main(["convert", str(tmp_path / "missing.ies"), "--to", "ldt"]) == 2
    assert "[ERROR] File not found" in capsys.readouterr().out


def test_convert_bad_override(tmp_path, capsys):
    p = _write(tmp_path, "sample.ies", IES_SAMPLE)
    assert main(["convert", str(p), "--to", "ldt", "--set", "manufacturer"]) == 2
    assert "expected key=value" in capsys.readouterr().out


def test_convert_failure_exit_code(tmp_path, capsys):
    type_b = IES_SAMPLE.replace("1 1000 1 3 2 1 2", "1 1000 1 3 2 2 2")
    p = _write(tmp_path, "typeb.ies", type_b)
    assert main(["convert", str(p), "--to", "cie"]) == 3
    assert "UNSUPPORTED_PHOTOMETRY_TYPE" in capsys.readouterr().out
    assert not (tmp_path / "typeb.cie").exists()


def test_validate_json(tmp_path, capsys):
    p = _write(tmp_path, "sample.ldt", LDT_SAMPLE)
    assert main(["validate", str(p), "--json"]) == 0
    doc = json.loads(capsys.readouterr().out)
    assert doc["format"] == "ldt"
    assert doc["is_valid"] is True
    assert 0.0 <= doc["score"] <= 1.0
    assert set(doc["summary"]) == {"errors", "warnings", "info"}


def test_validate_invalid_file(tmp_path, capsys):
    p = _write(tmp_path, "neg.ies", IES_SAMPLE.replace("70 70\n", "70 -70\n"))
    assert main(["validate", str(p), "--format", "ies"]) == 3
    out = capsys.readouterr().out
    assert "INVALID" in out
    assert "[ERROR]" in out


def test_info(capsys):
    assert main(["info", "cie"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("CIE i-table (cie)")
    assert "Max grid: 19 x 16" in out


def test_info_json_and_unknown(capsys):
    assert main(["info", "ldt", "--json"]) == 0
    doc = json.loads(capsys.readouterr().out)
    assert doc["capabilities"]["photometry_types"] == ["C"]
    assert main(["info", "xml"]) == 2


def test_formats(capsys):
    assert main(["formats"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["cie\tCIE i-table", "ies\tIES LM-63", "ldt\tEULUMDAT"]
