# tests/test_cli.py
"""
Tests for the hexbloop command-line interface.
"""
import json

import pytest

from hexbloop.cli import _parse_effects, main


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert "hexbloop" in capsys.readouterr().out


def test_list_styles(capsys):
    assert main(["list-styles"]) == 0
    out = capsys.readouterr().out
    assert "plasma" in out
    assert "Family:" in out


def test_dna_json(capsys):
    assert main(["dna", "Hexbloop", "--seed", "99"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["identifier"] == "Hexbloop"
    assert data["primary"] == 99
    assert "auto_style" in data


def test_palette(capsys):
    assert main(["palette", "--hue", "0", "--scheme", "triadic", "--count", "3"]) == 0
    out = capsys.readouterr().out
    assert "#" in out
    assert "background" in out


def test_palette_bad_scheme(capsys):
    assert main(["palette", "--scheme", "rainbowish"]) == 1
    assert "ERROR" in capsys.readouterr().out


def test_generate_writes_files(tmp_path, capsys):
    code = main([
        "generate", "QUANTUM DIGITAL CORE",
        "--seed", "12345", "--size", "64",
        "--effect", "grain=5", "--effect", "vignette=off",
        "-o", str(tmp_path), "--name", "quantum",
    ])
    assert code == 0
    assert (tmp_path / "quantum.png").exists()
    report = json.loads((tmp_path / "quantum.json").read_text())
    assert report["metadata"]["seed_used"] == 12345
    assert report["fingerprint"].startswith("sha256:")
    assert "[2/2]" in capsys.readouterr().out


def test_generate_mix_jpeg(tmp_path):
    code = main([
        "generate", "night drive", "--mix", "--tempo", "70", "--moon-phase", "0.02",
        "--size", "64", "-o", str(tmp_path), "--format", "jpg",
    ])
    assert code == 0
    assert len(list(tmp_path.glob("*.jpg"))) == 1


def test_generate_bad_moon(tmp_path, capsys):
    assert main(["generate", "x", "--moon-phase", "soon", "-o", str(tmp_path)]) == 1
    assert "moon-phase" in capsys.readouterr().out


def test_generate_bad_format(tmp_path):
    assert main(["generate", "x", "--size", "64", "-o", str(tmp_path), "--format", "gif"]) == 1


def test_verify(capsys):
    assert main(["verify", "Hexbloop", "--size", "64"]) == 0
    out = capsys.readouterr().out
    assert "FAIL" not in out
    assert out.count("OK:") == 2


class TestParseEffects:

    def test_values(self):
        assert _parse_effects(["bloom=0.5", "grain=on", "vignette=off", "scanlines"]) == {
            "bloom": 0.5,
            "grain": True,
            "vignette": False,
            "scanlines": True,
        }

    def test_empty(self):
        assert _parse_effects(None) == {}

    def test_bad_value(self):
        with pytest.raises(ValueError):
            _parse_effects(["bloom=lots"])
