"""Tests for the command-line entry point."""

from archsketch.main import build_parser, main


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.seed == 42
    assert args.style == "gothic"
    assert not args.line_art
    assert args.hatch_coverage == 0.3


def test_writes_svg(tmp_path):
    out = tmp_path / "building.svg"
    assert main(["--seed", "3", "--style", "ruin", "--line-art", "--hatch", "--hatch-coverage", "0.5", "-o", str(out)]) == 0
    text = out.read_text(encoding="utf-8")
    assert text.startswith("<?xml")
    assert "<path" in text


def test_unknown_style_fails(capsys):
    assert main(["--style", "rococo"]) == 1
    assert "Unknown style" in capsys.readouterr().err
