"""CLI tests for main.py on a generated PDF."""

import json

import fitz
from main import build_parser, main


def write_pdf(path, fonts=("helv",)):
    doc = fitz.open()
    page = doc.new_page()
    for i, font in enumerate(fonts):
        page.insert_text((72, 100 + 30 * i), f"Line {i}", fontsize=12, fontname=font)
    doc.save(str(path))
    doc.close()
    return path


def test_parser_defaults():
    args = build_parser().parse_args(["analyze", "doc.pdf"])
    assert args.command == "analyze"
    assert args.out == "output"
    assert args.config is None
    assert args.verbose is False


def test_cli_analyze_writes_artifacts(tmp_path, capsys):
    pdf = write_pdf(tmp_path / "doc.pdf", fonts=("helv", "tiro", "cour"))
    out = tmp_path / "out"

    assert main(["analyze", str(pdf), "--out", str(out)]) == 0

    assert (out / "pdfHighlighted.pdf").exists()
    assert (out / "pdfHighlightedFont.pdf").exists()
    report = json.loads((out / "report.json").read_text(encoding="utf-8"))
    assert report["suspicious"] is True
    assert report["summary"]["fontFamilyIssues"] == 1
    assert "TYPOGRAPHY FORENSIC REPORT" in capsys.readouterr().out


def test_cli_analyze_bad_pdf_returns_error(tmp_path, capsys):
    bad = tmp_path / "bad.pdf"
    bad.write_bytes(b"not a pdf at all")
    assert main(["analyze", str(bad), "--out", str(tmp_path / "out")]) == 1
    assert "Failed to analyze PDF document" in capsys.readouterr().err


def test_cli_fonts_lists_inventory(tmp_path, capsys):
    pdf = write_pdf(tmp_path / "doc.pdf", fonts=("helv", "helv"))
    assert main(["fonts", str(pdf)]) == 0
    inventory = json.loads(capsys.readouterr().out)
    assert len(inventory) == 1
    assert inventory[0]["occurrences"] == 2


def test_cli_config_option_applies(tmp_path):
    pdf = write_pdf(tmp_path / "doc.pdf", fonts=("helv", "tiro", "cour"))
    cfg = tmp_path / "lenient.yaml"
    cfg.write_text("detectors:\n  max_families_per_context: 3\n  max_spacing: 1000\n", encoding="utf-8")
    out = tmp_path / "out"

    assert main(["analyze", str(pdf), "--out", str(out), "--config", str(cfg)]) == 0
    report = json.loads((out / "report.json").read_text(encoding="utf-8"))
    assert report["summary"]["fontFamilyIssues"] == 0


def test_cli_missing_pdf_returns_error(tmp_path, capsys):
    assert main(["analyze", str(tmp_path / "absent.pdf"), "--out", str(tmp_path / "out")]) == 1
    assert "not found" in capsys.readouterr().err
    assert main(["fonts", str(tmp_path / "absent.pdf")]) == 1


def test_cli_missing_config_returns_error(tmp_path, capsys):
    pdf = write_pdf(tmp_path / "doc.pdf")
    assert main(["fonts", str(pdf), "--config", str(tmp_path / "absent.yaml")]) == 1
    assert "Config file not found" in capsys.readouterr().err


def test_cli_runs_then_score(tmp_path, capsys):
    pdf = write_pdf(tmp_path / "doc.pdf", fonts=("helv", "tiro", "cour"))
    runs_json = tmp_path / "runs.json"

    assert main(["runs", str(pdf), "--out", str(runs_json)]) == 0
    runs = json.loads(runs_json.read_text(encoding="utf-8"))
    assert len(runs) == 3
    assert {"text", "fontFamily", "fontSize", "position", "width", "height"} <= set(runs[0])
    capsys.readouterr()

    assert main(["score", str(runs_json), "--json"]) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["summary"]["fontFamilyIssues"] == 1


def test_cli_score_bad_runs_file(tmp_path, capsys):
    bad = tmp_path / "runs.json"
    bad.write_text('{"runs": []}', encoding="utf-8")
    assert main(["score", str(bad)]) == 1
    assert "Could not read text runs" in capsys.readouterr().err
