"""High-level API + CLI for the typography tamper detector."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pipeline import (
    AnalysisError,
    ConfigError,
    DocumentAnalyzer,
    extract_text_runs,
    load_analyzer_config,
    load_text_runs,
    save_artifacts,
    save_text_runs,
)
from scoring.engine import ForensicReport
from typography.utils import font_inventory, json_sanitize

DEFAULT_OUTPUT_DIR = Path("output")

# Failures reported as exit code 1 instead of a traceback
CLI_ERRORS = (AnalysisError, ConfigError, FileNotFoundError)


class TamperDetectorAPI:
    """High-level orchestration API usable from CLI or notebooks."""

    def __init__(self, config_path: str | Path | None = None):
        self.config = load_analyzer_config(config_path)
        self.analyzer = DocumentAnalyzer(config=self.config)

    def analyze(self, pdf_path: str | Path, output_dir: str | Path = DEFAULT_OUTPUT_DIR) -> dict[str, Any]:
        result = self.analyzer.analyze_file(pdf_path)
        paths = save_artifacts(result, output_dir)
        return {"report": result.report, "artifacts": paths}

    def fonts(self, pdf_path: str | Path) -> list[dict[str, Any]]:
        parsed = extract_text_runs(Path(pdf_path).read_bytes())
        return font_inventory(parsed.runs)

    def export_runs(self, pdf_path: str | Path, out_path: str | Path) -> int:
        """Extract a PDF's text runs to JSON; returns the run count."""
        parsed = extract_text_runs(Path(pdf_path).read_bytes())
        save_text_runs(parsed.runs, out_path)
        return len(parsed.runs)

    def score_runs(self, runs_path: str | Path) -> ForensicReport:
        """Score a JSON run list without touching any PDF."""
        report, _ = self.analyzer.analyze_runs(load_text_runs(runs_path))
        return report


# -------------------- CLI commands --------------------

def cmd_analyze(args: argparse.Namespace) -> int:
    try:
        api = TamperDetectorAPI(args.config)
        out = api.analyze(args.pdf, output_dir=args.out)
    except CLI_ERRORS as exc:
        print(f"[analyze] {exc}", file=sys.stderr)
        return 1
    print(out["report"].to_summary_text())
    print(f"[analyze] Artifacts saved to {Path(args.out).resolve()}")
    return 0


def cmd_fonts(args: argparse.Namespace) -> int:
    try:
        api = TamperDetectorAPI(args.config)
        inventory = api.fonts(args.pdf)
    except CLI_ERRORS as exc:
        print(f"[fonts] {exc}", file=sys.stderr)
        return 1
    print(json.dumps(inventory, indent=2, ensure_ascii=False))
    return 0


def cmd_runs(args: argparse.Namespace) -> int:
    try:
        api = TamperDetectorAPI(args.config)
        n = api.export_runs(args.pdf, args.out)
    except CLI_ERRORS as exc:
        print(f"[runs] {exc}", file=sys.stderr)
        return 1
    print(f"[runs] {n} text runs written to {args.out}")
    return 0


def cmd_score(args: argparse.Namespace) -> int:
    try:
        api = TamperDetectorAPI(args.config)
        report = api.score_runs(args.runs)
    except CLI_ERRORS as exc:
        print(f"[score] {exc}", file=sys.stderr)
        return 1
    if args.json:
        print(json.dumps(json_sanitize(report.to_dict()), indent=2, ensure_ascii=False))
    else:
        print(report.to_summary_text())
    return 0


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default=None, help="Path to analyzer YAML config")
    common.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    parser = argparse.ArgumentParser(description="Typography tamper detector for PDF documents")
    sub = parser.add_subparsers(dest="command", required=True)

    analyze_p = sub.add_parser(
        "analyze", parents=[common], help="Analyze a PDF and write report + annotated PDFs"
    )
    analyze_p.add_argument("pdf", help="Path to the PDF document")
    analyze_p.add_argument(
        "--out", default=str(DEFAULT_OUTPUT_DIR),
        help="Output directory for report.json and annotated PDFs",
    )

    fonts_p = sub.add_parser("fonts", parents=[common], help="List font families used in a PDF")
    fonts_p.add_argument("pdf", help="Path to the PDF document")

    runs_p = sub.add_parser("runs", parents=[common], help="Extract a PDF's text runs to JSON")
    runs_p.add_argument("pdf", help="Path to the PDF document")
    runs_p.add_argument("--out", default="runs.json", help="Output JSON file")

    score_p = sub.add_parser("score", parents=[common], help="Score a JSON list of text runs")
    score_p.add_argument("runs", help="Path to a runs JSON file (see `runs`)")
    score_p.add_argument("--json", action="store_true", help="Print the full report as JSON")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(name)s] %(message)s",
    )

    commands = {
        "analyze": cmd_analyze,
        "fonts": cmd_fonts,
        "runs": cmd_runs,
        "score": cmd_score,
    }
    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
