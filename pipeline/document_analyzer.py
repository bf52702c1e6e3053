"""
DocumentAnalyzer — orchestrates text-run extraction, the consistency
detectors, scoring and the two overlay renders for a single PDF.

Flow
----
  1. reader                — PDF bytes -> ordered TextRun list (+ page geometry)
  2. detect_all            — font-family / font-size / spacing issue lists
  3. ScoringEngine.score   — weighted severity, confidence, ForensicReport
  4. plan_*_overlay        — suspicious-area plan and font-type plan
  5. writer                — both plans burned into copies of the PDF

Only steps 1 and 5 touch the document bytes.  Both are injectable so the
core (2-4) can run against any parser/renderer pair.

Usage
-----
    from pipeline.document_analyzer import DocumentAnalyzer
    analyzer = DocumentAnalyzer()
    result = analyzer.analyze_pdf(Path("statement.pdf").read_bytes())
    print(result.report.to_summary_text())
"""

from __future__ import annotations

import base64
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from overlay.plan import AnnotationPlan
from overlay.planner import plan_font_type_overlay, plan_suspicious_overlay
from scoring.engine import ForensicReport, ScoringEngine
from typography.detectors import detect_all
from typography.utils import IssuesByType, TextRun, ensure_dir, font_inventory, save_json

from .config import AnalyzerConfig
from .errors import AnalysisError, DocumentParseError
from .pdf_reader import ParsedDocument, extract_text_runs
from .pdf_writer import render_annotation_plan

logger = logging.getLogger(__name__)

Reader = Callable[[bytes], ParsedDocument]
Writer = Callable[[bytes, AnnotationPlan], bytes]

REPORT_FILENAME = "report.json"
HIGHLIGHTED_FILENAME = "pdfHighlighted.pdf"
FONT_TYPE_FILENAME = "pdfHighlightedFont.pdf"


@dataclass(frozen=True)
class AnalysisResult:
    """Report plus the two annotated PDFs for one document."""

    report: ForensicReport
    highlighted_pdf: bytes
    font_type_pdf: bytes
    page_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.report.to_dict(),
            "highlightedPdf": base64.b64encode(self.highlighted_pdf).decode("ascii"),
            "fontTypePdf": base64.b64encode(self.font_type_pdf).decode("ascii"),
        }


class DocumentAnalyzer:
    """
    End-to-end typography tamper analysis.

    Args:
        config: thresholds, weights and overlay styling (defaults if None)
        reader: PDF bytes -> ParsedDocument
        writer: (PDF bytes, AnnotationPlan) -> PDF bytes
    """

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        reader: Reader = extract_text_runs,
        writer: Writer = render_annotation_plan,
    ):
        self.config = config or AnalyzerConfig()
        self.reader = reader
        self.writer = writer
        self.scoring_engine = ScoringEngine(
            weights=self.config.scoring.weights,
            severity_multipliers=self.config.scoring.severity_multipliers,
        )

    # ── Public interface ─────────────────────────────────────────────────────

    def analyze_runs(
        self,
        runs: Sequence[TextRun],
        timestamp: Optional[str] = None,
    ) -> Tuple[ForensicReport, IssuesByType]:
        """Detectors + scoring only; no document bytes involved."""
        issues = detect_all(runs, self.config.detectors)
        report = self.scoring_engine.score(
            issues,
            detected_fonts=font_inventory(runs),
            timestamp=timestamp,
        )
        return report, issues

    def plan_overlays(
        self,
        parsed: ParsedDocument,
        issues: IssuesByType,
    ) -> Tuple[AnnotationPlan, AnnotationPlan]:
        style = dict(
            page_height=parsed.page_height,
            page_count=parsed.page_count,
            opacity=self.config.overlay.opacity,
            default_size=self.config.overlay.default_box_size,
        )
        return (
            plan_suspicious_overlay(parsed.runs, issues, **style),
            plan_font_type_overlay(parsed.runs, **style),
        )

    def analyze_pdf(self, pdf_bytes: bytes, timestamp: Optional[str] = None) -> AnalysisResult:
        """Run the full pipeline on one PDF.

        Raises
        ------
        AnalysisError
            The reader failed (the DocumentParseError is chained as cause).
        OverlayGenerationError
            The writer rejected one of the plans; raised unchanged.
        """
        try:
            parsed = self.reader(pdf_bytes)
        except DocumentParseError as exc:
            logger.error("Error analyzing PDF: %s", exc)
            raise AnalysisError("Failed to analyze PDF document") from exc

        logger.info(
            "Analyzing %d text runs across %d page(s)",
            len(parsed.runs), parsed.page_count,
        )
        report, issues = self.analyze_runs(parsed.runs, timestamp=timestamp)
        logger.info(
            "Found %d issue(s): severity=%.2f confidence=%.2f",
            report.total_issues, report.severity_score, report.confidence,
        )

        suspicious_plan, font_plan = self.plan_overlays(parsed, issues)
        highlighted = self.writer(pdf_bytes, suspicious_plan)
        font_type = self.writer(pdf_bytes, font_plan)

        return AnalysisResult(
            report=report,
            highlighted_pdf=highlighted,
            font_type_pdf=font_type,
            page_count=parsed.page_count,
        )

    def analyze_file(self, pdf_path: Union[str, Path]) -> AnalysisResult:
        path = Path(pdf_path)
        if not path.exists():
            raise FileNotFoundError(f"PDF not found: {path}")
        return self.analyze_pdf(path.read_bytes())


def save_artifacts(result: AnalysisResult, output_dir: Union[str, Path]) -> Dict[str, str]:
    """Write report.json and both annotated PDFs; return their paths."""
    outp = ensure_dir(output_dir)
    highlighted = outp / HIGHLIGHTED_FILENAME
    font_type = outp / FONT_TYPE_FILENAME
    highlighted.write_bytes(result.highlighted_pdf)
    font_type.write_bytes(result.font_type_pdf)

    report_path = save_json(result.report.to_dict(), outp / REPORT_FILENAME)
    logger.info("Artifacts saved to %s", outp)
    return {
        "report": report_path,
        "highlighted_pdf": str(highlighted),
        "font_type_pdf": str(font_type),
    }


def save_text_runs(runs: Sequence[TextRun], out_path: Union[str, Path]) -> str:
    """Write ``runs`` as a JSON list (camelCase keys), in reading order."""
    ensure_dir(Path(out_path).parent)
    return save_json([r.to_dict() for r in runs], out_path)


def load_text_runs(path: Union[str, Path]) -> List[TextRun]:
    """Read a JSON list of runs written by :func:`save_text_runs` or another parser.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    DocumentParseError
        If the file is not a JSON list of run objects.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Runs file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise TypeError(f"expected a list of runs, got {type(data).__name__}")
        return [TextRun.from_dict(item) for item in data]
    except (ValueError, TypeError, AttributeError) as exc:
        logger.error("Could not read text runs from %s: %s", path, exc)
        raise DocumentParseError(f"Could not read text runs from {path}: {exc}") from exc
