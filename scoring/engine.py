"""
ScoringEngine: Aggregates the three detector issue lists into a ForensicReport.

=== Weighted Severity Scoring ===

Each issue contributes its severity multiplier, scaled by the weight of the
detector that produced it:

    severity_score = Σ_type  weight[type] × Σ_issue multiplier[issue.severity]

    weight     = {fontFamily: 0.4, fontSize: 0.3, spacing: 0.3}
    multiplier = {high: 1.0, medium: 0.6, low: 0.3}

The score is unbounded above; it grows with both the number of issues and
how bad they are.

Confidence is the inverse signal: how confident we are that the document is
*clean* (not how confident the detectors are):

    base_confidence = clamp(1 - severity_score / 10, 0, 1)
    issues_penalty  = min(0.5, 0.1 × total_issues)
    confidence      = max(0, base_confidence - issues_penalty)

A document is flagged as suspicious as soon as one issue exists.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from typography.utils import FONT_FAMILY, FONT_SIZE, ISSUE_TYPES, SPACING, Inconsistency

DEFAULT_WEIGHTS: Dict[str, float] = {
    FONT_FAMILY: 0.4,
    FONT_SIZE: 0.3,
    SPACING: 0.3,
}

DEFAULT_SEVERITY_MULTIPLIERS: Dict[str, float] = {
    "high": 1.0,
    "medium": 0.6,
    "low": 0.3,
}


@dataclass(frozen=True)
class ForensicReport:
    """The terminal verdict for one analysed document."""

    timestamp: str
    suspicious: bool
    severity_score: float
    confidence: float               # [0, 1], 1 = no sign of tampering
    total_issues: int
    issues: Mapping[str, Tuple[Inconsistency, ...]]
    detected_fonts: Tuple[Mapping[str, Any], ...] = ()
                                    # ({"name": ..., "occurrences": ...}, ...)

    def __post_init__(self):
        # read-only views; the counts above were computed from these issues
        object.__setattr__(self, "issues", MappingProxyType(
            {t: tuple(lst) for t, lst in self.issues.items()}
        ))
        object.__setattr__(self, "detected_fonts", tuple(
            MappingProxyType(dict(f)) for f in self.detected_fonts
        ))

    def issue_count(self, issue_type: str) -> int:
        return len(self.issues.get(issue_type, ()))

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "suspicious": self.suspicious,
            "severityScore": self.severity_score,
            "confidence": self.confidence,
            "summary": {
                "totalIssues": self.total_issues,
                "fontFamilyIssues": self.issue_count(FONT_FAMILY),
                "fontSizeIssues": self.issue_count(FONT_SIZE),
                "spacingIssues": self.issue_count(SPACING),
            },
            "details": {
                FONT_FAMILY: {
                    "issues": [i.to_dict() for i in self.issues.get(FONT_FAMILY, [])],
                    "detectedFonts": [dict(f) for f in self.detected_fonts],
                },
                FONT_SIZE: [i.to_dict() for i in self.issues.get(FONT_SIZE, [])],
                SPACING: [i.to_dict() for i in self.issues.get(SPACING, [])],
            },
        }

    # ── Text formatting ──────────────────────────────────────────────────────

    def to_summary_text(self) -> str:
        """Compact human-readable summary (CLI output)."""
        lines: List[str] = []
        lines.append("=== TYPOGRAPHY FORENSIC REPORT ===")
        lines.append(f"Verdict        : {self._interpret()}")
        lines.append(f"Severity score : {self.severity_score:.2f}")
        lines.append(f"Confidence     : {self.confidence:.0%}")
        lines.append(
            f"Issues         : {self.total_issues} "
            f"(family={self.issue_count(FONT_FAMILY)}, "
            f"size={self.issue_count(FONT_SIZE)}, "
            f"spacing={self.issue_count(SPACING)})"
        )

        for issue in self.issues.get(FONT_FAMILY, []):
            fonts = ", ".join(issue.detected_fonts or ())
            lines.append(f"  [{issue.context}] {issue.description}: {fonts}")
        for issue in self.issues.get(FONT_SIZE, []):
            d = issue.details or {}
            lines.append(
                f"  [{issue.context}] {issue.description} "
                f"(mean={d.get('mean', 0):.2f}, variance={d.get('variance', 0):.2f})"
            )
        spacing = self.issues.get(SPACING, [])
        if spacing:
            lines.append(f"  {len(spacing)} abnormal spacing gap(s) between consecutive runs")

        if self.detected_fonts:
            lines.append("Fonts:")
            for f in self.detected_fonts:
                lines.append(f"  {f['name']} ({f['occurrences']} occurrences)")
        return "\n".join(lines)

    def _interpret(self) -> str:
        if not self.suspicious:
            return "✓ CLEAN — no typographic inconsistencies"
        if self.confidence < 0.3:
            return "⚠ HIGH — strong signs of post-hoc editing"
        if self.confidence < 0.7:
            return "⚡ MODERATE — some inconsistencies"
        return "⚡ LOW — minor inconsistencies"


class ScoringEngine:
    """
    Turns per-detector issue lists into a ForensicReport.

    Args:
        weights: per issue type weight (unknown types weigh 0)
        severity_multipliers: per severity multiplier (unknown severities count as "low")
    """

    def __init__(
        self,
        weights: Optional[Mapping[str, float]] = None,
        severity_multipliers: Optional[Mapping[str, float]] = None,
    ):
        self.weights = dict(weights if weights is not None else DEFAULT_WEIGHTS)
        self.severity_multipliers = dict(
            severity_multipliers if severity_multipliers is not None
            else DEFAULT_SEVERITY_MULTIPLIERS
        )

    def score(
        self,
        issues_by_type: Mapping[str, Sequence[Inconsistency]],
        detected_fonts: Sequence[Mapping[str, Any]] = (),
        timestamp: Optional[str] = None,
    ) -> ForensicReport:
        issues = {t: list(issues_by_type.get(t, [])) for t in ISSUE_TYPES}
        # keep any extra issue types the caller passed in
        for t, lst in issues_by_type.items():
            issues.setdefault(t, list(lst))

        total_issues = sum(len(lst) for lst in issues.values())
        severity_score = self.severity_score(issues)

        return ForensicReport(
            timestamp=timestamp or datetime.now(timezone.utc).isoformat(),
            suspicious=total_issues > 0,
            severity_score=severity_score,
            confidence=self.confidence(total_issues, severity_score),
            total_issues=total_issues,
            issues=issues,
            detected_fonts=tuple(detected_fonts),
        )

    # ------------------------------------------------------------------
    # Score components
    # ------------------------------------------------------------------

    def severity_multiplier(self, issue: Inconsistency) -> float:
        if issue.severity in self.severity_multipliers:
            return self.severity_multipliers[issue.severity]
        return self.severity_multipliers.get("low", DEFAULT_SEVERITY_MULTIPLIERS["low"])

    def severity_score(self, issues_by_type: Mapping[str, Sequence[Inconsistency]]) -> float:
        score = 0.0
        for issue_type, issues in issues_by_type.items():
            weight = self.weights.get(issue_type, 0.0)
            issue_score = sum(self.severity_multiplier(i) for i in issues)
            score += issue_score * weight
        return score

    @staticmethod
    def confidence(total_issues: int, severity_score: float) -> float:
        """Confidence that the document is clean, in [0, 1]."""
        base_confidence = min(1.0, max(0.0, 1.0 - severity_score / 10.0))
        issues_penalty = min(0.5, total_issues * 0.1)
        return max(0.0, base_confidence - issues_penalty)
