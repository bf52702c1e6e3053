from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .font_family import DEFAULT_MAX_FAMILIES, detect_family_issues
from .font_size import DEFAULT_VARIANCE_THRESHOLD, detect_size_issues
from .spacing import DEFAULT_MAX_SPACING, DEFAULT_MIN_SPACING, detect_spacing_issues
from .utils import FONT_FAMILY, FONT_SIZE, SPACING, IssuesByType, TextRun


@dataclass(frozen=True)
class DetectorConfig:
    """Thresholds shared by the three consistency detectors."""

    max_families_per_context: int = DEFAULT_MAX_FAMILIES
    size_variance_threshold: float = DEFAULT_VARIANCE_THRESHOLD
    min_spacing: float = DEFAULT_MIN_SPACING
    max_spacing: float = DEFAULT_MAX_SPACING


def detect_all(
    runs: Sequence[TextRun],
    config: Optional[DetectorConfig] = None,
) -> IssuesByType:
    """Run every detector over the same (read-only) run list."""
    cfg = config or DetectorConfig()
    return {
        FONT_FAMILY: detect_family_issues(runs, max_families=cfg.max_families_per_context),
        FONT_SIZE: detect_size_issues(runs, variance_threshold=cfg.size_variance_threshold),
        SPACING: detect_spacing_issues(
            runs, min_spacing=cfg.min_spacing, max_spacing=cfg.max_spacing
        ),
    }
