from __future__ import annotations

from typing import List, Optional, Sequence

from .utils import SPACING, Inconsistency, TextRun, run_spacing

DEFAULT_MIN_SPACING = 0.1
DEFAULT_MAX_SPACING = 20.0


def is_spacing_abnormal(
    spacing: float,
    min_spacing: float = DEFAULT_MIN_SPACING,
    max_spacing: float = DEFAULT_MAX_SPACING,
) -> bool:
    return spacing < min_spacing or spacing > max_spacing


def detect_spacing_issues(
    runs: Sequence[TextRun],
    min_spacing: float = DEFAULT_MIN_SPACING,
    max_spacing: float = DEFAULT_MAX_SPACING,
) -> List[Inconsistency]:
    """
    Compare each run with its immediate predecessor, in input order.

    Only adjacent pairs are compared, so column breaks and page breaks show
    up as large jumps.  Callers must not reorder runs to hide that.
    """
    out: List[Inconsistency] = []
    prev: Optional[TextRun] = None

    for run in runs:
        if prev is not None:
            spacing = run_spacing(prev, run)
            if is_spacing_abnormal(spacing, min_spacing, max_spacing):
                out.append(Inconsistency(
                    type=SPACING,
                    severity="medium",
                    description="Abnormal character spacing detected",
                    position=run.position,
                    details={"spacing": spacing},
                ))
        prev = run
    return out
