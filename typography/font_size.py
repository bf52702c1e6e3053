"""
typography.font_size — Font-size variance per context.

Inside one context (see :mod:`typography.context`) sizes of genuine text
cluster tightly; an edited field retyped at a slightly different size
pushes the population variance up.  Variance is in squared size units.
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from .context import group_by_context
from .utils import FONT_SIZE, Inconsistency, TextRun

DEFAULT_VARIANCE_THRESHOLD = 2.0


def detect_size_issues(
    runs: Sequence[TextRun],
    variance_threshold: float = DEFAULT_VARIANCE_THRESHOLD,
) -> List[Inconsistency]:
    """Emit one ``medium`` issue per context whose size variance exceeds the threshold.

    Parameters
    ----------
    runs : sequence of TextRun
        Runs in reading order (order does not matter here).
    variance_threshold : float
        Population variance above which a context is flagged.

    Returns
    -------
    list of Inconsistency
        ``details`` holds ``{"mean", "variance"}`` for each flagged context.
    """
    out: List[Inconsistency] = []
    sizes_by_ctx = group_by_context(runs, lambda r: r.font_size)

    for ctx, sizes in sizes_by_ctx.items():
        if not sizes:
            continue
        arr = np.asarray(sizes, dtype=np.float64)
        mean = float(arr.mean())
        variance = float(arr.var())  # population variance (ddof=0)

        if variance > variance_threshold:
            out.append(Inconsistency(
                type=FONT_SIZE,
                severity="medium",
                description="Suspicious font size variations detected",
                context=ctx,
                details={"mean": mean, "variance": variance},
            ))
    return out
