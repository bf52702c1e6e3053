from __future__ import annotations

from typing import List, Sequence

from .context import group_by_context
from .utils import FONT_FAMILY, Inconsistency, TextRun

# A regular face plus one bold/italic face is normal within one context.
DEFAULT_MAX_FAMILIES = 2


def detect_family_issues(
    runs: Sequence[TextRun],
    max_families: int = DEFAULT_MAX_FAMILIES,
) -> List[Inconsistency]:
    """
    Flag every context that mixes more than ``max_families`` font families.

    One ``high`` issue is emitted per offending context, carrying every
    distinct family seen there (discovery order).
    """
    out: List[Inconsistency] = []
    families_by_ctx = group_by_context(runs, lambda r: r.font_family)

    for ctx, families in families_by_ctx.items():
        distinct = tuple(dict.fromkeys(families))
        if len(distinct) > max_families:
            out.append(Inconsistency(
                type=FONT_FAMILY,
                severity="high",
                description=f"Multiple font families ({len(distinct)}) detected in same context",
                context=ctx,
                detected_fonts=distinct,
            ))
    return out
