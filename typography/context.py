"""
typography.context — Coarse semantic bucketing of text runs.

A run's context is derived from its font size alone:

    size > 20  ->  "header"
    size > 14  ->  "subheader"
    otherwise  ->  "body"

Runs anywhere in the document (any page) with the same size land in the
same bucket.  This is not layout analysis; the detectors only need a
stable grouping key, and equal sizes must always map to equal labels.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Sequence, Tuple, TypeVar

from .utils import TextRun

T = TypeVar("T")

HEADER = "header"
SUBHEADER = "subheader"
BODY = "body"
CONTEXTS: Tuple[str, ...] = (HEADER, SUBHEADER, BODY)

HEADER_MIN_SIZE = 20.0
SUBHEADER_MIN_SIZE = 14.0


def classify(run: TextRun) -> str:
    if run.font_size > HEADER_MIN_SIZE:
        return HEADER
    if run.font_size > SUBHEADER_MIN_SIZE:
        return SUBHEADER
    return BODY


def group_by_context(
    runs: Sequence[TextRun],
    value: Callable[[TextRun], T],
) -> Dict[str, Tuple[T, ...]]:
    """Fold runs into an immutable ``context -> values`` mapping.

    Contexts appear in first-seen order; values keep input order.
    """
    acc: Dict[str, List[T]] = {}
    for run in runs:
        acc.setdefault(classify(run), []).append(value(run))
    return {ctx: tuple(vals) for ctx, vals in acc.items()}
