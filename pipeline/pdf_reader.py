"""
pipeline.pdf_reader — PDF bytes -> ordered text-run list (PyMuPDF).

Every text span reported by ``page.get_text("dict")`` becomes one
:class:`~typography.utils.TextRun`, in page order and then in the reading
order PyMuPDF reports within a page.

Coordinates
-----------
``position`` is the span's baseline origin in PyMuPDF's top-left page
space, with ``y`` shifted by ``page_index * page_height`` so that it is
document-wide.  ``page_height`` is the height of the *first* page; the
overlay planner recovers the page as ``floor(y / page_height)``, which is
only exact when all pages share that height.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Tuple

import fitz  # PyMuPDF

from typography.utils import Position, TextRun

from .errors import DocumentParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParsedDocument:
    runs: Tuple[TextRun, ...]
    page_height: float
    page_count: int


def _iter_spans(page: "fitz.Page") -> Iterator[Dict[str, Any]]:
    raw = page.get_text("dict")
    for block in raw.get("blocks", []):
        if block.get("type") != 0:  # text blocks only
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                yield span


def span_to_run(span: Dict[str, Any], y_offset: float = 0.0) -> TextRun:
    x0, y0, x1, y1 = span.get("bbox", (0.0, 0.0, 0.0, 0.0))
    origin = span.get("origin") or (x0, y1)
    return TextRun(
        text=span.get("text", ""),
        font_family=span.get("font", ""),
        font_size=float(span.get("size", 0.0)),
        position=Position(float(origin[0]), float(origin[1]) + y_offset),
        width=float(x1 - x0),
        height=float(y1 - y0),
    )


def extract_text_runs(pdf_bytes: bytes) -> ParsedDocument:
    """Parse ``pdf_bytes`` into a ParsedDocument.

    Raises
    ------
    DocumentParseError
        If the bytes cannot be opened or a page cannot be read.
    """
    try:
        doc = fitz.open(stream=pdf_bytes, filetype="pdf")
    except Exception as exc:
        logger.error("Could not open PDF: %s", exc)
        raise DocumentParseError(f"Could not open PDF: {exc}") from exc

    try:
        page_count = doc.page_count
        page_height = float(doc[0].rect.height) if page_count else 0.0

        runs: List[TextRun] = []
        for page_index, page in enumerate(doc):
            offset = page_index * page_height
            for span in _iter_spans(page):
                runs.append(span_to_run(span, y_offset=offset))
    except Exception as exc:
        logger.error("Could not extract text runs: %s", exc)
        raise DocumentParseError(f"Could not extract text runs: {exc}") from exc
    finally:
        doc.close()

    logger.debug("Extracted %d text runs from %d page(s)", len(runs), page_count)
    return ParsedDocument(runs=tuple(runs), page_height=page_height, page_count=page_count)
