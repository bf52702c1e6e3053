"""
pipeline.pdf_writer — Burn an AnnotationPlan into a copy of the PDF (PyMuPDF).

Annotation rectangles arrive in the reader's document-wide coordinates:
``rect.x``/``rect.y`` is a span's baseline origin and ``y`` includes the
``page_index * page_height`` offset.  Each one is drawn on its page as a
filled, stroke-less box covering ``rect.h`` units above the baseline.

Legend geometry is expressed from the bottom-left corner of page 0 and is
flipped here into PyMuPDF's top-left space.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

import fitz  # PyMuPDF
from PIL import Image

from overlay.plan import Annotation, AnnotationPlan, Legend, Rect

from .errors import OverlayGenerationError

logger = logging.getLogger(__name__)

LEGEND_TEXT_COLOR = (0.0, 0.0, 0.0)


def _check_rect(rect: Rect) -> None:
    values = (rect.x, rect.y, rect.w, rect.h)
    if not all(math.isfinite(v) for v in values):
        raise OverlayGenerationError(f"Non-finite annotation geometry: {rect}")
    if rect.w < 0 or rect.h < 0:
        raise OverlayGenerationError(f"Negative annotation extent: {rect}")


def _page_rect(ann: Annotation, page_height: float) -> "fitz.Rect":
    r = ann.rect
    baseline = r.y - ann.page_index * page_height
    return fitz.Rect(r.x, baseline - r.h, r.x + r.w, baseline)


def _draw_legend(page: "fitz.Page", legend: Legend) -> None:
    height = page.rect.height

    tx, ty = legend.title_point()
    page.insert_text(
        fitz.Point(tx, height - ty),
        legend.title,
        fontsize=legend.title_size,
        color=LEGEND_TEXT_COLOR,
    )
    for row in legend.layout():
        s = row.swatch
        page.draw_rect(
            fitz.Rect(s.x, height - (s.y + s.h), s.x + s.w, height - s.y),
            color=None,
            fill=row.entry.color,
            fill_opacity=legend.opacity,
            overlay=True,
        )
        lx, ly = row.label_point
        page.insert_text(
            fitz.Point(lx, height - ly),
            row.entry.label,
            fontsize=legend.label_size,
            color=LEGEND_TEXT_COLOR,
        )


def render_annotation_plan(pdf_bytes: bytes, plan: AnnotationPlan) -> bytes:
    """Return a new PDF with ``plan`` drawn over ``pdf_bytes``.

    Raises
    ------
    OverlayGenerationError
        On malformed plan geometry or if PyMuPDF fails to load/draw/save.
    """
    for ann in plan.annotations:
        _check_rect(ann.rect)

    try:
        doc = fitz.open(stream=pdf_bytes, filetype="pdf")
    except Exception as exc:
        logger.error("Error generating overlay PDF: %s", exc)
        raise OverlayGenerationError(f"Could not open PDF for overlay: {exc}") from exc

    try:
        skipped = 0
        for ann in plan.annotations:
            if not 0 <= ann.page_index < doc.page_count:
                skipped += 1
                continue
            page = doc[ann.page_index]
            page.draw_rect(
                _page_rect(ann, plan.page_height),
                color=None,
                fill=ann.color,
                fill_opacity=ann.opacity,
                overlay=True,
            )
        if skipped:
            logger.debug("Skipped %d annotation(s) outside the document's pages", skipped)

        if doc.page_count:
            _draw_legend(doc[0], plan.legend)

        return doc.tobytes()
    except Exception as exc:
        logger.error("Error generating overlay PDF: %s", exc)
        raise OverlayGenerationError(f"Failed to generate overlay PDF: {exc}") from exc
    finally:
        doc.close()


def render_page_preview(
    pdf_bytes: bytes,
    page_index: int = 0,
    zoom: float = 1.5,
) -> Optional[Image.Image]:
    """Rasterise one page for display; None if the page does not exist."""
    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        if not 0 <= page_index < doc.page_count:
            return None
        pix = doc[page_index].get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False)
        return Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
