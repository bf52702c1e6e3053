"""
Streamlit front-end — Typography tamper detector.

Run with:
    streamlit run app/main.py
"""

from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

# Ensure project root is on the path when launched via `streamlit run`
_ROOT = Path(__file__).parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from pipeline import AnalysisError, DocumentAnalyzer, load_analyzer_config, render_page_preview

MAX_UPLOAD_MB = 10
MAX_UPLOAD_BYTES = MAX_UPLOAD_MB * 1024 * 1024


@st.cache_resource
def _analyzer() -> DocumentAnalyzer:
    return DocumentAnalyzer(config=load_analyzer_config())


def _show_overlay(label: str, pdf_bytes: bytes, filename: str, page_count: int, key: str) -> None:
    page = 0
    if page_count > 1:
        page = st.number_input(
            f"Page ({label})", min_value=1, max_value=page_count, value=1, key=f"{key}_page"
        ) - 1
    img = render_page_preview(pdf_bytes, page_index=int(page))
    if img is not None:
        st.image(img, caption=f"{label} (page {int(page) + 1})")
    else:
        st.error("Unable to render the selected page")
    st.download_button(
        f"Download {filename}",
        data=pdf_bytes,
        file_name=filename,
        mime="application/pdf",
        key=f"{key}_download",
    )


def main() -> None:
    st.set_page_config(page_title="Typography Tamper Detector", layout="wide")
    st.title("Typography Tamper Detector")
    st.caption("Flags mixed font families, font-size variance and abnormal spacing in PDFs.")

    uploaded = st.file_uploader("PDF document", type=["pdf"])
    if uploaded is None:
        st.info("Upload a PDF to start the analysis.")
        return

    if uploaded.size > MAX_UPLOAD_BYTES:
        st.error(f"File exceeds the {MAX_UPLOAD_MB} MB limit")
        return
    if "pdf" not in (uploaded.type or ""):
        st.error("File must be a PDF")
        return

    pdf_bytes = uploaded.getvalue()
    with st.spinner("Analyzing document..."):
        try:
            result = _analyzer().analyze_pdf(pdf_bytes)
        except AnalysisError as exc:
            st.error(f"Failed to analyze PDF: {exc}")
            return

    report = result.report
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Suspicious", "Yes" if report.suspicious else "No")
    c2.metric("Severity score", f"{report.severity_score:.2f}")
    c3.metric("Confidence", f"{report.confidence:.0%}")
    c4.metric("Issues", report.total_issues)

    tab_sus, tab_font, tab_json = st.tabs(["Suspicious areas", "Font types", "Report JSON"])
    with tab_sus:
        _show_overlay("Suspicious areas", result.highlighted_pdf, "pdfHighlighted.pdf", result.page_count, "sus")
    with tab_font:
        _show_overlay("Font types", result.font_type_pdf, "pdfHighlightedFont.pdf", result.page_count, "font")
    with tab_json:
        st.json(report.to_dict())


main()
