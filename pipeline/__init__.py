from .config import AnalyzerConfig, load_analyzer_config
from .document_analyzer import (
    AnalysisResult,
    DocumentAnalyzer,
    load_text_runs,
    save_artifacts,
    save_text_runs,
)
from .errors import AnalysisError, ConfigError, DocumentParseError, OverlayGenerationError
from .pdf_reader import ParsedDocument, extract_text_runs
from .pdf_writer import render_annotation_plan, render_page_preview

__all__ = [
    "AnalyzerConfig", "load_analyzer_config",
    "AnalysisResult", "DocumentAnalyzer", "save_artifacts",
    "load_text_runs", "save_text_runs",
    "AnalysisError", "ConfigError", "DocumentParseError", "OverlayGenerationError",
    "ParsedDocument", "extract_text_runs",
    "render_annotation_plan", "render_page_preview",
]
