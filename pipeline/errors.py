from __future__ import annotations


class AnalysisError(RuntimeError):
    """Raised when a document cannot be analysed end to end."""


class DocumentParseError(AnalysisError):
    """Raised when the PDF reader cannot produce a text-run list."""


class OverlayGenerationError(AnalysisError):
    """Raised when the PDF writer rejects an annotation plan."""


class ConfigError(ValueError):
    """Raised for unreadable or malformed analyzer configuration."""
