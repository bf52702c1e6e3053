from .engine import (
    DEFAULT_SEVERITY_MULTIPLIERS,
    DEFAULT_WEIGHTS,
    ForensicReport,
    ScoringEngine,
)

__all__ = [
    "ScoringEngine",
    "ForensicReport",
    "DEFAULT_WEIGHTS",
    "DEFAULT_SEVERITY_MULTIPLIERS",
]
