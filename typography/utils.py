from __future__ import annotations

import json
import math
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

# Issue types (also the keys of an IssuesByType mapping)
FONT_FAMILY = "fontFamily"
FONT_SIZE = "fontSize"
SPACING = "spacing"
ISSUE_TYPES: Tuple[str, ...] = (FONT_FAMILY, FONT_SIZE, SPACING)

SEVERITIES: Tuple[str, ...] = ("high", "medium", "low")


@dataclass(frozen=True)
class Position:
    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    """First non-null value among ``keys``."""
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _as_float(value: Any) -> float:
    return 0.0 if value is None else float(value)


@dataclass(frozen=True)
class TextRun:
    """One extracted glyph run, as handed over by the document parser."""

    text: str
    font_family: str
    font_size: float
    position: Position
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TextRun":
        """Build a run from parser JSON (snake_case or camelCase keys).

        Missing or null numbers read as 0.0, a missing position as the origin.
        """
        pos = data.get("position") or {}
        return cls(
            text=str(_pick(data, "text") or ""),
            font_family=str(_pick(data, "font_family", "fontFamily") or ""),
            font_size=_as_float(_pick(data, "font_size", "fontSize")),
            position=Position(_as_float(pos.get("x")), _as_float(pos.get("y"))),
            width=_as_float(data.get("width")),
            height=_as_float(data.get("height")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "fontFamily": self.font_family,
            "fontSize": self.font_size,
            "position": self.position.to_dict(),
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True)
class Inconsistency:
    """A single detected issue. Produced only by the detectors."""

    type: str                                   # fontFamily | fontSize | spacing
    severity: str                               # high | medium | low
    description: str
    context: Optional[str] = None               # header | subheader | body
    position: Optional[Position] = None         # spacing issues only
    details: Optional[Mapping[str, float]] = None
    detected_fonts: Optional[Tuple[str, ...]] = None  # fontFamily issues only

    def __post_init__(self):
        # read-only views so a built issue cannot be edited in place
        if self.details is not None:
            object.__setattr__(self, "details", MappingProxyType(dict(self.details)))
        if self.detected_fonts is not None:
            object.__setattr__(self, "detected_fonts", tuple(self.detected_fonts))

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "type": self.type,
            "severity": self.severity,
            "description": self.description,
        }
        if self.context is not None:
            out["context"] = self.context
        if self.position is not None:
            out["position"] = self.position.to_dict()
        if self.details is not None:
            out["details"] = dict(self.details)
        if self.detected_fonts is not None:
            out["detectedFonts"] = list(self.detected_fonts)
        return out


IssuesByType = Dict[str, List[Inconsistency]]


def empty_issues() -> IssuesByType:
    return {t: [] for t in ISSUE_TYPES}


def run_spacing(prev: TextRun, current: TextRun) -> float:
    """Distance from the previous run's right edge to the current run's origin."""
    return math.hypot(
        current.position.x - (prev.position.x + prev.width),
        current.position.y - prev.position.y,
    )


def unique_families(runs: Sequence[TextRun]) -> List[str]:
    return list(dict.fromkeys(r.font_family for r in runs))


def font_inventory(runs: Sequence[TextRun]) -> List[Dict[str, Any]]:
    """Distinct font families with their run counts, in discovery order."""
    counts: Dict[str, int] = {}
    for r in runs:
        counts[r.font_family] = counts.get(r.font_family, 0) + 1
    return [{"name": name, "occurrences": n} for name, n in counts.items()]


def ensure_dir(path: Union[str, Path]) -> Path:
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def json_sanitize(obj: Any) -> Any:
    """Recursively copy report data, turning NaN/inf into None (JSON null)."""
    if isinstance(obj, float) and not math.isfinite(obj):
        return None
    if isinstance(obj, Mapping):
        return {str(k): json_sanitize(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [json_sanitize(x) for x in obj]
    return obj


def save_json(data: Any, out_path: Union[str, Path]) -> str:
    out_path = str(out_path)
    safe = json_sanitize(data)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(safe, f, ensure_ascii=False, indent=2)
    return out_path
