from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from overlay.planner import DEFAULT_BOX_SIZE, DEFAULT_OPACITY
from scoring.engine import DEFAULT_SEVERITY_MULTIPLIERS, DEFAULT_WEIGHTS
from typography.detectors import DetectorConfig

from .errors import ConfigError

CONFIG_ANALYZER = Path(__file__).resolve().parent.parent / "configs" / "analyzer.yaml"


@dataclass(frozen=True)
class ScoringConfig:
    weights: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))
    severity_multipliers: Dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_SEVERITY_MULTIPLIERS)
    )


@dataclass(frozen=True)
class OverlayConfig:
    opacity: float = DEFAULT_OPACITY
    default_box_size: float = DEFAULT_BOX_SIZE


@dataclass(frozen=True)
class AnalyzerConfig:
    detectors: DetectorConfig = field(default_factory=DetectorConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    overlay: OverlayConfig = field(default_factory=OverlayConfig)


def _section(cfg: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    sec = cfg.get(name) or {}
    if not isinstance(sec, Mapping):
        raise ConfigError(f"Section '{name}' must be a mapping, got {type(sec).__name__}")
    return sec


def config_from_dict(cfg: Mapping[str, Any]) -> AnalyzerConfig:
    """Build an AnalyzerConfig; missing keys keep their defaults."""
    det = _section(cfg, "detectors")
    sc = _section(cfg, "scoring")
    ov = _section(cfg, "overlay")
    defaults = DetectorConfig()

    try:
        detectors = DetectorConfig(
            max_families_per_context=int(
                det.get("max_families_per_context", defaults.max_families_per_context)
            ),
            size_variance_threshold=float(
                det.get("size_variance_threshold", defaults.size_variance_threshold)
            ),
            min_spacing=float(det.get("min_spacing", defaults.min_spacing)),
            max_spacing=float(det.get("max_spacing", defaults.max_spacing)),
        )
        scoring = ScoringConfig(
            weights={
                **DEFAULT_WEIGHTS,
                **{str(k): float(v) for k, v in (sc.get("weights") or {}).items()},
            },
            severity_multipliers={
                **DEFAULT_SEVERITY_MULTIPLIERS,
                **{str(k): float(v) for k, v in (sc.get("severity_multipliers") or {}).items()},
            },
        )
        overlay = OverlayConfig(
            opacity=float(ov.get("opacity", DEFAULT_OPACITY)),
            default_box_size=float(ov.get("default_box_size", DEFAULT_BOX_SIZE)),
        )
    except (TypeError, ValueError, AttributeError) as exc:
        raise ConfigError(f"Invalid analyzer configuration: {exc}") from exc

    if detectors.min_spacing > detectors.max_spacing:
        raise ConfigError(
            f"min_spacing ({detectors.min_spacing}) is greater than "
            f"max_spacing ({detectors.max_spacing})"
        )
    return AnalyzerConfig(detectors=detectors, scoring=scoring, overlay=overlay)


def load_analyzer_config(config_path: Optional[Union[str, Path]] = None) -> AnalyzerConfig:
    """
    Load thresholds and weights from YAML.

    With no path, ``configs/analyzer.yaml`` is used if present; otherwise the
    built-in defaults apply.  An explicit path that does not exist is an error.
    """
    if config_path is None:
        if not CONFIG_ANALYZER.exists():
            return AnalyzerConfig()
        cfg_path = CONFIG_ANALYZER
    else:
        cfg_path = Path(config_path)
        if not cfg_path.exists():
            raise ConfigError(f"Config file not found: {cfg_path}")

    try:
        with open(cfg_path, encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Could not parse {cfg_path}: {exc}") from exc

    if not isinstance(cfg, Mapping):
        raise ConfigError(f"{cfg_path} must contain a mapping at top level")
    return config_from_dict(cfg)
