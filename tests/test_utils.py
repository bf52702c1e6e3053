"""Tests for the run data model and JSON helpers."""

import json
import math

import pytest
from typography.utils import Inconsistency, Position, TextRun, json_sanitize, save_json


def test_from_dict_camel_case():
    run = TextRun.from_dict({
        "text": "Total",
        "fontFamily": "Arial",
        "fontSize": 12,
        "position": {"x": 72, "y": 700},
        "width": 30,
        "height": 12,
    })
    assert run == TextRun("Total", "Arial", 12.0, Position(72.0, 700.0), 30.0, 12.0)


def test_from_dict_snake_case():
    run = TextRun.from_dict({
        "text": "Total",
        "font_family": "Times",
        "font_size": 9.5,
        "position": {"x": 1, "y": 2},
    })
    assert run.font_family == "Times"
    assert run.font_size == 9.5
    assert run.position == Position(1.0, 2.0)


def test_from_dict_null_and_missing_values_fall_back_to_zero():
    run = TextRun.from_dict({
        "text": None,
        "fontFamily": "A",
        "fontSize": None,
        "position": None,
        "width": None,
    })
    assert run.text == ""
    assert run.font_size == 0.0
    assert run.position == Position(0.0, 0.0)
    assert run.width == 0.0
    assert run.height == 0.0


def test_from_dict_null_snake_key_uses_camel_key():
    run = TextRun.from_dict({"font_size": None, "fontSize": 14, "position": {"x": None, "y": 3}})
    assert run.font_size == 14.0
    assert run.position == Position(0.0, 3.0)


def test_from_dict_reads_to_dict_output():
    run = TextRun("Total", "Arial", 12.0, Position(72.0, 700.0), 30.0, 12.0)
    data = run.to_dict()
    assert data["fontFamily"] == "Arial"
    assert data["position"] == {"x": 72.0, "y": 700.0}
    assert TextRun.from_dict(json.loads(json.dumps(data))) == run


def test_from_dict_rejects_non_numeric_size():
    with pytest.raises(ValueError):
        TextRun.from_dict({"fontFamily": "A", "fontSize": "big"})


def test_inconsistency_fields_are_read_only():
    details = {"spacing": 50.0}
    issue = Inconsistency("spacing", "medium", "gap", details=details)
    details["spacing"] = 0.0
    assert issue.details["spacing"] == 50.0
    with pytest.raises(TypeError):
        issue.details["spacing"] = 1.0

    fam = Inconsistency("fontFamily", "high", "fonts", detected_fonts=["A", "B", "C"])
    assert fam.detected_fonts == ("A", "B", "C")


def test_json_sanitize_nested_non_finite():
    data = {"a": [1.0, math.nan, {"b": math.inf}], "c": (-math.inf, "x"), "d": True, "e": None}
    assert json_sanitize(data) == {"a": [1.0, None, {"b": None}], "c": [None, "x"], "d": True, "e": None}


def test_save_json_writes_null_for_nan(tmp_path):
    out = save_json({"details": {"variance": math.nan}}, tmp_path / "r.json")
    with open(out, encoding="utf-8") as f:
        assert json.load(f) == {"details": {"variance": None}}
