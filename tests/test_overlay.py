"""Tests for overlay colors, legends and annotation planning."""

import math

import pytest
from overlay import (
    ISSUE_COLORS,
    Legend,
    LegendEntry,
    family_color,
    family_palette,
    hue_to_rgb,
    page_index_for,
    plan_font_type_overlay,
    plan_suspicious_overlay,
)
from typography import Position, TextRun, detect_all
from typography.utils import Inconsistency

PAGE_H = 792.0


def make_run(font="Arial", size=12.0, x=72.0, y=100.0, width=30.0, height=12.0):
    return TextRun("txt", font, size, Position(x, y), width, height)


def test_issue_colors():
    assert ISSUE_COLORS["fontFamily"] == (1.0, 0.0, 0.0)
    assert ISSUE_COLORS["fontSize"] == (1.0, 0.5, 0.0)
    assert ISSUE_COLORS["spacing"] == (1.0, 1.0, 0.0)


def test_hue_to_rgb_sine_waves():
    r, g, b = hue_to_rgb(0.0)
    assert r == pytest.approx(0.5)
    assert g == pytest.approx(math.sin(2 * math.pi / 3) * 0.5 + 0.5)
    assert b == pytest.approx(math.sin(4 * math.pi / 3) * 0.5 + 0.5)
    assert all(0.0 <= c <= 1.0 for c in hue_to_rgb(0.37))


def test_family_palette_distinct_and_stable():
    families = ["Arial", "Times", "Courier", "Helvetica"]
    palette = family_palette(families)
    assert len(set(palette.values())) == len(families)
    assert palette == family_palette(families)
    assert palette["Times"] == family_color(1, 4)
    assert family_color(0, 0) == hue_to_rgb(0.0)


@pytest.mark.parametrize("y,expected", [
    (0.0, 0),
    (791.9, 0),
    (792.0, 1),
    (2000.0, 2),
    (-5.0, -1),
    (float("nan"), -1),
    (float("inf"), -1),
])
def test_page_index_for(y, expected):
    assert page_index_for(y, PAGE_H) == expected


def test_page_index_for_zero_height():
    assert page_index_for(100.0, 0.0) == -1


def test_legend_layout_rows_and_title():
    legend = Legend(
        title="Legend:",
        entries=(LegendEntry("A", (1, 0, 0)), LegendEntry("B", (0, 1, 0))),
        title_gap=40.0,
    )
    rows = legend.layout()
    assert [r.swatch.y for r in rows] == [50.0, 70.0]
    assert rows[0].swatch.w == rows[0].swatch.h == 15.0
    assert rows[1].label_point == (75.0, 74.0)
    assert legend.title_point() == (50.0, 130.0)


def test_suspicious_plan_family_issue_highlights_context_runs():
    runs = [
        make_run("Arial", 12, x=72),
        make_run("Times", 12, x=120),
        make_run("Helvetica", 12, x=170),
        make_run("Arial", 24, x=72, y=50),  # header, different context
    ]
    issue = Inconsistency(
        "fontFamily", "high", "Multiple font families (3) detected in same context",
        context="body", detected_fonts=("Arial", "Times", "Helvetica"),
    )
    plan = plan_suspicious_overlay(runs, {"fontFamily": [issue]}, page_height=PAGE_H)
    assert len(plan.annotations) == 3
    assert all(a.color == ISSUE_COLORS["fontFamily"] for a in plan.annotations)
    assert all(a.opacity == 0.3 for a in plan.annotations)
    assert [a.rect.x for a in plan.annotations] == [72, 120, 170]


def test_suspicious_plan_order_and_spacing_default_box():
    runs = [
        make_run("A", 10, x=0, width=10),
        make_run("B", 12, x=60, width=10),
        make_run("C", 14, x=120, width=10),
    ]
    issues = detect_all(runs)
    assert len(issues["fontFamily"]) == 1
    assert len(issues["fontSize"]) == 1
    assert len(issues["spacing"]) == 2

    plan = plan_suspicious_overlay(runs, issues, page_height=PAGE_H)
    colors = [a.color for a in plan.annotations]
    assert colors == [ISSUE_COLORS["fontFamily"]] * 3 + [ISSUE_COLORS["fontSize"]] * 3 + [ISSUE_COLORS["spacing"]] * 2

    spacing_rects = [a.rect for a in plan.annotations[-2:]]
    assert [(r.x, r.y) for r in spacing_rects] == [(60, 100.0), (120, 100.0)]
    assert all(r.w == 10.0 and r.h == 10.0 for r in spacing_rects)


def test_zero_extent_run_gets_default_box():
    runs = [make_run("A", width=0.0, height=0.0), make_run("B"), make_run("C")]
    plan = plan_font_type_overlay(runs, page_height=PAGE_H)
    first = plan.annotations[0].rect
    assert (first.w, first.h) == (10.0, 10.0)
    assert plan.annotations[1].rect.w == 30.0


def test_default_box_size_configurable():
    plan = plan_font_type_overlay([make_run(width=0.0, height=0.0)], page_height=PAGE_H, default_size=4.0)
    assert plan.annotations[0].rect.w == 4.0


def test_rects_past_last_page_dropped():
    runs = [make_run(y=100.0), make_run(y=900.0), make_run(y=1700.0)]
    plan = plan_font_type_overlay(runs, page_height=PAGE_H, page_count=2)
    assert [a.page_index for a in plan.annotations] == [0, 1]
    assert plan.pages() == [0, 1]


def test_negative_and_nan_positions_dropped():
    runs = [make_run(y=-10.0), make_run(y=float("nan")), make_run(y=10.0)]
    plan = plan_font_type_overlay(runs, page_height=PAGE_H)
    assert len(plan.annotations) == 1


def test_suspicious_legend_fixed_entries():
    plan = plan_suspicious_overlay([], {}, page_height=PAGE_H)
    assert plan.annotations == ()
    assert plan.legend.title == "Suspicious Areas Legend:"
    assert [e.label for e in plan.legend.entries] == [
        "FontFamily Issues", "FontSize Issues", "Spacing Issues",
    ]
    assert plan.legend.title_point() == (50.0, 110.0)


def test_font_type_legend_counts_and_title_clears_swatches():
    runs = [make_run("Arial"), make_run("Times"), make_run("Arial"), make_run("Courier")]
    plan = plan_font_type_overlay(runs, page_height=PAGE_H)
    assert plan.legend.title == "Font Types Legend:"
    assert [e.label for e in plan.legend.entries] == [
        "Arial (2 occurrences)", "Times (1 occurrences)", "Courier (1 occurrences)",
    ]
    top_of_swatches = max(r.swatch.y + r.swatch.h for r in plan.legend.layout())
    assert plan.legend.title_point()[1] > top_of_swatches

    palette = family_palette(["Arial", "Times", "Courier"])
    assert [a.color for a in plan.annotations] == [
        palette["Arial"], palette["Times"], palette["Arial"], palette["Courier"],
    ]


def test_planning_is_deterministic():
    runs = [make_run("A", 10, x=0), make_run("B", 13, x=90), make_run("C", 14, x=400, y=1000)]
    issues = detect_all(runs)
    assert plan_suspicious_overlay(runs, issues, page_height=PAGE_H) == \
        plan_suspicious_overlay(runs, issues, page_height=PAGE_H)
    assert plan_font_type_overlay(runs, page_height=PAGE_H) == \
        plan_font_type_overlay(runs, page_height=PAGE_H)


def test_plan_to_dict():
    plan = plan_font_type_overlay([make_run("Arial")], page_height=PAGE_H)
    d = plan.to_dict()
    assert d["pageHeight"] == PAGE_H
    assert d["annotations"][0]["pageIndex"] == 0
    assert d["annotations"][0]["rect"] == {"x": 72.0, "y": 100.0, "w": 30.0, "h": 12.0}
    assert d["legend"]["entries"][0]["label"] == "Arial (1 occurrences)"
