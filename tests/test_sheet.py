"""
Tests for sheet bend geometry (visualizer_core/sheet.py).

Tests:
1-2.   Trapezoid construction and rigid motions
3-8.   Vertical probe (vertices, edge tolerances, interior, outside span, negative y)
9-13.  Interval sampling (exact sample points, zero width, no contact, infinite bounds)
14-16. Stop rectangles and center parsing
17-18. Scene border
"""

import math

import pytest

from visualizer_core.affine import Point2D
from visualizer_core.settings import SHEET_DEFAULTS
from visualizer_core.sheet import (
    BBox, bbox, bend_sheet, build_trapezoid, compute_stop_rects,
    max_intersection_y, max_y_over_interval, parse_centers, rotate_point,
    scene_border, transform_polygon,
)


def _default_trapezoid():
    return build_trapezoid(350, 300, 260, 0)


# --- Construction ---

def test_build_trapezoid_vertex_order():
    poly = build_trapezoid(350, 300, 260, 25)
    assert poly == (Point2D(-260, 25), Point2D(-260, 375),
                    Point2D(0.0, 300), Point2D(0.0, 0.0))


def test_transform_polygon_translates_then_rotates():
    poly = _default_trapezoid()
    moved = transform_polygon(poly, (0.0, -40.0), 90.0, Point2D(0.0, 0.0))
    # (0, 0) -> (0, -40) -> rotated +90° -> (40, 0)
    assert moved[3].x == pytest.approx(40.0)
    assert moved[3].y == pytest.approx(0.0, abs=1e-9)
    p = rotate_point(Point2D(2.0, 1.0), 180.0, Point2D(1.0, 1.0))
    assert p.x == pytest.approx(0.0) and p.y == pytest.approx(1.0)


# --- Vertical probe ---

def test_probe_right_and_left_edges():
    poly = _default_trapezoid()
    assert max_intersection_y(poly, 0.0) == 300
    assert max_intersection_y(poly, -260.0) == 350


def test_probe_vertical_edge_tolerance():
    poly = _default_trapezoid()
    # within 1e-6 of the left side: its top vertex counts
    assert max_intersection_y(poly, -260.0 + 5e-7) == 350
    # just past the tolerance: only the slanted top edge is hit
    y = max_intersection_y(poly, -260.0 + 2e-6)
    assert y != 350
    assert y == pytest.approx(350 - 50 * 2e-6 / 260)
    assert max_intersection_y(poly, 1e-10) == pytest.approx(300)


def test_probe_slanted_edge_span_tolerance():
    diamond = (Point2D(-10.0, 0.0), Point2D(0.0, 10.0), Point2D(10.0, 0.0), Point2D(0.0, -10.0))
    # t slightly outside [0, 1] is still accepted at the right corner
    assert max_intersection_y(diamond, 10.0 + 5e-10) == pytest.approx(0.0, abs=1e-8)
    assert max_intersection_y(diamond, 10.0 + 2e-9) is None
    assert max_intersection_y(diamond, -10.0 - 5e-10) == pytest.approx(0.0, abs=1e-8)
    assert max_intersection_y(diamond, -10.0 - 2e-9) is None


def test_probe_interior_top_edge():
    poly = _default_trapezoid()
    # top edge (-260, 350) -> (0, 300)
    assert max_intersection_y(poly, -130.0) == pytest.approx(325.0)


def test_probe_outside_span_is_none():
    poly = _default_trapezoid()
    assert max_intersection_y(poly, 0.5) is None
    assert max_intersection_y(poly, -300.0) is None


def test_probe_below_bending_line_is_clamped_or_dropped():
    poly = build_trapezoid(100, 100, 100, -300)
    # left side spans y in [-300, -200]: the vertical edge top is negative
    assert max_intersection_y(poly, -100.0) is None
    # top edge (-100, -200) -> (0, 100) crosses y = 0 at x = -100/3
    assert max_intersection_y(poly, -20.0) == pytest.approx(40.0)
    assert max_intersection_y(poly, -80.0) is None


# --- Interval sampling ---

def test_interval_max_hits_left_sample():
    poly = _default_trapezoid()
    y, x_at = max_y_over_interval(poly, -150.0, -110.0)
    assert y == pytest.approx(350 - 50 * 110 / 260)
    assert x_at == -150.0


def test_interval_zero_width_still_samples():
    poly = _default_trapezoid()
    result = max_y_over_interval(poly, 0.0, 0.0)
    assert result.y == 300
    assert result.x_at == 0.0


def test_interval_outside_polygon_is_none():
    poly = _default_trapezoid()
    result = max_y_over_interval(poly, 10.0, 50.0)
    assert result.y is None
    assert result.x_at is None


def test_interval_infinite_bound_gives_no_contact():
    poly = _default_trapezoid()
    assert max_y_over_interval(poly, -math.inf, 0.0) == (None, None)
    assert max_y_over_interval(poly, -100.0, math.inf) == (None, None)
    rect = compute_stop_rects(poly, [-100.0], math.inf)[0]
    assert rect.height == 0.0
    assert rect.touch_x == -100.0


def test_interval_sampling_is_discrete():
    # Peak of a narrow spike falls between 1 mm samples and is missed.
    spike = (Point2D(-10.0, 0.0), Point2D(-5.3, 0.0), Point2D(-5.2, 100.0), Point2D(-5.1, 0.0))
    y, _ = max_y_over_interval(spike, -10.0, 0.0)
    assert y is not None and y < 100.0


# --- Stops ---

def test_stop_rects_heights_and_fallback():
    poly = bend_sheet(350, 300, 260, 0, 0.0, 40.0)
    rects = compute_stop_rects(poly, [-20.0, 100.0], 40.0)
    on_sheet, off_sheet = rects
    # top edge (-260, 310) -> (0, 260), highest at the left end x = -40
    assert on_sheet.height == pytest.approx(310 - 50 * 220 / 260)
    assert on_sheet.touch_x == -40.0
    assert (on_sheet.x0, on_sheet.x1, on_sheet.width) == (-40.0, 0.0, 40.0)
    assert off_sheet.height == 0.0
    assert off_sheet.touch_x == 100.0


def test_default_bend_stops_clear_of_sheet():
    d = SHEET_DEFAULTS
    poly = bend_sheet(d["left_len"], d["right_len"], d["sheet_width"],
                      d["left_start_offset"], d["angle_deg"], d["feed_along_right"])
    assert max(p.x for p in poly) < 260 - d["stop_width"] / 2
    rects = compute_stop_rects(poly, parse_centers(d["centers_csv"]), d["stop_width"])
    assert [r.height for r in rects] == [0.0] * 5
    assert [r.touch_x for r in rects] == [260.0, 320.0, 380.0, 440.0, 500.0]


def test_parse_centers():
    assert parse_centers("260, 320;380  440") == [260.0, 320.0, 380.0, 440.0]
    assert parse_centers(" 1, abc, nan, inf, 2 ,") == [1.0, 2.0]
    assert parse_centers("") == []
    assert len(parse_centers(" ".join(str(i) for i in range(30)))) == 16


# --- Scene border ---

def test_bbox_empty():
    assert bbox([]) == BBox(0.0, 0.0, 0.0, 0.0)


def test_scene_border_padding_and_bending_line():
    poly = _default_trapezoid()
    border = scene_border(poly, [], pad=100)
    assert border == BBox(-360.0, -100.0, 100.0, 450.0)
    assert border.width == 460.0 and border.height == 550.0

    rects = compute_stop_rects(poly, [200.0], 40.0)
    border = scene_border(poly, rects, pad=100)
    assert border.max_x == 320.0
    assert not math.isnan(border.min_y)
