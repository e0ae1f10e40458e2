"""
Sheet bend geometry (all lengths in mm).

The sheet is a trapezoid whose right side sits on x = 0 and whose left side sits
on x = -sheet_width. For the bend it is pushed down along its right side and
rotated about the origin, where the bending line y = 0 meets the right edge.
Stop rectangles are axis-aligned boxes standing on y = 0 whose height is the
highest contact with the sheet polygon across their width.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from visualizer_core.affine import Point2D
from visualizer_core.settings import MAX_STOPS, SCENE_PADDING

logger = logging.getLogger(__name__)

EPS = 1e-9
VERTICAL_TOL = 1e-6

Polygon = Tuple[Point2D, Point2D, Point2D, Point2D]


class IntervalMax(NamedTuple):
    y: Optional[float]
    x_at: Optional[float]


@dataclass(frozen=True)
class StopRect:
    center: float
    x0: float
    x1: float
    width: float
    height: float
    touch_x: float


@dataclass(frozen=True)
class BBox:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


# ---------- Construction & rigid motions ----------

def build_trapezoid(left_len: float, right_len: float,
                    sheet_width: float, left_start_offset: float) -> Polygon:
    """
    Vertices [leftBottom, leftTop, rightTop, rightBottom].
    Right side runs (0, 0) -> (0, right_len); the left side is shifted by
    left_start_offset along the side direction. sheet_width must be > 0.
    """
    return (
        Point2D(-sheet_width, left_start_offset),
        Point2D(-sheet_width, left_start_offset + left_len),
        Point2D(0.0, right_len),
        Point2D(0.0, 0.0),
    )


def translate_points(points: Iterable[Point2D], dx: float, dy: float) -> List[Point2D]:
    return [Point2D(p.x + dx, p.y + dy) for p in points]


def rotate_point(p: Point2D, deg: float, pivot: Point2D) -> Point2D:
    th = deg * math.pi / 180
    with np.errstate(invalid="ignore"):
        s, c = float(np.sin(th)), float(np.cos(th))
    dx, dy = p.x - pivot.x, p.y - pivot.y
    return Point2D(pivot.x + c * dx - s * dy, pivot.y + s * dx + c * dy)


def transform_polygon(polygon: Sequence[Point2D],
                      translation: Tuple[float, float],
                      rotation_deg: float,
                      pivot: Point2D = Point2D(0.0, 0.0)) -> Polygon:
    """Translate every vertex, then rotate the translated vertices about pivot."""
    dx, dy = translation
    moved = translate_points(polygon, dx, dy)
    return tuple(rotate_point(p, rotation_deg, pivot) for p in moved)


def bend_sheet(left_len: float, right_len: float, sheet_width: float,
               left_start_offset: float, angle_deg: float,
               feed_along_right: float) -> Polygon:
    """
    Place the sheet for a bend: the point feed_along_right up the right edge is
    moved onto y = 0, then the sheet is rotated by angle_deg about the origin.
    """
    base = build_trapezoid(left_len, right_len, sheet_width, left_start_offset)
    return transform_polygon(base, (0.0, -feed_along_right), angle_deg, Point2D(0.0, 0.0))


# ---------- Vertical probes ----------

def _closed_edges(polygon: Sequence[Point2D]):
    n = len(polygon)
    for i in range(n):
        yield polygon[i], polygon[(i + 1) % n]


def max_intersection_y(polygon: Sequence[Point2D], x: float) -> Optional[float]:
    """
    Highest y >= 0 where the vertical line through x crosses the polygon
    boundary, or None when no edge is hit.
    """
    candidates: List[float] = []
    for a, b in _closed_edges(polygon):
        dx, dy = b.x - a.x, b.y - a.y

        if abs(dx) < EPS:
            if abs(x - a.x) < VERTICAL_TOL:
                y_top = max(a.y, b.y)
                if y_top >= 0:
                    candidates.append(y_top)
            continue

        if x < min(a.x, b.x) - EPS or x > max(a.x, b.x) + EPS:
            continue

        t = (x - a.x) / dx
        if t < -EPS or t > 1 + EPS:
            continue
        y = a.y + t * dy
        if y >= -EPS:
            candidates.append(max(0.0, y))

    if not candidates:
        return None
    return max(candidates)


def max_y_over_interval(polygon: Sequence[Point2D], x0: float, x1: float) -> IntervalMax:
    """
    Sampled maximum of max_intersection_y over [x0, x1].

    Uses steps = max(6, ceil(width)) and probes x0 + width*i/steps for
    i = 0..steps, so the answer is only as exact as a 1 mm sample grid.
    Ties keep the first (leftmost) sample.
    An infinite interval has no sample grid and gives no contact.
    """
    width = max(0.0, x1 - x0)
    if not math.isfinite(width):
        return IntervalMax(None, None)
    steps = max(6, math.ceil(width / 1))
    best_y: Optional[float] = None
    best_x: Optional[float] = None
    for i in range(steps + 1):
        x = x0 + (width * i) / steps
        y = max_intersection_y(polygon, x)
        if y is not None and (best_y is None or y > best_y):
            best_y, best_x = y, x
    return IntervalMax(best_y, best_x)


# ---------- Stops ----------

_CENTER_SPLIT = re.compile(r"[;,\s]+")


def parse_centers(text: str, limit: int = MAX_STOPS) -> List[float]:
    """'260, 320; 380 440' -> [260.0, 320.0, 380.0, 440.0]. Bad tokens are dropped."""
    centers: List[float] = []
    for token in _CENTER_SPLIT.split(text or ""):
        if not token:
            continue
        try:
            value = float(token)
        except ValueError:
            logger.debug("ignoring center token %r", token)
            continue
        if math.isfinite(value):
            centers.append(value)
    return centers[:limit]


def stop_rect_at(polygon: Sequence[Point2D], center: float, stop_width: float) -> StopRect:
    x0 = center - stop_width / 2
    x1 = center + stop_width / 2
    y, x_at = max_y_over_interval(polygon, x0, x1)
    if y is None:
        logger.debug("no sheet contact under stop at x=%s", center)
    return StopRect(
        center=center,
        x0=x0,
        x1=x1,
        width=stop_width,
        height=y if y is not None else 0.0,
        touch_x=x_at if x_at is not None else center,
    )


def compute_stop_rects(polygon: Sequence[Point2D],
                       centers: Iterable[float],
                       stop_width: float) -> List[StopRect]:
    return [stop_rect_at(polygon, cx, stop_width) for cx in centers]


# ---------- Scene framing ----------

def bbox(points: Iterable[Point2D]) -> BBox:
    pts = list(points)
    if not pts:
        return BBox(0.0, 0.0, 0.0, 0.0)
    xs = [p.x for p in pts]
    ys = [p.y for p in pts]
    return BBox(min(xs), min(ys), max(xs), max(ys))


def scene_border(polygon: Sequence[Point2D],
                 stop_rects: Sequence[StopRect],
                 pad: float = SCENE_PADDING) -> BBox:
    """
    Bounds of sheet, stops and the bending line, padded by 'pad' on every side.
    The vertical range always includes y = 0.
    """
    sheet_bb = bbox(polygon)
    stop_pts = [p for r in stop_rects
                for p in (Point2D(r.x0, 0.0), Point2D(r.x1, r.height))]
    raw = bbox(list(polygon) + stop_pts +
               [Point2D(sheet_bb.min_x, 0.0), Point2D(sheet_bb.max_x, 0.0)])
    return BBox(
        min_x=raw.min_x - pad,
        min_y=min(raw.min_y, 0.0) - pad,
        max_x=raw.max_x + pad,
        max_y=max(raw.max_y, 0.0) + pad,
    )
