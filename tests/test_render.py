"""
Tests for figure builders (visualizer_core/render.py).

Tests:
1. HSL conversion matches CSS hsl()
2. Affine grid figure draws both lattices and eigen lines
3. Sheet figure traces, shapes and fitted axis ranges
4. GIF export writes a file
"""

import matplotlib.pyplot as plt
import pytest

from visualizer_core.affine import apply_transform, compose_matrix, make_grid_points
from visualizer_core.render import (
    build_sheet_figure, create_affine_animation_gif, hsl_color, plot_affine_grid,
)
from visualizer_core.sheet import (
    bend_sheet, compute_stop_rects, scene_border,
)


def test_hsl_color():
    assert hsl_color(0, 1.0, 0.5) == pytest.approx((1.0, 0.0, 0.0))
    assert hsl_color(120, 1.0, 0.5) == pytest.approx((0.0, 1.0, 0.0))
    assert hsl_color(480, 1.0, 0.5) == pytest.approx((0.0, 1.0, 0.0))


def test_plot_affine_grid_with_real_eigenvectors():
    M = compose_matrix(0.5, 0.0, 0.0)
    pts = make_grid_points(2)
    fig = plot_affine_grid(pts, apply_transform(M, (1.0, 0.0), pts), M, scale=50)
    ax = fig.axes[0]
    assert len(ax.collections) == 2          # original + transformed scatter
    assert len(ax.texts) == 2                # λ1, λ2 labels
    assert ax.get_xlim() == pytest.approx((-7.2, 7.2))
    plt.close(fig)


def test_plot_affine_grid_complex_eigen_has_no_lines():
    M = compose_matrix(0.0, 0.0, 90.0)
    pts = make_grid_points(1)
    fig = plot_affine_grid(pts, apply_transform(M, (0.0, 0.0), pts), M,
                           show_vectors=True)
    ax = fig.axes[0]
    assert len(ax.texts) == 0
    assert len(ax.lines) == 2 + len(pts)     # two axes + displacement lines
    plt.close(fig)


def test_build_sheet_figure():
    poly = bend_sheet(350, 300, 260, 0, 0.0, 40.0)
    centers = [-200.0, -20.0, 100.0]
    rects = compute_stop_rects(poly, centers, 40.0)
    border = scene_border(poly, rects)
    fig = build_sheet_figure(poly, rects, centers, border)

    names = [t.name for t in fig.data]
    assert names[0] == "Sheet"
    assert names[-1] == "Bending line"
    assert len(fig.data) == 1 + len(rects) + 1
    assert len(fig.data[0].x) == 5           # closed polygon
    # border + center guides + touch lines
    assert len(fig.layout.shapes) == 1 + len(centers) + len(rects)
    assert len(fig.layout.annotations) == len(rects)
    assert tuple(fig.layout.xaxis.range) == (border.min_x, border.max_x)
    assert tuple(fig.layout.yaxis.range) == (border.min_y, border.max_y)


def test_create_affine_animation_gif(tmp_path):
    out = tmp_path / "anim.gif"
    create_affine_animation_gif(str(out), make_grid_points(1),
                                skew_x=0.5, skew_y=0.0, rotation_deg=30.0,
                                translation=(1.0, 0.0), n_frames=3, fps=5)
    assert out.exists()
    assert out.stat().st_size > 0
