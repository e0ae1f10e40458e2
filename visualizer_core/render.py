"""
Figure builders for the Streamlit pages.

The affine grid is drawn with Matplotlib (static frame + GIF via PillowWriter);
the sheet bend scene is a Plotly figure so wheel-zoom and drag-pan come for free.
"""

from __future__ import annotations

import colorsys
import logging

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.animation import PillowWriter
import plotly.graph_objects as go

from visualizer_core.affine import (
    apply_transform, compose_matrix, eigen, hue_for_point,
)
from visualizer_core.settings import CANVAS_SIZE

logger = logging.getLogger(__name__)


# ---------- Colors ----------

def hsl_color(hue, saturation, lightness):
    """CSS-style hsl(h, s%, l%) -> matplotlib RGB tuple."""
    return colorsys.hls_to_rgb((hue % 360) / 360.0, lightness, saturation)


def lattice_colors(points, saturation, lightness):
    return [hsl_color(hue_for_point(x, y), saturation, lightness) for x, y in points]


# ---------- Affine grid (Matplotlib) ----------

def draw_affine_frame(ax,
                      points,
                      points_transformed,
                      M,
                      scale=50,
                      show_vectors=False,
                      draw_eigs=True,
                      title_suffix=""):
    """
    Draw one frame on an existing Axes: grid, axes, lattice (high saturation),
    transformed lattice (same hue, lower saturation), optional displacement
    lines and real eigenvector lines through the origin.
    """
    ax.clear()
    half = CANVAS_SIZE / 2 / scale

    ax.axhline(0, color="black", linewidth=1.5)
    ax.axvline(0, color="black", linewidth=1.5)

    if show_vectors:
        for (x, y), (xp, yp) in zip(points, points_transformed):
            ax.plot([x, xp], [y, yp], color="black", linewidth=0.8, alpha=0.3)

    ax.scatter(points[:, 0], points[:, 1], s=12,
               c=lattice_colors(points, 0.85, 0.45), zorder=3)
    ax.scatter(points_transformed[:, 0], points_transformed[:, 1], s=12,
               c=lattice_colors(points, 0.40, 0.55), zorder=3)

    if draw_eigs:
        result = eigen(M)
        if not result.is_complex:
            L = 2 * half
            for i, (v, lam) in enumerate(zip((result.v1, result.v2), result.lambdas)):
                vx, vy = v
                if not (np.isfinite(vx) and np.isfinite(vy)):
                    continue
                ax.plot([-vx * L, vx * L], [-vy * L, vy * L],
                        color="tab:purple", linewidth=2)
                ax.text(vx * L * 0.55, vy * L * 0.55, f"λ{i + 1}={lam:.3f}",
                        color="purple", fontsize=9)

    ax.set_xlim(-half, half)
    ax.set_ylim(-half, half)
    ax.set_aspect("equal", "box")
    ax.set_xticks(np.arange(np.ceil(-half), np.floor(half) + 1))
    ax.set_yticks(np.arange(np.ceil(-half), np.floor(half) + 1))
    ax.tick_params(labelbottom=False, labelleft=False, length=0)
    ax.grid(True, color="lightgray", linewidth=0.8)

    base_title = "Rotation ∘ SkewX ∘ SkewY + Translation"
    ax.set_title(f"{base_title} {title_suffix}".strip())


def plot_affine_grid(points, points_transformed, M, scale=50,
                     show_vectors=False, draw_eigs=True):
    fig, ax = plt.subplots(figsize=(7, 7))
    draw_affine_frame(ax, points, points_transformed, M, scale=scale,
                      show_vectors=show_vectors, draw_eigs=draw_eigs)
    plt.tight_layout()
    return fig


def create_affine_animation_gif(filename,
                                points,
                                skew_x,
                                skew_y,
                                rotation_deg,
                                translation,
                                scale=50,
                                show_vectors=False,
                                n_frames=60,
                                fps=20):
    """
    GIF of the path identity -> current transform: every parameter is scaled
    by t in [0, 1]. Saved with PillowWriter (no ffmpeg needed).
    """
    fig, ax = plt.subplots(figsize=(7, 7))
    writer = PillowWriter(fps=fps)
    tx, ty = translation
    last = max(n_frames - 1, 1)

    with writer.saving(fig, filename, dpi=100):
        for i in range(n_frames):
            t = i / last
            M = compose_matrix(t * skew_x, t * skew_y, t * rotation_deg)
            pts_M = apply_transform(M, (t * tx, t * ty), points)
            draw_affine_frame(ax, points, pts_M, M, scale=scale,
                              show_vectors=show_vectors,
                              draw_eigs=(i == n_frames - 1),
                              title_suffix=f"(t={t:.2f})")
            writer.grab_frame()

    plt.close(fig)
    logger.info("wrote %d-frame animation to %s", n_frames, filename)


# ---------- Sheet bend scene (Plotly) ----------

def _closed_xy(polygon):
    xs = [p.x for p in polygon] + [polygon[0].x]
    ys = [p.y for p in polygon] + [polygon[0].y]
    return xs, ys


def build_sheet_figure(sheet_poly, stop_rects, centers, border, height=640):
    """
    Sheet polygon (light gray), stop rectangles with height labels and touch
    lines, dashed center guides, dashed border box and the bending line on top.
    Axis ranges are fitted to the border ("fit to scene").
    """
    fig = go.Figure()

    fig.add_shape(type="rect",
                  x0=border.min_x, y0=border.min_y, x1=border.max_x, y1=border.max_y,
                  line=dict(color="#C7CCD1", width=1, dash="dash"))

    for cx in centers:
        fig.add_shape(type="line", x0=cx, y0=border.min_y, x1=cx, y1=border.max_y,
                      line=dict(color="#888", width=1, dash="dot"))

    xs, ys = _closed_xy(sheet_poly)
    fig.add_trace(go.Scatter(x=xs, y=ys, mode="lines", fill="toself",
                             fillcolor="#ECEFF1", line=dict(color="#111", width=1.2),
                             name="Sheet"))

    for i, r in enumerate(stop_rects):
        fig.add_trace(go.Scatter(
            x=[r.x0, r.x1, r.x1, r.x0, r.x0],
            y=[0, 0, r.height, r.height, 0],
            mode="lines", fill="toself",
            fillcolor="rgba(255, 59, 48, 0.85)", line=dict(color="#a00", width=0.8),
            name=f"Stop {i + 1}", showlegend=False,
            hovertemplate=f"center {r.center:.1f} mm<br>height {r.height:.1f} mm<extra></extra>",
        ))
        fig.add_shape(type="line", x0=r.touch_x, y0=0, x1=r.touch_x, y1=r.height,
                      line=dict(color="#a00", width=1, dash="dot"))
        fig.add_annotation(x=r.center, y=r.height, text=f"{r.height:.1f} mm",
                           showarrow=False, yshift=10, font=dict(size=10, color="#000"))

    fig.add_trace(go.Scatter(x=[border.min_x, border.max_x], y=[0, 0], mode="lines",
                             line=dict(color="#5B6BF0", width=2), name="Bending line"))

    fig.update_xaxes(range=[border.min_x, border.max_x], title_text="x (mm)",
                     showgrid=False, zeroline=False)
    fig.update_yaxes(range=[border.min_y, border.max_y], title_text="y (mm)",
                     scaleanchor="x", scaleratio=1, showgrid=False, zeroline=False)
    fig.update_layout(height=height, margin=dict(l=30, r=20, t=30, b=40),
                      plot_bgcolor="white", dragmode="pan",
                      legend=dict(orientation="h", x=0.5, xanchor="center",
                                  y=-0.12, yanchor="top"))
    return fig
