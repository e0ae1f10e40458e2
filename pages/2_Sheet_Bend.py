"""
Sheet bend visualizer.

- All stops share the same width; the user gives their CENTER positions.
- The sheet trapezoid is fed down along its right side and rotated about the
  point where the right edge meets the horizontal bending line y = 0.
- Wheel = zoom, drag = pan (Plotly). Double-click resets to the fitted scene.
"""

import streamlit as st

from visualizer_core import configure_logging
from visualizer_core.render import build_sheet_figure
from visualizer_core.settings import MAX_STOPS, SCENE_PADDING, SHEET_DEFAULTS
from visualizer_core.sheet import (
    bend_sheet, compute_stop_rects, parse_centers, scene_border,
)


@st.cache_data(show_spinner=False)
def cached_scene(left_len, right_len, sheet_width, left_start_offset,
                 angle_deg, feed_along_right, stop_width, centers):
    sheet_poly = bend_sheet(left_len, right_len, sheet_width, left_start_offset,
                            angle_deg, feed_along_right)
    stop_rects = compute_stop_rects(sheet_poly, centers, stop_width)
    border = scene_border(sheet_poly, stop_rects, pad=SCENE_PADDING)
    return sheet_poly, stop_rects, border


def main():
    configure_logging()
    st.set_page_config(page_title="Sheet Bend Visualizer", layout="wide")
    st.title("Sheet Bend Visualizer")

    d = SHEET_DEFAULTS

    st.sidebar.header("Sheet geometry (mm)")
    c1, c2 = st.sidebar.columns(2)
    with c1:
        left_len = st.number_input("Left side length", value=d["left_len"], step=1.0)
    with c2:
        right_len = st.number_input("Right side length", value=d["right_len"], step=1.0)
    sheet_width = st.sidebar.number_input("Sheet width (normal to sides)",
                                          value=d["sheet_width"], min_value=1.0, step=1.0)
    left_start_offset = st.sidebar.number_input(
        "Left start offset from right side (along sides)",
        value=d["left_start_offset"], step=1.0)

    st.sidebar.markdown("---")
    st.sidebar.header("Bend setup")
    angle_deg = st.sidebar.number_input("Angle (deg)", value=d["angle_deg"], step=0.1)
    feed_along_right = st.sidebar.number_input("Forward along right side (mm)",
                                               value=d["feed_along_right"], step=1.0)
    st.sidebar.caption(
        "Bending line is horizontal at y=0. The sheet is translated so the point "
        "on the right edge at this distance lies on the line, then rotated around "
        "the intersection of the right edge and the bending line."
    )

    st.sidebar.markdown("---")
    st.sidebar.header("Stop points")
    stop_width = st.sidebar.number_input("Width (mm)", value=d["stop_width"],
                                         min_value=1.0, step=1.0)
    centers_csv = st.sidebar.text_input(
        f"Center positions (mm, up to {MAX_STOPS}; comma/space separated)",
        value=d["centers_csv"])
    st.sidebar.caption(
        "Each rectangle is centered at the given X, axis-aligned, and raised "
        "until its bottom touches the highest point of the sheet across its width."
    )

    centers = parse_centers(centers_csv)
    sheet_poly, stop_rects, border = cached_scene(
        left_len, right_len, sheet_width, left_start_offset,
        angle_deg, feed_along_right, stop_width, tuple(centers))

    m1, m2 = st.columns(2)
    m1.write(f"Stops: {len(centers)} | Width: {stop_width:g} mm")
    m2.write(f"Scene border: {border.width:.0f} × {border.height:.0f} mm "
             f"(+{SCENE_PADDING:.0f} mm padding)")

    fig = build_sheet_figure(sheet_poly, stop_rects, centers, border)
    st.plotly_chart(fig, use_container_width=True,
                    config={"scrollZoom": True, "displaylogo": False})

    with st.expander("Stop heights"):
        for i, r in enumerate(stop_rects):
            st.write(f"Stop {i + 1}: center {r.center:g} mm → height {r.height:.1f} mm "
                     f"(contact at x = {r.touch_x:.1f} mm)")

    st.caption(
        "Center guide lines and the bending line extend to the scene border "
        "rectangle. Wheel to zoom, drag to pan, double-click to fit the scene."
    )


if __name__ == "__main__":
    main()
