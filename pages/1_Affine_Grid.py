"""
Affine grid visualizer: Rotation ∘ SkewX ∘ SkewY + Translation.

In the web UI:
- Drag the sliders; the lattice is recomputed on every change.
- Hue of a point = its angle from the +x axis (transformed points keep the hue).
- Scroll to the bottom and click Generate GIF animation.
"""
# Order: vectors are transformed by SkewY, then SkewX, then Rotation, then translated.

import os

import matplotlib.pyplot as plt
import streamlit as st

from visualizer_core import configure_logging
from visualizer_core.affine import (
    apply_transform, compose_matrix, eigen, make_grid_points, run_diagnostics,
)
from visualizer_core.render import create_affine_animation_gif, plot_affine_grid
from visualizer_core.settings import (
    AFFINE_DEFAULTS, EXTENT_RANGE, GIF_FILENAME, ROTATION_RANGE, SCALE_RANGE,
    SKEW_RANGE, TRANSLATION_RANGE,
)


# ---------- Cached computations ----------

@st.cache_data(show_spinner=False)
def cached_grid(extent):
    return make_grid_points(extent)


@st.cache_data(show_spinner=False)
def cached_matrix(skew_x, skew_y, rotation_deg):
    return compose_matrix(skew_x, skew_y, rotation_deg)


@st.cache_data(show_spinner=False)
def cached_diagnostics():
    return run_diagnostics()


def reset_controls():
    for key, value in AFFINE_DEFAULTS.items():
        st.session_state[key] = value


# ---------- Streamlit app ----------

def main():
    configure_logging()
    st.set_page_config(page_title="2×2 Affine Transform Visualizer", layout="wide")
    st.title("Affine Visualizer: Rotation ∘ SkewX ∘ SkewY + Translation")

    for key, value in AFFINE_DEFAULTS.items():
        st.session_state.setdefault(key, value)

    # Sidebar: transform parameters
    st.sidebar.header("Transform")
    lo, hi, step = TRANSLATION_RANGE
    tx = st.sidebar.slider("Translation X", lo, hi, step=step, key="translation_x")
    ty = st.sidebar.slider("Translation Y", lo, hi, step=step, key="translation_y")
    lo, hi, step = SKEW_RANGE
    skew_x = st.sidebar.slider("Skew X (x += k·y)", lo, hi, step=step, key="skew_x")
    skew_y = st.sidebar.slider("Skew Y (y += k·x)", lo, hi, step=step, key="skew_y")
    lo, hi, step = ROTATION_RANGE
    rotation_deg = st.sidebar.slider("Rotation (°)", lo, hi, step=step, key="rotation_deg")

    st.sidebar.caption(
        "Order: vectors are transformed by **SkewY**, then **SkewX**, "
        "then **Rotation**, then translated."
    )

    st.sidebar.markdown("---")
    st.sidebar.header("View")
    lo, hi, step = EXTENT_RANGE
    extent = st.sidebar.slider("Grid extent (−N … N)", lo, hi, step=step, key="extent")
    lo, hi, step = SCALE_RANGE
    scale = st.sidebar.slider("Scale (px / unit)", lo, hi, step=step, key="scale")
    show_vectors = st.sidebar.checkbox("Show displacement vectors", key="show_vectors")
    show_diagnostics = st.sidebar.checkbox("Show diagnostics", key="show_diagnostics")
    st.sidebar.button("Reset", on_click=reset_controls)

    # Core computations
    M = cached_matrix(skew_x, skew_y, rotation_deg)
    result = eigen(M)
    points = cached_grid(extent)
    transformed = apply_transform(M, (tx, ty), points)

    col1, col2 = st.columns([3, 2])

    with col1:
        st.subheader("Lattice")
        fig = plot_affine_grid(points, transformed, M, scale=scale,
                               show_vectors=show_vectors, draw_eigs=True)
        st.pyplot(fig, width="stretch")
        plt.close(fig)

    with col2:
        st.subheader("Resulting 2×2 matrix")
        st.latex(
            r"""
            M =
            \begin{bmatrix}
            %.3f & %.3f \\
            %.3f & %.3f
            \end{bmatrix}
            """ % (M.a, M.b, M.c, M.d)
        )
        st.caption("Applied as (x', y') = M·(x, y) + (tₓ, tᵧ).")

        st.write(f"determinant = {M.determinant:.3f}")
        if result.is_complex:
            st.write(f"eigenvalues: {result.real:.3f} ± {result.imag:.3f}i")
            st.write("Eigenvalues are complex; no real invariant directions.")
        else:
            st.latex(
                r"""
                \lambda_1 = %.3f,\quad
                \lambda_2 = %.3f
                """ % (result.lambda1, result.lambda2)
            )

        st.info(
            "Original points = high saturation • Transformed points = same hue, "
            "lower saturation. Eigenvectors (if real) are drawn as lines through the origin."
        )

        if show_diagnostics:
            st.markdown("##### Diagnostics")
            for r in cached_diagnostics():
                mark = "✔" if r.passed else "✘"
                details = f" — {r.details}" if r.details else ""
                st.markdown(f"{mark} {r.name}{details}")

    st.markdown("---")
    st.caption(
        "Hue = angle from +x axis. The determinant gives area scaling, and a "
        "negative value means orientation flips. Translation does not affect eigenvectors."
    )

    # ---------- GIF generation section ----------
    st.markdown("## GIF animation from identity to M")

    if st.button(f"Generate GIF animation ({GIF_FILENAME})"):
        with st.spinner("Generating GIF animation (this may take a bit)..."):
            try:
                create_affine_animation_gif(
                    filename=GIF_FILENAME,
                    points=points,
                    skew_x=skew_x,
                    skew_y=skew_y,
                    rotation_deg=rotation_deg,
                    translation=(tx, ty),
                    scale=scale,
                    show_vectors=show_vectors,
                )
                st.success(f"Animation saved as {GIF_FILENAME}")
            except Exception as e:
                st.error(f"Failed to create animation. Error: {e}")

    if os.path.exists(GIF_FILENAME):
        c1, c2, c3 = st.columns([1, 2, 1])
        with c2:
            st.image(GIF_FILENAME)


if __name__ == "__main__":
    main()
