# Home page for the Geometry Visualizer Playground

import streamlit as st

from visualizer_core import configure_logging

configure_logging()

st.set_page_config(
    page_title="Visualization Demos",
    layout="wide"
)

st.title("Visualization Demos")

st.write(
    """
    Choose a demo below:

    - **2×2 Affine Transform**: integer lattice under Rotation ∘ SkewX ∘ SkewY + Translation,
      with determinant, eigenvalues and eigenvectors.
    - **Sheet Bend**: a trapezoid sheet fed and rotated about the bending line, with stop
      rectangles resting on it.
    """
)

col1, col2 = st.columns(2)

with col1:
    st.subheader("2×2 Affine Transform Visualizer")
    st.write("Interactively explore rotation, skew, translation, eigen data.")
    if st.button("Go to Affine Transform"):
        st.switch_page("pages/1_Affine_Grid.py")

with col2:
    st.subheader("Sheet Bend Visualizer")
    st.write("Set sheet dimensions, bend angle and stop centers; read off stop heights.")
    if st.button("Go to Sheet Bend"):
        st.switch_page("pages/2_Sheet_Bend.py")

st.markdown("---")
st.caption("New components can be added here as the project grows.")
