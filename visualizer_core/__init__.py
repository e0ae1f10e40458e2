"""
Numeric cores behind the Streamlit visualizer pages.

- affine : 2x2 composition, lattice transform, eigen decomposition
- sheet  : sheet-bend trapezoid, vertical probes, stop rectangles
- render : matplotlib / plotly figure builders used by the pages
"""

from visualizer_core.settings import configure_logging

__all__ = ["configure_logging"]
