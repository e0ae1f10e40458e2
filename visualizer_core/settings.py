import logging
import os

LOG_LEVEL_ENV = "VISUALIZER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# ---------- Affine grid page ----------
AFFINE_DEFAULTS = {
    "translation_x": 0.0,
    "translation_y": 0.0,
    "skew_x": 0.0,          # x' = x + k * y
    "skew_y": 0.0,          # y' = y + k * x
    "rotation_deg": 0.0,
    "extent": 5,
    "scale": 50,
    "show_vectors": False,
    "show_diagnostics": False,
}

TRANSLATION_RANGE = (-10.0, 10.0, 0.1)
SKEW_RANGE = (-2.0, 2.0, 0.01)
ROTATION_RANGE = (-180.0, 180.0, 0.1)
EXTENT_RANGE = (1, 12, 1)
SCALE_RANGE = (20, 100, 1)      # px / unit

CANVAS_SIZE = 720               # px
GIF_FILENAME = "affine_grid_animation.gif"

# ---------- Sheet bend page (mm) ----------
SHEET_DEFAULTS = {
    "left_len": 350.0,
    "right_len": 300.0,
    "sheet_width": 260.0,
    "left_start_offset": 0.0,
    "angle_deg": -12.0,
    "feed_along_right": 40.0,
    "stop_width": 40.0,
    "centers_csv": "260, 320, 380, 440, 500",
}

MAX_STOPS = 16
SCENE_PADDING = 100.0


_configured = False


def configure_logging(level=None):
    """
    Install a basic root handler once per process.
    Level comes from the argument, else $VISUALIZER_LOG_LEVEL, else WARNING.
    Unknown level names fall back to WARNING.
    """
    global _configured
    if _configured:
        return
    level = level or os.environ.get(LOG_LEVEL_ENV, "WARNING")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)
    _configured = True
