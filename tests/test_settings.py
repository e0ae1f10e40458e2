"""
Tests for defaults and logging setup (visualizer_core/settings.py).
"""

import logging

from visualizer_core import settings
from visualizer_core.affine import compose_matrix


def test_affine_defaults_give_identity():
    d = settings.AFFINE_DEFAULTS
    M = compose_matrix(d["skew_x"], d["skew_y"], d["rotation_deg"])
    assert M.as_tuple() == (1.0, 0.0, 0.0, 1.0)
    lo, hi, _ = settings.EXTENT_RANGE
    assert lo <= d["extent"] <= hi


def test_configure_logging_runs_once(monkeypatch):
    monkeypatch.setattr(settings, "_configured", False)
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    monkeypatch.setenv(settings.LOG_LEVEL_ENV, "debug")

    settings.configure_logging()
    settings.configure_logging()

    assert len(calls) == 1
    assert calls[0]["level"] == logging.DEBUG


def test_configure_logging_unknown_level_falls_back(monkeypatch):
    monkeypatch.setattr(settings, "_configured", False)
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    monkeypatch.setenv(settings.LOG_LEVEL_ENV, "verbose")

    settings.configure_logging()

    assert calls[0]["level"] == logging.WARNING


def test_configure_logging_numeric_level(monkeypatch):
    monkeypatch.setattr(settings, "_configured", False)
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))

    settings.configure_logging(logging.INFO)

    assert calls[0]["level"] == logging.INFO
