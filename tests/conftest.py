"""Shared test fixtures: raw point lists and a default store/recognizer."""

import numpy as np
import pytest

from recognizer.params import RecognizerParams
from recognizer.scoring import ShapeRecognizer
from recognizer.template_store import TemplateStore


def line_points(start, end, n=64):
    t = np.linspace(0.0, 1.0, n)[:, None]
    return (1 - t) * np.array(start, dtype=np.float64) + t * np.array(end, dtype=np.float64)


def circle_points(radius=80.0, n=64, start_deg=0.0, clockwise=False):
    sign = -1.0 if clockwise else 1.0
    t = np.radians(start_deg) + sign * np.linspace(0.0, 2 * np.pi, n)
    return np.stack([radius * np.cos(t), radius * np.sin(t)], axis=1)


def arc_points(radius=150.0, n=100, sweep_deg=90.0):
    t = np.linspace(0.0, np.radians(sweep_deg), n)
    return np.stack([radius * np.cos(t), radius * np.sin(t)], axis=1)


@pytest.fixture
def params() -> RecognizerParams:
    return RecognizerParams()


@pytest.fixture
def store(params) -> TemplateStore:
    return TemplateStore(params)


@pytest.fixture
def line_store(store) -> TemplateStore:
    store.add("line_right", line_points((0, 0), (150, 0)))
    store.add("line_left", line_points((0, 0), (-150, 0)))
    return store


@pytest.fixture
def recognizer(line_store) -> ShapeRecognizer:
    return ShapeRecognizer(line_store)
