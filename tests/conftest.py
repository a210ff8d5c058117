import logging
import math

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from segmentdistance.model.geometry_primitives import Point, Segment


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("segmentdistance")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def rng():
    return np.random.default_rng(20241019)


def random_segment(rng, scale: float = 10.0) -> Segment:
    p0, p1 = rng.uniform(-scale, scale, size=(2, 3))
    return Segment(Point(*p0), Point(*p1))


def _project(p, a, b):
    ab = b - a
    t = float(np.dot(p - a, ab) / np.dot(ab, ab))
    t = max(0.0, min(1.0, t))
    return a + t * ab


def reference_distance(s1: Segment, s2: Segment) -> float:
    """Minimum over the interior candidate and the four edges of the (s, t) square."""
    p0, p1 = s1.to_array()
    q0, q1 = s2.to_array()
    u, v, w0 = p1 - p0, q1 - q0, p0 - q0
    a, b, c = np.dot(u, u), np.dot(u, v), np.dot(v, v)
    d, e = np.dot(u, w0), np.dot(v, w0)
    D = a * c - b * b

    candidates = []
    if D > 1e-12 * a * c:
        s = (b * e - c * d) / D
        t = (a * e - b * d) / D
        if 0.0 <= s <= 1.0 and 0.0 <= t <= 1.0:
            candidates.append(np.linalg.norm((p0 + s * u) - (q0 + t * v)))

    candidates.append(np.linalg.norm(_project(q0, p0, p1) - q0))
    candidates.append(np.linalg.norm(_project(q1, p0, p1) - q1))
    candidates.append(np.linalg.norm(_project(p0, q0, q1) - p0))
    candidates.append(np.linalg.norm(_project(p1, q0, q1) - p1))
    return float(min(candidates))


def endpoint_distances(s1: Segment, s2: Segment) -> list:
    return [
        math.dist(a.to_array(), b.to_array())
        for a in (s1.begin, s1.end)
        for b in (s2.begin, s2.end)
    ]
