# batch.py
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
import numba as nb

from segmentdistance.config import PARALLEL_TOLERANCE
from segmentdistance.exceptions import DegenerateSegmentError

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

# ---- JIT'd segment distance kernels (scalar + batched) ----

@nb.njit(cache=True, fastmath=True)
def _dot3(a0: float, a1: float, a2: float, b0: float, b1: float, b2: float) -> float:
    return a0 * b0 + a1 * b1 + a2 * b2

@nb.njit(cache=True, fastmath=True)
def _point_distance(p: npt.NDArray[np.float64], u: npt.NDArray[np.float64], s: float,
                    q: npt.NDArray[np.float64], v: npt.NDArray[np.float64], t: float) -> float:
    """|(p + s*u) - (q + t*v)|"""
    d0 = p[0] + s * u[0] - q[0] - t * v[0]
    d1 = p[1] + s * u[1] - q[1] - t * v[1]
    d2 = p[2] + s * u[2] - q[2] - t * v[2]
    return np.sqrt(d0 * d0 + d1 * d1 + d2 * d2)

@nb.njit(cache=True, fastmath=True)
def segment_distance_kernel(
    p0: npt.NDArray[np.float64],
    p1: npt.NDArray[np.float64],
    q0: npt.NDArray[np.float64],
    q1: npt.NDArray[np.float64],
    tolerance: float,
) -> float:
    """
    Minimum distance between segments [p0, p1] and [q0, q1].

    Same branch structure as `segmentdistance.solvers.solver.closest_approach`.
    Callers must reject the case where exactly one segment has zero length.
    """
    u = p1 - p0
    v = q1 - q0

    uu = _dot3(u[0], u[1], u[2], u[0], u[1], u[2])
    vv = _dot3(v[0], v[1], v[2], v[0], v[1], v[2])
    if uu == 0.0 and vv == 0.0:
        return _point_distance(p0, u, 0.0, q0, v, 0.0)

    w0 = p0 - q0
    uv = _dot3(u[0], u[1], u[2], v[0], v[1], v[2])
    uw = _dot3(u[0], u[1], u[2], w0[0], w0[1], w0[2])
    vw = _dot3(v[0], v[1], v[2], w0[0], w0[1], w0[2])
    denominator = uv * uv - uu * vv

    c0 = u[1] * v[2] - u[2] * v[1]
    c1 = u[2] * v[0] - u[0] * v[2]
    c2 = u[0] * v[1] - u[1] * v[0]
    parallel = np.sqrt(c0 * c0 + c1 * c1 + c2 * c2) < tolerance or denominator == 0.0

    if parallel:
        if uw < 0.0:
            tc = 0.0
            sc = -uw / uu
        else:
            sc = 0.0
            tc = vw / vv
    else:
        sc = (vv * uw - uv * vw) / denominator
        tc = (uv * uw - uu * vw) / denominator

    if 0.0 <= sc <= 1.0 and 0.0 <= tc <= 1.0:
        return _point_distance(p0, u, sc, q0, v, tc)

    perpendicular = False
    if sc < 0.0:
        sc = 0.0
        tc = vw / vv
        perpendicular = 0.0 <= tc <= 1.0
    elif sc > 1.0:
        sc = 1.0
        tc = (uv + vw) / vv
        perpendicular = 0.0 <= tc <= 1.0

    if tc < 0.0:
        tc = 0.0
        sc = -uw / uu
        perpendicular = 0.0 <= sc <= 1.0
    elif tc > 1.0:
        tc = 1.0
        sc = (uv - uw) / uu
        perpendicular = 0.0 <= sc <= 1.0

    if perpendicular:
        return _point_distance(p0, u, sc, q0, v, tc)

    best = _point_distance(p0, u, 0.0, q0, v, 0.0)
    best = min(best, _point_distance(p0, u, 0.0, q0, v, 1.0))
    best = min(best, _point_distance(p0, u, 1.0, q0, v, 0.0))
    best = min(best, _point_distance(p0, u, 1.0, q0, v, 1.0))
    return best

@nb.njit(cache=True, fastmath=True)
def _pairwise_kernel(
    first: npt.NDArray[np.float64],
    second: npt.NDArray[np.float64],
    tolerance: float,
) -> npt.NDArray[np.float64]:
    n = first.shape[0]
    m = second.shape[0]
    out = np.empty((n, m), dtype=np.float64)
    for i in range(n):
        for j in range(m):
            out[i, j] = segment_distance_kernel(first[i, 0], first[i, 1], second[j, 0], second[j, 1], tolerance)
    return out

@nb.njit(cache=True, fastmath=True)
def _paired_kernel(
    first: npt.NDArray[np.float64],
    second: npt.NDArray[np.float64],
    tolerance: float,
) -> npt.NDArray[np.float64]:
    n = first.shape[0]
    out = np.empty(n, dtype=np.float64)
    for i in range(n):
        out[i] = segment_distance_kernel(first[i, 0], first[i, 1], second[i, 0], second[i, 1], tolerance)
    return out


def _as_segment_array(segments: npt.ArrayLike, name: str) -> npt.NDArray[np.float64]:
    arr = np.ascontiguousarray(segments, dtype=np.float64)
    if arr.ndim == 2 and arr.shape == (2, 3):
        arr = arr[np.newaxis, :, :]
    if arr.ndim != 3 or arr.shape[1:] != (2, 3):
        raise ValueError(f"'{name}' must have shape (N, 2, 3), got {arr.shape}")
    return arr


def _degenerate_mask(segments: npt.NDArray[np.float64]) -> npt.NDArray[np.bool_]:
    directions = segments[:, 1, :] - segments[:, 0, :]
    return np.einsum("ij,ij->i", directions, directions) == 0.0


def pairwise_distances(
    first: npt.ArrayLike,
    second: npt.ArrayLike,
    tolerance: float = PARALLEL_TOLERANCE,
) -> npt.NDArray[np.float64]:
    """
    Distance between every segment of `first` and every segment of `second`.

    Args:
        first: Array of shape (N, 2, 3) with segment endpoints.
        second: Array of shape (M, 2, 3) with segment endpoints.
        tolerance: Parallelism threshold (see `Segment.parallel`).

    Raises:
        ValueError: If the arrays do not have shape (N, 2, 3).
        DegenerateSegmentError: If a zero-length segment would be paired with
            a segment of non-zero length.

    Returns:
        An array of shape (N, M).
    """
    a = _as_segment_array(first, "first")
    b = _as_segment_array(second, "second")

    degenerate_a = _degenerate_mask(a)
    degenerate_b = _degenerate_mask(b)
    if (degenerate_a.any() and not degenerate_b.all()) or (degenerate_b.any() and not degenerate_a.all()):
        raise DegenerateSegmentError("Zero-length segment paired with a segment of non-zero length.")

    logger.debug(f"Computing {a.shape[0]}x{b.shape[0]} segment distances.")
    return _pairwise_kernel(a, b, tolerance)


def paired_distances(
    first: npt.ArrayLike,
    second: npt.ArrayLike,
    tolerance: float = PARALLEL_TOLERANCE,
) -> npt.NDArray[np.float64]:
    """
    Distance between `first[i]` and `second[i]` for every row i.

    Args:
        first: Array of shape (N, 2, 3).
        second: Array of shape (N, 2, 3).
        tolerance: Parallelism threshold (see `Segment.parallel`).

    Returns:
        An array of shape (N,).
    """
    a = _as_segment_array(first, "first")
    b = _as_segment_array(second, "second")
    if a.shape[0] != b.shape[0]:
        raise ValueError(f"Row count mismatch: {a.shape[0]} != {b.shape[0]}")

    if np.any(_degenerate_mask(a) != _degenerate_mask(b)):
        raise DegenerateSegmentError("Zero-length segment paired with a segment of non-zero length.")

    return _paired_kernel(a, b, tolerance)
