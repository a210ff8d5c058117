from __future__ import annotations

from dataclasses import dataclass
import logging

from segmentdistance.config import PARALLEL_TOLERANCE
from segmentdistance.exceptions import DegenerateSegmentError
from segmentdistance.model.geometry_primitives import Point, Segment, dot, norm

logger = logging.getLogger(__name__)

INTERIOR = "interior"
PERPENDICULAR = "perpendicular"
ENDPOINTS = "endpoints"
POINTS = "points"


@dataclass(frozen=True)
class ClosestApproach:
    """
    Where two segments come closest.

    Attributes:
        distance: Minimum Euclidean distance between the segments.
        sc: Parameter of the closest point on the first segment.
        tc: Parameter of the closest point on the second segment.
        point_on_first: first.point(sc).
        point_on_second: second.point(tc).
        parallel: Whether the pair was classified as parallel.
        kind: Which branch produced the result: "interior" (both parameters
            inside the segments), "perpendicular" (a foot dropped from a
            clamped endpoint), "endpoints" (endpoint-to-endpoint) or
            "points" (both segments have zero length).
    """
    distance: float
    sc: float
    tc: float
    point_on_first: Point
    point_on_second: Point
    parallel: bool
    kind: str


def _in_unit_interval(t: float) -> bool:
    return 0.0 <= t <= 1.0


def _from_parameters(s1: Segment, s2: Segment, sc: float, tc: float, parallel: bool, kind: str) -> ClosestApproach:
    p = s1.point(sc)
    q = s2.point(tc)
    return ClosestApproach(
        distance=norm(p - q),
        sc=sc,
        tc=tc,
        point_on_first=p,
        point_on_second=q,
        parallel=parallel,
        kind=kind,
    )


def _closest_endpoints(s1: Segment, s2: Segment, parallel: bool) -> ClosestApproach:
    """Minimum over the four endpoint-to-endpoint pairings."""
    pairings = [(sc, tc) for sc in (0.0, 1.0) for tc in (0.0, 1.0)]
    candidates = [_from_parameters(s1, s2, sc, tc, parallel, ENDPOINTS) for sc, tc in pairings]
    return min(candidates, key=lambda c: c.distance)


def closest_approach(
    s1: Segment,
    s2: Segment,
    tolerance: float = PARALLEL_TOLERANCE,
) -> ClosestApproach:
    """
    Find the closest points between two finite segments in 3D.

    The segments are written parametrically as P(s) = P0 + s * u and
    Q(t) = Q0 + t * v with s, t in [0, 1]. The unconstrained optimum of the
    infinite lines is computed first; if it falls outside the segments, the
    offending parameter is clamped and a perpendicular is dropped from the
    clamped endpoint onto the other segment. When no perpendicular lands
    inside, the answer is one of the four endpoint pairings.

    Args:
        s1: First segment.
        s2: Second segment.
        tolerance: Cross-product norm below which the segments are treated as
            parallel. Near-parallel pairs switch branches as the angle crosses
            this threshold, which can make the result slightly discontinuous.

    Raises:
        DegenerateSegmentError: If exactly one of the segments has zero length.

    Returns:
        The closest approach, including the parameters (sc, tc).
    """
    if s1.is_degenerate and s2.is_degenerate:
        # Two single points
        return _from_parameters(s1, s2, 0.0, 0.0, True, POINTS)
    if s1.is_degenerate or s2.is_degenerate:
        which = "first" if s1.is_degenerate else "second"
        raise DegenerateSegmentError(f"The {which} segment has zero length.")

    u = s1.direction
    v = s2.direction
    w0 = s1.begin - s2.begin

    uu = dot(u, u)
    uv = dot(u, v)
    vv = dot(v, v)
    uw = dot(u, w0)
    vw = dot(v, w0)

    denominator = uv * uv - uu * vv

    parallel = s1.parallel(s2, tolerance) or denominator == 0.0
    if parallel:
        # The infinite lines have a whole family of closest pairs; anchor one
        # parameter at a begin point and project it onto the other line.
        if uw < 0:
            tc = 0.0
            sc = -uw / uu
        else:
            sc = 0.0
            tc = vw / vv
    else:
        sc = (vv * uw - uv * vw) / denominator
        tc = (uv * uw - uu * vw) / denominator

    logger.debug(f"Line parameters: sc={sc}, tc={tc}, parallel={parallel}")

    if _in_unit_interval(sc) and _in_unit_interval(tc):
        return _from_parameters(s1, s2, sc, tc, parallel, INTERIOR)

    perpendicular = False

    # Clamp the first parameter and drop a perpendicular onto the second line
    if sc < 0.0:
        sc = 0.0
        tc = vw / vv
        perpendicular = _in_unit_interval(tc)
    elif sc > 1.0:
        sc = 1.0
        tc = (uv + vw) / vv
        perpendicular = _in_unit_interval(tc)

    # Clamp the second parameter and drop a perpendicular onto the first line
    if tc < 0.0:
        tc = 0.0
        sc = -uw / uu
        perpendicular = _in_unit_interval(sc)
    elif tc > 1.0:
        tc = 1.0
        sc = (uv - uw) / uu
        perpendicular = _in_unit_interval(sc)

    if perpendicular:
        logger.debug(f"Perpendicular from clamped endpoint: sc={sc}, tc={tc}")
        return _from_parameters(s1, s2, sc, tc, parallel, PERPENDICULAR)

    logger.debug("No perpendicular lands inside the segments, comparing endpoints")
    return _closest_endpoints(s1, s2, parallel)


def distance(s1: Segment, s2: Segment, tolerance: float = PARALLEL_TOLERANCE) -> float:
    """Minimum Euclidean distance between two finite segments."""
    return closest_approach(s1, s2, tolerance).distance


def point_segment_distance(point: Point, segment: Segment) -> float:
    """Distance from a point to a segment (a zero-length segment acts as a point)."""
    if segment.is_degenerate:
        return point.distance_to(segment.begin)
    d = segment.direction
    t = dot(point - segment.begin, d) / dot(d, d)
    t = min(1.0, max(0.0, t))
    return point.distance_to(segment.point(t))
