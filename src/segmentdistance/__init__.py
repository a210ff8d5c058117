"""
Minimum distance between finite line segments in 3D.
"""
from segmentdistance.exceptions import (
    SegmentDistanceError,
    DegenerateSegmentError,
    ParameterOutOfRangeError,
)
from segmentdistance.model.geometry_primitives import Point, Vector, Segment, dot, cross, norm
from segmentdistance.solvers.solver import ClosestApproach, closest_approach, distance, point_segment_distance

__all__ = [
    "SegmentDistanceError",
    "DegenerateSegmentError",
    "ParameterOutOfRangeError",
    "Point",
    "Vector",
    "Segment",
    "dot",
    "cross",
    "norm",
    "ClosestApproach",
    "closest_approach",
    "distance",
    "point_segment_distance",
]
