from segmentdistance.solvers.solver import ClosestApproach, closest_approach, distance, point_segment_distance

__all__ = ["ClosestApproach", "closest_approach", "distance", "point_segment_distance"]
