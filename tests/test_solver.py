import math

import pytest

from conftest import random_segment, reference_distance, endpoint_distances
from segmentdistance.exceptions import DegenerateSegmentError
from segmentdistance.model.geometry_primitives import Point, Vector, Segment
from segmentdistance.model.scenarios import load_scenarios
from segmentdistance.solvers.solver import (
    closest_approach,
    distance,
    point_segment_distance,
    INTERIOR,
    PERPENDICULAR,
    ENDPOINTS,
    POINTS,
)

SCENARIOS = list(load_scenarios().values())


def seg(p, q):
    return Segment(Point(*p), Point(*q))


class TestScenarios:
    @pytest.mark.parametrize("scenario", SCENARIOS, ids=lambda s: s.name)
    def test_expected_distance(self, scenario):
        assert distance(scenario.first, scenario.second) == pytest.approx(scenario.expected, abs=1e-9)

    @pytest.mark.parametrize("scenario", SCENARIOS, ids=lambda s: s.name)
    def test_symmetric(self, scenario):
        forward = distance(scenario.first, scenario.second)
        backward = distance(scenario.second, scenario.first)
        assert forward == pytest.approx(backward, abs=1e-12)

    @pytest.mark.parametrize("scenario", SCENARIOS, ids=lambda s: s.name)
    def test_orientation_does_not_matter(self, scenario):
        expected = distance(scenario.first, scenario.second)
        assert distance(scenario.first.reversed(), scenario.second) == pytest.approx(expected, abs=1e-12)
        assert distance(scenario.first, scenario.second.reversed()) == pytest.approx(expected, abs=1e-12)

    def test_intersecting_skew(self):
        assert distance(seg((0, 0, 0), (2, 0, 0)), seg((1, -1, 1), (1, 1, -1))) == 0.0

    def test_parallel_overlapping(self):
        assert distance(seg((0, 0, 0), (6, 0, 0)), seg((4, 5, 0), (8, 5, 0))) == pytest.approx(5.0)

    def test_parallel_not_overlapping(self):
        assert distance(seg((0, 0, 0), (4, 0, 0)), seg((5, 5, 0), (9, 5, 0))) == pytest.approx(math.sqrt(26))

    def test_perpendicular_endpoints(self):
        assert distance(seg((0, 0, 0), (5, 0, 0)), seg((6, 1, 0), (6, 6, 0))) == pytest.approx(math.sqrt(2))

    def test_collinear_overlapping(self):
        assert distance(seg((0, 0, 0), (5, 0, 0)), seg((2, 0, 0), (8, 0, 0))) == pytest.approx(0.0, abs=1e-12)

    def test_collinear_gap(self):
        assert distance(seg((0, 0, 0), (5, 0, 0)), seg((7, 0, 0), (6, 0, 0))) == pytest.approx(1.0)


class TestClosestApproach:
    def test_interior(self):
        result = closest_approach(seg((0, 0, 0), (5, 5, 0)), seg((5, 0, 1), (0, 5, 3)))
        assert result.kind == INTERIOR
        assert not result.parallel
        assert result.sc == pytest.approx(0.5)
        assert result.tc == pytest.approx(23 / 54)
        assert result.distance == pytest.approx(10 / math.sqrt(27))
        assert result.point_on_first == Point(2.5, 2.5, 0)

    def test_perpendicular_from_clamped_endpoint(self):
        result = closest_approach(seg((0, 0, 0), (5, 0, 0)), seg((3, 3, 0), (3, 8, 0)))
        assert result.kind == PERPENDICULAR
        assert result.sc == pytest.approx(0.6)
        assert result.tc == 0.0
        assert result.point_on_second == Point(3, 3, 0)
        assert result.distance == pytest.approx(3.0)

    def test_endpoint_pairing(self):
        result = closest_approach(seg((0, 0, 0), (5, 0, 0)), seg((6, 1, 0), (6, 6, 0)))
        assert result.kind == ENDPOINTS
        assert (result.sc, result.tc) == (1.0, 0.0)
        assert result.point_on_first == Point(5, 0, 0)
        assert result.point_on_second == Point(6, 1, 0)

    def test_parallel_flag(self):
        result = closest_approach(seg((0, 0, 0), (6, 0, 0)), seg((4, 5, 0), (8, 5, 0)))
        assert result.parallel
        assert result.kind == INTERIOR
        assert result.distance == pytest.approx(5.0)

    def test_distance_matches_closest_points(self, rng):
        for _ in range(200):
            s1, s2 = random_segment(rng), random_segment(rng)
            result = closest_approach(s1, s2)
            assert 0.0 <= result.sc <= 1.0
            assert 0.0 <= result.tc <= 1.0
            assert result.point_on_first.distance_to(result.point_on_second) == pytest.approx(result.distance)


class TestBoundaryReprojection:
    def test_anti_parallel_overlap(self):
        # Overlapping x-ranges with opposite directions
        s1 = seg((0, 0, 0), (4, 0, 0))
        s2 = seg((6, 1, 0), (2, 1, 0))
        result = closest_approach(s1, s2)
        assert result.distance == pytest.approx(1.0)
        assert result.kind == PERPENDICULAR

    def test_foot_from_end_of_second_segment(self):
        # Only the perpendicular dropped from the end of the second segment lands inside
        s1 = seg((0, 0, 0), (10, 0, 0))
        s2 = seg((3, -5, 2), (4, -1, 2))
        assert distance(s1, s2) == pytest.approx(math.hypot(1, 2))

    def test_skew_clamped_with_perpendicular_to_second(self):
        s1 = seg((0, 0, 0), (1, 0, 0))
        s2 = seg((3, -2, 1), (3, 2, 1))
        result = closest_approach(s1, s2)
        assert result.sc == 1.0
        assert result.tc == pytest.approx(0.5)
        assert result.distance == pytest.approx(math.hypot(2, 1))


class TestDegenerate:
    def test_two_points(self):
        p = seg((1, 1, 1), (1, 1, 1))
        q = seg((4, 5, 1), (4, 5, 1))
        result = closest_approach(p, q)
        assert result.kind == POINTS
        assert result.distance == 5.0

    def test_single_degenerate_segment_raises(self):
        p = seg((1, 1, 1), (1, 1, 1))
        s = seg((0, 0, 0), (2, 0, 0))
        with pytest.raises(DegenerateSegmentError):
            distance(p, s)
        with pytest.raises(DegenerateSegmentError):
            distance(s, p)

    def test_degenerate_error_is_value_error(self):
        with pytest.raises(ValueError):
            distance(seg((0, 0, 0), (0, 0, 0)), seg((0, 0, 0), (1, 0, 0)))

    @pytest.mark.parametrize("length", [1e-1, 1e-3, 1e-5, 1e-8])
    def test_shrinking_segment_converges_to_point_distance(self, length):
        s1 = seg((0, 0, 0), (10, 0, 0))
        for anchor in [(3, 4, 0), (-2, 1, 1), (12, -3, 2), (5, 0, 0)]:
            q = Point(*anchor)
            direction = Vector(1, 2, -2).unit() * length
            short = Segment.from_point_and_vector(q, direction)
            expected = point_segment_distance(q, s1)
            assert abs(distance(s1, short) - expected) <= length * 1.01 + 1e-12


class TestPointSegmentDistance:
    def test_inside(self):
        assert point_segment_distance(Point(2, 3, 0), seg((0, 0, 0), (4, 0, 0))) == pytest.approx(3.0)

    def test_beyond_ends(self):
        s = seg((0, 0, 0), (4, 0, 0))
        assert point_segment_distance(Point(-1, 3, 0), s) == pytest.approx(math.sqrt(10))
        assert point_segment_distance(Point(5, -1, 0), s) == pytest.approx(math.sqrt(2))

    def test_degenerate_segment(self):
        assert point_segment_distance(Point(0, 3, 4), seg((0, 0, 0), (0, 0, 0))) == 5.0


class TestProperties:
    def test_matches_reference(self, rng):
        for _ in range(500):
            s1, s2 = random_segment(rng), random_segment(rng)
            assert distance(s1, s2) == pytest.approx(reference_distance(s1, s2), rel=1e-9, abs=1e-9)

    def test_matches_reference_for_parallel_pairs(self, rng):
        for _ in range(300):
            s1 = random_segment(rng)
            k = rng.choice([-1.0, 1.0]) * rng.uniform(0.2, 3.0)
            offset = Vector(*rng.uniform(-5, 5, size=3))
            begin = s1.begin + offset
            s2 = Segment.from_point_and_vector(begin, s1.direction * k)
            assert s1.parallel(s2)
            assert distance(s1, s2) == pytest.approx(reference_distance(s1, s2), rel=1e-9, abs=1e-9)

    def test_symmetric_and_non_negative(self, rng):
        for _ in range(300):
            s1, s2 = random_segment(rng), random_segment(rng)
            d = distance(s1, s2)
            assert d >= 0.0
            assert d == pytest.approx(distance(s2, s1), rel=1e-9, abs=1e-12)

    def test_bounded_by_endpoint_distances(self, rng):
        for _ in range(300):
            s1, s2 = random_segment(rng), random_segment(rng)
            assert distance(s1, s2) <= min(endpoint_distances(s1, s2)) + 1e-12

    def test_zero_when_touching(self, rng):
        for _ in range(200):
            s1 = random_segment(rng)
            shared = s1.point(float(rng.uniform(0.0, 1.0)))
            a = float(rng.uniform(0.0, 1.0))
            d = Vector(*rng.uniform(-5, 5, size=3))
            s2 = Segment(shared - d * a, shared + d * (1.0 - a))
            assert distance(s1, s2) == pytest.approx(0.0, abs=1e-9)

    def test_positive_when_apart(self, rng):
        for _ in range(200):
            s1, s2 = random_segment(rng), random_segment(rng)
            if reference_distance(s1, s2) > 1e-3:
                assert distance(s1, s2) > 0.0
