"""Unit tests for sim_model.geometry: segments, headings and rays."""
import pytest

from sim_model import (
    Segment,
    angle_difference,
    distance_to_point,
    intersection_point,
    intersects,
    normalize_heading,
    ray_from,
    square_edges,
)


# ---------------------------------------------------------------------------
# Segment intersection
# ---------------------------------------------------------------------------

class TestIntersection:

    def test_crossing_segments(self):
        a = Segment(0, 0, 10, 10)
        b = Segment(0, 10, 10, 0)
        assert a.intersects(b)
        assert b.intersects(a)
        assert a.intersection_point(b) == pytest.approx((5.0, 5.0))

    def test_parallel_segments_never_intersect(self):
        a = Segment(0, 0, 10, 0)
        b = Segment(0, 1, 10, 1)
        assert not a.intersects(b)
        assert a.intersection_point(b) is None

    def test_collinear_overlap_is_not_an_intersection(self):
        a = Segment(0, 0, 10, 0)
        b = Segment(5, 0, 15, 0)
        assert not a.intersects(b)

    def test_lines_cross_outside_segments(self):
        a = Segment(0, 0, 1, 1)
        b = Segment(5, 0, 6, -1)
        assert not a.intersects(b)
        assert a.intersection_point(b) is None

    def test_shared_endpoint_counts(self):
        a = Segment(0, 0, 10, 0)
        b = Segment(10, 0, 10, 10)
        assert a.intersects(b)
        assert a.intersection_point(b) == pytest.approx((10.0, 0.0))

    def test_functional_helpers_match_methods(self):
        a = Segment(0, 0, 10, 10)
        b = Segment(0, 10, 10, 0)
        assert intersects(a, b)
        assert intersection_point(a, b) == pytest.approx((5.0, 5.0))


# ---------------------------------------------------------------------------
# Length / distance
# ---------------------------------------------------------------------------

class TestDistance:

    def test_length(self):
        assert Segment(0, 0, 3, 4).length() == pytest.approx(5.0)

    @pytest.mark.parametrize("point, expected", [
        ((5, 3), 3.0),      # perpendicular foot inside
        ((-3, 4), 5.0),     # beyond start
        ((13, 4), 5.0),     # beyond end
        ((7, 0), 0.0),      # on the segment
    ])
    def test_distance_to_point_clamps_to_segment(self, point, expected):
        segment = Segment(0, 0, 10, 0)
        assert segment.distance_to_point(*point) == pytest.approx(expected)
        assert distance_to_point(segment, point) == pytest.approx(expected)

    def test_zero_length_segment_uses_point_distance(self):
        assert Segment(1, 1, 1, 1).distance_to_point(4, 5) == pytest.approx(5.0)

    def test_set_reaims_in_place(self):
        segment = Segment(0, 0, 1, 1)
        segment.set(2, 3, 4, 5)
        assert segment.start == (2.0, 3.0)
        assert segment.end == (4.0, 5.0)


# ---------------------------------------------------------------------------
# Headings
# ---------------------------------------------------------------------------

class TestHeadings:

    @pytest.mark.parametrize("angle, expected", [
        (0, 0.0),
        (360, 0.0),
        (-90, 270.0),
        (725, 5.0),
        (-720, 0.0),
    ])
    def test_normalize_heading(self, angle, expected):
        assert normalize_heading(angle) == pytest.approx(expected)

    def test_normalize_tiny_negative_stays_below_full_turn(self):
        value = normalize_heading(-1e-15)
        assert 0.0 <= value < 360.0

    @pytest.mark.parametrize("target, current, expected", [
        (10, 350, 20.0),
        (350, 10, -20.0),
        (180, 0, 180.0),
        (90, 90, 0.0),
    ])
    def test_angle_difference_is_shortest_rotation(self, target, current, expected):
        assert angle_difference(target, current) == pytest.approx(expected)

    def test_ray_points_down_for_heading_90(self):
        ray = ray_from(0, 0, 90, 10)
        assert ray.start == (0.0, 0.0)
        assert ray.end == pytest.approx((0.0, 10.0), abs=1e-9)
        assert ray.length() == pytest.approx(10.0)


class TestSquareEdges:

    def test_edges_of_square(self):
        top, bottom, left, right = square_edges(0, 0, 5)
        assert top == Segment(-5, -5, 5, -5)
        assert bottom == Segment(-5, 5, 5, 5)
        assert left == Segment(-5, -5, -5, 5)
        assert right == Segment(5, -5, 5, 5)
