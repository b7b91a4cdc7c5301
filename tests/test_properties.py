import math
import pytest
from hypothesis import given, strategies as st, assume
from nearstations.geometry import (
    Point,
    Segment,
    distance,
    point_segment_distance,
)
from nearstations.query import brute_force_query, optimized_query
from nearstations.sorted_index import (
    build_sorted_index,
    points_bound_by_x,
    x_bound_index,
)

# Integer-valued coordinates produce many shared x values and exact hits on
# the window edges.
grid_coord = st.integers(-200, 200).map(float)
grid_point = st.builds(Point, x=grid_coord, y=grid_coord)
grid_threshold = st.integers(0, 100).map(float)

real_coord = st.floats(-1000.0, 1000.0, allow_nan=False, allow_infinity=False)
real_point = st.builds(Point, x=real_coord, y=real_coord)


class TestSegmentDistanceProperties:

    @given(real_point, real_point, real_point)
    def test_distance_is_non_negative(self, a, b, p):
        assert point_segment_distance(Segment(a, b), p) >= 0

    @given(real_point, real_point)
    def test_degenerate_segment_equals_point_distance(self, a, p):
        assert point_segment_distance(Segment(a, a), p) == distance(a, p)

    @given(real_point, real_point, real_point)
    def test_never_further_than_endpoints(self, a, b, p):
        d = point_segment_distance(Segment(a, b), p)
        assert d <= distance(a, p) + 1e-9
        assert d <= distance(b, p) + 1e-9

    @given(real_point, real_point)
    def test_start_point_is_on_segment(self, a, b):
        assert point_segment_distance(Segment(a, b), a) == 0.0


class TestSortedIndexProperties:

    @given(st.lists(grid_point, max_size=50))
    def test_sorted_index_is_sorted_permutation(self, stations):
        index = build_sorted_index(stations)
        assert sorted(index) == sorted(stations)
        assert all(index[i].x <= index[i + 1].x for i in range(len(index) - 1))

    @given(st.lists(grid_point, min_size=1, max_size=50), grid_coord, st.booleans())
    def test_bound_index_in_range(self, stations, bound, upper):
        index = build_sorted_index(stations)
        assert 0 <= x_bound_index(index, bound, upper) < len(index)

    @given(st.lists(grid_point, max_size=50), grid_coord, grid_coord)
    def test_range_query_matches_filter(self, stations, lower, upper):
        index = build_sorted_index(stations)
        expected = [p for p in index if lower <= p.x <= upper]
        assert points_bound_by_x(index, lower, upper) == expected


class TestQueryProperties:

    @given(
        st.lists(grid_point, max_size=8),
        st.lists(grid_point, max_size=40),
        grid_threshold,
    )
    def test_strategies_are_equivalent(self, path, stations, threshold):
        assert brute_force_query(path, stations, threshold) == optimized_query(
            path, stations, threshold
        )

    @given(
        st.lists(real_point, max_size=8),
        st.lists(real_point, max_size=40),
        st.floats(0.0, 100.0),
    )
    def test_strategies_are_equivalent_for_real_coordinates(
        self, path, stations, threshold
    ):
        assert brute_force_query(path, stations, threshold) == optimized_query(
            path, stations, threshold
        )

    @given(real_coord, real_coord, st.floats(0.0, 100.0), st.integers(-4, 4))
    def test_strategies_agree_next_to_window_edge(self, ax, y, threshold, ulps):
        path = [Point(ax, 0.0), Point(ax + 1.0, 0.0)]
        sx = ax - threshold
        step = -math.inf if ulps < 0 else math.inf
        for _ in range(abs(ulps)):
            sx = math.nextafter(sx, step)
        stations = [Point(sx, 0.0), Point(sx, y)]
        assert brute_force_query(path, stations, threshold) == optimized_query(
            path, stations, threshold
        )

    @given(
        st.lists(grid_point, max_size=8),
        st.lists(grid_point, max_size=40),
        grid_threshold,
        grid_threshold,
    )
    def test_monotonic_in_threshold(self, path, stations, t1, t2):
        low, high = min(t1, t2), max(t1, t2)
        for query in (brute_force_query, optimized_query):
            assert query(path, stations, low) <= query(path, stations, high)

    @given(
        st.lists(grid_point, max_size=8),
        st.lists(grid_point, max_size=40),
        grid_threshold,
    )
    def test_result_is_subset_of_stations(self, path, stations, threshold):
        assert optimized_query(path, stations, threshold) <= set(stations)

    @given(st.lists(grid_point, max_size=40), grid_threshold)
    def test_no_segments_means_no_results(self, stations, threshold):
        for path in ([], stations[:1]):
            assert brute_force_query(path, stations, threshold) == set()
            assert optimized_query(path, stations, threshold) == set()

    @given(st.lists(grid_point, min_size=2, max_size=8))
    def test_path_vertices_always_near(self, path):
        assert optimized_query(path, path, 0.0) == set(path)

    @given(
        st.lists(grid_point, min_size=2, max_size=8),
        st.lists(real_point, max_size=30),
        st.floats(0.0, 50.0),
    )
    def test_real_valued_results_pass_exact_test(self, path, stations, threshold):
        result = optimized_query(path, stations, threshold)
        segments = [Segment(path[i], path[i + 1]) for i in range(len(path) - 1)]
        for station in result:
            assert any(
                point_segment_distance(segment, station) <= threshold
                for segment in segments
            )
