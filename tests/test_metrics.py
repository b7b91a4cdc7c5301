import logging
from nearstations.config import NearStationsConfig
from nearstations.geometry import Point
from nearstations.highlight import HighlightState, classify_stations
from nearstations.metrics import collect_metrics, log_metrics
from nearstations.query import brute_force_query, optimized_query_with_stats
from nearstations.scene import Scene


def _scene():
    path = [Point(0.0, 0.0), Point(10.0, 0.0), Point(10.0, 10.0)]
    stations = [Point(5.0, 1.0), Point(5.0, 100.0), Point(11.0, 5.0), Point(50.0, 50.0)]
    return Scene(path=path, stations=stations, width=100.0, height=100.0)


def test_collect_metrics_counts():
    scene = _scene()
    brute = brute_force_query(scene.path, scene.stations, 2.0)
    optimized, optimized_tests = optimized_query_with_stats(
        scene.path, scene.stations, 2.0
    )
    highlights = classify_stations(scene.stations, brute, optimized)

    metrics = collect_metrics(scene, brute, optimized, highlights, optimized_tests)

    assert metrics.segment_count == 2
    assert metrics.station_count == 4
    assert metrics.brute_force_tests == 8
    # Windows [-2, 12] and [8, 12] admit (5,1), (5,100), (11,5) and (11,5)
    assert metrics.optimized_tests == 4
    assert metrics.brute_force_near == 2
    assert metrics.optimized_near == 2
    assert metrics.results_match
    assert metrics.highlight_counts == {
        HighlightState.NEAR_BOTH: 2,
        HighlightState.NOT_NEAR: 2,
    }


def test_collect_metrics_detects_mismatch():
    scene = _scene()
    highlights = classify_stations(scene.stations, {scene.stations[0]}, set())
    metrics = collect_metrics(scene, {scene.stations[0]}, set(), highlights, 0)
    assert not metrics.results_match
    assert metrics.highlight_counts[HighlightState.ONLY_BRUTE_FORCE] == 1


def test_log_metrics_disabled(caplog):
    scene = _scene()
    metrics = collect_metrics(scene, set(), set(), {}, 0)
    with caplog.at_level(logging.DEBUG, logger="nearstations.metrics"):
        log_metrics(metrics, NearStationsConfig(metrics=False))
    assert "NEARSTATIONS_METRICS" not in caplog.text


def test_log_metrics_enabled(caplog):
    scene = _scene()
    brute = brute_force_query(scene.path, scene.stations, 2.0)
    highlights = classify_stations(scene.stations, brute, brute)
    metrics = collect_metrics(scene, brute, brute, highlights, 4)
    with caplog.at_level(logging.DEBUG, logger="nearstations.metrics"):
        log_metrics(metrics, NearStationsConfig(metrics=True))
    assert "=== NEARSTATIONS_METRICS ===" in caplog.text
    assert "brute_force_tests=8" in caplog.text
    assert "optimized_tests=4" in caplog.text
    assert "highlight[near_both]=2" in caplog.text
    assert "=== END_NEARSTATIONS_METRICS ===" in caplog.text
