import logging

import numpy as np
import pytest

from mazecam_lib.analysis import DeadEndClassifier, EdgeMask, build_quadtree, find_dead_ends
from mazecam_lib.schema import DeadEndPoint, Region

from conftest import mask_from_points

PLUS_A = [(2, 1), (1, 2), (2, 2), (3, 2), (2, 3)]
PLUS_B = [(7, 6), (6, 7), (7, 7), (8, 7), (7, 8)]
LEAF = Region(0, 0, 10, 10)


@pytest.fixture
def classifier():
    return DeadEndClassifier()


def test_density_exactly_at_threshold_is_not_a_dead_end(classifier):
    mask = mask_from_points(10, 10, [(0, 0), (2, 0), (4, 0), (6, 0), (8, 0)])
    verdict = classifier.classify(mask, LEAF)
    assert verdict.density == 0.05
    assert verdict.intersections == 0
    assert not verdict.is_dead_end


def test_density_above_threshold_is_a_dead_end(classifier):
    mask = mask_from_points(10, 10, [(0, 0), (2, 0), (4, 0), (6, 0), (8, 0), (0, 2)])
    assert classifier.is_dead_end(mask, LEAF)


def test_one_intersection_is_allowed(classifier):
    mask = mask_from_points(10, 10, PLUS_A + [(9, 0)])
    verdict = classifier.classify(mask, LEAF)
    assert verdict.intersections == 1
    assert verdict.is_dead_end


def test_two_intersections_are_not_a_dead_end(classifier):
    mask = mask_from_points(10, 10, PLUS_A + PLUS_B)
    verdict = classifier.classify(mask, LEAF)
    assert verdict.density == pytest.approx(0.10)
    assert verdict.intersections == 2
    assert not verdict.is_dead_end


def test_zero_area_region_is_never_a_dead_end(classifier, line_mask):
    verdict = classifier.classify(line_mask, Region(3, 3, 0, 4))
    assert verdict.density == 0.0
    assert not verdict.is_dead_end


def test_find_dead_ends_returns_leaf_centers(line_mask):
    tree = build_quadtree(line_mask)
    assert find_dead_ends(tree, line_mask) == [DeadEndPoint(5, 5)]


def test_no_edge_mask_has_no_dead_ends():
    mask = EdgeMask(np.zeros((50, 70), dtype=np.uint8))
    assert find_dead_ends(build_quadtree(mask), mask) == []


def test_uniform_dense_mask_leaves_are_full_but_branching(classifier):
    mask = EdgeMask(np.full((64, 64), 255, dtype=np.uint8))
    tree = build_quadtree(mask)
    verdicts = [classifier.classify(mask, leaf.region) for leaf in tree.leaves()]
    assert all(v.density == 1.0 for v in verdicts)
    assert not any(v.is_dead_end for v in verdicts)
    assert classifier.find_dead_ends(tree, mask) == []


def test_dead_ends_follow_leaf_order():
    # Two separate strokes in the TL and BR quadrants of a 40x40 frame.
    stroke_tl = [(x, 5) for x in range(2, 8)]
    stroke_br = [(x, 35) for x in range(32, 38)]
    mask = mask_from_points(40, 40, stroke_tl + stroke_br)
    points = find_dead_ends(build_quadtree(mask), mask)
    assert points == [DeadEndPoint(5, 5), DeadEndPoint(35, 35)]


def test_custom_thresholds():
    mask = mask_from_points(10, 10, PLUS_A + PLUS_B)
    lenient = DeadEndClassifier(density_threshold=0.05, intersection_threshold=2)
    assert lenient.is_dead_end(mask, LEAF)


def test_verdict_hook_sees_every_leaf_without_changing_results():
    mask = mask_from_points(40, 40, [(x, 5) for x in range(2, 8)])
    tree = build_quadtree(mask)
    seen = []
    hooked = DeadEndClassifier(on_verdict=seen.append)
    assert hooked.find_dead_ends(tree, mask) == DeadEndClassifier().find_dead_ends(tree, mask)
    assert [v.region for v in seen] == [leaf.region for leaf in tree.leaves()]


def test_classification_is_deterministic(classifier):
    rng = np.random.default_rng(11)
    mask = EdgeMask((rng.random((64, 64)) > 0.93).astype(np.uint8))
    tree = build_quadtree(mask)
    assert classifier.find_dead_ends(tree, mask) == classifier.find_dead_ends(tree, mask)


def test_trace_is_logged_on_deadend_topic(caplog, line_mask):
    caplog.set_level(logging.DEBUG, logger="mazecam.deadend")
    DeadEndClassifier().classify(line_mask, LEAF)
    assert any(
        r.name == "mazecam.deadend" and "Is Dead End: True" in r.getMessage()
        for r in caplog.records
    )
