import numpy as np
import pytest

from orbweaver import Line, NoBorderIntersectionError, PlacementExhaustedError, Vector, angular_gaps
from orbweaver.weave.frame import build_frame
from orbweaver.weave.spokes import cast_ray, place_spokes, sample_gap_offset


def _square(half=1.0):
    a, b, c, d = (Vector(-half, -half), Vector(half, -half), Vector(half, half), Vector(-half, half))
    return [Line(a, b), Line(b, c), Line(c, d), Line(d, a)]


def _placed(seed, max_gap=30.0, clearance=0.25):
    rng = np.random.default_rng(seed)
    frame = build_frame(800, 600, rng)
    spokes, events = place_spokes(frame, max_gap, clearance, rng)
    return frame, spokes, events


@pytest.mark.parametrize(
    "angle, expected",
    [
        (0.0, (1.0, 0.0)),
        (90.0, (0.0, 1.0)),
        (180.0, (-1.0, 0.0)),
        (30.0, (1.0, 0.57735)),
        (225.0, (-1.0, -1.0)),
    ],
)
def test_cast_ray_hits_the_nearest_border_ahead(angle, expected):
    hit = cast_ray(Vector(0, 0), angle, _square())
    assert hit.x == pytest.approx(expected[0], abs=1e-5)
    assert hit.y == pytest.approx(expected[1], abs=1e-5)


def test_cast_ray_without_borders_ahead_fails():
    behind = [Line(Vector(-5, -1), Vector(-5, 1))]
    with pytest.raises(NoBorderIntersectionError):
        cast_ray(Vector(0, 0), 0.0, behind)
    with pytest.raises(NoBorderIntersectionError):
        cast_ray(Vector(0, 0), 0.0, [])


def test_sample_gap_offset_respects_clearance():
    rng = np.random.default_rng(4)
    for gap in (31.0, 90.0, 200.0):
        offset, attempts = sample_gap_offset(gap, 0.3, rng, 1000)
        assert gap * 0.3 <= offset <= gap * 0.7
        assert attempts >= 1


def test_sample_gap_offset_gives_up():
    with pytest.raises(PlacementExhaustedError):
        sample_gap_offset(100.0, 0.5 + 1e-9, np.random.default_rng(0), 25)


@pytest.mark.parametrize("seed", [0, 1, 42, 2024])
def test_spokes_cover_the_circle_within_max_gap(seed):
    frame, spokes, _ = _placed(seed)
    gaps = angular_gaps(spokes)

    assert gaps.max() <= 30.0 + 1e-9
    assert gaps.sum() == pytest.approx(360.0)
    angles = [spoke.angle for spoke in spokes]
    assert angles == sorted(angles)
    assert all(0.0 <= angle < 360.0 for angle in angles)
    assert all(spoke.start == frame.hub for spoke in spokes)


@pytest.mark.parametrize("seed", [3, 42])
def test_spokes_end_on_the_border(seed):
    frame, spokes, _ = _placed(seed)
    for spoke in spokes:
        assert any(border.contains(spoke.end) for border in frame.borders)
        assert spoke.end.angle_around(frame.hub) == pytest.approx(spoke.angle, abs=1e-6)


def test_inserted_spokes_keep_their_clearance():
    _, spokes, events = _placed(42, clearance=0.3)

    assert len(spokes) == 3 + len(events)
    for event in events:
        assert event.gap > 30.0
        assert event.left_clearance >= event.gap * 0.3
        assert event.right_clearance >= event.gap * 0.3
        assert event.left_clearance + event.right_clearance == pytest.approx(event.gap)
        assert event.attempts >= 1


def test_full_circle_gap_keeps_only_seed_spokes():
    _, spokes, events = _placed(7, max_gap=360.0)
    assert len(spokes) == 3
    assert events == []


def test_unsatisfiable_clearance_is_reported():
    rng = np.random.default_rng(0)
    frame = build_frame(800, 600, rng)
    with pytest.raises(PlacementExhaustedError):
        place_spokes(frame, 30.0, 0.6, rng, max_attempts=50)
