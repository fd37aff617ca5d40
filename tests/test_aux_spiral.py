import numpy as np
import pytest

from orbweaver import SegmentRole, Spoke, Vector
from orbweaver.primitives import from_angle
from orbweaver.weave.aux_spiral import step_limit, trace_auxiliary_spiral
from orbweaver.weave.frame import build_frame
from orbweaver.weave.spokes import place_spokes


def _cross(length=100.0):
    hub = Vector(0, 0)
    return [Spoke(hub, from_angle(hub, angle, length), angle=angle) for angle in (0.0, 90.0, 180.0, 270.0)]


def _woven_spokes(seed):
    rng = np.random.default_rng(seed)
    frame = build_frame(800, 600, rng)
    spokes, _ = place_spokes(frame, 30.0, 0.25, rng)
    return spokes, rng


def test_unjittered_spiral_on_equal_spokes():
    spokes = _cross()
    trace = trace_auxiliary_spiral(spokes, 4, np.random.default_rng(0), jitter=0.0)

    # 25 + 12 * 6.25 reaches the spoke length of 100
    assert len(trace.segments) == 12
    assert trace.cumulative[0] == pytest.approx(25.0)
    assert trace.cumulative[-1] == pytest.approx(100.0)
    assert trace.terminal_index == trace.start_index
    assert trace.direction in (1, -1)

    terminal = spokes[trace.terminal_index]
    assert [mark.distance for mark in terminal.aux_points] == pytest.approx([25.0, 50.0, 75.0, 100.0])
    for offset in (1, 2, 3):
        other = spokes[(trace.start_index + offset * trace.direction) % 4]
        assert [mark.distance for mark in other.aux_points] == pytest.approx(
            [25.0 + 6.25 * offset, 50.0 + 6.25 * offset, 75.0 + 6.25 * offset]
        )


def test_spiral_segments_chain_recorded_points():
    spokes, rng = _woven_spokes(42)
    trace = trace_auxiliary_spiral(spokes, 5, rng)

    assert all(segment.role == SegmentRole.AUXILIARY for segment in trace.segments)
    for before, after in zip(trace.segments, trace.segments[1:]):
        assert before.end == after.start

    recorded = sum(len(spoke.aux_points) for spoke in spokes)
    assert recorded == len(trace.segments) + 1


@pytest.mark.parametrize("seed", [0, 42, 99])
def test_cumulative_distance_is_monotonic_and_bounded(seed):
    spokes, rng = _woven_spokes(seed)
    trace = trace_auxiliary_spiral(spokes, 5, rng)

    steps = np.diff(np.asarray(trace.cumulative))
    assert np.all(steps > 0)
    assert len(trace.segments) <= step_limit(spokes, 5)
    # ring_count * spoke_count plus one lap of slack
    assert len(trace.segments) <= (5 + 1) * len(spokes)

    terminal = spokes[trace.terminal_index]
    assert trace.cumulative[-1] >= terminal.length
    assert trace.cumulative[-2] < max(spoke.length for spoke in spokes)
    for spoke in spokes:
        for mark in spoke.aux_points:
            assert 0.0 < mark.distance <= spoke.length
            assert spoke.contains(mark.point)


@pytest.mark.parametrize("seed", range(12))
def test_spiral_ends_only_when_cumulative_distance_reaches_a_spoke_end(seed):
    spokes, rng = _woven_spokes(seed)
    trace = trace_auxiliary_spiral(spokes, 5, rng)

    count = len(spokes)
    index = trace.start_index
    for distance in trace.cumulative[1:-1]:
        index = (index + trace.direction) % count
        assert distance < spokes[index].length
    assert trace.cumulative[-1] >= spokes[trace.terminal_index].length


def test_step_limit_scales_with_rings_and_spokes():
    assert step_limit(_cross(), 4) == 4 * 6
    assert step_limit(_cross()[:3], 1) == 3 * 3


def test_spiral_is_reproducible_for_a_seed():
    first_spokes, first_rng = _woven_spokes(8)
    second_spokes, second_rng = _woven_spokes(8)

    first = trace_auxiliary_spiral(first_spokes, 3, first_rng)
    second = trace_auxiliary_spiral(second_spokes, 3, second_rng)

    assert first.segments == second.segments
    assert first.terminal_index == second.terminal_index


def test_spiral_needs_spokes():
    with pytest.raises(ValueError):
        trace_auxiliary_spiral([], 3, np.random.default_rng(0))
