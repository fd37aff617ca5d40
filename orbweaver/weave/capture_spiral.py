"""Capture spiral: nested rings laid inside the auxiliary zones."""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Optional, Sequence, Tuple

import numpy as np

from ..logging_utils import debug_log_call
from ..primitives import Spoke, Vector
from .model import CaptureTrace, Segment, SegmentRole
from .utils import clamp, fuzz

logger = logging.getLogger(__name__)

MIN_SEGMENT_LENGTH = 1e-9


def lane_fraction(
    zone: Tuple[float, float],
    lane: int,
    capacity: int,
    rng: np.random.Generator,
    jitter: float = 0.05,
) -> float:
    """Fraction along a spoke for ``lane`` inside ``zone``.

    Lane 0 sits closest to the outer bound; lanes are spaced evenly at
    ``zone_size / (capacity + 1)`` and each spacing is jittered.
    """

    inner, outer = zone
    size = outer - inner
    offset = fuzz((capacity - lane) * size / (capacity + 1), rng, jitter)
    return clamp(inner + offset, inner, outer)


def _connect(segments: List[Segment], start: Vector, end: Vector) -> bool:
    if start.distance_to(end) <= MIN_SEGMENT_LENGTH:
        return False
    segments.append(Segment(SegmentRole.CAPTURE, start, end))
    return True


def _ring_ends(
    terminal: Spoke,
    zone: Tuple[float, float],
    capacity: int,
    rng: np.random.Generator,
    jitter: float,
) -> Deque[Vector]:
    return deque(
        terminal.point_at(lane_fraction(zone, lane, capacity, rng, jitter)) for lane in range(capacity)
    )


@debug_log_call(logger, log_result=False)
def trace_capture_spiral(
    spokes: Sequence[Spoke],
    terminal_index: int,
    direction: int,
    cap_capacity: int,
    rng: np.random.Generator,
    jitter: float = 0.05,
) -> CaptureTrace:
    """Lay ``cap_capacity`` rings inside every auxiliary zone.

    Rings start on the terminal spoke, visit every other spoke once in
    ``direction`` and close on their own starting point, so consecutive
    levels are never joined across the terminal spoke. The run ends when
    the terminal spoke has no zone left.
    """

    count = len(spokes)
    terminal = spokes[terminal_index]
    segments: List[Segment] = []
    dropped = 0
    level = 0

    while True:
        zone = terminal.aux_zone(level)
        if zone is None:
            break
        ring_ends = _ring_ends(terminal, zone, cap_capacity, rng, jitter)
        lane = 0
        while ring_ends:
            start = ring_ends.popleft()
            terminal.cap_points.append(start)
            previous: Optional[Vector] = start
            index = terminal_index
            for _ in range(count - 1):
                index = (index + direction) % count
                spoke = spokes[index]
                spoke_zone = spoke.aux_zone(level)
                if spoke_zone is None:
                    previous = None
                    continue
                point = spoke.point_at(lane_fraction(spoke_zone, lane, cap_capacity, rng, jitter))
                spoke.cap_points.append(point)
                if previous is not None and not _connect(segments, previous, point):
                    dropped += 1
                previous = point
            if previous is not None and previous is not start and not _connect(segments, previous, start):
                dropped += 1
            lane += 1
        logger.debug("Capture ring level %d done, %d segment(s) so far", level, len(segments))
        level += 1

    logger.info(
        "Capture spiral laid %d ring level(s) with %d segment(s), dropped %d zero-length",
        level,
        len(segments),
        dropped,
    )
    return CaptureTrace(segments=segments, levels=level, dropped=dropped)
