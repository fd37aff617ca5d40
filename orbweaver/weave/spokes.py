"""Spoke placement by circular gap filling."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..logging_utils import debug_log_call
from ..primitives import Line, Spoke, Vector, from_angle, intersect, normalize_degrees
from .model import (
    DegenerateFrameError,
    NoBorderIntersectionError,
    PlacementEvent,
    PlacementExhaustedError,
    WebFrame,
)
from .utils import angular_gap, rand

logger = logging.getLogger(__name__)

_AHEAD_EPS = 1e-9


def cast_ray(hub: Vector, angle: float, borders: Sequence[Line]) -> Vector:
    """Return the first border point hit by the ray from ``hub`` at ``angle``.

    Only intersections lying on a border segment and ahead of the hub
    count; the closest of those wins.
    """

    direction = from_angle(Vector(0.0, 0.0), angle)
    ray = Line(hub, hub + direction)
    best: Optional[Tuple[float, Vector]] = None
    for border in borders:
        hit = intersect(ray, border)
        if hit is None or not border.contains(hit):
            continue
        ahead = hit.to_space(hub).dot(direction)
        if ahead <= _AHEAD_EPS:
            continue
        if best is None or ahead < best[0]:
            best = (ahead, hit)
    if best is None:
        raise NoBorderIntersectionError(f"ray at {angle:.4f} degrees meets no border")
    return best[1]


def seed_spokes(frame: WebFrame) -> List[Spoke]:
    """Build the three spokes aimed at the anchor origins, sorted by angle."""

    seeds: List[Spoke] = []
    for origin, frame_line in zip(frame.origins, frame.frame_lines):
        end = intersect(Line(frame.hub, origin), frame_line)
        if end is None:
            raise NoBorderIntersectionError(f"ray towards {origin.as_tuple()} misses its frame line")
        if not frame_line.contains(end):
            raise DegenerateFrameError(f"spoke towards {origin.as_tuple()} ends off its frame line")
        seeds.append(Spoke(frame.hub, end, angle=end.angle_around(frame.hub)))
    seeds.sort(key=lambda spoke: spoke.angle)
    return seeds


def sample_gap_offset(
    gap: float,
    min_clearance_factor: float,
    rng: np.random.Generator,
    max_attempts: int,
) -> Tuple[float, int]:
    """Draw an offset into ``gap`` keeping ``gap * min_clearance_factor`` from both sides.

    Returns the offset together with the number of draws it took.
    """

    clearance = gap * min_clearance_factor
    for attempt in range(1, max_attempts + 1):
        offset = rand(rng, 0.0, gap)
        if offset >= clearance and gap - offset >= clearance:
            return offset, attempt
    raise PlacementExhaustedError(
        f"no spoke angle with clearance {clearance:.4f} in a {gap:.4f} degree gap "
        f"after {max_attempts} attempts"
    )


@debug_log_call(logger, log_result=False)
def place_spokes(
    frame: WebFrame,
    max_gap_degrees: float,
    min_clearance_factor: float,
    rng: np.random.Generator,
    max_attempts: int = 1000,
) -> Tuple[List[Spoke], List[PlacementEvent]]:
    """Fill every angular gap wider than ``max_gap_degrees`` with new spokes.

    The spokes are walked as a ring. A gap that is too wide receives one
    spoke and is checked again from the same position; the walk ends after
    a full lap without insertions.
    """

    borders = frame.borders
    spokes = seed_spokes(frame)
    events: List[PlacementEvent] = []

    index = 0
    quiet = 0
    while quiet < len(spokes):
        current = spokes[index]
        following = spokes[(index + 1) % len(spokes)]
        gap = angular_gap(current.angle, following.angle)
        if gap <= max_gap_degrees:
            index = (index + 1) % len(spokes)
            quiet += 1
            continue

        offset, attempts = sample_gap_offset(gap, min_clearance_factor, rng, max_attempts)
        angle = normalize_degrees(current.angle + offset)
        spoke = Spoke(frame.hub, cast_ray(frame.hub, angle, borders), angle=angle)
        if angle < current.angle:
            # wrapped past 360: keep the list sorted in [0, 360)
            spokes.insert(0, spoke)
            index += 1
        else:
            spokes.insert(index + 1, spoke)
        events.append(
            PlacementEvent(
                angle=angle,
                gap=gap,
                left_clearance=offset,
                right_clearance=gap - offset,
                attempts=attempts,
            )
        )
        logger.debug(
            "Inserted spoke at %.4f deg into %.4f deg gap after %d draw(s)", angle, gap, attempts
        )
        quiet = 0

    logger.info("Placed %d spoke(s) (%d inserted)", len(spokes), len(events))
    return spokes, events
