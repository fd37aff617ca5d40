"""Auxiliary spiral used to mark evenly spaced reference points on the spokes."""

from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

from ..logging_utils import debug_log_call
from ..primitives import Spoke
from .model import AuxiliaryTrace, PlacementExhaustedError, Segment, SegmentRole
from .utils import fuzz, rand_int, random_direction

logger = logging.getLogger(__name__)


def step_limit(spokes: Sequence[Spoke], ring_count: int) -> int:
    """Upper bound on spiral steps before the tracer must have reached a spoke end.

    The cumulative distance passes the shortest spoke after at most
    ``ring_count - 1`` laps, and the next lap visits that spoke.
    """

    return len(spokes) * (ring_count + 2)


@debug_log_call(logger, log_result=False)
def trace_auxiliary_spiral(
    spokes: Sequence[Spoke],
    ring_count: int,
    rng: np.random.Generator,
    jitter: float = 0.05,
) -> AuxiliaryTrace:
    """Spiral outwards across ``spokes`` recording one mark per crossing.

    The spiral starts one ring width out on a random spoke and moves by a
    fixed increment per spoke until it reaches the end of the spoke it is
    on, which becomes the terminal spoke.
    """

    if not spokes:
        raise ValueError("auxiliary spiral needs at least one spoke")

    count = len(spokes)
    reference = min(spoke.length for spoke in spokes)
    if reference <= 0.0:
        raise PlacementExhaustedError("shortest spoke has zero length")
    ring_width = 1.0 / ring_count
    increment = ring_width * reference / count

    direction = random_direction(rng)
    index = rand_int(rng, 0, count)
    start_index = index
    distance = ring_width * reference
    previous = spokes[index].record_aux(min(distance, spokes[index].length))

    segments: List[Segment] = []
    cumulative: List[float] = [distance]
    limit = step_limit(spokes, ring_count)

    for _ in range(limit):
        index = (index + direction) % count
        spoke = spokes[index]
        distance += increment
        jittered = min(fuzz(distance, rng, jitter), spoke.length)
        point = spoke.record_aux(jittered)
        segments.append(Segment(SegmentRole.AUXILIARY, previous, point))
        cumulative.append(distance)
        previous = point
        if distance >= spoke.length:
            logger.info(
                "Auxiliary spiral finished after %d step(s) on spoke %d (direction=%+d)",
                len(segments),
                index,
                direction,
            )
            return AuxiliaryTrace(
                segments=segments,
                terminal_index=index,
                direction=direction,
                start_index=start_index,
                cumulative=cumulative,
            )

    raise PlacementExhaustedError(f"auxiliary spiral did not reach a border within {limit} steps")
