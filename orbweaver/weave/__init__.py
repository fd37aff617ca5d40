"""Weaving façade running the frame, spoke and spiral stages in order."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from ..validate import validate_params
from .aux_spiral import trace_auxiliary_spiral
from .capture_spiral import trace_capture_spiral
from .frame import build_frame
from .model import (
    AuxiliaryTrace,
    CaptureTrace,
    DegenerateFrameError,
    NoBorderIntersectionError,
    PlacementEvent,
    PlacementExhaustedError,
    Segment,
    SegmentRole,
    WeaveError,
    WeaveParams,
    WebFrame,
    WebGeometry,
)
from .spokes import place_spokes
from .utils import angular_gaps

logger = logging.getLogger(__name__)


def generate(
    width: float,
    height: float,
    params: Optional[WeaveParams] = None,
    seed: Optional[int] = None,
) -> WebGeometry:
    """Weave one web on a ``width`` x ``height`` canvas.

    All randomness comes from ``numpy.random.default_rng(seed)``; the same
    inputs always produce the same geometry. Any :class:`WeaveError`
    aborts the run and no partial geometry is returned.
    """

    params = params or WeaveParams()
    validate_params(params, width, height)
    rng = np.random.default_rng(seed)
    logger.info("Weaving %gx%g web with seed=%s params=%s", width, height, seed, params.to_dict())

    frame = build_frame(width, height, rng, params.jitter_factor)
    spokes, events = place_spokes(
        frame,
        params.max_gap_degrees,
        params.min_clearance_factor,
        rng,
        max_attempts=params.max_placement_attempts,
    )
    aux = trace_auxiliary_spiral(spokes, params.ring_count, rng, jitter=params.aux_jitter)
    capture = trace_capture_spiral(
        spokes,
        aux.terminal_index,
        -aux.direction,
        params.cap_capacity,
        rng,
        jitter=params.capture_jitter,
    )

    segments = frame.segments()
    segments.extend(Segment(SegmentRole.SPOKE, spoke.start, spoke.end) for spoke in spokes)
    segments.extend(aux.segments)
    segments.extend(capture.segments)

    geometry = WebGeometry(
        width=float(width),
        height=float(height),
        seed=seed,
        params=params,
        frame=frame,
        spokes=tuple(spokes),
        segments=tuple(segments),
        placement_events=tuple(events),
        aux_trace=aux,
        capture_trace=capture,
    )
    logger.info(
        "Woven web: %d spoke(s), max gap %.3f deg, %d segment(s)",
        len(spokes),
        float(angular_gaps(spokes).max()),
        len(segments),
    )
    return geometry


def generate_with_reseed(
    width: float,
    height: float,
    params: Optional[WeaveParams] = None,
    seed: Optional[int] = None,
    attempts: int = 1,
) -> WebGeometry:
    """Call :func:`generate`, retrying with ``seed + attempt`` after a :class:`WeaveError`."""

    attempts = max(1, int(attempts))
    last_error: Optional[WeaveError] = None
    for attempt in range(attempts):
        attempt_seed = None if seed is None else seed + attempt
        try:
            return generate(width, height, params, attempt_seed)
        except WeaveError as exc:
            logger.warning("Weave attempt %d/%d with seed=%s failed: %s", attempt + 1, attempts, attempt_seed, exc)
            last_error = exc
    assert last_error is not None
    raise last_error


__all__ = [
    "AuxiliaryTrace",
    "CaptureTrace",
    "DegenerateFrameError",
    "NoBorderIntersectionError",
    "PlacementEvent",
    "PlacementExhaustedError",
    "Segment",
    "SegmentRole",
    "WeaveError",
    "WeaveParams",
    "WebFrame",
    "WebGeometry",
    "angular_gaps",
    "build_frame",
    "generate",
    "generate_with_reseed",
    "place_spokes",
    "trace_auxiliary_spiral",
    "trace_capture_spiral",
]
