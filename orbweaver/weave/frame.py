"""Anchor triangle, hub and border construction."""

from __future__ import annotations

import logging

import numpy as np

from ..logging_utils import debug_log_call
from ..primitives import Line, Vector, intersect
from .model import DegenerateFrameError, WebFrame
from .utils import clamp, fuzz, rand

logger = logging.getLogger(__name__)

_DEGENERATE_EPS = 1e-9

# Fractions of the canvas where the three anchors are placed before jitter.
TOP_MARGIN = 0.1
SIDE_MARGIN = 0.1
BOTTOM_MARGIN = 0.9


def _bisector(vertex: Vector, toward_a: Vector, toward_b: Vector) -> Line:
    direction = (toward_a - vertex).unit() + (toward_b - vertex).unit()
    if direction.magnitude() <= _DEGENERATE_EPS:
        raise DegenerateFrameError(f"bisector at {vertex.as_tuple()} has no direction")
    return Line(vertex, vertex + direction)


def bisector_intersection(top_a: Vector, top_b: Vector, bottom: Vector) -> Vector:
    """Intersect the angle bisectors at ``top_a`` and ``top_b``.

    For a proper triangle this is its incenter. Collapsed triangles raise
    :class:`DegenerateFrameError`.
    """

    for first, second in ((top_a, top_b), (top_a, bottom), (top_b, bottom)):
        if first.distance_to(second) <= _DEGENERATE_EPS:
            raise DegenerateFrameError("anchor origins coincide")
    ab = top_b - top_a
    ac = bottom - top_a
    area2 = ab.x * ac.y - ab.y * ac.x
    if abs(area2) <= _DEGENERATE_EPS * max(ab.magnitude() * ac.magnitude(), 1.0):
        raise DegenerateFrameError("anchor origins are collinear")

    hit = intersect(_bisector(top_a, bottom, top_b), _bisector(top_b, bottom, top_a))
    if hit is None:
        raise DegenerateFrameError("anchor bisectors are parallel")
    return hit


def distance_to_edge(point: Vector, edge: Line) -> float:
    """Perpendicular distance from ``point`` to the infinite line through ``edge``."""

    direction = edge.direction()
    foot = intersect(edge, Line(point, point + Vector(-direction.y, direction.x)))
    if foot is None:
        raise DegenerateFrameError("edge has zero length")
    return point.distance_to(foot)


def _side_of(line: Line, point: Vector) -> float:
    direction = line.end - line.start
    rel = point - line.start
    return direction.x * rel.y - direction.y * rel.x


def _strictly_inside(point: Vector, top_a: Vector, top_b: Vector, bottom: Vector) -> bool:
    sides = [
        _side_of(Line(top_a, top_b), point),
        _side_of(Line(top_b, bottom), point),
        _side_of(Line(bottom, top_a), point),
    ]
    return all(side > 0.0 for side in sides) or all(side < 0.0 for side in sides)


def _jitter_along(side: Line, crossing: Vector, rng: np.random.Generator, jitter: float) -> Vector:
    fraction = clamp(fuzz(crossing.component_of(side), rng, jitter), 0.0, 1.0)
    return side.point_at(fraction)


def _corner_frame(
    origin: Vector,
    hub: Vector,
    radius: float,
    first_far: Vector,
    second_far: Vector,
    rng: np.random.Generator,
    jitter: float,
) -> Line:
    axis = (origin - hub).unit()
    foot = hub + axis.scale(radius)
    perpendicular = Line(foot, foot + Vector(-axis.y, axis.x))

    first_side = Line(origin, first_far)
    second_side = Line(origin, second_far)
    first_hit = intersect(perpendicular, first_side)
    second_hit = intersect(perpendicular, second_side)
    if first_hit is None or second_hit is None:
        raise DegenerateFrameError(f"corner at {origin.as_tuple()} cannot be cut")

    return Line(
        _jitter_along(first_side, first_hit, rng, jitter),
        _jitter_along(second_side, second_hit, rng, jitter),
    )


@debug_log_call(logger)
def build_frame(
    width: float,
    height: float,
    rng: np.random.Generator,
    jitter_factor: float = 0.1,
) -> WebFrame:
    """Place the anchors, locate the hub and cut the three frame lines."""

    top_a = Vector(fuzz(width * SIDE_MARGIN, rng, jitter_factor), fuzz(height * TOP_MARGIN, rng, jitter_factor))
    top_b = Vector(
        fuzz(width * (1.0 - SIDE_MARGIN), rng, jitter_factor),
        fuzz(height * TOP_MARGIN, rng, jitter_factor),
    )
    bottom = Vector(fuzz(width * 0.5, rng, jitter_factor), fuzz(height * BOTTOM_MARGIN, rng, jitter_factor))

    bridge = Line(top_a, top_b)
    anchor_a = Line(top_a, bottom)
    anchor_b = Line(top_b, bottom)

    incenter = bisector_intersection(top_a, top_b, bottom)
    inradius = distance_to_edge(incenter, bridge)
    hub = incenter + Vector(
        rand(rng, -1.0, 1.0) * jitter_factor * inradius,
        rand(rng, -1.0, 1.0) * jitter_factor * inradius,
    )

    if not _strictly_inside(hub, top_a, top_b, bottom):
        raise DegenerateFrameError(f"hub {hub.as_tuple()} lies outside the anchor triangle")

    radius = min(distance_to_edge(hub, edge) for edge in (bridge, anchor_a, anchor_b))
    if radius <= _DEGENERATE_EPS:
        raise DegenerateFrameError("hub sits on a triangle edge")
    logger.debug("incenter=%s inradius=%.4f hub=%s radius=%.4f", incenter.as_tuple(), inradius, hub.as_tuple(), radius)

    frame_a = _corner_frame(top_a, hub, radius, top_b, bottom, rng, jitter_factor)
    frame_b = _corner_frame(top_b, hub, radius, top_a, bottom, rng, jitter_factor)
    frame_c = _corner_frame(bottom, hub, radius, top_a, top_b, rng, jitter_factor)
    # each frame line must separate the hub from the corner it cuts
    for origin, frame_line in ((top_a, frame_a), (top_b, frame_b), (bottom, frame_c)):
        if _side_of(frame_line, hub) * _side_of(frame_line, origin) >= 0.0:
            raise DegenerateFrameError(f"frame line at {origin.as_tuple()} does not cut the corner off the hub")

    frame = WebFrame(
        top_a=top_a,
        top_b=top_b,
        bottom=bottom,
        hub=hub,
        bridge=bridge,
        anchor_a=anchor_a,
        anchor_b=anchor_b,
        frame_a=frame_a,
        frame_b=frame_b,
        frame_c=frame_c,
        branches=(Line(top_a, hub), Line(top_b, hub), Line(bottom, hub)),
        radius=radius,
    )
    logger.info(
        "Built frame for %gx%g canvas: hub=(%.2f, %.2f) radius=%.2f",
        width,
        height,
        hub.x,
        hub.y,
        radius,
    )
    return frame
