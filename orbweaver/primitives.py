"""Planar vector and line primitives shared by every weaving stage."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

CONTAINS_TOL = 1e-5
PARALLEL_EPS = 1e-12


def rad_to_deg(angle: float) -> float:
    return angle * (180.0 / math.pi)


def deg_to_rad(angle: float) -> float:
    return angle * (math.pi / 180.0)


def normalize_degrees(angle: float) -> float:
    """Fold ``angle`` into ``[0, 360)``."""

    folded = angle % 360.0
    # -1e-17 % 360.0 evaluates to 360.0
    if folded >= 360.0:
        return 0.0
    return folded


@dataclass(frozen=True)
class Vector:
    """Immutable point or displacement in the canvas plane."""

    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector":
        return self.scale(scalar)

    __rmul__ = __mul__

    def scale(self, scalar: float) -> "Vector":
        return Vector(self.x * scalar, self.y * scalar)

    def dot(self, other: "Vector") -> float:
        return self.x * other.x + self.y * other.y

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def unit(self) -> "Vector":
        mag = self.magnitude()
        if mag <= PARALLEL_EPS:
            raise ValueError("cannot normalize a zero-length vector")
        return Vector(self.x / mag, self.y / mag)

    def to_space(self, origin: "Vector") -> "Vector":
        """Express this vector in a frame whose origin is ``origin``."""

        return Vector(self.x - origin.x, self.y - origin.y)

    def distance_to(self, point: "Vector") -> float:
        return math.hypot(point.x - self.x, point.y - self.y)

    def angle_around(self, origin: "Vector", degrees: bool = True) -> float:
        """Return the absolute angle of this point around ``origin``.

        The result lies in ``[0, 360)`` degrees (or ``[0, 2*pi)`` radians),
        measured from the positive x axis towards the positive y axis.
        """

        rel = self.to_space(origin)
        if rel.x == 0.0:
            if rel.y > 0.0:
                angle = 90.0
            elif rel.y < 0.0:
                angle = 270.0
            else:
                angle = 0.0
        else:
            base = rad_to_deg(math.atan(rel.y / rel.x))
            if rel.x < 0.0:
                angle = base + 180.0
            elif rel.y < 0.0:
                angle = base + 360.0
            else:
                angle = base
        angle = normalize_degrees(angle)
        return angle if degrees else deg_to_rad(angle)

    def component_of(self, line: "Line") -> float:
        """Scalar projection onto ``line`` as a fraction of its length."""

        direction = line.end.to_space(line.start)
        denom = direction.dot(direction)
        if denom <= PARALLEL_EPS:
            return 0.0
        return self.to_space(line.start).dot(direction) / denom

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


def from_angle(origin: Vector, angle_degrees: float, distance: float = 1.0) -> Vector:
    """Return the point ``distance`` away from ``origin`` along ``angle_degrees``."""

    theta = deg_to_rad(angle_degrees)
    return Vector(origin.x + math.cos(theta) * distance, origin.y + math.sin(theta) * distance)


def _standard_form(line: "Line") -> Tuple[float, float, float]:
    # a*x + b*y = c
    a = line.end.y - line.start.y
    b = line.start.x - line.end.x
    c = a * line.start.x + b * line.start.y
    return a, b, c


def intersect(first: "Line", second: "Line") -> Optional[Vector]:
    """Intersect the infinite lines through ``first`` and ``second``.

    Returns ``None`` when the lines are parallel or coincident.
    """

    a1, b1, c1 = _standard_form(first)
    a2, b2, c2 = _standard_form(second)
    denom = a1 * b2 - a2 * b1
    if abs(denom) <= PARALLEL_EPS:
        return None
    x = (b2 * c1 - b1 * c2) / denom
    y = (a1 * c2 - a2 * c1) / denom
    return Vector(x, y)


@dataclass(frozen=True)
class Line:
    """Directed segment from ``start`` to ``end`` with a cached length."""

    start: Vector
    end: Vector
    length: float = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "length", self.end.to_space(self.start).magnitude())

    def direction(self) -> Vector:
        return self.end.to_space(self.start)

    def intersect(self, other: "Line") -> Optional[Vector]:
        return intersect(self, other)

    def point_at(self, position: float) -> Vector:
        """Point at affine parameter ``position`` (0 is ``start``, 1 is ``end``)."""

        return self.start + self.direction().scale(position)

    def point_at_abs(self, distance: float) -> Vector:
        """Point ``distance`` canvas units away from ``start`` along the line."""

        if self.length <= PARALLEL_EPS:
            return self.start
        return self.point_at(distance / self.length)

    def contains(self, point: Vector, extended: bool = False) -> bool:
        """Return ``True`` if ``point`` lies on the segment (or its extension).

        Endpoints are inclusive; distances are compared with an absolute
        tolerance of ``1e-5``.
        """

        to_start = self.start.distance_to(point)
        to_end = point.distance_to(self.end)
        if math.isclose(to_start + to_end, self.length, rel_tol=0.0, abs_tol=CONTAINS_TOL):
            return True
        if not extended:
            return False
        return math.isclose(abs(to_start - to_end), self.length, rel_tol=0.0, abs_tol=CONTAINS_TOL)

    def line_value_at(self, point: Vector) -> Optional[float]:
        """Inverse of :meth:`point_at`; ``None`` when ``point`` is off the segment."""

        if not self.contains(point):
            return None
        if self.length <= PARALLEL_EPS:
            return 0.0
        return self.start.distance_to(point) / self.length

    def reverse(self) -> "Line":
        return Line(self.end, self.start)


def percent_of(point: Vector, axis_line: Line, anchor_line: Line) -> Optional[float]:
    """Position of ``point`` along ``axis_line`` when slid parallel to ``anchor_line``.

    ``0`` maps to the start of ``axis_line`` and ``1`` to its end. The value
    is rounded to four decimals. ``None`` is returned when ``anchor_line``
    is parallel to ``axis_line`` and no such position exists.
    """

    measuring = Line(point, point + anchor_line.direction())
    hit = measuring.intersect(axis_line)
    if hit is None:
        return None
    return round(hit.component_of(axis_line), 4)


@dataclass(frozen=True)
class AuxMark:
    """Auxiliary spiral crossing recorded on a spoke."""

    distance: float
    point: Vector


@dataclass(frozen=True)
class Spoke(Line):
    """Radial thread from the hub to the border.

    ``angle`` is fixed when the spoke is created. ``aux_points`` keeps the
    auxiliary spiral crossings in recording order and ``cap_points`` the
    capture spiral crossings in generation order; both only ever grow.
    """

    angle: float = 0.0
    aux_points: List[AuxMark] = field(default_factory=list, compare=False, repr=False)
    cap_points: List[Vector] = field(default_factory=list, compare=False, repr=False)

    def record_aux(self, distance: float) -> Vector:
        point = self.point_at_abs(distance)
        self.aux_points.append(AuxMark(distance, point))
        return point

    def sorted_aux_marks(self) -> List[AuxMark]:
        return sorted(self.aux_points, key=lambda mark: mark.distance)

    def aux_zone(self, level: int) -> Optional[Tuple[float, float]]:
        """Return ``(inner, outer)`` fractions bounding auxiliary zone ``level``."""

        marks = self.sorted_aux_marks()
        if level < 0 or level + 1 >= len(marks) or self.length <= PARALLEL_EPS:
            return None
        inner = marks[level].distance / self.length
        outer = marks[level + 1].distance / self.length
        return inner, outer


__all__ = [
    "AuxMark",
    "CONTAINS_TOL",
    "Line",
    "Spoke",
    "Vector",
    "deg_to_rad",
    "from_angle",
    "intersect",
    "normalize_degrees",
    "percent_of",
    "rad_to_deg",
]
