"""Core data structures for the weaving pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..primitives import Line, Spoke, Vector


class WeaveError(RuntimeError):
    """Base class for failures that abort a weaving run."""


class DegenerateFrameError(WeaveError):
    """Raised when the anchor triangle collapses and has no usable incenter."""


class PlacementExhaustedError(WeaveError):
    """Raised when a bounded search (spoke resampling, spiral stepping) gives up."""


class NoBorderIntersectionError(WeaveError):
    """Raised when a ray from the hub meets no border line ahead of it."""


class SegmentRole(str, Enum):
    BRIDGE = "bridge"
    ANCHOR_A = "anchorA"
    ANCHOR_B = "anchorB"
    FRAME_A = "frameA"
    FRAME_B = "frameB"
    FRAME_C = "frameC"
    BRANCH = "branch"
    SPOKE = "spoke"
    AUXILIARY = "auxiliary"
    CAPTURE = "capture"


_CAMEL_ALIASES = {
    "maxGapDegrees": "max_gap_degrees",
    "minClearanceFactor": "min_clearance_factor",
    "ringCount": "ring_count",
    "capCapacity": "cap_capacity",
    "jitterFactor": "jitter_factor",
    "auxJitter": "aux_jitter",
    "captureJitter": "capture_jitter",
    "maxPlacementAttempts": "max_placement_attempts",
}


@dataclass(frozen=True)
class WeaveParams:
    """Tunable options for a single weave."""

    max_gap_degrees: float = 30.0
    min_clearance_factor: float = 0.25
    ring_count: int = 5
    cap_capacity: int = 2
    jitter_factor: float = 0.1
    aux_jitter: float = 0.05
    capture_jitter: float = 0.05
    max_placement_attempts: int = 1000

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "WeaveParams":
        """Build params from snake_case or camelCase keys."""

        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            name = _CAMEL_ALIASES.get(key, key)
            if name not in known:
                raise KeyError(f"unknown weave parameter '{key}'")
            values[name] = value
        return cls(**values)

    def replace(self, **changes: Any) -> "WeaveParams":
        merged = self.to_dict()
        merged.update({key: value for key, value in changes.items() if value is not None})
        return WeaveParams(**merged)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Segment:
    role: SegmentRole
    start: Vector
    end: Vector

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role.value,
            "start": [self.start.x, self.start.y],
            "end": [self.end.x, self.end.y],
        }


@dataclass(frozen=True)
class WebFrame:
    """Anchor triangle, hub and the six border lines that bound every spoke."""

    top_a: Vector
    top_b: Vector
    bottom: Vector
    hub: Vector
    bridge: Line
    anchor_a: Line
    anchor_b: Line
    frame_a: Line
    frame_b: Line
    frame_c: Line
    branches: Tuple[Line, Line, Line]
    radius: float

    @property
    def origins(self) -> Tuple[Vector, Vector, Vector]:
        return (self.top_a, self.top_b, self.bottom)

    @property
    def frame_lines(self) -> Tuple[Line, Line, Line]:
        return (self.frame_a, self.frame_b, self.frame_c)

    @property
    def borders(self) -> Tuple[Line, ...]:
        return (self.bridge, self.anchor_a, self.anchor_b, self.frame_a, self.frame_b, self.frame_c)

    def segments(self) -> List[Segment]:
        out = [
            Segment(SegmentRole.BRIDGE, self.bridge.start, self.bridge.end),
            Segment(SegmentRole.ANCHOR_A, self.anchor_a.start, self.anchor_a.end),
            Segment(SegmentRole.ANCHOR_B, self.anchor_b.start, self.anchor_b.end),
            Segment(SegmentRole.FRAME_A, self.frame_a.start, self.frame_a.end),
            Segment(SegmentRole.FRAME_B, self.frame_b.start, self.frame_b.end),
            Segment(SegmentRole.FRAME_C, self.frame_c.start, self.frame_c.end),
        ]
        out.extend(Segment(SegmentRole.BRANCH, branch.start, branch.end) for branch in self.branches)
        return out


@dataclass(frozen=True)
class PlacementEvent:
    """Record of one spoke inserted into an angular gap."""

    angle: float
    gap: float
    left_clearance: float
    right_clearance: float
    attempts: int


@dataclass
class AuxiliaryTrace:
    segments: List[Segment]
    terminal_index: int
    direction: int
    start_index: int
    cumulative: List[float] = field(default_factory=list)


@dataclass
class CaptureTrace:
    segments: List[Segment]
    levels: int
    dropped: int = 0


@dataclass(frozen=True)
class WebGeometry:
    """Everything produced by one weave, in drawing order."""

    width: float
    height: float
    seed: Optional[int]
    params: WeaveParams
    frame: WebFrame
    spokes: Tuple[Spoke, ...]
    segments: Tuple[Segment, ...]
    placement_events: Tuple[PlacementEvent, ...]
    aux_trace: AuxiliaryTrace
    capture_trace: CaptureTrace

    @property
    def hub(self) -> Vector:
        return self.frame.hub

    @property
    def origins(self) -> Tuple[Vector, Vector, Vector]:
        return self.frame.origins

    def segments_by_role(self, role: SegmentRole) -> List[Segment]:
        return [segment for segment in self.segments if segment.role == role]

    def role_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {role.value: 0 for role in SegmentRole}
        for segment in self.segments:
            counts[segment.role.value] += 1
        return counts

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "seed": self.seed,
            "params": self.params.to_dict(),
            "hub": [self.hub.x, self.hub.y],
            "origins": [[p.x, p.y] for p in self.origins],
            "spokes": [
                {
                    "angle": spoke.angle,
                    "end": [spoke.end.x, spoke.end.y],
                    "aux_points": [[m.point.x, m.point.y] for m in spoke.aux_points],
                    "cap_points": [[p.x, p.y] for p in spoke.cap_points],
                }
                for spoke in self.spokes
            ],
            "segments": [segment.to_dict() for segment in self.segments],
        }


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
]
