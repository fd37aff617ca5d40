from .primitives import AuxMark, Line, Spoke, Vector, intersect, percent_of
from .weave import (
    generate,
    generate_with_reseed,
    angular_gaps,
    WeaveParams,
    WebGeometry,
    WebFrame,
    Segment,
    SegmentRole,
    PlacementEvent,
    WeaveError,
    DegenerateFrameError,
    PlacementExhaustedError,
    NoBorderIntersectionError,
)
from .validate import validate_params, ValidationError
from .tikz_codegen import generate_tikz_code, generate_tikz_document

__all__ = [
    'AuxMark',
    'Line',
    'Spoke',
    'Vector',
    'intersect',
    'percent_of',
    'validate_params',
    'ValidationError',
    'generate',
    'generate_with_reseed',
    'angular_gaps',
    'WeaveParams',
    'WebGeometry',
    'WebFrame',
    'Segment',
    'SegmentRole',
    'PlacementEvent',
    'WeaveError',
    'DegenerateFrameError',
    'PlacementExhaustedError',
    'NoBorderIntersectionError',
    'generate_tikz_code',
    'generate_tikz_document',
]
