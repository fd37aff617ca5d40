import math
from numbers import Integral, Real

from .weave.model import WeaveParams


class ValidationError(ValueError):
    pass


def _ensure_number(name: str, value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(f'{name} must be a number (got {value!r})')
    if not math.isfinite(float(value)):
        raise ValidationError(f'{name} must be finite (got {value!r})')
    return float(value)


def _ensure_count(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise ValidationError(f'{name} must be an integer (got {value!r})')
    if value < 1:
        raise ValidationError(f'{name} must be >= 1 (got {value})')
    return int(value)


def validate_params(params: WeaveParams, width: float, height: float) -> None:
    for name, value in (('width', width), ('height', height)):
        if _ensure_number(name, value) <= 0:
            raise ValidationError(f'{name} must be positive (got {value})')

    gap = _ensure_number('max_gap_degrees', params.max_gap_degrees)
    if not 0 < gap <= 360:
        raise ValidationError(f'max_gap_degrees must be in (0, 360] (got {gap})')

    clearance = _ensure_number('min_clearance_factor', params.min_clearance_factor)
    if not 0 < clearance < 1:
        raise ValidationError(f'min_clearance_factor must be in (0, 1) (got {clearance})')

    _ensure_count('ring_count', params.ring_count)
    _ensure_count('cap_capacity', params.cap_capacity)
    _ensure_count('max_placement_attempts', params.max_placement_attempts)

    if _ensure_number('jitter_factor', params.jitter_factor) < 0:
        raise ValidationError(f'jitter_factor must be >= 0 (got {params.jitter_factor})')
    for name in ('aux_jitter', 'capture_jitter'):
        value = _ensure_number(name, getattr(params, name))
        if not 0 <= value < 1:
            raise ValidationError(f'{name} must be in [0, 1) (got {value})')
