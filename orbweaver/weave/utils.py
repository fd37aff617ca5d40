"""Random-stream and angular helpers shared across weaving stages."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..primitives import Spoke


def clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def rand(rng: np.random.Generator, low: float, high: float) -> float:
    """Uniform float in ``[low, high)``."""

    return float(rng.uniform(low, high))


def rand_int(rng: np.random.Generator, low: int, high: int) -> int:
    """Uniform integer in ``[low, high)``."""

    return int(rng.integers(low, high))


def fuzz(value: float, rng: np.random.Generator, factor: float = 0.1) -> float:
    """Scale ``value`` by a uniform amount in ``[-factor, factor)``.

    Always consumes exactly one draw so that a zero ``factor`` leaves the
    rest of the stream untouched.
    """

    spread = rng.uniform(-1.0, 1.0)
    return value + value * factor * float(spread)


def random_direction(rng: np.random.Generator) -> int:
    """Return ``1`` or ``-1`` with equal probability."""

    return 1 if rng.random() < 0.5 else -1


def angular_gap(first: float, second: float) -> float:
    """Counter-clockwise gap from ``first`` to ``second`` in ``[0, 360)``."""

    return (second - first + 360.0) % 360.0


def angular_gaps(spokes: Sequence[Spoke]) -> np.ndarray:
    """Circular gaps between consecutive spokes sorted by angle."""

    if not spokes:
        return np.zeros(0, dtype=float)
    angles = np.array([spoke.angle for spoke in spokes], dtype=float)
    if angles.size == 1:
        return np.array([360.0], dtype=float)
    wrapped = np.append(angles[1:], angles[0] + 360.0)
    return wrapped - angles
