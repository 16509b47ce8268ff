from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from .vector_math import VectorLike, deltas, standard_angle_deg


@dataclass(frozen=True, slots=True)
class ResultantVector:
    """Vector sum in the engineering convention (up is positive)."""

    x: float
    y: float
    magnitude: float
    angle: float  # degrees, [0, 360)

    @classmethod
    def from_components(cls, x: float, y: float) -> "ResultantVector":
        return cls(x=float(x), y=float(y), magnitude=math.hypot(x, y), angle=standard_angle_deg(x, y))

    def components(self) -> tuple[float, float]:
        return (self.x, self.y)


ZERO_RESULTANT = ResultantVector(x=0.0, y=0.0, magnitude=0.0, angle=0.0)


def compute_resultant(vectors: Iterable[VectorLike]) -> ResultantVector:
    total_x = 0.0
    total_y = 0.0
    for v in vectors:
        dx, dy = deltas(v.start, v.end)
        total_x += dx
        total_y += dy
    return ResultantVector.from_components(total_x, total_y)
