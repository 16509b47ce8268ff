"""Coordinate and trigonometry helpers for force vectors.

Everything here is a pure function of a vector's endpoints and its chosen
reference axis. Screen coordinates (Y grows downward) are converted to the
engineering convention (up is positive) before any trigonometry:

* ``dx = end.x - start.x`` and ``dy = start.y - end.y``
* ``angle_standard`` is measured counter-clockwise from +X, in [0, 360)
* ``quadrant`` follows the signs of dx/dy, with zero treated as positive
* ``angle_from_reference`` is the acute angle to the chosen reference axis

Component formulas shown to the learner take their sign from dx/dy rather
than from the trig function, since the reference angle is always folded into
the first quadrant.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

from .vectors import AngleReference, Point


class VectorLike(Protocol):
    @property
    def start(self) -> Point: ...

    @property
    def end(self) -> Point: ...

    @property
    def angle_reference(self) -> AngleReference: ...


@dataclass(frozen=True, slots=True)
class VectorComponents:
    dx: float
    dy: float
    magnitude: float
    angle_standard: float
    quadrant: int
    angle_reference: AngleReference
    angle_from_reference: float
    x_direction: str
    y_direction: str
    x_formula: str
    y_formula: str
    vector_id: int | None = None

    @property
    def formulas(self) -> tuple[str, str]:
        return (self.x_formula, self.y_formula)


@dataclass(frozen=True, slots=True)
class ComponentCheck:
    vector_id: int | None
    quadrant: int
    angle_reference: AngleReference
    angle_from_reference: float
    actual_x: float
    actual_y: float
    expected_x: float
    expected_y: float
    error_x: float
    error_y: float
    is_accurate: bool


def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x <= lo else hi if x >= hi else float(x)


def round_half_up(x: float) -> int:
    # Display rounding; Python's round() would send 0.5 to the even neighbour.
    return int(math.floor(x + 0.5))


def deltas(start: Point, end: Point) -> tuple[float, float]:
    return (end.x - start.x, start.y - end.y)


def normalize_angle_deg(angle: float) -> float:
    """Map any angle in degrees into [0, 360)."""

    a = angle + 360.0 if angle < 0 else angle
    a = a % 360.0
    # -1e-15 + 360.0 rounds to 360.0, which the modulo already folds to 0.
    return 0.0 if a >= 360.0 else a


def standard_angle_deg(dx: float, dy: float) -> float:
    # atan2(0, 0) == 0, so a zero-length vector reports 0 degrees.
    return normalize_angle_deg(math.degrees(math.atan2(dy, dx)))


def quadrant_of(dx: float, dy: float) -> int:
    if dx >= 0 and dy >= 0:
        return 1
    if dx < 0 and dy >= 0:
        return 2
    if dx < 0:
        return 3
    return 4


def angle_from_reference(dx: float, dy: float, reference: AngleReference) -> float:
    """Acute angle between a vector and its reference axis, in [0, 90].

    Taken from the absolute components, so it always agrees with
    ``quadrant_of`` even when ``angle_standard`` has rounded onto an axis.
    A vector lying on the axis perpendicular to its reference reports 90,
    which keeps ``reconstruct_components`` exact; a zero-length vector
    reports 0.
    """

    ax, ay = abs(dx), abs(dy)
    if reference is AngleReference.X_AXIS:
        return math.degrees(math.atan2(ay, ax))
    return math.degrees(math.atan2(ax, ay))


def component_formulas(
    *,
    dx: float,
    dy: float,
    magnitude: float,
    angle_from_ref: float,
    reference: AngleReference,
) -> tuple[str, str]:
    x_sign = "+" if dx >= 0 else "-"
    y_sign = "+" if dy >= 0 else "-"
    x_arrow = "→" if dx >= 0 else "←"
    y_arrow = "↑" if dy >= 0 else "↓"
    f = round_half_up(magnitude)
    theta = round_half_up(angle_from_ref)
    ax = round_half_up(abs(dx))
    ay = round_half_up(abs(dy))

    x_fn, y_fn = ("cos", "sin") if reference is AngleReference.X_AXIS else ("sin", "cos")
    return (
        f"Fx = {x_sign} {f} {x_fn} {theta}° = {ax} N {x_arrow}",
        f"Fy = {y_sign} {f} {y_fn} {theta}° = {ay} N {y_arrow}",
    )


def compute_vector_components(vector: VectorLike) -> VectorComponents:
    dx, dy = deltas(vector.start, vector.end)
    magnitude = math.hypot(dx, dy)
    angle = standard_angle_deg(dx, dy)
    quadrant = quadrant_of(dx, dy)
    reference = AngleReference(vector.angle_reference)
    from_ref = angle_from_reference(dx, dy, reference)
    x_formula, y_formula = component_formulas(
        dx=dx,
        dy=dy,
        magnitude=magnitude,
        angle_from_ref=from_ref,
        reference=reference,
    )
    return VectorComponents(
        dx=dx,
        dy=dy,
        magnitude=magnitude,
        angle_standard=angle,
        quadrant=quadrant,
        angle_reference=reference,
        angle_from_reference=from_ref,
        x_direction="→" if dx >= 0 else "←",
        y_direction="↑" if dy >= 0 else "↓",
        x_formula=x_formula,
        y_formula=y_formula,
        vector_id=getattr(vector, "id", None),
    )


def reconstruct_components(
    magnitude: float,
    angle_from_ref: float,
    quadrant: int,
    reference: AngleReference,
) -> tuple[float, float]:
    """Inverse of the polar decomposition: signs come from the quadrant."""

    if quadrant not in (1, 2, 3, 4):
        raise ValueError(f"quadrant must be 1-4, got {quadrant}")
    rad = math.radians(angle_from_ref)
    if reference is AngleReference.X_AXIS:
        ax, ay = magnitude * math.cos(rad), magnitude * math.sin(rad)
    else:
        ax, ay = magnitude * math.sin(rad), magnitude * math.cos(rad)
    x_sign = 1.0 if quadrant in (1, 4) else -1.0
    y_sign = 1.0 if quadrant in (1, 2) else -1.0
    return (x_sign * ax, y_sign * ay)


def verify_components(vector: VectorLike, *, tolerance: float = 1.0) -> ComponentCheck:
    """Rebuild dx/dy from the displayed polar form and compare with the truth."""

    c = compute_vector_components(vector)
    ex, ey = reconstruct_components(c.magnitude, c.angle_from_reference, c.quadrant, c.angle_reference)
    err_x = abs(ex - c.dx)
    err_y = abs(ey - c.dy)
    return ComponentCheck(
        vector_id=c.vector_id,
        quadrant=c.quadrant,
        angle_reference=c.angle_reference,
        angle_from_reference=c.angle_from_reference,
        actual_x=c.dx,
        actual_y=c.dy,
        expected_x=ex,
        expected_y=ey,
        error_x=err_x,
        error_y=err_y,
        is_accurate=err_x < tolerance and err_y < tolerance,
    )
