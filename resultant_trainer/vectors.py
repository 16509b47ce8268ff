from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .config import SimulatorConfig


class AngleReference(StrEnum):
    X_AXIS = "x"
    Y_AXIS = "y"

    def toggled(self) -> "AngleReference":
        return AngleReference.Y_AXIS if self is AngleReference.X_AXIS else AngleReference.X_AXIS


@dataclass(frozen=True, slots=True)
class Point:
    """Canvas point in screen coordinates (Y grows downward)."""

    x: float
    y: float


@dataclass(slots=True)
class Vector:
    id: int
    start: Point
    end: Point
    angle_reference: AngleReference = AngleReference.X_AXIS
    color: str = "#3b82f6"

    @property
    def dx(self) -> float:
        return self.end.x - self.start.x

    @property
    def dy(self) -> float:
        # Screen Y is flipped so that "up" is positive.
        return self.start.y - self.end.y

    def move_head(self, point: Point) -> None:
        self.end = point

    def move_tail(self, point: Point) -> None:
        """Translate the whole vector so its tail sits at ``point``."""

        sx = self.end.x - self.start.x
        sy = self.end.y - self.start.y
        self.start = point
        self.end = Point(point.x + sx, point.y + sy)

    def toggle_reference(self) -> AngleReference:
        self.angle_reference = self.angle_reference.toggled()
        return self.angle_reference


VECTOR_COLORS: tuple[str, ...] = ("#3b82f6", "#10b981", "#8b5cf6", "#f97316")

# (id, end offset from canvas centre in screen px, reference axis)
_PRESETS: tuple[tuple[int, tuple[float, float], AngleReference], ...] = (
    (1, (192.0, -166.0), AngleReference.X_AXIS),
    (2, (-175.0, -102.0), AngleReference.Y_AXIS),
    (3, (-216.0, 91.0), AngleReference.X_AXIS),
    (4, (165.0, 130.0), AngleReference.Y_AXIS),
)


def default_vectors(config: SimulatorConfig | None = None) -> dict[int, Vector]:
    """Fresh copies of the four preset vectors, keyed by id in preset order."""

    cfg = config or SimulatorConfig()
    cx, cy = cfg.center
    out: dict[int, Vector] = {}
    for idx, (vector_id, (ox, oy), reference) in enumerate(_PRESETS):
        out[vector_id] = Vector(
            id=vector_id,
            start=Point(cx, cy),
            end=Point(cx + ox, cy + oy),
            angle_reference=reference,
            color=VECTOR_COLORS[idx % len(VECTOR_COLORS)],
        )
    return out
