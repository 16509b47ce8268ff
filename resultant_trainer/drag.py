from __future__ import annotations

import math
from dataclasses import dataclass

from .simulator import VectorSimulator
from .vector_math import clamp
from .vectors import Point, Vector


@dataclass(frozen=True, slots=True)
class DragTarget:
    vector_id: int
    is_tail: bool


class DragController:
    """Translates pointer press/move/release into endpoint updates.

    Pure logic: the UI passes canvas coordinates, so this works headlessly.
    """

    def __init__(self, simulator: VectorSimulator) -> None:
        self._sim = simulator
        self._target: DragTarget | None = None
        self._active_vector_id: int | None = None

    @property
    def target(self) -> DragTarget | None:
        return self._target

    @property
    def dragging(self) -> bool:
        return self._target is not None

    @property
    def active_vector_id(self) -> int | None:
        return self._active_vector_id

    def hit_test(self, point: Point) -> DragTarget | None:
        radius = self._sim.config.handle_radius
        order = self.render_order()
        best: tuple[tuple[float, int, int, int], DragTarget] | None = None
        for depth, vector in enumerate(order):
            for handle, is_tail in ((vector.end, False), (vector.start, True)):
                dist = math.hypot(handle.x - point.x, handle.y - point.y)
                if dist > radius:
                    continue
                # Nearest first; then heads over tails, then whatever is drawn on top.
                key = (round(dist, 6), int(is_tail), 0 if vector.id == self._active_vector_id else 1, -depth)
                if best is None or key < best[0]:
                    best = (key, DragTarget(vector_id=vector.id, is_tail=is_tail))
        return None if best is None else best[1]

    def press(self, point: Point) -> DragTarget | None:
        target = self.hit_test(point)
        self._target = target
        if target is not None:
            self._active_vector_id = target.vector_id
        return target

    def move(self, point: Point) -> tuple[Vector, ...] | None:
        if self._target is None:
            return None
        cfg = self._sim.config
        clamped = Point(
            clamp(point.x, 0.0, float(cfg.canvas_width)),
            clamp(point.y, 0.0, float(cfg.canvas_height)),
        )
        return self._sim.update_vector_endpoint(self._target.vector_id, clamped, self._target.is_tail)

    def release(self) -> None:
        self._target = None

    def render_order(self) -> list[Vector]:
        vectors = list(self._sim.vectors)
        if self._active_vector_id is None:
            return vectors
        # Stable: only the active vector moves to the end so it draws on top.
        return [v for v in vectors if v.id != self._active_vector_id] + [
            v for v in vectors if v.id == self._active_vector_id
        ]
