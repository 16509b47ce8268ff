from __future__ import annotations

import os
from dataclasses import dataclass

TICK_INTERVAL_ENV = "RESULTANT_TRAINER_TICK_S"
HANDLE_RADIUS_ENV = "RESULTANT_TRAINER_HANDLE_RADIUS"
LOG_LEVEL_ENV = "RESULTANT_TRAINER_LOG_LEVEL"


@dataclass(frozen=True, slots=True)
class SimulatorConfig:
    canvas_width: int = 700
    canvas_height: int = 400
    # Challenge clock granularity; the stopwatch advances once per tick.
    tick_interval_s: float = 1.0
    # Pointer distance (canvas px) within which an endpoint handle is grabbed.
    handle_radius: float = 12.0

    def __post_init__(self) -> None:
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ValueError("canvas dimensions must be > 0")
        if self.tick_interval_s <= 0:
            raise ValueError("tick_interval_s must be > 0")
        if self.handle_radius <= 0:
            raise ValueError("handle_radius must be > 0")

    @property
    def center(self) -> tuple[float, float]:
        return (self.canvas_width / 2.0, self.canvas_height / 2.0)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "SimulatorConfig":
        env = os.environ if environ is None else environ
        kwargs: dict[str, float] = {}
        for key, field_name in (
            (TICK_INTERVAL_ENV, "tick_interval_s"),
            (HANDLE_RADIUS_ENV, "handle_radius"),
        ):
            raw = env.get(key, "").strip()
            if raw == "":
                continue
            try:
                kwargs[field_name] = float(raw)
            except ValueError:
                raise ValueError(f"{key} must be a number, got {raw!r}") from None
        return cls(**kwargs)
