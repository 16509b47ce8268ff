from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from .challenges import DEFAULT_CHALLENGES, ChallengeDefinition, clamp_pct
from .clock import Clock, Scheduler, TimerHandle
from .errors import InvalidState
from .resultant import ResultantVector

logger = logging.getLogger(__name__)


class ChallengePhase(str, Enum):
    INACTIVE = "inactive"
    INTRODUCED = "introduced"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass(slots=True)
class ChallengeRecord:
    """Mutable per-session state of one challenge."""

    completed: bool = False
    progress: float = 0.0
    completion_time_s: float | None = None


@dataclass(frozen=True, slots=True)
class ChallengeSnapshot:
    """View model for the UI (pure data)."""

    phase: ChallengePhase
    active_id: int | None
    description: str
    objective: str
    hint: str
    progress_pct: int
    elapsed_s: int | None
    elapsed_label: str
    completed: bool
    completion_time_s: float | None
    completed_count: int
    total: int


def format_time(seconds: int | None) -> str:
    if seconds is None:
        return "00:00"
    mins, secs = divmod(int(seconds), 60)
    return f"{mins:02d}:{secs:02d}"


class ChallengeEngine:
    """Inactive -> Introduced -> InProgress -> Completed, one challenge at a time.

    - Time is entirely via the injected Clock and Scheduler.
    - At most one stopwatch timer is live; it is cancelled before a new one is
      created and on every way out of a session (completion, exit, reset, close).
    - Completion flags survive ``reset()``; only ``reset_all()`` clears them.
    """

    def __init__(
        self,
        *,
        clock: Clock,
        scheduler: Scheduler,
        challenges: Iterable[ChallengeDefinition] = DEFAULT_CHALLENGES,
        tick_interval_s: float = 1.0,
    ) -> None:
        if tick_interval_s <= 0:
            raise ValueError("tick_interval_s must be > 0")

        self._clock = clock
        self._scheduler = scheduler
        self._tick_interval_s = float(tick_interval_s)

        self._definitions: dict[int, ChallengeDefinition] = {}
        self._records: dict[int, ChallengeRecord] = {}
        for definition in challenges:
            self.register(definition)

        self._phase = ChallengePhase.INACTIVE
        self._active_id: int | None = None
        self._started_at_s: float | None = None
        self._elapsed_s: int | None = None
        self._timer: TimerHandle | None = None
        self._completed_count = 0

    # -- Configuration ------------------------------------------------------
    def register(self, definition: ChallengeDefinition) -> None:
        if definition.id in self._definitions:
            raise ValueError(f"duplicate challenge id: {definition.id}")
        self._definitions[definition.id] = definition
        self._records[definition.id] = ChallengeRecord()

    def definitions(self) -> list[ChallengeDefinition]:
        return list(self._definitions.values())

    def definition(self, challenge_id: int) -> ChallengeDefinition:
        return self._definitions[challenge_id]

    # -- State --------------------------------------------------------------
    @property
    def phase(self) -> ChallengePhase:
        return self._phase

    @property
    def active_id(self) -> int | None:
        return self._active_id

    @property
    def active(self) -> ChallengeDefinition | None:
        return None if self._active_id is None else self._definitions[self._active_id]

    @property
    def elapsed_s(self) -> int | None:
        return self._elapsed_s

    @property
    def completed_count(self) -> int:
        return self._completed_count

    @property
    def timer_running(self) -> bool:
        return self._timer is not None and self._timer.active

    def is_completed(self, challenge_id: int) -> bool:
        return self._records[challenge_id].completed

    def progress(self, challenge_id: int) -> float:
        return self._records[challenge_id].progress

    def completion_time_s(self, challenge_id: int) -> float | None:
        return self._records[challenge_id].completion_time_s

    # -- Transitions --------------------------------------------------------
    def start(self, challenge_id: int) -> ChallengeDefinition:
        definition = self._definitions[challenge_id]

        self._stop_timer()
        self._active_id = challenge_id
        self._phase = ChallengePhase.INTRODUCED
        self._records[challenge_id].progress = 0.0
        self._started_at_s = self._clock.now()
        self._elapsed_s = 0
        self._timer = self._scheduler.call_every(self._tick_interval_s, self._on_tick)

        logger.info("challenge %d started: %s", challenge_id, definition.description)
        return definition

    def dismiss_intro(self) -> None:
        # Presentation-only step; nothing numeric changes.
        if self._phase is ChallengePhase.INTRODUCED:
            self._phase = ChallengePhase.IN_PROGRESS

    def update_progress(self, resultant: ResultantVector) -> float:
        definition = self._require_active("update_progress")
        progress = clamp_pct(float(definition.progress(resultant)))
        self._records[definition.id].progress = progress
        return progress

    def check_completion(self, resultant: ResultantVector) -> bool:
        """Mark the active challenge completed once its predicate holds.

        Returns whether the active challenge is completed. Calls after the
        first completion change nothing.
        """

        definition = self._require_active("check_completion")
        record = self._records[definition.id]
        if record.completed:
            return True
        if not definition.is_complete(resultant):
            return False

        self._stop_timer()
        assert self._started_at_s is not None
        record.completed = True
        record.completion_time_s = max(0.0, self._clock.now() - self._started_at_s)
        self._phase = ChallengePhase.COMPLETED
        self._completed_count += 1
        logger.info(
            "challenge %d completed in %.1fs (%d completed)",
            definition.id,
            record.completion_time_s,
            self._completed_count,
        )
        return True

    def reset(self) -> None:
        """Leave the active challenge; completion flags are kept."""

        if self._active_id is not None:
            logger.info("challenge %d exited", self._active_id)
        self._stop_timer()
        self._phase = ChallengePhase.INACTIVE
        self._active_id = None
        self._started_at_s = None
        self._elapsed_s = None

    def reset_all(self) -> None:
        self.reset()
        for challenge_id in self._records:
            self._records[challenge_id] = ChallengeRecord()
        self._completed_count = 0

    def close(self) -> None:
        self._stop_timer()

    def snapshot(self) -> ChallengeSnapshot:
        definition = self.active
        record = None if definition is None else self._records[definition.id]
        return ChallengeSnapshot(
            phase=self._phase,
            active_id=self._active_id,
            description="" if definition is None else definition.description,
            objective="" if definition is None else definition.objective,
            hint="" if definition is None else definition.hint,
            progress_pct=0 if record is None else int(round(record.progress)),
            elapsed_s=self._elapsed_s,
            elapsed_label=format_time(self._elapsed_s),
            completed=False if record is None else record.completed,
            completion_time_s=None if record is None else record.completion_time_s,
            completed_count=self._completed_count,
            total=len(self._definitions),
        )

    # -- Internals ----------------------------------------------------------
    def _require_active(self, op: str) -> ChallengeDefinition:
        definition = self.active
        if definition is None:
            raise InvalidState(f"{op} called with no active challenge")
        return definition

    def _on_tick(self) -> None:
        if self._phase in (ChallengePhase.INTRODUCED, ChallengePhase.IN_PROGRESS) and self._elapsed_s is not None:
            self._elapsed_s += 1

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
