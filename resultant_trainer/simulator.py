from __future__ import annotations

import logging
from dataclasses import dataclass

from .challenge_engine import ChallengeEngine, ChallengeSnapshot
from .challenges import DEFAULT_CHALLENGES, ChallengeDefinition
from .clock import Clock, PolledScheduler, Scheduler
from .config import SimulatorConfig
from .errors import UnknownVector
from .prediction import Prediction, PredictionResult, evaluate_prediction
from .resultant import ResultantVector, compute_resultant
from .vector_math import ComponentCheck, VectorComponents, compute_vector_components, verify_components
from .vectors import AngleReference, Point, Vector, default_vectors

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SimulatorSnapshot:
    """View model for the UI (pure data)."""

    vectors: tuple[Vector, ...]
    components: tuple[VectorComponents, ...]
    resultant: ResultantVector
    prediction: PredictionResult | None
    challenge: ChallengeSnapshot


class VectorSimulator:
    """Headless core of the resultant widget.

    Owns the vector set (keyed by id), the current resultant, the last scored
    prediction and the challenge engine. Every mutation funnels through
    ``_on_vector_changed`` so the resultant, challenge progress and completion
    are brought up to date before the call returns.
    """

    def __init__(
        self,
        *,
        clock: Clock,
        scheduler: Scheduler,
        config: SimulatorConfig | None = None,
        challenges: tuple[ChallengeDefinition, ...] = DEFAULT_CHALLENGES,
    ) -> None:
        self._config = config or SimulatorConfig()
        self._scheduler = scheduler
        self._vectors: dict[int, Vector] = default_vectors(self._config)
        self._resultant = compute_resultant(self._vectors.values())
        self._prediction: PredictionResult | None = None
        self._challenges = ChallengeEngine(
            clock=clock,
            scheduler=scheduler,
            challenges=challenges,
            tick_interval_s=self._config.tick_interval_s,
        )

    @property
    def config(self) -> SimulatorConfig:
        return self._config

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def challenges(self) -> ChallengeEngine:
        return self._challenges

    @property
    def resultant(self) -> ResultantVector:
        return self._resultant

    @property
    def prediction(self) -> PredictionResult | None:
        return self._prediction

    @property
    def vectors(self) -> tuple[Vector, ...]:
        return tuple(self._vectors.values())

    def vector(self, vector_id: int) -> Vector:
        try:
            return self._vectors[vector_id]
        except KeyError:
            raise UnknownVector(vector_id) from None

    # -- Vector mutations ---------------------------------------------------
    def update_vector_endpoint(self, vector_id: int, point: Point, is_tail_drag: bool) -> tuple[Vector, ...]:
        vector = self.vector(vector_id)
        if is_tail_drag:
            vector.move_tail(point)
        else:
            vector.move_head(point)
        logger.debug("vector %d %s -> (%.1f, %.1f)", vector_id, "tail" if is_tail_drag else "head", point.x, point.y)
        self._on_vector_changed()
        return self.vectors

    def toggle_angle_reference(self, vector_id: int) -> AngleReference:
        # Display-only: the reference axis never changes dx/dy or the resultant.
        return self.vector(vector_id).toggle_reference()

    def reset_vectors(self) -> tuple[Vector, ...]:
        self._vectors = default_vectors(self._config)
        self._prediction = None
        logger.debug("vectors reset to defaults")
        self._on_vector_changed()
        return self.vectors

    # -- Derived values -----------------------------------------------------
    def compute_resultant(self, vectors: tuple[Vector, ...] | None = None) -> ResultantVector:
        return compute_resultant(self._vectors.values() if vectors is None else vectors)

    def compute_vector_components(self, vector: Vector | int) -> VectorComponents:
        v = self.vector(vector) if isinstance(vector, int) else vector
        return compute_vector_components(v)

    def components(self) -> tuple[VectorComponents, ...]:
        return tuple(compute_vector_components(v) for v in self._vectors.values())

    def verify(self) -> tuple[ComponentCheck, ...]:
        return tuple(verify_components(v) for v in self._vectors.values())

    # -- Prediction ---------------------------------------------------------
    def submit_prediction(self, prediction: Prediction) -> PredictionResult:
        self._prediction = evaluate_prediction(prediction, self._resultant)
        return self._prediction

    def reset_prediction(self) -> None:
        self._prediction = None

    # -- Challenges ---------------------------------------------------------
    def start_challenge(self, challenge_id: int) -> ChallengeDefinition:
        definition = self._challenges.start(challenge_id)
        self._vectors = default_vectors(self._config)
        self._prediction = None
        self._on_vector_changed()
        return definition

    def dismiss_challenge_intro(self) -> None:
        self._challenges.dismiss_intro()

    def reset_challenge(self) -> None:
        self._challenges.reset()

    def update_challenge_progress(self) -> float:
        return self._challenges.update_progress(self._resultant)

    def check_challenge_completion(self) -> bool:
        return self._challenges.check_completion(self._resultant)

    def reset_all(self) -> None:
        """Full application reset, including challenge completion flags."""

        self._challenges.reset_all()
        self.reset_vectors()

    def close(self) -> None:
        self._challenges.close()

    def snapshot(self) -> SimulatorSnapshot:
        return SimulatorSnapshot(
            vectors=self.vectors,
            components=self.components(),
            resultant=self._resultant,
            prediction=self._prediction,
            challenge=self._challenges.snapshot(),
        )

    def _on_vector_changed(self) -> None:
        self._resultant = compute_resultant(self._vectors.values())
        if self._challenges.active_id is not None:
            self._challenges.update_progress(self._resultant)
            self._challenges.check_completion(self._resultant)


def build_vector_simulator(
    *,
    clock: Clock,
    scheduler: Scheduler | None = None,
    config: SimulatorConfig | None = None,
) -> VectorSimulator:
    return VectorSimulator(
        clock=clock,
        scheduler=scheduler if scheduler is not None else PolledScheduler(clock),
        config=config,
    )
