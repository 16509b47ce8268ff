from __future__ import annotations

from dataclasses import dataclass

import pytest

from resultant_trainer.challenge_engine import ChallengePhase
from resultant_trainer.clock import PolledScheduler
from resultant_trainer.errors import InvalidState, UnknownVector
from resultant_trainer.prediction import DirectionQuadrant, MagnitudeRange, Prediction, PredictionAccuracy
from resultant_trainer.simulator import build_vector_simulator
from resultant_trainer.vectors import AngleReference, Point


@dataclass
class FakeClock:
    t: float = 0.0

    def now(self) -> float:
        return self.t

    def advance(self, dt: float) -> None:
        self.t += dt


def _sim():
    clock = FakeClock()
    scheduler = PolledScheduler(clock)
    return build_vector_simulator(clock=clock, scheduler=scheduler), clock, scheduler


def _wait(clock: FakeClock, scheduler: PolledScheduler, seconds: int) -> None:
    for _ in range(seconds):
        clock.advance(1.0)
        scheduler.poll()


def test_default_state() -> None:
    sim, _, _ = _sim()
    assert [v.id for v in sim.vectors] == [1, 2, 3, 4]
    assert sim.resultant.components() == (-34.0, 47.0)
    assert sim.prediction is None
    assert all(check.is_accurate for check in sim.verify())


def test_head_drag_changes_direction_and_tail_drag_translates() -> None:
    sim, _, _ = _sim()

    sim.update_vector_endpoint(1, Point(450.0, 200.0), is_tail_drag=False)
    c = sim.compute_vector_components(1)
    assert (c.dx, c.dy) == (100.0, 0.0)
    assert sim.resultant.components() == (-126.0, -119.0)

    before = sim.resultant
    vectors = sim.update_vector_endpoint(2, Point(100.0, 300.0), is_tail_drag=True)
    moved = next(v for v in vectors if v.id == 2)
    assert moved.start == Point(100.0, 300.0)
    assert (moved.dx, moved.dy) == (-175.0, 102.0)
    assert sim.resultant == before


def test_self_check_holds_for_heads_dragged_onto_an_axis() -> None:
    sim, _, _ = _sim()
    # Vector 2 is measured from the Y axis; vector 1 from X.
    sim.update_vector_endpoint(2, Point(550.0, 200.00000000000003), is_tail_drag=False)
    sim.update_vector_endpoint(1, Point(350.0, 399.99999999999994), is_tail_drag=False)

    checks = {check.vector_id: check for check in sim.verify()}
    assert checks[2].angle_from_reference == pytest.approx(90.0)
    assert checks[1].angle_from_reference == pytest.approx(90.0)
    assert all(check.is_accurate for check in checks.values())


def test_unknown_vector_id() -> None:
    sim, _, _ = _sim()
    with pytest.raises(UnknownVector):
        sim.update_vector_endpoint(9, Point(0.0, 0.0), is_tail_drag=False)
    with pytest.raises(KeyError):
        sim.toggle_angle_reference(0)


def test_toggle_reference_leaves_resultant_alone() -> None:
    sim, _, _ = _sim()
    before = sim.resultant
    assert sim.toggle_angle_reference(1) is AngleReference.Y_AXIS
    assert sim.resultant == before
    assert sim.compute_vector_components(1).angle_reference is AngleReference.Y_AXIS


def test_reset_vectors_restores_presets_and_clears_prediction() -> None:
    sim, _, _ = _sim()
    sim.update_vector_endpoint(3, Point(10.0, 10.0), is_tail_drag=False)
    sim.toggle_angle_reference(3)
    sim.submit_prediction(Prediction(DirectionQuadrant.NE, MagnitudeRange.UNDER_50))

    vectors = sim.reset_vectors()
    assert vectors[2].end == Point(134.0, 291.0)
    assert vectors[2].angle_reference is AngleReference.X_AXIS
    assert sim.resultant.components() == (-34.0, 47.0)
    assert sim.prediction is None


def test_prediction_against_default_resultant() -> None:
    sim, _, _ = _sim()
    # Default resultant: ~58 N at ~126 degrees.
    result = sim.submit_prediction(Prediction(DirectionQuadrant.SE, MagnitudeRange.FROM_50_TO_100))
    assert result.accuracy is PredictionAccuracy.HIGH
    assert result.direction_feedback == "Good prediction! The actual direction is 126°, which is in the SE quadrant."
    assert result.magnitude_feedback == "Good estimation! The actual magnitude is 58 N, which is 50-100 N."

    again = sim.submit_prediction(Prediction(DirectionQuadrant.NW, MagnitudeRange.OVER_150))
    assert again.accuracy is PredictionAccuracy.LOW
    assert sim.prediction is again

    sim.reset_prediction()
    assert sim.prediction is None


def test_challenge_checks_need_an_active_challenge() -> None:
    sim, _, _ = _sim()
    with pytest.raises(InvalidState):
        sim.update_challenge_progress()
    with pytest.raises(InvalidState):
        sim.check_challenge_completion()


def test_scripted_strong_resultant_challenge() -> None:
    sim, clock, scheduler = _sim()

    sim.update_vector_endpoint(4, Point(0.0, 0.0), is_tail_drag=False)
    sim.submit_prediction(Prediction(DirectionQuadrant.NE, MagnitudeRange.UNDER_50))
    sim.start_challenge(3)
    # Starting a challenge restores the presets and drops the prediction.
    assert sim.resultant.components() == (-34.0, 47.0)
    assert sim.prediction is None
    assert sim.challenges.progress(3) == pytest.approx(58.0086 / 150.0 * 100.0, abs=0.01)

    sim.dismiss_challenge_intro()
    _wait(clock, scheduler, 2)

    sim.update_vector_endpoint(1, Point(550.0, 200.0), is_tail_drag=False)
    assert sim.challenges.phase is ChallengePhase.IN_PROGRESS
    assert sim.check_challenge_completion() is False

    clock.advance(0.5)
    sim.update_vector_endpoint(2, Point(500.0, 200.0), is_tail_drag=False)
    snap = sim.snapshot().challenge
    assert snap.phase is ChallengePhase.COMPLETED
    assert snap.completed is True
    assert snap.progress_pct == 100
    assert snap.completion_time_s == pytest.approx(2.5)
    assert snap.completed_count == 1

    _wait(clock, scheduler, 3)
    assert sim.challenges.elapsed_s == 2
    assert scheduler.live_count == 0

    for _ in range(3):
        assert sim.check_challenge_completion() is True
        sim.update_vector_endpoint(1, Point(560.0, 200.0), is_tail_drag=False)
    assert sim.challenges.completed_count == 1

    sim.reset_challenge()
    assert sim.challenges.phase is ChallengePhase.INACTIVE
    assert sim.challenges.is_completed(3)


def test_scripted_point_east_challenge_tracks_progress() -> None:
    sim, _, _ = _sim()
    sim.start_challenge(2)

    progress = []
    for vector_id, head in ((1, (450.0, 200.0)), (2, (400.0, 200.0)), (3, (300.0, 200.0))):
        sim.update_vector_endpoint(vector_id, Point(*head), is_tail_drag=False)
        progress.append(sim.update_challenge_progress())
        assert not sim.challenges.is_completed(2)
    # Resultant swings from ~223 to ~294 to ~334 degrees; only the last is within 45 of east.
    assert progress[:2] == [0.0, 0.0]
    assert progress[2] == pytest.approx(41.9, abs=0.1)

    sim.update_vector_endpoint(4, Point(420.0, 200.0), is_tail_drag=False)
    assert sim.resultant.components() == (170.0, 0.0)
    assert sim.challenges.is_completed(2)
    assert sim.update_challenge_progress() == pytest.approx(100.0)


def test_near_zero_challenge_then_full_reset() -> None:
    sim, _, scheduler = _sim()
    sim.start_challenge(1)
    for vector_id, head in ((1, (450.0, 200.0)), (2, (250.0, 200.0)), (3, (350.0, 100.0)), (4, (350.0, 300.0))):
        sim.update_vector_endpoint(vector_id, Point(*head), is_tail_drag=False)

    assert sim.resultant.magnitude == 0.0
    assert sim.challenges.is_completed(1)

    sim.start_challenge(1)
    assert sim.challenges.is_completed(1)
    assert scheduler.live_count == 1

    sim.reset_all()
    assert not sim.challenges.is_completed(1)
    assert sim.challenges.completed_count == 0
    assert scheduler.live_count == 0


def test_close_cancels_timer() -> None:
    sim, clock, scheduler = _sim()
    sim.start_challenge(4)
    sim.close()
    _wait(clock, scheduler, 2)
    assert sim.challenges.elapsed_s == 0
