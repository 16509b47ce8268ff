from __future__ import annotations

import math

import pytest

from resultant_trainer.errors import InvalidPrediction
from resultant_trainer.prediction import (
    DirectionQuadrant,
    MagnitudeRange,
    Prediction,
    PredictionAccuracy,
    direction_bucket,
    evaluate_prediction,
    magnitude_bucket,
    score_prediction,
)
from resultant_trainer.resultant import ResultantVector


def _at(angle_deg: float, magnitude: float) -> ResultantVector:
    rad = math.radians(angle_deg)
    return ResultantVector.from_components(magnitude * math.cos(rad), magnitude * math.sin(rad))


ACTUAL = _at(45.0, 30.0)


def test_fixture_resultant_is_where_we_think() -> None:
    assert ACTUAL.angle == pytest.approx(45.0)
    assert ACTUAL.magnitude == pytest.approx(30.0)


def test_both_buckets_match_scores_high() -> None:
    p = Prediction(DirectionQuadrant.NE, MagnitudeRange.UNDER_50)
    assert score_prediction(p, ACTUAL) is PredictionAccuracy.HIGH


def test_one_bucket_matches_scores_medium() -> None:
    p = Prediction(DirectionQuadrant.SE, MagnitudeRange.UNDER_50)
    assert score_prediction(p, ACTUAL) is PredictionAccuracy.MEDIUM


def test_no_bucket_matches_scores_low() -> None:
    p = Prediction(DirectionQuadrant.SW, MagnitudeRange.OVER_150)
    result = evaluate_prediction(p, ACTUAL)
    assert result.accuracy is PredictionAccuracy.LOW
    assert result.show_tips is True


@pytest.mark.parametrize(
    "prediction",
    [
        Prediction(DirectionQuadrant.NOT_SURE, MagnitudeRange.OVER_150),
        Prediction(DirectionQuadrant.SW, MagnitudeRange.NOT_SURE),
        Prediction(DirectionQuadrant.NOT_SURE, MagnitudeRange.NOT_SURE),
        Prediction(None, MagnitudeRange.UNDER_50),
    ],
)
def test_unsure_or_missing_gets_partial_credit(prediction: Prediction) -> None:
    assert score_prediction(prediction, ACTUAL) is PredictionAccuracy.MEDIUM


def test_incomplete_prediction_is_rejected_at_submission() -> None:
    with pytest.raises(InvalidPrediction):
        evaluate_prediction(Prediction(direction=DirectionQuadrant.NE), ACTUAL)
    with pytest.raises(InvalidPrediction):
        evaluate_prediction(Prediction(magnitude_range=MagnitudeRange.UNDER_50), ACTUAL)


@pytest.mark.parametrize(
    ("angle", "bucket"),
    [
        (0.0, DirectionQuadrant.NE),
        (89.99, DirectionQuadrant.NE),
        (90.0, DirectionQuadrant.SE),
        (180.0, DirectionQuadrant.SW),
        (269.99, DirectionQuadrant.SW),
        (270.0, DirectionQuadrant.NW),
        (359.99, DirectionQuadrant.NW),
    ],
)
def test_direction_bucket_edges(angle: float, bucket: DirectionQuadrant) -> None:
    assert direction_bucket(angle) is bucket


@pytest.mark.parametrize(
    ("magnitude", "bucket"),
    [
        (0.0, MagnitudeRange.UNDER_50),
        (49.99, MagnitudeRange.UNDER_50),
        (50.0, MagnitudeRange.FROM_50_TO_100),
        (100.0, MagnitudeRange.FROM_100_TO_150),
        (149.99, MagnitudeRange.FROM_100_TO_150),
        (150.0, MagnitudeRange.OVER_150),
    ],
)
def test_magnitude_bucket_edges(magnitude: float, bucket: MagnitudeRange) -> None:
    assert magnitude_bucket(magnitude) is bucket


def test_feedback_text_for_hits_and_misses() -> None:
    hit = evaluate_prediction(Prediction(DirectionQuadrant.NE, MagnitudeRange.UNDER_50), ACTUAL)
    assert hit.direction_feedback == "Good prediction! The actual direction is 45°, which is in the NE quadrant."
    assert hit.magnitude_feedback == "Good estimation! The actual magnitude is 30 N, which is < 50 N."
    assert hit.show_tips is False

    miss = evaluate_prediction(Prediction(DirectionQuadrant.SW, MagnitudeRange.NOT_SURE), ACTUAL)
    assert miss.direction_feedback == "The actual direction is 45°, which is in the NE quadrant."
    assert miss.magnitude_feedback == ""
    assert miss.actual_range is MagnitudeRange.UNDER_50


def test_plain_labels_are_accepted() -> None:
    p = Prediction(direction="NE", magnitude_range="< 50 N")
    assert p.direction is DirectionQuadrant.NE
    assert score_prediction(p, ACTUAL) is PredictionAccuracy.HIGH

    with pytest.raises(ValueError):
        Prediction(direction="North")
