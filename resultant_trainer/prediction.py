from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from .errors import InvalidPrediction
from .resultant import ResultantVector
from .vector_math import round_half_up

logger = logging.getLogger(__name__)


class DirectionQuadrant(StrEnum):
    NE = "NE"
    SE = "SE"
    SW = "SW"
    NW = "NW"
    NOT_SURE = "Not sure"


class MagnitudeRange(StrEnum):
    UNDER_50 = "< 50 N"
    FROM_50_TO_100 = "50-100 N"
    FROM_100_TO_150 = "100-150 N"
    OVER_150 = "> 150 N"
    NOT_SURE = "Not sure"


class PredictionAccuracy(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True, slots=True)
class Prediction:
    direction: DirectionQuadrant | None = None
    magnitude_range: MagnitudeRange | None = None

    def __post_init__(self) -> None:
        # Accept the plain labels a UI hands over ("NE", "< 50 N", ...).
        if self.direction is not None:
            object.__setattr__(self, "direction", DirectionQuadrant(self.direction))
        if self.magnitude_range is not None:
            object.__setattr__(self, "magnitude_range", MagnitudeRange(self.magnitude_range))

    @property
    def is_complete(self) -> bool:
        return self.direction is not None and self.magnitude_range is not None


@dataclass(frozen=True, slots=True)
class PredictionResult:
    prediction: Prediction
    accuracy: PredictionAccuracy
    actual_direction: DirectionQuadrant
    actual_range: MagnitudeRange
    direction_feedback: str
    magnitude_feedback: str
    # Caller shows PREDICTION_TIPS when set.
    show_tips: bool


PREDICTION_TIPS: tuple[str, ...] = (
    "Add the x-components and y-components separately before guessing.",
    "Vectors pointing in opposite directions cancel each other out.",
    "The resultant points towards the side with the largest net component.",
    "Compare the longest vectors first; short ones rarely change the quadrant.",
)


def direction_bucket(angle: float) -> DirectionQuadrant:
    if 0.0 <= angle < 90.0:
        return DirectionQuadrant.NE
    if 90.0 <= angle < 180.0:
        return DirectionQuadrant.SE
    if 180.0 <= angle < 270.0:
        return DirectionQuadrant.SW
    return DirectionQuadrant.NW


def magnitude_bucket(magnitude: float) -> MagnitudeRange:
    if magnitude < 50.0:
        return MagnitudeRange.UNDER_50
    if magnitude < 100.0:
        return MagnitudeRange.FROM_50_TO_100
    if magnitude < 150.0:
        return MagnitudeRange.FROM_100_TO_150
    return MagnitudeRange.OVER_150


def score_prediction(prediction: Prediction, resultant: ResultantVector) -> PredictionAccuracy:
    """Partial credit for "Not sure": any unsure or missing field scores medium."""

    direction = prediction.direction
    magnitude_range = prediction.magnitude_range
    if (
        direction is None
        or magnitude_range is None
        or direction is DirectionQuadrant.NOT_SURE
        or magnitude_range is MagnitudeRange.NOT_SURE
    ):
        return PredictionAccuracy.MEDIUM

    direction_ok = direction is direction_bucket(resultant.angle)
    magnitude_ok = magnitude_range is magnitude_bucket(resultant.magnitude)
    if direction_ok and magnitude_ok:
        return PredictionAccuracy.HIGH
    if direction_ok or magnitude_ok:
        return PredictionAccuracy.MEDIUM
    return PredictionAccuracy.LOW


def direction_feedback(prediction: Prediction, resultant: ResultantVector) -> str:
    if prediction.direction is None or prediction.direction is DirectionQuadrant.NOT_SURE:
        return ""
    actual = direction_bucket(resultant.angle)
    text = f"The actual direction is {round_half_up(resultant.angle)}°, which is in the {actual} quadrant."
    if prediction.direction is actual:
        return f"Good prediction! {text}"
    return text


def magnitude_feedback(prediction: Prediction, resultant: ResultantVector) -> str:
    if prediction.magnitude_range is None or prediction.magnitude_range is MagnitudeRange.NOT_SURE:
        return ""
    actual = magnitude_bucket(resultant.magnitude)
    text = f"The actual magnitude is {round_half_up(resultant.magnitude)} N, which is {actual}."
    if prediction.magnitude_range is actual:
        return f"Good estimation! {text}"
    return text


def evaluate_prediction(prediction: Prediction, resultant: ResultantVector) -> PredictionResult:
    if not prediction.is_complete:
        raise InvalidPrediction("direction and magnitude range must both be selected")

    accuracy = score_prediction(prediction, resultant)
    logger.info(
        "prediction %s / %s scored %s (actual %.1f deg, %.1f N)",
        prediction.direction,
        prediction.magnitude_range,
        accuracy,
        resultant.angle,
        resultant.magnitude,
    )
    return PredictionResult(
        prediction=prediction,
        accuracy=accuracy,
        actual_direction=direction_bucket(resultant.angle),
        actual_range=magnitude_bucket(resultant.magnitude),
        direction_feedback=direction_feedback(prediction, resultant),
        magnitude_feedback=magnitude_feedback(prediction, resultant),
        show_tips=accuracy is PredictionAccuracy.LOW,
    )
