"""Challenge definitions.

A challenge is immutable configuration: learner-facing text, a completion
predicate over the resultant and a progress function mapping the resultant to
a percentage. The engine only calls these two callables, so new challenges are
added by building another ``ChallengeDefinition``, never by editing the engine.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from .resultant import ResultantVector
from .vector_math import clamp

CompletionPredicate = Callable[[ResultantVector], bool]
ProgressFunction = Callable[[ResultantVector], float]


class Difficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True, slots=True)
class ChallengeDefinition:
    id: int
    description: str
    objective: str
    hint: str
    feedback: str
    explanation: str
    difficulty: Difficulty
    is_complete: CompletionPredicate
    progress: ProgressFunction
    learning_outcome: str = ""
    real_world_example: str = ""


def clamp_pct(x: float) -> float:
    return clamp(x, 0.0, 100.0)


def near_zero_progress(r: ResultantVector) -> float:
    return clamp_pct(100.0 - (r.magnitude / 50.0) * 100.0)


def strong_resultant_progress(r: ResultantVector) -> float:
    return clamp_pct((r.magnitude / 150.0) * 100.0)


def heading_progress(target_deg: float, *, span_deg: float = 45.0) -> ProgressFunction:
    """Progress for a "point the resultant at ``target_deg``" challenge."""

    if span_deg <= 0:
        raise ValueError("span_deg must be > 0")

    def _progress(r: ResultantVector) -> float:
        diff = abs(r.angle - target_deg) % 360.0
        err = min(diff, 360.0 - diff)
        return clamp_pct(100.0 - (err / span_deg) * 100.0)

    return _progress


DEFAULT_CHALLENGES: tuple[ChallengeDefinition, ...] = (
    ChallengeDefinition(
        id=1,
        description="Adjust vectors so the resultant is nearly zero",
        objective="Create a balanced system where all forces cancel each other out",
        is_complete=lambda r: r.magnitude < 20.0,
        progress=near_zero_progress,
        feedback="Great job balancing the forces! The resultant is nearly zero.",
        explanation=(
            "When forces are balanced in all directions, they cancel each other out, resulting in "
            "no net force. This is the principle of equilibrium in static systems."
        ),
        hint="Try to make pairs of vectors point in opposite directions with similar magnitudes.",
        difficulty=Difficulty.EASY,
        learning_outcome="Understanding force equilibrium and vector cancellation",
        real_world_example=(
            "A bridge in static equilibrium has multiple forces (weight, tension, compression) "
            "that sum to zero, keeping it stable."
        ),
    ),
    ChallengeDefinition(
        id=2,
        description="Make the resultant point exactly east (0°)",
        objective="Create a system where the net force points horizontally to the right",
        is_complete=lambda r: abs(r.angle) < 5.0 or abs(r.angle - 360.0) < 5.0,
        progress=heading_progress(0.0),
        feedback="Perfect! The resultant is pointing east.",
        explanation=(
            "You've aligned the net force along the positive x-axis by balancing the y-components "
            "while maintaining positive x-components."
        ),
        hint="Ensure the sum of y-components is close to zero, while keeping a positive sum of x-components.",
        difficulty=Difficulty.MEDIUM,
        learning_outcome="Understanding directional control of resultant vectors",
        real_world_example=(
            "A boat crossing a river with a current needs to aim at a specific angle to travel straight east."
        ),
    ),
    ChallengeDefinition(
        id=3,
        description="Create a resultant with magnitude > 150 N",
        objective="Maximize the resultant force by aligning vectors constructively",
        is_complete=lambda r: r.magnitude > 150.0,
        progress=strong_resultant_progress,
        feedback="Impressive! You've created a strong resultant force.",
        explanation=(
            "By aligning multiple vectors in similar directions, you've created constructive "
            "interference that increases the total magnitude."
        ),
        hint="Try to align all vectors in roughly the same direction to maximize their combined effect.",
        difficulty=Difficulty.MEDIUM,
        learning_outcome="Understanding constructive vector addition and maximizing resultant magnitude",
        real_world_example=(
            "Multiple rocket engines pointing in the same direction combine their thrust to launch a spacecraft."
        ),
    ),
    ChallengeDefinition(
        id=4,
        description="Create a resultant pointing northwest (315°)",
        objective="Manipulate vectors to create a specific resultant direction",
        is_complete=lambda r: abs(r.angle - 315.0) < 10.0,
        progress=heading_progress(315.0),
        feedback="Excellent directional control! Your resultant is pointing northwest.",
        explanation=(
            "You've balanced the x and y components to achieve a specific angle. For northwest "
            "(315°), you need negative y-components and negative x-components."
        ),
        hint=(
            "Try to make the sum of x-components negative and the sum of y-components positive "
            "with similar magnitudes."
        ),
        difficulty=Difficulty.HARD,
        learning_outcome="Mastering precise directional control of resultant vectors",
        real_world_example=(
            "Aircraft navigation systems calculate required headings to reach destinations while "
            "accounting for crosswinds."
        ),
    ),
)
