from __future__ import annotations


class InvalidPrediction(ValueError):
    """A prediction was submitted with the direction or magnitude unset."""


class InvalidState(RuntimeError):
    """A challenge operation was called while no challenge is active."""


class UnknownVector(KeyError):
    """No vector with the given id exists in the current vector set."""

    def __init__(self, vector_id: int) -> None:
        super().__init__(vector_id)
        self.vector_id = vector_id

    def __str__(self) -> str:
        return f"unknown vector id: {self.vector_id}"
