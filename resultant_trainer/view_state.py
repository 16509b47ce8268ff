from __future__ import annotations

from dataclasses import dataclass

from .prediction import PredictionResult


@dataclass(slots=True)
class ViewState:
    """Presentation flags for the simulator screen.

    The numeric core never reads these; the screen updates them in response
    to core events.
    """

    show_prediction: bool = True
    show_prediction_tips: bool = False
    show_hint: bool = False
    show_intro: bool = False
    show_explanation: bool = False
    show_real_world_example: bool = False
    show_formulas: bool = False
    show_resultant: bool = True

    def on_challenge_started(self) -> None:
        self.show_prediction = False
        self.show_prediction_tips = False
        self.show_hint = False
        self.show_intro = True
        self.show_explanation = False
        self.show_real_world_example = False

    def on_intro_dismissed(self) -> None:
        self.show_intro = False

    def on_challenge_completed(self) -> None:
        self.show_explanation = True

    def on_challenge_exit(self) -> None:
        self.show_prediction = True
        self.show_hint = False
        self.show_intro = False
        self.show_explanation = False
        self.show_real_world_example = False

    def on_prediction(self, result: PredictionResult | None) -> None:
        self.show_prediction_tips = result is not None and result.show_tips

    def toggle(self, flag: str) -> bool:
        if flag not in self.__slots__:
            raise ValueError(f"unknown view flag: {flag}")
        value = not getattr(self, flag)
        setattr(self, flag, value)
        return value
