from __future__ import annotations

import os


def test_ui_smoke_open_challenge_and_drag_a_vector() -> None:
    # Headless SDL for CI.
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

    import pygame

    from resultant_trainer.app import CANVAS_ORIGIN, run

    ox, oy = CANVAS_ORIGIN
    # Head of preset vector 1 sits at canvas (542, 34).
    head = (ox + 542, oy + 34)
    east = (ox + 450, oy + 200)

    def key(k: int) -> None:
        pygame.event.post(pygame.event.Event(pygame.KEYDOWN, {"key": k, "unicode": ""}))

    def inject(frame: int) -> None:
        # Main Menu -> Challenges -> first challenge -> dismiss intro -> drag -> back
        if frame == 1:
            key(pygame.K_DOWN)
        elif frame == 2:
            key(pygame.K_RETURN)
        elif frame == 3:
            key(pygame.K_RETURN)
        elif frame == 4:
            key(pygame.K_RETURN)
        elif frame == 5:
            pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONDOWN, {"pos": head, "button": 1}))
        elif frame == 6:
            pygame.event.post(
                pygame.event.Event(pygame.MOUSEMOTION, {"pos": east, "rel": (0, 0), "buttons": (1, 0, 0)})
            )
        elif frame == 7:
            pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONUP, {"pos": east, "button": 1}))
        elif frame == 8:
            key(pygame.K_f)
        elif frame == 9:
            key(pygame.K_ESCAPE)

    assert run(max_frames=14, event_injector=inject) == 0


def test_ui_smoke_free_play_prediction_keys() -> None:
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

    import pygame

    from resultant_trainer.app import run

    keys = {
        1: pygame.K_RETURN,  # Free play
        2: pygame.K_d,
        3: pygame.K_m,
        4: pygame.K_RETURN,  # submit prediction
        5: pygame.K_2,
        6: pygame.K_r,
        7: pygame.K_ESCAPE,
    }

    def inject(frame: int) -> None:
        k = keys.get(frame)
        if k is not None:
            pygame.event.post(pygame.event.Event(pygame.KEYDOWN, {"key": k, "unicode": ""}))

    assert run(max_frames=10, event_injector=inject) == 0
