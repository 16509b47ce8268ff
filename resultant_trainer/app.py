"""Pygame UI shell for the Resultant Trainer.

A screen stack with a main menu, a challenge menu and the simulator screen.
Deterministic geometry/scoring/timing/state lives in resultant_trainer/*
(core modules); this layer only draws and forwards input.
"""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

import pygame

from .challenge_engine import ChallengePhase
from .clock import PolledScheduler, RealClock
from .config import LOG_LEVEL_ENV, SimulatorConfig
from .drag import DragController
from .prediction import PREDICTION_TIPS, DirectionQuadrant, MagnitudeRange, Prediction
from .simulator import VectorSimulator, build_vector_simulator
from .vector_math import round_half_up
from .vectors import AngleReference, Point, Vector
from .view_state import ViewState

logger = logging.getLogger(__name__)


class Screen(Protocol):
    def handle_event(self, event: pygame.event.Event) -> None: ...
    def render(self, surface: pygame.Surface) -> None: ...


@dataclass(frozen=True, slots=True)
class MenuItem:
    label: str
    action: Callable[[], None]


WINDOW_SIZE = (1180, 640)
TARGET_FPS = 60
CANVAS_ORIGIN = (20, 70)

BG = (3, 9, 78)
PANEL_BG = (8, 18, 104)
BORDER = (226, 236, 255)
TEXT_MAIN = (238, 245, 255)
TEXT_MUTED = (186, 200, 224)
GOOD = (150, 230, 170)
WARN = (240, 200, 140)
RESULTANT_COLOR = (239, 68, 68)


class App:
    def __init__(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        self._surface = surface
        self._font = font
        self._screens: list[Screen] = []
        self._running = True

    @property
    def running(self) -> bool:
        return self._running

    @property
    def font(self) -> pygame.font.Font:
        return self._font

    def push(self, screen: Screen) -> None:
        self._screens.append(screen)

    def pop(self) -> None:
        # The main menu stays at the bottom; Esc there quits instead.
        if len(self._screens) > 1:
            self._screens.pop()

    def quit(self) -> None:
        self._running = False

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.quit()
            return
        if not self._screens:
            return
        self._screens[-1].handle_event(event)

    def render(self) -> None:
        if not self._screens:
            return
        self._screens[-1].render(self._surface)


class MenuScreen:
    def __init__(self, app: App, title: str, items: list[MenuItem], *, is_root: bool = False) -> None:
        self._app = app
        self._title = title
        self._items = items
        self._selected = 0
        self._is_root = is_root
        self._title_font = pygame.font.Font(None, 42)
        self._item_font = pygame.font.Font(None, 32)
        self._hint_font = pygame.font.Font(None, 22)

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type != pygame.KEYDOWN:
            return
        key = event.key
        if key in (pygame.K_UP, pygame.K_w):
            self._move(-1)
        elif key in (pygame.K_DOWN, pygame.K_s):
            self._move(1)
        elif key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE):
            self._activate()
        elif key in (pygame.K_ESCAPE, pygame.K_BACKSPACE):
            self._back()

    def _move(self, delta: int) -> None:
        if not self._items:
            return
        self._selected = (self._selected + delta) % len(self._items)

    def _activate(self) -> None:
        if not self._items:
            return
        self._items[self._selected].action()

    def _back(self) -> None:
        if self._is_root:
            self._app.quit()
        else:
            self._app.pop()

    def render(self, surface: pygame.Surface) -> None:
        w, h = surface.get_size()
        surface.fill(BG)

        margin = max(10, min(26, w // 34))
        frame = pygame.Rect(margin, margin, max(260, w - margin * 2), max(220, h - margin * 2))
        pygame.draw.rect(surface, PANEL_BG, frame)
        pygame.draw.rect(surface, BORDER, frame, 2)

        title = self._title_font.render(self._title, True, TEXT_MAIN)
        surface.blit(title, title.get_rect(midtop=(frame.centerx, frame.y + 18)))

        row_h = 40
        y = frame.y + 90
        for idx, item in enumerate(self._items):
            row = pygame.Rect(frame.x + 40, y, frame.w - 80, row_h)
            selected = idx == self._selected
            if selected:
                pygame.draw.rect(surface, (244, 248, 255), row)
            else:
                pygame.draw.rect(surface, (62, 84, 152), row, 1)
            color = (14, 26, 74) if selected else TEXT_MAIN
            text = self._item_font.render(item.label, True, color)
            surface.blit(text, (row.x + 10, row.y + (row.h - text.get_height()) // 2))
            y += row_h + 8

        footer = "Enter/Space: Select  |  Esc/Backspace: Back"
        foot = self._hint_font.render(footer, True, TEXT_MUTED)
        surface.blit(foot, foot.get_rect(midbottom=(frame.centerx, frame.bottom - 10)))


def _cycle(options: list, current: object | None) -> object:
    if current is None or current not in options:
        return options[0]
    return options[(options.index(current) + 1) % len(options)]


class SimulatorScreen:
    """Canvas with draggable vectors plus a text panel for analysis.

    Controls: drag red handles (head) or white handles (tail); 1-4 toggle the
    angle reference of a vector; D/M cycle the prediction; Enter submits it
    (or dismisses a challenge intro); R resets vectors; H hint; F formulas;
    T resultant; E real-world example; Esc leaves.
    """

    def __init__(
        self,
        app: App,
        *,
        simulator: VectorSimulator,
        scheduler: PolledScheduler,
        challenge_id: int | None = None,
    ) -> None:
        self._app = app
        self._sim = simulator
        self._scheduler = scheduler
        self._drag = DragController(simulator)
        self._view = ViewState()
        self._direction: DirectionQuadrant | None = None
        self._magnitude_range: MagnitudeRange | None = None

        self._font = pygame.font.Font(None, 24)
        self._small_font = pygame.font.Font(None, 20)
        self._title_font = pygame.font.Font(None, 34)

        if challenge_id is not None:
            self._sim.start_challenge(challenge_id)
            self._view.on_challenge_started()

    # -- Event handling -----------------------------------------------------
    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.MOUSEBUTTONDOWN and getattr(event, "button", 0) == 1:
            self._drag.press(self._to_canvas(event.pos))
        elif event.type == pygame.MOUSEMOTION and self._drag.dragging:
            was_completed = self._sim.challenges.phase is ChallengePhase.COMPLETED
            self._drag.move(self._to_canvas(event.pos))
            if not was_completed and self._sim.challenges.phase is ChallengePhase.COMPLETED:
                self._view.on_challenge_completed()
        elif event.type == pygame.MOUSEBUTTONUP and getattr(event, "button", 0) == 1:
            self._drag.release()
        elif event.type == pygame.KEYDOWN:
            self._handle_key(event.key)

    def _handle_key(self, key: int) -> None:
        if key in (pygame.K_ESCAPE, pygame.K_BACKSPACE):
            self._exit()
        elif key == pygame.K_r:
            self._sim.reset_vectors()
            self._direction = None
            self._magnitude_range = None
            self._view.on_prediction(None)
        elif key in (pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4):
            vector_id = key - pygame.K_0
            if vector_id in {v.id for v in self._sim.vectors}:
                self._sim.toggle_angle_reference(vector_id)
        elif key == pygame.K_d:
            self._direction = _cycle(list(DirectionQuadrant), self._direction)
        elif key == pygame.K_m:
            self._magnitude_range = _cycle(list(MagnitudeRange), self._magnitude_range)
        elif key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self._on_enter()
        elif key == pygame.K_h:
            self._view.toggle("show_hint")
        elif key == pygame.K_f:
            self._view.toggle("show_formulas")
        elif key == pygame.K_t:
            self._view.toggle("show_resultant")
        elif key == pygame.K_e:
            self._view.toggle("show_real_world_example")

    def _on_enter(self) -> None:
        if self._view.show_intro:
            self._sim.dismiss_challenge_intro()
            self._view.on_intro_dismissed()
            return
        prediction = Prediction(direction=self._direction, magnitude_range=self._magnitude_range)
        # Submit stays disabled until both fields are chosen.
        if not prediction.is_complete:
            return
        result = self._sim.submit_prediction(prediction)
        self._view.on_prediction(result)

    def _exit(self) -> None:
        self._drag.release()
        self._sim.reset_challenge()
        self._view.on_challenge_exit()
        self._app.pop()

    def _to_canvas(self, pos: tuple[int, int]) -> Point:
        return Point(float(pos[0] - CANVAS_ORIGIN[0]), float(pos[1] - CANVAS_ORIGIN[1]))

    # -- Rendering ----------------------------------------------------------
    def render(self, surface: pygame.Surface) -> None:
        self._scheduler.poll()
        surface.fill(BG)

        snap = self._sim.snapshot()
        title = "Free Play" if snap.challenge.active_id is None else f"Challenge: {snap.challenge.description}"
        surface.blit(self._title_font.render(title, True, TEXT_MAIN), (CANVAS_ORIGIN[0], 24))

        self._render_canvas(surface)
        self._render_panel(surface)

    def _render_canvas(self, surface: pygame.Surface) -> None:
        cfg = self._sim.config
        ox, oy = CANVAS_ORIGIN
        canvas = pygame.Rect(ox, oy, cfg.canvas_width, cfg.canvas_height)
        pygame.draw.rect(surface, (250, 250, 252), canvas)

        for gx in range(0, cfg.canvas_width + 1, 50):
            pygame.draw.line(surface, (228, 232, 240), (ox + gx, oy), (ox + gx, oy + cfg.canvas_height))
        for gy in range(0, cfg.canvas_height + 1, 50):
            pygame.draw.line(surface, (228, 232, 240), (ox, oy + gy), (ox + cfg.canvas_width, oy + gy))
        cx, cy = cfg.center
        pygame.draw.line(surface, (120, 120, 130), (ox, oy + cy), (ox + cfg.canvas_width, oy + cy), 2)
        pygame.draw.line(surface, (120, 120, 130), (ox + cx, oy), (ox + cx, oy + cfg.canvas_height), 2)

        for vector in self._drag.render_order():
            self._draw_vector(surface, vector)

        if self._view.show_resultant:
            r = self._sim.resultant
            start = (ox + cx, oy + cy)
            end = (ox + cx + r.x, oy + cy - r.y)
            _draw_arrow(surface, RESULTANT_COLOR, start, end, width=4)

        pygame.draw.rect(surface, BORDER, canvas, 2)

    def _draw_vector(self, surface: pygame.Surface, vector: Vector) -> None:
        ox, oy = CANVAS_ORIGIN
        start = (ox + vector.start.x, oy + vector.start.y)
        end = (ox + vector.end.x, oy + vector.end.y)
        color = pygame.Color(vector.color)
        width = 4 if vector.id == self._drag.active_vector_id else 3
        _draw_arrow(surface, color, start, end, width=width)
        pygame.draw.circle(surface, (255, 255, 255), (int(start[0]), int(start[1])), 6)
        pygame.draw.circle(surface, color, (int(start[0]), int(start[1])), 6, 2)
        pygame.draw.circle(surface, RESULTANT_COLOR, (int(end[0]), int(end[1])), 7)

        c = self._sim.compute_vector_components(vector)
        axis = "x" if c.angle_reference is AngleReference.X_AXIS else "y"
        label = f"F{vector.id} {round_half_up(c.magnitude)} N, {round_half_up(c.angle_from_reference)}° from {axis}"
        surface.blit(self._small_font.render(label, True, color), (end[0] + 8, end[1] - 8))

    def _render_panel(self, surface: pygame.Surface) -> None:
        cfg = self._sim.config
        x = CANVAS_ORIGIN[0] + cfg.canvas_width + 20
        panel = pygame.Rect(x, CANVAS_ORIGIN[1], surface.get_width() - x - 20, surface.get_height() - 90)
        pygame.draw.rect(surface, PANEL_BG, panel)
        pygame.draw.rect(surface, BORDER, panel, 1)

        snap = self._sim.snapshot()
        r = snap.resultant
        lines: list[tuple[str, tuple[int, int, int]]] = [
            (f"Resultant: {round_half_up(r.magnitude)} N at {round_half_up(r.angle)}°", TEXT_MAIN),
            (f"Rx = {round_half_up(r.x)} N   Ry = {round_half_up(r.y)} N", TEXT_MUTED),
            ("", TEXT_MAIN),
        ]
        if self._view.show_formulas:
            for c in snap.components:
                lines.append((f"F{c.vector_id}: {c.x_formula}", TEXT_MUTED))
                lines.append((f"     {c.y_formula}", TEXT_MUTED))
            for check in self._sim.verify():
                status = "ok" if check.is_accurate else "mismatch"
                lines.append(
                    (
                        f"F{check.vector_id} check {status}: error {check.error_x:.2f} / {check.error_y:.2f} N",
                        GOOD if check.is_accurate else WARN,
                    )
                )
            lines.append(("", TEXT_MAIN))

        ch = snap.challenge
        if ch.active_id is not None:
            definition = self._sim.challenges.definition(ch.active_id)
            lines.append((f"Time {ch.elapsed_label}   Progress {ch.progress_pct}%", TEXT_MAIN))
            if self._view.show_intro:
                lines.append((definition.objective, TEXT_MUTED))
                lines.append(("Press Enter to begin.", WARN))
            if self._view.show_hint:
                lines.append((f"Hint: {definition.hint}", WARN))
            if ch.completed:
                secs = "" if ch.completion_time_s is None else f" in {round_half_up(ch.completion_time_s)} s"
                lines.append((f"Completed{secs}! {definition.feedback}", GOOD))
            if self._view.show_explanation:
                lines.append((definition.explanation, TEXT_MUTED))
                lines.append((f"Learning outcome: {definition.learning_outcome}", TEXT_MUTED))
            if self._view.show_real_world_example:
                lines.append((definition.real_world_example, TEXT_MUTED))
            lines.append((f"Challenges completed: {ch.completed_count}/{ch.total}", TEXT_MUTED))
        elif self._view.show_prediction:
            direction = "-" if self._direction is None else str(self._direction)
            magnitude = "-" if self._magnitude_range is None else str(self._magnitude_range)
            lines.append((f"Predict: direction [D] {direction}   magnitude [M] {magnitude}", TEXT_MAIN))
            result = snap.prediction
            if result is not None:
                lines.append((f"Accuracy: {result.accuracy}", GOOD if result.accuracy == "high" else WARN))
                for text in (result.direction_feedback, result.magnitude_feedback):
                    if text:
                        lines.append((text, TEXT_MUTED))
            if self._view.show_prediction_tips:
                lines.extend((f"- {tip}", WARN) for tip in PREDICTION_TIPS)

        y = panel.y + 10
        for text, color in lines:
            for chunk in _wrap(self._small_font, text, panel.w - 20):
                surface.blit(self._small_font.render(chunk, True, color), (panel.x + 10, y))
                y += 20

        hint = "Drag handles | 1-4 axis | R reset | H hint | F formulas | T resultant | Esc back"
        surface.blit(self._small_font.render(hint, True, TEXT_MUTED), (CANVAS_ORIGIN[0], surface.get_height() - 26))


def _wrap(font: pygame.font.Font, text: str, max_width: int) -> list[str]:
    if text == "":
        return [""]
    out: list[str] = []
    line = ""
    for word in text.split(" "):
        candidate = word if line == "" else f"{line} {word}"
        if font.size(candidate)[0] <= max_width or line == "":
            line = candidate
        else:
            out.append(line)
            line = word
    out.append(line)
    return out


def _draw_arrow(
    surface: pygame.Surface,
    color: pygame.Color | tuple[int, int, int],
    start: tuple[float, float],
    end: tuple[float, float],
    *,
    width: int,
) -> None:
    pygame.draw.line(surface, color, start, end, width)
    length = math.hypot(end[0] - start[0], end[1] - start[1])
    if length < 1.0:
        return
    angle = math.atan2(end[1] - start[1], end[0] - start[0])
    arrow_len, arrow_w = 12.0, 7.0
    x, y = end
    p1 = (x - arrow_len * math.cos(angle) + arrow_w * math.sin(angle), y - arrow_len * math.sin(angle) - arrow_w * math.cos(angle))
    p2 = (x - arrow_len * math.cos(angle) - arrow_w * math.sin(angle), y - arrow_len * math.sin(angle) + arrow_w * math.cos(angle))
    pygame.draw.polygon(surface, color, (end, p1, p2))


def _configure_logging() -> None:
    level = os.environ.get(LOG_LEVEL_ENV, "WARNING").strip().upper() or "WARNING"
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def run(*, max_frames: int | None = None, event_injector: Callable[[int], None] | None = None) -> int:
    _configure_logging()
    pygame.init()

    pygame.display.set_caption("Resultant Trainer")
    surface = pygame.display.set_mode(WINDOW_SIZE, pygame.RESIZABLE)

    font = pygame.font.Font(None, 36)
    clock = pygame.time.Clock()

    app = App(surface=surface, font=font)

    real_clock = RealClock()
    scheduler = PolledScheduler(real_clock)
    # One simulator per session so completed challenges stay completed.
    simulator = build_vector_simulator(clock=real_clock, scheduler=scheduler, config=SimulatorConfig.from_env())

    def open_free_play() -> None:
        app.push(SimulatorScreen(app, simulator=simulator, scheduler=scheduler))

    def open_challenge(challenge_id: int) -> Callable[[], None]:
        def _open() -> None:
            app.push(
                SimulatorScreen(app, simulator=simulator, scheduler=scheduler, challenge_id=challenge_id)
            )

        return _open

    challenge_items = [
        MenuItem(f"{d.description} ({d.difficulty})", open_challenge(d.id))
        for d in simulator.challenges.definitions()
    ]
    challenge_items.append(MenuItem("Back", app.pop))
    challenges_menu = MenuScreen(app, "Challenges", challenge_items)

    def reset_session() -> None:
        simulator.reset_all()
        logger.info("session reset")

    main_items = [
        MenuItem("Free play", open_free_play),
        MenuItem("Challenges", lambda: app.push(challenges_menu)),
        MenuItem("Reset session", reset_session),
        MenuItem("Quit", app.quit),
    ]

    app.push(MenuScreen(app, "Resultant Trainer", main_items, is_root=True))

    frame = 0
    try:
        while app.running:
            if event_injector is not None:
                event_injector(frame)

            for event in pygame.event.get():
                app.handle_event(event)

            app.render()

            pygame.display.flip()

            frame += 1
            if max_frames is not None and frame >= max_frames:
                break

            clock.tick(TARGET_FPS)
    finally:
        simulator.close()
        pygame.quit()

    return 0
