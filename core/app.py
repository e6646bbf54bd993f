"""
core/app.py — Pygame application shell

Opens a small window purely to receive keyboard focus, turns key
presses into intents and hands them to the ``GameController``.  State
changes are reported on the console through the controller's event
bus; the only on-screen output is the window caption.

    app = App(controller)
    app.run()
"""

from __future__ import annotations
import pygame

from components.session import Outcome
from core.events import GameWon, PlayerInfected, PromptShown
from logic.input_manager import InputContext, InputManager, MOVE_INTENTS
from simulation.controller import GameController


def dispatch_intent(ctl: GameController, intent: str) -> bool:
    """Apply one intent to the controller.  Returns whether it was accepted."""
    if intent in MOVE_INTENTS:
        return ctl.move(MOVE_INTENTS[intent])
    if intent == "confirm":
        return ctl.attempt_enter()
    if intent == "back":
        return ctl.leave_location()
    if intent == "restart":
        ctl.restart()
        return True
    if intent.startswith("option_"):
        prompt = ctl.current_prompt()
        try:
            idx = int(intent.split("_", 1)[1]) - 1
        except ValueError:
            return False
        if prompt is None or not 0 <= idx < len(prompt.options):
            return False
        return ctl.choose_option(prompt.id, prompt.options[idx].id)
    return False


def context_for(ctl: GameController) -> InputContext:
    if ctl.session.finished:
        return InputContext.ENDED
    if ctl.session.trace is not None:
        return InputContext.PROMPT
    return InputContext.TOWN


def handle_events(ctl: GameController, im: InputManager, events) -> list[str]:
    """Map and dispatch one frame of raw events.

    Each KEYDOWN is mapped with the context left by the previous
    dispatch, so Enter then Y in one frame enters a zone and answers
    its first prompt.  Returns the intents dispatched, in order.
    """
    im.begin_frame()
    dispatched: list[str] = []
    for event in events:
        im.context = context_for(ctl)
        seen = len(im.pressed_in_order())
        im.feed(event)
        for intent in im.pressed_in_order()[seen:]:
            dispatch_intent(ctl, intent)
            dispatched.append(intent)
    im.context = context_for(ctl)
    return dispatched


class App:
    def __init__(self, controller: GameController, title: str = "Outbreak Walk",
                 width: int = 480, height: int = 120):
        pygame.init()
        self.screen = pygame.display.set_mode((width, height))
        self.title = title
        pygame.display.set_caption(title)
        self.clock = pygame.time.Clock()
        self.running = True
        self.fps = 30

        self.ctl = controller
        self.input = InputManager()
        self._caption = ""
        self._subscribe_console(controller)

    # -- Main loop --

    def run(self):
        while self.running:
            self.clock.tick(self.fps)

            handle_events(self.ctl, self.input, pygame.event.get())
            if any(e.type == pygame.QUIT for e in self.input.raw_events):
                self.running = False

            self.ctl.tick(pygame.time.get_ticks() / 1000.0)
            self.ctl.bus.drain()
            self._update_caption()

        pygame.quit()

    # -- Console reporting --

    def _update_caption(self):
        s = self.ctl.session
        parts = [self.title, f"Day {s.day}", f"community {s.community_level:.2f}"]
        if s.outcome is Outcome.NONE:
            parts.append(self.ctl.presentation.advisory or self.ctl.hint())
        else:
            parts.append(s.outcome.value.upper())
        caption = " | ".join(parts)
        if caption != self._caption:
            self._caption = caption
            pygame.display.set_caption(caption)

    def _subscribe_console(self, ctl: GameController):
        bus = ctl.bus

        def on_prompt(e: PromptShown):
            opts = "  ".join(f"[{i}] {label}"
                             for i, (_oid, label) in enumerate(e.options, 1))
            print(f"[{e.location_id.upper()}] {e.prompt}  {opts}")

        def on_infected(e: PlayerInfected):
            s = ctl.session
            print(f"[GAME] INFECTED — survived {e.days_survived} days "
                  f"({s.agent.age_label}, {s.agent.comorbidity_label}).  "
                  f"Press R to try again.")

        def on_won(e: GameWon):
            print(f"[GAME] VICTORY — {e.days_survived} days survived "
                  f"({ctl.session.agent.age_label}).  Press R to play again.")

        bus.subscribe("SessionStarted",
                      lambda e: print(f"[GAME] Day 1 — {ctl.session.agent.describe()}"))
        bus.subscribe("VisitStarted",
                      lambda e: print(f"[GAME] Entered {e.label}"))
        bus.subscribe("PromptShown", on_prompt)
        bus.subscribe("VisitAbandoned",
                      lambda e: print(f"[GAME] Back in town ({e.reason})"))
        bus.subscribe("DayAdvanced",
                      lambda e: print(f"[GAME] Day {e.day}, community level "
                                      f"{e.community_level:.2f}"))
        bus.subscribe("AdvisoryShown", lambda e: print(f"[TIP] {e.text}"))
        bus.subscribe("PlayerInfected", on_infected)
        bus.subscribe("GameWon", on_won)

