"""logic/input_manager.py — Intent-based input layer.

Sits between raw pygame events and the controller.  The app feeds in
raw events; the manager maps KEYDOWNs to *intents* based on the current
**input context** (town or prompt).  The controller never sees keycodes.

Usage (in App.run):

    self.input.begin_frame()
    for event in pygame.event.get():
        self.input.feed(event)

    if self.input.just("confirm"):
        ...
    for intent in self.input.pressed_in_order():
        dispatch(intent)

Intents
-------
Town:    move_up  move_down  move_left  move_right  confirm  restart
Prompt:  option_1  option_2  back  restart

Movement is discrete: one keypress is one step, as in the original
arrow-key town map.
"""

from __future__ import annotations
from enum import Enum, auto
import pygame


# ── Input contexts ──────────────────────────────────────────────────

class InputContext(Enum):
    """Determines which key-bindings are active."""
    TOWN   = auto()   # walking around the map
    PROMPT = auto()   # answering a location decision
    ENDED  = auto()   # infected / survived screen


# ── Default key bindings ────────────────────────────────────────────

# Each binding is  (pygame key constant, modifier mask or 0)

_TOWN_BINDS: dict[str, list[tuple[int, int]]] = {
    "move_up":      [(pygame.K_UP, 0), (pygame.K_w, 0)],
    "move_down":    [(pygame.K_DOWN, 0), (pygame.K_s, 0)],
    "move_left":    [(pygame.K_LEFT, 0), (pygame.K_a, 0)],
    "move_right":   [(pygame.K_RIGHT, 0), (pygame.K_d, 0)],
    "confirm":      [(pygame.K_RETURN, 0), (pygame.K_SPACE, 0),
                     (pygame.K_KP_ENTER, 0)],
    "restart":      [(pygame.K_r, pygame.KMOD_SHIFT)],
}

_PROMPT_BINDS: dict[str, list[tuple[int, int]]] = {
    "option_1":     [(pygame.K_y, 0), (pygame.K_1, 0)],
    "option_2":     [(pygame.K_n, 0), (pygame.K_2, 0)],
    "back":         [(pygame.K_ESCAPE, 0), (pygame.K_BACKSPACE, 0)],
    "restart":      [(pygame.K_r, pygame.KMOD_SHIFT)],
}

_ENDED_BINDS: dict[str, list[tuple[int, int]]] = {
    "restart":      [(pygame.K_r, 0), (pygame.K_RETURN, 0)],
}

MOVE_INTENTS: dict[str, str] = {
    "move_up": "up",
    "move_down": "down",
    "move_left": "left",
    "move_right": "right",
}


# ── InputManager ────────────────────────────────────────────────────

class InputManager:
    """Context-aware input mapper.

    Call ``begin_frame()`` before processing events and ``feed(event)``
    for each pygame event.  Then use ``just(intent)`` or walk
    ``pressed_in_order()`` to dispatch.
    """

    def __init__(self):
        self.context: InputContext = InputContext.TOWN
        # Intents pressed *this frame*, in arrival order
        self._pressed: list[str] = []
        # Stash for unhandled raw events the app still needs (e.g. QUIT)
        self.raw_events: list[pygame.event.Event] = []

    # ── frame lifecycle ─────────────────────────────────────────

    def begin_frame(self):
        """Call at the start of each frame before feeding events."""
        self._pressed.clear()
        self.raw_events.clear()

    def feed(self, event: pygame.event.Event):
        """Feed a raw pygame event.  Maps it to intents based on context."""
        if event.type != pygame.KEYDOWN:
            self.raw_events.append(event)
            return

        mods = getattr(event, "mod", 0)
        for intent, key_list in self._active_binds().items():
            for key, req_mod in key_list:
                if event.key != key:
                    continue
                if req_mod == 0 or (mods & req_mod):
                    self._pressed.append(intent)
                    return

    # ── queries ─────────────────────────────────────────────────

    def just(self, intent: str) -> bool:
        """True if the intent was triggered this frame."""
        return intent in self._pressed

    def pressed_in_order(self) -> list[str]:
        return list(self._pressed)

    # ── internal ────────────────────────────────────────────────

    def _active_binds(self) -> dict[str, list[tuple[int, int]]]:
        if self.context == InputContext.TOWN:
            return _TOWN_BINDS
        elif self.context == InputContext.PROMPT:
            return _PROMPT_BINDS
        elif self.context == InputContext.ENDED:
            return _ENDED_BINDS
        return {}
