"""test_input.py — Key bindings, input contexts and intent dispatch.

No display is opened: events are built directly and fed to the
``InputManager``, and intents go straight to a ``GameController``.

Run:  python test_input.py
"""
from __future__ import annotations
import sys, traceback

import pygame

from core.tuning import load as _load_tuning
_load_tuning()

from components.session import Outcome
from core.app import context_for, dispatch_intent, handle_events
from core.entropy import FixedEntropy, default_entropy
from logic.input_manager import InputContext, InputManager
from simulation.controller import GameController


_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")


def _key(key: int, mod: int = 0) -> pygame.event.Event:
    return pygame.event.Event(pygame.KEYDOWN, key=key, mod=mod)


def _intents(context: InputContext, *events) -> list[str]:
    im = InputManager()
    im.context = context
    im.begin_frame()
    for ev in events:
        im.feed(ev)
    return im.pressed_in_order()


# ═══════════════════════════════════════════════════════════════════════
#  1 — Bindings per context
# ═══════════════════════════════════════════════════════════════════════

def test_town_bindings():
    print("\n=== 1: Town bindings ===")
    got = _intents(InputContext.TOWN,
                   _key(pygame.K_UP), _key(pygame.K_a), _key(pygame.K_DOWN),
                   _key(pygame.K_d), _key(pygame.K_RETURN))
    assert got == ["move_up", "move_left", "move_down", "move_right", "confirm"], got
    ok("arrows / WASD / Enter map in arrival order")

    assert _intents(InputContext.TOWN, _key(pygame.K_y), _key(pygame.K_1)) == []
    ok("prompt keys inactive in town")

    assert _intents(InputContext.TOWN, _key(pygame.K_r)) == []
    assert _intents(InputContext.TOWN,
                    _key(pygame.K_r, pygame.KMOD_LSHIFT)) == ["restart"]
    ok("restart needs Shift while playing")


def test_prompt_and_ended_bindings():
    print("\n=== 2: Prompt and end-screen bindings ===")
    got = _intents(InputContext.PROMPT,
                   _key(pygame.K_y), _key(pygame.K_2), _key(pygame.K_ESCAPE),
                   _key(pygame.K_UP))
    assert got == ["option_1", "option_2", "back"], got
    ok("Y / 2 / Esc; arrows ignored at a prompt")

    got = _intents(InputContext.ENDED, _key(pygame.K_r), _key(pygame.K_LEFT))
    assert got == ["restart"], got
    ok("plain R restarts on the end screen")

    im = InputManager()
    im.begin_frame()
    quit_ev = pygame.event.Event(pygame.QUIT)
    im.feed(quit_ev)
    assert im.pressed_in_order() == [] and im.raw_events == [quit_ev]
    im.feed(_key(pygame.K_SPACE))
    assert im.just("confirm")
    im.begin_frame()
    assert not im.just("confirm") and im.raw_events == []
    ok("non-key events stashed; frame reset clears intents")


# ═══════════════════════════════════════════════════════════════════════
#  2 — Dispatch into the controller
# ═══════════════════════════════════════════════════════════════════════

def test_dispatch():
    print("\n=== 3: Intent dispatch ===")
    ctl = GameController(entropy=FixedEntropy(0.99),
                         agent_entropy=default_entropy(8))
    assert context_for(ctl) is InputContext.TOWN

    assert dispatch_intent(ctl, "move_left")
    assert ctl.session.x == 47.0
    dispatch_intent(ctl, "move_right")
    ok("move intents step the player")

    assert dispatch_intent(ctl, "confirm")            # (50, 55) is in work
    assert ctl.location == "work"
    assert context_for(ctl) is InputContext.PROMPT
    ok("confirm enters the zone underfoot")

    assert dispatch_intent(ctl, "option_3") is False
    assert dispatch_intent(ctl, "option_x") is False
    assert dispatch_intent(ctl, "dance") is False
    assert ctl.current_prompt().id == "work_from_home"
    ok("out-of-range / unknown intents rejected")

    assert dispatch_intent(ctl, "option_2")           # go in to work
    assert ctl.current_prompt().id == "mask_sd"
    assert dispatch_intent(ctl, "option_1")           # mask on
    assert ctl.day == 2 and ctl.location == "overworld"
    assert ctl.last_visit.precaution_used
    ok("option_N answers the Nth option of the current prompt")

    dispatch_intent(ctl, "confirm")
    assert dispatch_intent(ctl, "back")
    assert ctl.location == "overworld" and ctl.day == 2
    ok("back leaves the visit")

    ctl2 = GameController(entropy=FixedEntropy(0.0),
                          agent_entropy=default_entropy(8))
    dispatch_intent(ctl2, "confirm")
    dispatch_intent(ctl2, "option_2")
    dispatch_intent(ctl2, "option_2")
    assert ctl2.outcome is Outcome.INFECTED
    assert context_for(ctl2) is InputContext.ENDED
    assert dispatch_intent(ctl2, "restart")
    assert ctl2.outcome is Outcome.NONE and ctl2.day == 1
    assert context_for(ctl2) is InputContext.TOWN
    ok("infection → end screen; restart → fresh session")


def test_frame_context_switch():
    print("\n=== 4: Context follows each dispatch within a frame ===")
    ctl = GameController(entropy=FixedEntropy(0.99),
                         agent_entropy=default_entropy(8))
    im = InputManager()
    got = handle_events(ctl, im, [_key(pygame.K_RETURN), _key(pygame.K_y)])
    assert got == ["confirm", "option_1"], got
    assert ctl.day == 2 and ctl.location == "overworld"
    assert im.context is InputContext.TOWN
    ok("Enter then Y in one frame: enter work, then work from home")

    got = handle_events(ctl, im, [_key(pygame.K_RETURN), _key(pygame.K_n),
                                  _key(pygame.K_LEFT), _key(pygame.K_ESCAPE)])
    assert got == ["confirm", "option_2", "back"], got
    assert ctl.location == "overworld" and ctl.day == 2
    assert im.context is InputContext.TOWN
    ok("arrow key at a prompt dropped, Esc backs out")

    quit_ev = pygame.event.Event(pygame.QUIT)
    assert handle_events(ctl, im, [quit_ev]) == []
    assert im.raw_events == [quit_ev]
    ok("QUIT left in raw events for the main loop")


if __name__ == "__main__":
    sections = [
        ("Town Bindings", test_town_bindings),
        ("Prompt & Ended Bindings", test_prompt_and_ended_bindings),
        ("Dispatch", test_dispatch),
        ("Frame Context Switch", test_frame_context_switch),
    ]

    for name, fn in sections:
        try:
            fn()
        except Exception:
            _failed += 1
            print(f"\n  [CRASH] {name} — unhandled exception:")
            traceback.print_exc()

    total = _passed + _failed
    print(f"\n{'=' * 60}")
    print(f"  Input Tests: {_passed} passed, {_failed} failed  "
          f"(total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
