"""test_zones_agents.py — Zone locator and agent profile generation.

Run:  python test_zones_agents.py
"""
from __future__ import annotations
import sys, random, tempfile, traceback
from pathlib import Path

from core.tuning import load as _load_tuning
_load_tuning()

from components.agent import AGE_BRACKETS, COMORBIDITY_MULT
from core.entropy import FixedEntropy, SequenceEntropy, default_entropy
from core.zone import DEFAULT_ZONES, ZoneRect, load_zones, locate
from logic.agent_generator import generate


_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")


# ═══════════════════════════════════════════════════════════════════════
#  1 — Zone locator
# ═══════════════════════════════════════════════════════════════════════

def test_zone_loading():
    print("\n=== 1: Zone table ===")
    zones = load_zones()
    assert zones == DEFAULT_ZONES, zones
    assert [z.id for z in zones] == ["home", "work", "school", "social", "hospital"]
    ok("zones.toml matches built-in layout, declaration order kept")

    assert load_zones("no/such/zones.toml") == DEFAULT_ZONES
    ok("missing file falls back to built-in layout")

    with tempfile.TemporaryDirectory() as tmp:
        broken = Path(tmp) / "broken.toml"
        broken.write_text("[[zone]\n", encoding="utf-8")
        assert load_zones(broken) == DEFAULT_ZONES
        ok("unparseable TOML falls back to built-in layout")

        partial = Path(tmp) / "partial.toml"
        partial.write_text(
            "[[zone]]\nid = \"park\"\nx = 1\ny = 2\nw = 3\nh = 4\n"
            "[[zone]]\nid = \"pier\"\nx = \"far\"\ny = 0\nw = 1\nh = 1\n"
            "[[zone]]\nid = \"mall\"\nx = 5\n",
            encoding="utf-8")
        assert load_zones(partial) == (ZoneRect("park", 1.0, 2.0, 3.0, 4.0),)
        ok("malformed zone entries skipped")

        empty = Path(tmp) / "empty.toml"
        empty.write_text("[[zone]]\nid = \"mall\"\n", encoding="utf-8")
        assert load_zones(empty) == DEFAULT_ZONES
        ok("file with no usable zone falls back to built-in layout")


def test_locate():
    print("\n=== 2: locate() ===")
    assert locate((19.0, 65.0), DEFAULT_ZONES) == "home"
    assert locate((55.0, 30.0), DEFAULT_ZONES) == "work"
    assert locate((19.0, 20.0), DEFAULT_ZONES) == "hospital"
    assert locate((35.0, 90.0), DEFAULT_ZONES) is None
    ok("interior points and empty ground")

    # Just outside home's right edge (28) but within the 2.0 buffer
    assert locate((29.5, 60.0), DEFAULT_ZONES) == "home"
    assert locate((30.5, 60.0), DEFAULT_ZONES) is None
    assert locate((30.0, 60.0), DEFAULT_ZONES) == "home"     # edge inclusive
    ok("buffer margin of 2.0 on all sides")

    assert locate((29.5, 60.0), DEFAULT_ZONES, buffer=0.0) is None
    ok("buffer can be overridden")


def test_overlap_priority():
    print("\n=== 3: Buffered overlap resolves by declaration order ===")
    school = next(z for z in DEFAULT_ZONES if z.id == "school")
    social = next(z for z in DEFAULT_ZONES if z.id == "social")
    point = (80.0, 54.0)
    assert social.contains(*point) and not school.contains(*point)
    assert school.contains(*point, buffer=2.0)
    assert locate(point, DEFAULT_ZONES) == "school"
    ok("point inside social but in school's buffer → school (declared first)")

    flipped = tuple(reversed(DEFAULT_ZONES))
    assert locate(point, flipped) == "social"
    ok("reordering the zone list changes the winner")

    a = ZoneRect("a", 0.0, 0.0, 10.0, 10.0)
    b = ZoneRect("b", 11.0, 0.0, 10.0, 10.0)
    assert locate((11.5, 5.0), (a, b)) == "a"
    assert locate((11.5, 5.0), (b, a)) == "b"
    ok("nearest zone does not win over earlier zone")


# ═══════════════════════════════════════════════════════════════════════
#  2 — Agent generator
# ═══════════════════════════════════════════════════════════════════════

def test_agent_generation():
    print("\n=== 4: Agent profiles ===")
    a1 = generate(default_entropy(99))
    a2 = generate(default_entropy(99))
    assert a1 == a2
    ok("same seed → same agent")

    rng = random.Random(5)
    seen_brackets, seen_comorb, seen_status = set(), set(), set()
    for _ in range(2000):
        a = generate(rng)
        assert a.age_bracket in AGE_BRACKETS
        assert a.comorbidities in (0, 1, 2)
        assert a.employment_status in ("employed", "student", "unemployed")
        assert (a.employment_type is not None) == (a.employment_status == "employed")
        assert a.gender in ("female", "male")
        expect = a.age_bracket.susceptibility * COMORBIDITY_MULT[a.comorbidities]
        assert abs(a.susceptibility - expect) < 1e-12
        seen_brackets.add(a.age_bracket.id)
        seen_comorb.add(a.comorbidities)
        seen_status.add(a.employment_status)
    assert len(seen_brackets) == 7 and seen_comorb == {0, 1, 2}
    assert len(seen_status) == 3
    ok("2000 draws: fields valid, every bracket / count / status reached")

    # Draw order: age, comorbidity gate, comorbidity count, employment,
    # essential, senior center, gender
    a = generate(SequenceEntropy([0.99, 0.1, 0.9, 0.1, 0.1, 0.5, 0.1]))
    assert a.age_bracket.id == "84+"
    assert a.comorbidities == 2
    assert a.employment_status == "employed" and a.employment_type == "essential"
    assert not a.senior_center and a.gender == "female"
    assert abs(a.susceptibility - 1.25 * 1.15) < 1e-12
    ok("sequenced draws give the expected oldest, 2+ comorbidity agent")

    low = generate(FixedEntropy(0.0))
    assert low.age_bracket.id == "0-19" and low.comorbidities == 1
    ok("all-zero draws give youngest bracket")

    d = low.to_dict()
    assert d["age_label"] == "Age 0-19" and d["comorbidity_label"] == "1 comorbidity"
    assert low.describe().endswith("Age 0-19, 1 comorbidity")
    ok("summary fields")


if __name__ == "__main__":
    sections = [
        ("Zone Loading", test_zone_loading),
        ("Locate", test_locate),
        ("Overlap Priority", test_overlap_priority),
        ("Agent Generation", test_agent_generation),
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
    print(f"  Zone & Agent Tests: {_passed} passed, {_failed} failed  "
          f"(total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
