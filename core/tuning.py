"""core/tuning.py — Data-driven tuning constants.

Epidemiology and gameplay numbers live in ``data/tuning.toml`` and are
loaded once at startup.  Any module can read a value with::

    from core.tuning import get
    growth = get("session", "community_growth", 0.04)

Every caller passes a default equal to the shipped value, so the engine
behaves identically when the file is missing or was never loaded.
"""

from __future__ import annotations
from pathlib import Path

try:
    import tomllib                         # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib                # pip install tomli


DATA_DIR = Path(__file__).resolve().parent.parent / "data"

_data: dict = {}


def load(path: str | Path | None = None) -> None:
    """Load tuning constants from *path*.

    If *path* is ``None``, default to ``data/tuning.toml`` at the
    project root.
    """
    global _data

    path = DATA_DIR / "tuning.toml" if path is None else Path(path)

    if not path.exists():
        print(f"[TUNING] {path} not found — using defaults")
        _data = {}
        return

    try:
        with open(path, "rb") as f:
            _data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        print(f"[TUNING] {path} is malformed ({exc}) — using defaults")
        _data = {}
        return

    print(f"[TUNING] Loaded {_count_leaves(_data)} values from {path}")


def get(section: str, key: str, default=None):
    """Read a tuning value.

    *section* uses dot-notation to traverse nested tables, e.g.
    ``"risk.base.social"`` looks up ``[risk.base.social]``.

    >>> get("session", "goal_days", 100)
    100
    """
    node = _section_node(section)
    if isinstance(node, dict):
        return node.get(key, default)
    return default


def _section_node(section_path: str):
    node = _data
    for part in section_path.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
        if node is None:
            return None
    return node


def _count_leaves(d: dict, _n: int = 0) -> int:
    for v in d.values():
        if isinstance(v, dict):
            _n = _count_leaves(v, _n)
        else:
            _n += 1
    return _n
