"""core package initialization.

Making `core` an explicit package so imports like `import core.zone`
work reliably when running `main.py` from the project root.
"""

__all__ = ["app", "entropy", "events", "tuning", "zone"]
