"""simulation — Day-by-day session engine.

Everything that owns or advances the game session lives here.  The
controller is the single writer of the ``GameSession`` value; the
transition functions it calls are pure.

Submodules
----------
transitions     SessionSettings, Transition — pure (session, input) → session
controller      GameController — inputs, queries, infection resolution
scheduler       EffectScheduler — deferred presentation effects
"""
