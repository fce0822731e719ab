"""
Catchfall package root.

A small "catch the falling objects" arcade minigame. The session state machine
in :mod:`catchfall.engine.session` is kept free of engine specifics (e.g.,
Arcade) so it can be driven headless and tested in isolation.
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
