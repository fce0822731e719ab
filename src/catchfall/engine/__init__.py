"""Session state machine and the frame-driven plumbing around it."""

from .events import GameEvent, ObjectKind, SessionState
from .scheduler import Scheduler, TimerHandle
from .session import GameSession, SessionSnapshot

__all__ = [
    "GameEvent",
    "GameSession",
    "ObjectKind",
    "Scheduler",
    "SessionSnapshot",
    "SessionState",
    "TimerHandle",
]
