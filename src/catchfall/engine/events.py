from enum import Enum, auto


class SessionState(Enum):
    """Lifecycle of a single play session. WON and LOST are terminal."""

    NOT_STARTED = auto()
    PLAYING = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_over(self) -> bool:
        return self in (SessionState.WON, SessionState.LOST)


class ObjectKind(str, Enum):
    """Kind of a falling collectible."""

    GOOD = "good"
    BAD = "bad"


class GameEvent(Enum):
    """Events emitted by GameSession to notify UI or systems."""

    STARTED = auto()
    SCORE_CHANGED = auto()
    LIFE_LOST = auto()
    SPAWNED = auto()
    WON = auto()
    LOST = auto()
