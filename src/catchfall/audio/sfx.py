import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union


logger = logging.getLogger(__name__)


class SoundCue(str, Enum):
    """Sound cues a session can request."""

    WIN = "win"
    LOSE = "lose"
    POINT = "point"
    POINT_LOSS = "point_loss"


def _cue_key(cue: Union[SoundCue, str]) -> str:
    return cue.value if isinstance(cue, SoundCue) else str(cue)


@dataclass
class _SoundWrapper:
    """A thin wrapper around a backend sound object to normalize interface."""

    obj: Any

    def play(self, volume: float) -> None:
        play = getattr(self.obj, "play", None)
        if not callable(play):
            raise TypeError(f"{type(self.obj).__name__} has no play()")
        # arcade.Sound accepts volume=...; simpler fakes may take it positionally
        try:
            play(volume=volume)
        except TypeError:
            play(volume)


class SFXManager:
    """Loads and plays the game's sound cues, optionally using Arcade.

    Key guarantees:
    - Graceful degradation: if the backend or an asset is missing, no
      exception escapes :meth:`play`; it returns False instead.
    - Cue names are the only coupling with the rest of the game, so assets can
      change freely.

    Sounds come from a cue -> path mapping (usually ``GameConfig.sounds``) or
    are registered programmatically via :meth:`register_sound` /
    :meth:`register_path`.
    """

    def __init__(
        self,
        sounds: Optional[Mapping[str, str]] = None,
        *,
        enabled: bool = True,
        volume: float = 1.0,
        backend: Optional[Any] = None,
        base_dir: Optional[str] = None,
    ) -> None:
        """Create a new SFX manager.

        Args:
            sounds: Optional mapping of cue name -> sound file path.
            enabled: Whether playback is enabled.
            volume: SFX volume [0.0, 1.0].
            backend: Optional backend module (e.g., arcade). If None, arcade is
                     imported lazily when a path needs loading. Tests can
                     inject a fake backend.
            base_dir: Directory relative paths are resolved against; defaults to cwd.
        """
        self._enabled = bool(enabled)
        self._volume = self._clamp_volume(volume)
        self._backend = backend
        self._base_dir = base_dir
        self._sounds: Dict[str, _SoundWrapper] = {}

        for cue, path in (sounds or {}).items():
            self.register_path(cue, path)

    # ---------------------- Public properties ----------------------
    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = bool(value)

    @property
    def volume(self) -> float:
        return self._volume

    @volume.setter
    def volume(self, value: float) -> None:
        self._volume = self._clamp_volume(value)

    def has_cue(self, cue: Union[SoundCue, str]) -> bool:
        return _cue_key(cue) in self._sounds

    # ---------------------- Core API ----------------------
    def play(self, cue: Union[SoundCue, str]) -> bool:
        """Attempt to play the sound for ``cue``. Returns True on success.

        This never raises; it logs and returns False on failure or when disabled.
        """
        key = _cue_key(cue)
        if not self._enabled:
            logger.debug("SFX: Playback disabled (cue=%s)", key)
            return False
        snd = self._sounds.get(key)
        if snd is None:
            logger.debug("SFX: No sound registered for cue '%s'", key)
            return False
        try:
            snd.play(self._volume)
            return True
        except Exception:  # noqa: BLE001
            logger.exception("SFX: Unexpected error while playing '%s'", key)
            return False

    def register_sound(self, cue: Union[SoundCue, str], sound_obj: Any) -> None:
        """Register a pre-constructed backend sound object for a cue."""
        key = _cue_key(cue)
        self._sounds[key] = _SoundWrapper(sound_obj)
        logger.debug("SFX: Registered sound object for '%s'", key)

    def register_path(self, cue: Union[SoundCue, str], path: str) -> bool:
        """Register a path and try to load it via the backend.

        A missing backend or file is tolerated; the cue will simply not play.
        """
        key = _cue_key(cue)
        wrapper = self._create_sound_wrapper(path)
        if wrapper is None:
            logger.info("SFX: Could not load sound for '%s' from '%s'", key, path)
            return False
        self._sounds[key] = wrapper
        logger.debug("SFX: Registered sound path for '%s' -> %s", key, path)
        return True

    # ---------------------- Helpers ----------------------
    def _resolve(self, path: str) -> str:
        if os.path.isabs(path):
            return path
        return os.path.abspath(os.path.join(self._base_dir or os.getcwd(), path))

    def _create_sound_wrapper(self, path: str) -> Optional[_SoundWrapper]:
        resolved = self._resolve(path)
        if not os.path.exists(resolved):
            logger.info("SFX: Asset not found at %s", resolved)
            return None
        backend = self._ensure_backend()
        if backend is None:
            logger.info("SFX: No audio backend available; cannot load %s", resolved)
            return None
        try:
            # Arcade API: Sound(path, streaming=False)
            sound = backend.Sound(resolved, streaming=False)
            return _SoundWrapper(sound)
        except Exception:  # noqa: BLE001
            logger.exception("SFX: Backend failed to load %s", resolved)
            return None

    def _ensure_backend(self) -> Optional[Any]:
        if self._backend is not None:
            return self._backend
        # Lazy import: audio is optional and arcade needs a display-capable env
        try:
            import importlib

            self._backend = importlib.import_module("arcade")
        except Exception:  # noqa: BLE001
            self._backend = None
            logger.debug("SFX: Arcade backend not available; running in silent mode")
        return self._backend

    @staticmethod
    def _clamp_volume(v: float) -> float:
        try:
            fv = float(v)
        except (TypeError, ValueError):
            return 1.0
        return max(0.0, min(1.0, fv))
