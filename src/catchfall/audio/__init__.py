from .sfx import SFXManager, SoundCue

__all__ = ["SFXManager", "SoundCue"]
