from .hud import HudModel

__all__ = ["HudModel"]
