from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from importlib.resources import files as resource_files
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import yaml

from ..exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "CATCHFALL_"
ENV_CONFIG_FILE = "CATCHFALL_CONFIG"


def _as_float_tuple(value: Any) -> Tuple[float, ...]:
    if isinstance(value, str):
        value = [v for v in value.split(",") if v.strip()]
    return tuple(float(v) for v in value)


def _as_optional_int(value: Any) -> Optional[int]:
    if value is None or (isinstance(value, str) and value.strip().lower() in {"", "none", "null"}):
        return None
    return int(value)


def _as_optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class GameConfig:
    """Tunables for a single catch session.

    Defaults mirror the shipped ``defaults.yaml``. Build one with
    :func:`load_config` to honour the config file and environment overrides.
    """

    max_score: int = 100
    score_increment: int = 10
    score_decrement: int = 10
    max_mistakes: int = 3
    total_lives: int = 3

    # Catcher is clamped to [-screen_bounds, screen_bounds] on x (world units)
    screen_bounds: float = 8.0
    spawn_points: Tuple[float, ...] = (-6.0, -3.0, 0.0, 3.0, 6.0)
    spawn_interval: float = 2.0
    initial_speed: float = 2.0
    speed_increase_rate: float = 0.1

    message_duration: float = 1.0
    sprite_stages: int = 4
    game_id: int = 8
    seed: Optional[int] = None

    score_url: Optional[str] = None
    report_attempts: int = 1
    sfx_volume: float = 1.0
    sounds: Mapping[str, str] = field(default_factory=dict)

    def validate(self) -> "GameConfig":
        """Raise ConfigError if the values cannot describe a playable session."""
        problems = []
        for name in ("max_score", "score_increment", "max_mistakes", "total_lives", "sprite_stages"):
            if getattr(self, name) <= 0:
                problems.append(f"{name} must be positive")
        if self.score_decrement < 0:
            problems.append("score_decrement must not be negative")
        if self.screen_bounds < 0:
            problems.append("screen_bounds must not be negative")
        if not self.spawn_points:
            problems.append("spawn_points must not be empty")
        if self.spawn_interval <= 0:
            problems.append("spawn_interval must be positive")
        if self.initial_speed < 0 or self.speed_increase_rate < 0:
            problems.append("speeds must not be negative")
        if self.message_duration < 0:
            problems.append("message_duration must not be negative")
        if self.report_attempts < 1:
            problems.append("report_attempts must be at least 1")
        if problems:
            raise ConfigError("; ".join(problems))
        return self

    def as_dict(self) -> Dict[str, Any]:
        out = dataclasses.asdict(self)
        out["spawn_points"] = list(self.spawn_points)
        out["sounds"] = dict(self.sounds)
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameConfig":
        allowed = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - allowed)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        filtered: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in allowed:
                continue
            try:
                filtered[key] = _COERCE[key](value)
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"Invalid value for {key}: {value!r}") from exc
        return cls(**filtered).validate()


_COERCE: Dict[str, Callable[[Any], Any]] = {
    "max_score": int,
    "score_increment": int,
    "score_decrement": int,
    "max_mistakes": int,
    "total_lives": int,
    "screen_bounds": float,
    "spawn_points": _as_float_tuple,
    "spawn_interval": float,
    "initial_speed": float,
    "speed_increase_rate": float,
    "message_duration": float,
    "sprite_stages": int,
    "game_id": int,
    "seed": _as_optional_int,
    "score_url": _as_optional_str,
    "report_attempts": int,
    "sfx_volume": float,
    "sounds": lambda v: {str(k): str(p) for k, p in dict(v or {}).items()},
}


def _parse_yaml(text: str, source: str) -> Dict[str, Any]:
    try:
        raw = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config at {source} is not valid YAML") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"Config at {source} must be a mapping")
    return raw


def load_defaults() -> Dict[str, Any]:
    """Read the embedded ``defaults.yaml`` resource."""
    data = resource_files("catchfall.config").joinpath("defaults.yaml").read_text(encoding="utf-8")
    logger.debug("Loaded embedded default config resource")
    return _parse_yaml(data, "catchfall/config/defaults.yaml")


def load_file(path: Path | str) -> Dict[str, Any]:
    p = Path(path).expanduser()
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {p}: {exc}") from exc
    logger.debug("Loaded config from path: %s", p)
    return _parse_yaml(text, str(p))


def from_env(env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Collect ``CATCHFALL_<FIELD>`` overrides, e.g. CATCHFALL_MAX_SCORE=50."""
    env = os.environ if env is None else env
    out: Dict[str, Any] = {}
    for f in dataclasses.fields(GameConfig):
        if f.name == "sounds":
            continue
        key = ENV_PREFIX + f.name.upper()
        if key in env and env[key] != "":
            out[f.name] = env[key]
    return out


def load_config(
    path: Path | str | None = None,
    *,
    env: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> GameConfig:
    """Build a validated GameConfig.

    Order of precedence (lowest to highest): embedded defaults < file < env < overrides.
    The file is ``path`` if given, else ``$CATCHFALL_CONFIG`` if set.
    """
    env = os.environ if env is None else env
    data: Dict[str, Any] = load_defaults()
    chosen = path if path is not None else env.get(ENV_CONFIG_FILE) or None
    if chosen is not None:
        data.update(load_file(chosen))
    data.update(from_env(env))
    data.update({k: v for k, v in overrides.items() if v is not None})
    config = GameConfig.from_dict(data)
    logger.info(
        "Config: max_score=%d increment=%d decrement=%d max_mistakes=%d lives=%d",
        config.max_score,
        config.score_increment,
        config.score_decrement,
        config.max_mistakes,
        config.total_lives,
    )
    return config


__all__ = [
    "GameConfig",
    "load_config",
    "load_defaults",
    "load_file",
    "from_env",
]
