from __future__ import annotations

import logging
import textwrap
from pathlib import Path

import pytest

from catchfall.audio.sfx import SFXManager
from catchfall.config import GameConfig, from_env, load_config, load_defaults
from catchfall.exceptions import ConfigError


def test_embedded_defaults_match_dataclass_defaults():
    defaults = load_defaults()
    config = load_config(env={})
    assert defaults["max_score"] == 100
    assert config.max_score == GameConfig().max_score
    assert config.spawn_points == GameConfig().spawn_points
    assert config.game_id == 8
    assert config.sounds == {}


def test_default_sounds_load_without_missing_asset_warnings(caplog):
    caplog.set_level(logging.INFO, logger="catchfall.audio.sfx")
    config = load_config(env={})
    mgr = SFXManager(config.sounds, volume=config.sfx_volume)
    assert "Asset not found" not in caplog.text
    assert mgr.play("win") is False


def test_file_overrides_defaults(tmp_path: Path):
    cfg = tmp_path / "catch.yaml"
    cfg.write_text(
        textwrap.dedent(
            """
            max_score: 50
            spawn_points: [-1, 1]
            seed: 5
            """
        ),
        encoding="utf-8",
    )
    config = load_config(cfg, env={})
    assert config.max_score == 50
    assert config.spawn_points == (-1.0, 1.0)
    assert config.seed == 5
    assert config.score_increment == 10


def test_env_beats_file_and_overrides_beat_env(tmp_path: Path):
    cfg = tmp_path / "catch.yaml"
    cfg.write_text("max_mistakes: 5\ntotal_lives: 5\n", encoding="utf-8")
    env = {"CATCHFALL_MAX_MISTAKES": "4", "CATCHFALL_SPAWN_POINTS": "-2, 0, 2"}
    config = load_config(cfg, env=env, total_lives=2)
    assert config.max_mistakes == 4
    assert config.total_lives == 2
    assert config.spawn_points == (-2.0, 0.0, 2.0)


def test_config_file_from_env(tmp_path: Path):
    cfg = tmp_path / "env.yaml"
    cfg.write_text("score_increment: 25\n", encoding="utf-8")
    config = load_config(env={"CATCHFALL_CONFIG": str(cfg)})
    assert config.score_increment == 25


def test_unknown_keys_are_ignored(tmp_path: Path, caplog):
    cfg = tmp_path / "catch.yaml"
    cfg.write_text("max_score: 40\nrainbow_mode: true\n", encoding="utf-8")
    config = load_config(cfg, env={})
    assert config.max_score == 40
    assert "rainbow_mode" in caplog.text


def test_from_env_ignores_blank_values():
    assert from_env({"CATCHFALL_MAX_SCORE": "", "CATCHFALL_SEED": "9", "OTHER": "1"}) == {"seed": "9"}


@pytest.mark.parametrize(
    "text",
    [
        "max_score: 0\n",
        "spawn_points: []\n",
        "spawn_interval: -1\n",
        "max_score: lots\n",
        "- just\n- a list\n",
        "max_score: [unclosed\n",
    ],
)
def test_invalid_config_raises(tmp_path: Path, text: str):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(cfg, env={})


def test_missing_file_raises(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.yaml", env={})
