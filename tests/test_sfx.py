from pathlib import Path

import pytest

from catchfall.audio.sfx import SFXManager, SoundCue


class FakeSound:
    def __init__(self):
        self.calls = []

    def play(self, volume=1.0):
        self.calls.append(volume)


class FakeBackend:
    class Sound:
        def __init__(self, path, streaming=False):
            self._path = path
            self._streaming = streaming
            self._calls = []

        def play(self, volume=1.0):
            self._calls.append(volume)


def test_register_and_play_with_fake_sound():
    mgr = SFXManager()
    snd = FakeSound()
    mgr.register_sound(SoundCue.POINT, snd)

    assert mgr.play(SoundCue.POINT) is True
    # Plain cue names work the same as enum members
    assert mgr.play("point") is True
    assert snd.calls == [1.0, 1.0]


def test_play_returns_false_when_unregistered():
    mgr = SFXManager()
    assert mgr.play(SoundCue.WIN) is False


def test_missing_assets_do_not_crash(tmp_path: Path):
    sounds = {cue.value: str(tmp_path / f"missing_{cue.value}.wav") for cue in SoundCue}
    mgr = SFXManager(sounds, backend=FakeBackend)
    for cue in SoundCue:
        assert mgr.has_cue(cue) is False
        assert mgr.play(cue) is False


def test_paths_resolve_against_base_dir(tmp_path: Path):
    (tmp_path / "win.wav").write_bytes(b"FAKE")
    mgr = SFXManager({"win": "win.wav"}, backend=FakeBackend, base_dir=str(tmp_path))
    assert mgr.has_cue(SoundCue.WIN)
    assert mgr.play(SoundCue.WIN) is True


def test_enabled_flag_controls_playback():
    mgr = SFXManager()
    snd = FakeSound()
    mgr.register_sound(SoundCue.LOSE, snd)

    mgr.enabled = False
    assert mgr.play(SoundCue.LOSE) is False
    assert snd.calls == []

    mgr.enabled = True
    assert mgr.play(SoundCue.LOSE) is True


def test_volume_is_clamped():
    mgr = SFXManager(volume=0.5)
    snd = FakeSound()
    mgr.register_sound(SoundCue.POINT_LOSS, snd)

    mgr.volume = 5.0
    assert mgr.volume == 1.0
    mgr.play(SoundCue.POINT_LOSS)
    assert snd.calls[-1] == pytest.approx(1.0)

    mgr.volume = -0.5
    mgr.play(SoundCue.POINT_LOSS)
    assert snd.calls[-1] == pytest.approx(0.0)


def test_raising_sound_is_swallowed():
    class Broken:
        def play(self, volume=1.0):
            raise RuntimeError("device lost")

    mgr = SFXManager()
    mgr.register_sound(SoundCue.WIN, Broken())
    assert mgr.play(SoundCue.WIN) is False
