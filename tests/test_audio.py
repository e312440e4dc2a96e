import pytest

from wolfmac.audio import (
    MONO_FLAG,
    SAMPLE_RATE,
    SOUND_BASE,
    AudioFlag,
    AudioState,
)


class RecordingBackend:
    def __init__(self):
        self.calls = []

    def begin_sound(self, sound_id, rate):
        self.calls.append(("begin", sound_id, rate))

    def end_sound(self, sound_id):
        self.calls.append(("end", sound_id))

    def end_all_sound(self):
        self.calls.append(("end_all",))

    def begin_song_looped(self, song):
        self.calls.append(("song", song))

    def end_song(self):
        self.calls.append(("end_song",))


@pytest.fixture
def backend():
    return RecordingBackend()


def test_play_sound_uses_fixed_resource_offset_and_rate(backend):
    AudioState(backend).play_sound(1)
    assert backend.calls == [("begin", 128, 11127 << 17)]


def test_play_sound_starts_offset_resource(backend):
    AudioState(backend).play_sound(1)
    assert backend.calls == [("begin", 1 + SOUND_BASE, SAMPLE_RATE)]


def test_mono_sound_stops_previous_instance(backend):
    AudioState(backend).play_sound(5 | MONO_FLAG)
    assert backend.calls == [
        ("end", 5 + SOUND_BASE),
        ("begin", 5 + SOUND_BASE, SAMPLE_RATE),
    ]


def test_play_sound_zero_silences(backend):
    AudioState(backend).play_sound(0)
    assert backend.calls == [("end_all",)]


def test_sound_off_silences(backend):
    AudioState(backend).sound_off()
    assert backend.calls == [("end_all",)]


def test_effects_disabled_silences_instead(backend):
    AudioState(backend, AudioFlag.MUSIC).play_sound(3)
    assert backend.calls == [("end_all",)]


def test_stop_sound_targets_resource(backend):
    AudioState(backend).stop_sound(4)
    assert backend.calls == [("end", 4 + SOUND_BASE)]


def test_play_song_starts_once(backend):
    audio = AudioState(backend)
    audio.play_song(7)
    audio.play_song(7)
    assert backend.calls == [("song", 7)]
    assert audio.killed_song == 7
    assert audio.last_song == 7


def test_changing_song_restarts(backend):
    audio = AudioState(backend)
    audio.play_song(7)
    audio.play_song(8)
    assert backend.calls == [("song", 7), ("song", 8)]


def test_song_zero_stops_music_and_keeps_killed_song(backend):
    audio = AudioState(backend)
    audio.play_song(7)
    audio.play_song(0)
    assert backend.calls[-1] == ("end_song",)
    assert audio.last_song is None
    assert audio.killed_song == 7
    audio.play_song(7)
    assert backend.calls[-1] == ("song", 7)


def test_music_disabled_remembers_song_but_stops(backend):
    audio = AudioState(backend, AudioFlag.SFX)
    audio.play_song(9)
    assert backend.calls == [("end_song",)]
    assert audio.killed_song == 9
    assert audio.last_song is None


def test_default_flags_enable_everything(backend):
    audio = AudioState(backend)
    assert audio.flags == AudioFlag.SFX | AudioFlag.MUSIC