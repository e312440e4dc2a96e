"""Sound effect and music control on top of a pluggable backend."""

from __future__ import annotations

import enum
from typing import Optional, Protocol

SOUND_BASE = 127
MONO_FLAG = 0x8000
SAMPLE_RATE = 11127 << 17


class AudioFlag(enum.IntFlag):
    """Which parts of the audio system are switched on."""

    NONE = 0
    SFX = 1
    MUSIC = 2


class SoundBackend(Protocol):
    """The sound driver that actually produces audio."""

    def begin_sound(self, sound_id: int, rate: int) -> None: ...

    def end_sound(self, sound_id: int) -> None: ...

    def end_all_sound(self) -> None: ...

    def begin_song_looped(self, song: int) -> None: ...

    def end_song(self) -> None: ...


class AudioState:
    """Tracks enabled audio and the song in play, driving a backend."""

    def __init__(self, backend: SoundBackend,
                 flags: AudioFlag = AudioFlag.SFX | AudioFlag.MUSIC) -> None:
        self.backend = backend
        self.flags = AudioFlag(flags)
        self.killed_song = 0
        self.last_song: Optional[int] = None

    def play_sound(self, sound: int) -> None:
        """Start a sound effect; sound 0, or effects off, silences all.

        A sound number carrying the mono flag first stops its own earlier
        instance.
        """
        if sound and self.flags & AudioFlag.SFX:
            sound_id = (sound + SOUND_BASE) & 0xFFFF
            if sound_id & MONO_FLAG:
                self.backend.end_sound(sound_id & 0x7FFF)
            self.backend.begin_sound(sound_id & 0x7FFF, SAMPLE_RATE)
        else:
            self.backend.end_all_sound()

    def stop_sound(self, sound: int) -> None:
        """Stop one sound effect."""
        self.backend.end_sound((sound + SOUND_BASE) & 0xFFFF)

    def sound_off(self) -> None:
        """Silence all sound effects."""
        self.play_sound(0)

    def play_song(self, song: int) -> None:
        """Loop a song, or stop the music for song 0 or music off.

        The requested song is remembered so it can be resumed later.
        """
        if song:
            self.killed_song = song
            if self.flags & AudioFlag.MUSIC:
                if song != self.last_song:
                    self.backend.begin_song_looped(song)
                    self.last_song = song
                return
        self.backend.end_song()
        self.last_song = None