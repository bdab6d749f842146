from __future__ import annotations

from typing import Iterable, Iterator

from .song import Song


class MemoryPlaylistProvider:
    """Finite, read-only track list held entirely in memory.

    Iterating always starts from the first song; ``next_song`` walks a
    separate cursor that ``rewind`` resets.
    """

    def __init__(self, songs: Iterable[Song]) -> None:
        self._songs: tuple[Song, ...] = tuple(songs)
        self._cursor = 0

    def __iter__(self) -> Iterator[Song]:
        return iter(self._songs)

    def __len__(self) -> int:
        return len(self._songs)

    def __getitem__(self, index: int) -> Song:
        return self._songs[index]

    def __repr__(self) -> str:
        return f"MemoryPlaylistProvider({len(self._songs)} songs)"

    @property
    def songs(self) -> tuple[Song, ...]:
        return self._songs

    def next_song(self) -> Song | None:
        if self._cursor >= len(self._songs):
            return None
        song = self._songs[self._cursor]
        self._cursor += 1
        return song

    def rewind(self) -> None:
        self._cursor = 0
