from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Tag:
    duration_seconds: int | None = None
    name: str | None = None

    def __post_init__(self) -> None:
        if self.duration_seconds is not None and self.duration_seconds < 0:
            raise ValueError("duration_seconds must be non-negative")


@dataclass(frozen=True)
class Song:
    """A playable track descriptor produced by a playlist plugin."""

    uri: str
    tag: Tag = field(default_factory=Tag)
