# discrakt/models.py
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from pypresence.types import ActivityType

MOVIE = "movie"
EPISODE = "episode"


@dataclass(frozen=True)
class MediaIds:
    trakt: int
    slug: Optional[str] = None
    imdb: Optional[str] = None
    tmdb: Optional[int] = None

    @property
    def key(self) -> str:
        # Trakt accepts either the slug or the numeric id in URLs
        return self.slug or str(self.trakt)


@dataclass(frozen=True)
class WatchState:
    kind: str
    title: str  # show title for episodes
    year: Optional[int]
    ids: MediaIds  # show ids for episodes
    started_at: datetime
    expires_at: datetime
    season: Optional[int] = None
    episode: Optional[int] = None
    episode_title: Optional[str] = None

    def __post_init__(self):
        if self.kind not in (MOVIE, EPISODE):
            raise ValueError(f"unknown media kind: {self.kind!r}")
        if self.started_at.tzinfo is None or self.expires_at.tzinfo is None:
            raise ValueError("started_at and expires_at must be timezone-aware")
        if self.expires_at <= self.started_at:
            raise ValueError("expires_at must be after started_at")

        episode_fields = (self.season, self.episode, self.episode_title)
        if self.kind == EPISODE and any(v is None for v in episode_fields):
            raise ValueError("episode state requires season, episode and episode_title")
        if self.kind == MOVIE and any(v is not None for v in episode_fields):
            raise ValueError("movie state cannot carry episode fields")

    @property
    def is_episode(self) -> bool:
        return self.kind == EPISODE

    @property
    def media(self) -> str:
        return "shows" if self.is_episode else "movies"


@dataclass(frozen=True)
class PresencePayload:
    details: str
    state: str
    large_image: str
    large_text: str
    small_image: str
    small_text: str
    start: int
    end: int
    buttons: tuple = ()  # ((label, url), ...), at most two

    def to_activity(self) -> dict:
        """Keyword arguments for ``pypresence.Presence.update``."""
        activity = {
            "details": self.details[:128],
            "state": self.state[:128],
            "large_image": self.large_image,
            "large_text": self.large_text[:128],
            "small_image": self.small_image,
            "small_text": self.small_text[:128],
            "start": self.start,
            "end": self.end,
            "activity_type": ActivityType.WATCHING,
        }
        if self.buttons:
            activity["buttons"] = [{"label": label, "url": url} for label, url in self.buttons[:2]]
        return activity
