# discrakt/trakt_client.py
import re
from datetime import datetime
from typing import Dict, Optional, Tuple

import requests

from .debug import debug_log
from .models import EPISODE, MOVIE, MediaIds, WatchState
from .tmdb_lookup import lookup_artwork


TRAKT_API_URL = "https://api.trakt.tv"
HTTP_TIMEOUT = 5

_RFC3339 = re.compile(r"^(\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2})(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$")


def parse_timestamp(value: str) -> datetime:
    """
    Parse an RFC3339 timestamp such as 2021-10-22T20:15:00.000Z.

    Raises ValueError for anything without a UTC offset.
    """
    match = _RFC3339.match(value.strip())
    if match is None:
        raise ValueError(f"not an RFC3339 timestamp: {value!r}")
    base, fraction, offset = match.groups()
    base = f"{base[:10]}T{base[11:]}"
    if offset in ("Z", "z"):
        offset = "+00:00"
    # fromisoformat before 3.11 only takes 3 or 6 fractional digits
    fraction = "." + fraction[1:7].ljust(6, "0") if fraction else ""
    return datetime.fromisoformat(f"{base}{fraction}{offset}")


def _optional_int(value) -> Optional[int]:
    return int(value) if value is not None else None


def _parse_ids(ids: dict) -> MediaIds:
    return MediaIds(
        trakt=int(ids["trakt"]),
        slug=ids.get("slug") or None,
        imdb=ids.get("imdb") or None,
        tmdb=_optional_int(ids.get("tmdb")),
    )


def parse_watching(data: dict) -> WatchState:
    """
    Build a WatchState from a /users/{user}/watching body.

    Raises KeyError, TypeError or ValueError when the body does not describe a
    movie or an episode with everything needed to display it.
    """
    kind = data["type"]
    started_at = parse_timestamp(data["started_at"])
    expires_at = parse_timestamp(data["expires_at"])

    if kind == MOVIE:
        movie = data["movie"]
        return WatchState(
            kind=MOVIE,
            title=movie["title"],
            year=_optional_int(movie.get("year")),
            ids=_parse_ids(movie["ids"]),
            started_at=started_at,
            expires_at=expires_at,
        )

    if kind == EPISODE:
        show = data["show"]
        episode = data["episode"]
        return WatchState(
            kind=EPISODE,
            title=show["title"],
            year=_optional_int(show.get("year")),
            ids=_parse_ids(show["ids"]),
            started_at=started_at,
            expires_at=expires_at,
            season=_optional_int(episode.get("season")),
            episode=_optional_int(episode.get("number")),
            episode_title=episode.get("title"),
        )

    raise ValueError(f"unknown media type: {kind!r}")


class TraktClient:
    def __init__(
        self,
        client_id: str,
        username: str,
        tmdb_api_key: str = "",
        session: Optional[requests.Session] = None,
        timeout: float = HTTP_TIMEOUT,
    ):
        self.username = username
        self.tmdb_api_key = tmdb_api_key
        self.timeout = timeout
        self._session = session or requests.Session()
        self._headers = {
            "Content-Type": "application/json",
            "trakt-api-version": "2",
            "trakt-api-key": client_id,
        }
        self.rating_cache: Dict[str, float] = {}
        self.artwork_cache: Dict[Tuple[str, int, Optional[int]], str] = {}

    def _get_json(self, path: str):
        r = self._session.get(f"{TRAKT_API_URL}{path}", headers=self._headers, timeout=self.timeout)
        r.raise_for_status()
        # 204 No Content means nothing is being watched
        if r.status_code == 204:
            return None
        return r.json()

    def fetch_current_state(self) -> Optional[WatchState]:
        try:
            data = self._get_json(f"/users/{self.username}/watching")
        except Exception as e:
            debug_log(f"trakt watching request failed: {e}")
            return None

        if not data:
            return None

        try:
            return parse_watching(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            debug_log(f"ignoring unusable watching payload: {e!r}")
            return None

    def fetch_rating(self, slug: str) -> float:
        if slug in self.rating_cache:
            return self.rating_cache[slug]

        try:
            data = self._get_json(f"/movies/{slug}/ratings")
            rating = float(data["rating"])
        except Exception as e:
            debug_log(f"trakt rating request failed for {slug}: {e!r}")
            return 0.0

        self.rating_cache[slug] = rating
        return rating

    def fetch_artwork(self, tmdb_id: int, media_kind: str, season: Optional[int] = None) -> Optional[str]:
        key = (media_kind, tmdb_id, season)
        if key in self.artwork_cache:
            return self.artwork_cache[key]

        url = lookup_artwork(self._session, self.tmdb_api_key, tmdb_id, media_kind, season, timeout=self.timeout)
        if url:
            self.artwork_cache[key] = url
        return url

    def enrich(self, state: WatchState) -> Tuple[float, Optional[str]]:
        """Rating (movies only) and artwork for a watch state."""
        rating = 0.0 if state.is_episode else self.fetch_rating(state.ids.key)

        artwork = None
        if state.ids.tmdb is not None:
            if state.is_episode:
                artwork = self.fetch_artwork(state.ids.tmdb, "shows", state.season)
            else:
                artwork = self.fetch_artwork(state.ids.tmdb, "movies")
        return rating, artwork
