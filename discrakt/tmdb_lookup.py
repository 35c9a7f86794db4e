# discrakt/tmdb_lookup.py
from typing import Optional

import requests

from .debug import debug_log


TMDB_API_URL = "https://api.themoviedb.org/3/{kind}/{tmdb_id}"
TMDB_IMAGE_URL = "https://image.tmdb.org/t/p/w470_and_h470_face{path}"

# Trakt media kind -> TMDB path segment
TMDB_KINDS = {"movie": "movie", "movies": "movie", "show": "tv", "shows": "tv", "episode": "tv"}


def image_url(path: str) -> str:
    return TMDB_IMAGE_URL.format(path=path)


def pick_image_path(data: dict, kind: str, season: Optional[int] = None) -> Optional[str]:
    """
    Choose the image path from a TMDB details response.

    Shows prefer the poster of the requested season and fall back to the show
    backdrop. Movies always use the backdrop.
    """
    if kind == "tv" and season is not None:
        for entry in data.get("seasons") or []:
            if not isinstance(entry, dict):
                continue
            if entry.get("season_number") == season and entry.get("poster_path"):
                return entry["poster_path"]
    return data.get("backdrop_path") or None


def lookup_artwork(
    session: requests.Session,
    api_key: str,
    tmdb_id: int,
    media_kind: str,
    season: Optional[int] = None,
    timeout: float = 5,
) -> Optional[str]:
    kind = TMDB_KINDS.get(media_kind)
    if not api_key or kind is None:
        return None

    url = TMDB_API_URL.format(kind=kind, tmdb_id=tmdb_id)
    try:
        r = session.get(url, params={"api_key": api_key, "language": "en"}, timeout=timeout)
        r.raise_for_status()
        data = r.json()
    except Exception as e:
        debug_log(f"tmdb lookup failed for {kind}/{tmdb_id}: {e}")
        return None

    if not isinstance(data, dict):
        return None

    path = pick_image_path(data, kind, season)
    if not path:
        debug_log(f"tmdb has no image for {kind}/{tmdb_id} season={season}")
        return None
    return image_url(path)
