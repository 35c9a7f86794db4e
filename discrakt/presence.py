# discrakt/presence.py
from datetime import datetime, timezone
from typing import Optional

from .models import PresencePayload, WatchState


STAR = "⭐️"
SMALL_IMAGE = "trakt"
SMALL_TEXT = "Discrakt"


def watch_percentage(state: WatchState, now: datetime) -> str:
    total = (state.expires_at - state.started_at).total_seconds()
    elapsed = (now - state.started_at).total_seconds()
    fraction = min(max(elapsed / total, 0.0), 1.0)
    return f"{fraction * 100:.2f}%"


def imdb_url(imdb_id: str) -> str:
    return f"https://www.imdb.com/title/{imdb_id}"


def trakt_url(state: WatchState) -> str:
    url = f"https://trakt.tv/{state.media}/{state.ids.key}"
    if state.is_episode:
        url += f"/seasons/{state.season}/episodes/{state.episode}"
    return url


def render_presence(
    state: WatchState,
    rating: float,
    artwork: Optional[str],
    now: Optional[datetime] = None,
) -> PresencePayload:
    if now is None:
        now = datetime.now(timezone.utc)

    if state.is_episode:
        details = state.title
        line = f"S{state.season:02}E{state.episode} - {state.episode_title}"
    else:
        details = f"{state.title} ({state.year})" if state.year else state.title
        line = f"{rating:.1f} {STAR}"

    buttons = []
    if state.ids.imdb:
        buttons.append(("IMDB", imdb_url(state.ids.imdb)))
    buttons.append(("Trakt", trakt_url(state)))

    return PresencePayload(
        details=details,
        state=line,
        # Without artwork fall back to the "movies"/"shows" app asset
        large_image=artwork or state.media,
        large_text=watch_percentage(state, now),
        small_image=SMALL_IMAGE,
        small_text=SMALL_TEXT,
        start=int(state.started_at.timestamp()),
        end=int(state.expires_at.timestamp()),
        buttons=tuple(buttons),
    )
