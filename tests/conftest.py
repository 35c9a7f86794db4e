from datetime import datetime, timedelta, timezone

import pytest
import requests

from discrakt.models import EPISODE, MOVIE, MediaIds, WatchState

T0 = datetime(2021, 10, 22, 20, 0, tzinfo=timezone.utc)


class FakeResponse:
    def __init__(self, status_code=200, body=None, bad_json=False):
        self.status_code = status_code
        self._body = body
        self._bad_json = bad_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._bad_json:
            raise ValueError("not json")
        return self._body


class FakeSession:
    """Routes GETs by URL substring; counts calls per URL."""

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.calls = []

    def get(self, url, headers=None, params=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "params": params, "timeout": timeout})
        for fragment, outcome in self.routes.items():
            if fragment in url:
                if callable(outcome):
                    outcome = outcome()
                if isinstance(outcome, Exception):
                    raise outcome
                return outcome
        raise requests.ConnectionError(f"no route for {url}")

    def count(self, fragment):
        return sum(1 for c in self.calls if fragment in c["url"])


def movie_state(**overrides):
    values = dict(
        kind=MOVIE,
        title="Dune",
        year=2021,
        ids=MediaIds(trakt=287071, slug="dune-2021", imdb="tt1160419", tmdb=438631),
        started_at=T0,
        expires_at=T0 + timedelta(seconds=7200),
    )
    values.update(overrides)
    return WatchState(**values)


def episode_state(**overrides):
    values = dict(
        kind=EPISODE,
        title="Breaking Bad",
        year=2008,
        ids=MediaIds(trakt=1388, slug="breaking-bad", imdb="tt0903747", tmdb=100),
        started_at=T0,
        expires_at=T0 + timedelta(minutes=47),
        season=2,
        episode=5,
        episode_title="Breakage",
    )
    values.update(overrides)
    return WatchState(**values)


def movie_body(**overrides):
    body = {
        "expires_at": "2021-10-22T22:00:00.000Z",
        "started_at": "2021-10-22T20:00:00.000Z",
        "action": "scrobble",
        "type": "movie",
        "movie": {
            "title": "Dune",
            "year": 2021,
            "ids": {"trakt": 287071, "slug": "dune-2021", "imdb": "tt1160419", "tmdb": 438631},
        },
    }
    body.update(overrides)
    return body


def episode_body(season=2, number=5):
    return {
        "expires_at": "2021-10-22T21:00:00.000Z",
        "started_at": "2021-10-22T20:00:00.000Z",
        "action": "scrobble",
        "type": "episode",
        "episode": {"season": season, "number": number, "title": "Ozymandias", "ids": {"trakt": 73482}},
        "show": {
            "title": "Breaking Bad",
            "year": 2008,
            "ids": {"trakt": 1388, "slug": "breaking-bad", "imdb": "tt0903747", "tmdb": 100},
        },
    }


@pytest.fixture
def session():
    return FakeSession()
