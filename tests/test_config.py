import pytest

from discrakt.config import DEFAULT_POLL_SECONDS, ConfigError, load_config

BASE = {
    "TRAKT_CLIENT_ID": "trakt-id",
    "TRAKT_USERNAME": "alice",
    "DISCORD_CLIENT_ID": "826189107046121572",
}


def test_defaults():
    config = load_config(dict(BASE))

    assert config.trakt_username == "alice"
    assert config.tmdb_api_key == ""
    assert config.poll_seconds == DEFAULT_POLL_SECONDS
    assert config.clear_when_idle is True
    assert config.debug is False


def test_overrides():
    env = dict(BASE, TMDB_API_KEY=" key ", DISCRAKT_POLL_SECONDS="30",
               DISCRAKT_CLEAR_WHEN_IDLE="no", DISCRAKT_DEBUG="1")
    config = load_config(env)

    assert config.tmdb_api_key == "key"
    assert config.poll_seconds == 30
    assert config.clear_when_idle is False
    assert config.debug is True


@pytest.mark.parametrize("key", sorted(BASE))
def test_missing_required_value(key):
    env = dict(BASE)
    env[key] = ""
    with pytest.raises(ConfigError, match=key):
        load_config(env)


@pytest.mark.parametrize("value", ["soon", "0", "-5"])
def test_bad_poll_interval(value):
    with pytest.raises(ConfigError):
        load_config(dict(BASE, DISCRAKT_POLL_SECONDS=value))


def test_env_file_is_loaded(tmp_path, monkeypatch):
    for key in BASE:
        # setenv first so monkeypatch removes whatever the .env file adds
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.setenv("TRAKT_USERNAME", "from-environment")
    env_file = tmp_path / ".env"
    env_file.write_text(
        "TRAKT_CLIENT_ID=file-id\nTRAKT_USERNAME=from-file\nDISCORD_CLIENT_ID=123\n",
        encoding="utf-8",
    )

    config = load_config(env_file=env_file)

    assert config.trakt_client_id == "file-id"
    assert config.trakt_username == "from-environment"
