# discrakt/config.py
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv


ENV_PATH = Path(__file__).resolve().parents[1] / ".env"

DEFAULT_POLL_SECONDS = 15


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Config:
    trakt_client_id: str
    trakt_username: str
    discord_client_id: str
    tmdb_api_key: str = ""
    poll_seconds: int = DEFAULT_POLL_SECONDS
    clear_when_idle: bool = True
    debug: bool = False


def _required(env: Mapping[str, str], key: str) -> str:
    value = (env.get(key) or "").strip()
    if not value:
        raise ConfigError(f"{key} is required but not set")
    return value


def _bool(env: Mapping[str, str], key: str, default: str = "false") -> bool:
    return (env.get(key) or default).strip().lower() in ("1", "true", "yes", "on")


def _int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ConfigError(f"{key} must be at least 1, got {value}")
    return value


def load_config(env: Optional[Mapping[str, str]] = None, env_file: Optional[Path] = ENV_PATH) -> Config:
    """
    Read the configuration from the environment.

    A .env file next to the project is loaded first when present; variables
    already set in the environment take precedence over it. Passing ``env``
    skips both and reads from that mapping instead (used by tests).
    """
    if env is None:
        if env_file is not None and env_file.exists():
            load_dotenv(dotenv_path=env_file, override=False)
        env = os.environ

    return Config(
        trakt_client_id=_required(env, "TRAKT_CLIENT_ID"),
        trakt_username=_required(env, "TRAKT_USERNAME"),
        discord_client_id=_required(env, "DISCORD_CLIENT_ID"),
        tmdb_api_key=(env.get("TMDB_API_KEY") or "").strip(),
        poll_seconds=_int(env, "DISCRAKT_POLL_SECONDS", DEFAULT_POLL_SECONDS),
        clear_when_idle=_bool(env, "DISCRAKT_CLEAR_WHEN_IDLE", "true"),
        debug=_bool(env, "DISCRAKT_DEBUG"),
    )
