# discrakt/cli.py
from .config import ConfigError, load_config
from .debug import debug_log, log, set_debug
from .discord_rpc import DiscordSink
from .sync import SyncLoop
from .trakt_client import TraktClient


def main() -> int:
    try:
        config = load_config()
    except ConfigError as e:
        log(f"[Config] {e}")
        return 1

    if config.debug:
        set_debug(True)
    debug_log(f"poll every {config.poll_seconds}s for trakt user {config.trakt_username}")

    if not config.tmdb_api_key:
        log("[Config] TMDB_API_KEY not set, using default artwork")

    trakt = TraktClient(config.trakt_client_id, config.trakt_username, config.tmdb_api_key)

    try:
        sink = DiscordSink(config.discord_client_id)
    except Exception as e:
        log(f"[RPC] Couldn't create the Discord client: {e}")
        return 1

    loop = SyncLoop(trakt, sink, config.poll_seconds, clear_when_idle=config.clear_when_idle)
    try:
        sink.connect()
        loop.run()
    except KeyboardInterrupt:
        loop.stop()
        log("[Sync] Stopping")
    finally:
        sink.close()
    return 0
