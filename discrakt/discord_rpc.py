# discrakt/discord_rpc.py
import enum
import time
from typing import Callable, Optional

from pypresence import Presence

from .debug import debug_log, log
from .models import PresencePayload
from .retry import retry_blocking


RECONNECT_SECONDS = 15


class ConnectionState(enum.Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


class DiscordSink:
    """
    Owns the IPC connection to the local Discord client.

    Publishing is best effort: a failed update drops the payload, tears the
    connection down and blocks until Discord is reachable again. The next poll
    re-publishes the current state.
    """

    def __init__(
        self,
        client_id: str,
        client_factory: Callable[[str], Presence] = Presence,
        sleep: Callable[[float], None] = time.sleep,
        reconnect_seconds: float = RECONNECT_SECONDS,
    ):
        self.client_id = client_id
        self._client_factory = client_factory
        self._sleep = sleep
        self.reconnect_seconds = reconnect_seconds
        self.state = ConnectionState.DISCONNECTED
        self.connect_attempts = 0
        # Raises when the client cannot be built at all; callers treat it as fatal
        self._rpc: Optional[Presence] = client_factory(client_id)

    @property
    def connected(self) -> bool:
        return self.state is ConnectionState.CONNECTED

    def _attempt_connect(self) -> None:
        self.connect_attempts += 1
        if self._rpc is None:
            self._rpc = self._client_factory(self.client_id)
        self._rpc.connect()

    def _on_connect_failure(self, attempt: int, error: Exception) -> None:
        log(f"[RPC] Failed to connect to Discord ({error}), retrying in {self.reconnect_seconds:g} seconds")
        debug_log(f"connect attempt {attempt} failed: {error!r}")

    def connect(self) -> None:
        if self.connected:
            return

        retry_blocking(
            self._attempt_connect,
            delay=self.reconnect_seconds,
            sleep=self._sleep,
            on_failure=self._on_connect_failure,
        )
        self.state = ConnectionState.CONNECTED

        try:
            user = getattr(self._rpc, "user", None) or {}
            name = user.get("username", "")
            log(f"[RPC] Connected as {name}" if name else "[RPC] Connected")
        except Exception:
            log("[RPC] Connected")

    def _drop_connection(self) -> None:
        self.state = ConnectionState.DISCONNECTED
        rpc, self._rpc = self._rpc, None
        if rpc is None:
            return
        try:
            rpc.close()
        except Exception as e:
            debug_log(f"ignoring close error on broken connection: {e!r}")

    def _recover(self, error: Exception) -> None:
        log(f"[RPC] Update failed: {error}, reconnecting")
        self._drop_connection()
        self.connect()

    def publish(self, payload: PresencePayload) -> bool:
        if not self.connected:
            self.connect()

        try:
            self._rpc.update(**payload.to_activity())
        except Exception as e:
            self._recover(e)
            return False

        debug_log(f"[RPC] Updated: {payload.details} - {payload.state} | {payload.large_text}")
        return True

    def clear(self) -> bool:
        if not self.connected:
            return False

        try:
            self._rpc.clear()
        except Exception as e:
            self._recover(e)
            return False

        log("[RPC] Cleared (nothing watching)")
        return True

    def close(self) -> None:
        """Release the connection. Errors propagate: this only runs at shutdown."""
        rpc, self._rpc = self._rpc, None
        was_connected = self.connected
        self.state = ConnectionState.DISCONNECTED
        if rpc is not None and was_connected:
            rpc.close()
