# discrakt/retry.py
import time
from typing import Callable, Optional, TypeVar

T = TypeVar("T")


def retry_blocking(
    attempt: Callable[[], T],
    delay: float,
    max_attempts: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep,
    on_failure: Optional[Callable[[int, Exception], None]] = None,
) -> T:
    """
    Call ``attempt`` until it returns without raising, sleeping ``delay``
    seconds between tries. ``max_attempts=None`` retries forever; otherwise the
    last exception is re-raised once the attempts are used up.
    """
    tries = 0
    while True:
        tries += 1
        try:
            return attempt()
        except Exception as e:
            if on_failure is not None:
                on_failure(tries, e)
            if max_attempts is not None and tries >= max_attempts:
                raise
        sleep(delay)
