"""
Bounded polling.

The one blocking primitive in the harness: robots use it for both
verifications and navigations, and translate a timeout into the failure
kind that fits the caller.
"""
import time
from typing import Callable, Optional, TypeVar

T = TypeVar("T")


def wait_until(
    condition: Callable[[], Optional[T]],
    timeout: float,
    interval: float = 0.05,
) -> Optional[T]:
    """
    Poll `condition` until it returns a truthy value or `timeout` seconds pass.

    The condition is always evaluated at least once, and once more after the
    deadline, so a zero timeout still performs a single check.

    Returns:
        The first truthy value, or None on timeout.
    """
    deadline = time.monotonic() + timeout
    while True:
        result = condition()
        if result:
            return result
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            return None
        time.sleep(min(interval, remaining))
