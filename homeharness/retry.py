"""
RetryExecutor - bounded re-execution of a whole scenario body.

Every attempt gets a fresh fixture from `setup`, torn down before the next
attempt starts. Only AssertionError (which covers VerificationFailure and
NavigationFailure) earns another attempt; anything else is a broken setup or
a harness bug and surfaces at once. The failure of the last attempt is
re-raised as the very same exception object.
"""
from typing import Callable, ContextManager, Optional, TypeVar

from .errors import ConfigurationError
from .logging_config import get_logger, scenario_context

logger = get_logger("homeharness.retry")

F = TypeVar("F")
R = TypeVar("R")

RetryCallback = Callable[[int, BaseException], None]


class RetryExecutor:
    def __init__(self, attempts: int, on_retry: Optional[RetryCallback] = None):
        if isinstance(attempts, bool) or not isinstance(attempts, int) or attempts < 1:
            raise ConfigurationError(f"attempts must be an integer >= 1, got {attempts!r}")
        self.attempts = attempts
        self.on_retry = on_retry
        self.attempts_made = 0

    def execute(self, body: Callable[[F], R], setup: Callable[[], ContextManager[F]], name: str = "scenario") -> R:
        """
        Run `body` inside `setup()` until it passes or the budget is spent.

        Args:
            body: The scenario body, called with the per-attempt fixture
            setup: Returns a context manager yielding a fresh fixture
            name: Used in log messages only

        Returns:
            Whatever the passing attempt's body returned
        """
        self.attempts_made = 0

        for attempt in range(1, self.attempts + 1):
            self.attempts_made = attempt
            with scenario_context(scenario=name, attempt=attempt):
                try:
                    with setup() as fixture:
                        result = body(fixture)
                except AssertionError as e:
                    if attempt == self.attempts:
                        logger.error_with(
                            f"{name} failed on final attempt {attempt}/{self.attempts}: {e}",
                            attempts=self.attempts, error_type=type(e).__name__,
                        )
                        raise
                    logger.warning_with(
                        f"{name} failed on attempt {attempt}/{self.attempts}, retrying: {e}",
                        attempts=self.attempts, error_type=type(e).__name__,
                    )
                    self._notify(attempt, e)
                    continue

                if attempt > 1:
                    logger.info_with(f"{name} passed on attempt {attempt}/{self.attempts}", attempts=self.attempts)
                return result

        # attempts >= 1, so the loop always returns or raises
        raise RuntimeError("retry loop exited without a result")

    def _notify(self, attempt: int, error: BaseException):
        if self.on_retry is None:
            return
        try:
            self.on_retry(attempt, error)
        except Exception as e:
            logger.error(f"Retry callback error: {e}")
