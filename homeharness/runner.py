"""
Scenario runner.

Turns a registered scenario into one ScenarioResult: skipped scenarios are
reported without being attempted, everything else runs under a
RetryExecutor with a fresh session per attempt.
"""
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .config import HarnessConfig
from .logging_config import get_logger
from .retry import RetryCallback, RetryExecutor
from .scenarios import Scenario
from .session import open_session

logger = get_logger("homeharness.runner")


class ScenarioOutcome(Enum):
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class ScenarioResult:
    """Outcome of one scenario run."""
    name: str
    outcome: ScenarioOutcome
    attempts: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None
    skip_reason: Optional[str] = None
    duration_ms: int = 0

    @property
    def passed(self) -> bool:
        return self.outcome is ScenarioOutcome.PASSED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "outcome": self.outcome.value,
            "attempts": self.attempts,
            "error": self.error,
            "error_type": self.error_type,
            "skip_reason": self.skip_reason,
            "duration_ms": self.duration_ms,
        }


def run_scenario(
    scenario: Scenario,
    config: Optional[HarnessConfig] = None,
    on_retry: Optional[RetryCallback] = None,
) -> ScenarioResult:
    config = config or HarnessConfig()

    if scenario.skipped:
        logger.info(f"Skipping {scenario.name}: {scenario.skip_reason}")
        return ScenarioResult(
            name=scenario.name,
            outcome=ScenarioOutcome.SKIPPED,
            skip_reason=scenario.skip_reason,
        )

    started = time.monotonic()
    executor = None
    try:
        settings = scenario.resolve_settings()
        attempts = config.attempts if scenario.attempts is None else scenario.attempts
        executor = RetryExecutor(attempts, on_retry=on_retry)
        executor.execute(
            scenario.body,
            lambda: open_session(config, settings),
            name=scenario.name,
        )
    except Exception as e:
        # AssertionError after the last attempt, or a non-retryable error on any attempt
        logger.error(f"{scenario.name} failed: {e}")
        return ScenarioResult(
            name=scenario.name,
            outcome=ScenarioOutcome.FAILED,
            attempts=executor.attempts_made if executor else 0,
            error=str(e),
            error_type=type(e).__name__,
            duration_ms=int((time.monotonic() - started) * 1000),
        )

    logger.info(f"{scenario.name} passed after {executor.attempts_made} attempt(s)")
    return ScenarioResult(
        name=scenario.name,
        outcome=ScenarioOutcome.PASSED,
        attempts=executor.attempts_made,
        duration_ms=int((time.monotonic() - started) * 1000),
    )
