"""
Exception hierarchy for the harness.

Retry policy keys off these types: scenario failures are retryable,
resource and configuration errors are not.
"""
from typing import Optional


class HarnessError(Exception):
    """Base exception for harness errors"""
    pass


class ConfigurationError(HarnessError):
    """Invalid harness configuration or settings override. Never retried."""
    pass


class AssetOriginError(HarnessError):
    """Asset origin misuse or failure"""
    pass


class BindError(AssetOriginError):
    """The asset origin could not acquire its listening endpoint"""
    def __init__(self, host: str, port: int, reason: str):
        self.host = host
        self.port = port
        self.reason = reason
        super().__init__(f"Could not bind asset origin to {host}:{port}: {reason}")


class ScenarioFailure(HarnessError, AssertionError):
    """A scenario attempt failed in a way a fresh attempt may not reproduce"""
    pass


class VerificationFailure(ScenarioFailure):
    """An expected UI condition was absent"""
    def __init__(self, expected: str, screen: Optional[str] = None):
        self.expected = expected
        self.screen = screen
        where = f" on {screen}" if screen else ""
        super().__init__(f"Verification failed{where}: expected {expected}")


class NavigationFailure(ScenarioFailure):
    """An action could not complete within the wait bound"""
    def __init__(self, action: str, detail: str, screen: Optional[str] = None):
        self.action = action
        self.detail = detail
        self.screen = screen
        where = f" on {screen}" if screen else ""
        super().__init__(f"Navigation '{action}' failed{where}: {detail}")


class UnresolvedTransitionError(HarnessError):
    """A transition was left pending or resolved twice"""
    pass
