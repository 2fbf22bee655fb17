"""
Harness configuration.

Values come from keyword arguments, a dict, or HOMEHARNESS_* environment
variables. Anything malformed raises ConfigurationError up front so a bad
setup never reaches the retry loop.
"""
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigurationError


class Backend(Enum):
    SIMULATED = "simulated"
    PLAYWRIGHT = "playwright"


@dataclass
class HarnessConfig:
    """Configuration shared by every attempt of a run."""
    attempts: int = 3
    wait_timeout_ms: int = 5000
    poll_interval_ms: int = 50
    asset_host: str = "127.0.0.1"
    asset_port: int = 0  # 0 = ephemeral
    backend: Backend = Backend.SIMULATED
    app_url: str = ""
    headless: bool = True
    ui_latency_ms: int = 0

    def __post_init__(self):
        for name in ("attempts", "wait_timeout_ms", "poll_interval_ms", "asset_port", "ui_latency_ms"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        for name in ("asset_host", "app_url"):
            if not isinstance(getattr(self, name), str):
                raise ConfigurationError(f"{name} must be a string, got {getattr(self, name)!r}")
        if not isinstance(self.headless, bool):
            raise ConfigurationError(f"headless must be a boolean, got {self.headless!r}")

        if isinstance(self.backend, str):
            try:
                self.backend = Backend(self.backend)
            except ValueError:
                raise ConfigurationError(f"Unknown backend: {self.backend}")
        if not isinstance(self.backend, Backend):
            raise ConfigurationError(f"Unknown backend: {self.backend!r}")
        if self.attempts < 1:
            raise ConfigurationError(f"attempts must be >= 1, got {self.attempts}")
        if self.wait_timeout_ms < 0:
            raise ConfigurationError(f"wait_timeout_ms must be >= 0, got {self.wait_timeout_ms}")
        if self.poll_interval_ms < 1:
            raise ConfigurationError(f"poll_interval_ms must be >= 1, got {self.poll_interval_ms}")
        if not 0 <= self.asset_port <= 65535:
            raise ConfigurationError(f"asset_port out of range: {self.asset_port}")
        if self.ui_latency_ms < 0:
            raise ConfigurationError(f"ui_latency_ms must be >= 0, got {self.ui_latency_ms}")
        if self.backend is Backend.PLAYWRIGHT and not self.app_url:
            raise ConfigurationError("The playwright backend needs app_url (HOMEHARNESS_APP_URL)")

    @property
    def wait_timeout(self) -> float:
        return self.wait_timeout_ms / 1000

    @property
    def poll_interval(self) -> float:
        return self.poll_interval_ms / 1000

    def to_dict(self) -> Dict[str, Any]:
        return {
            "attempts": self.attempts,
            "wait_timeout_ms": self.wait_timeout_ms,
            "poll_interval_ms": self.poll_interval_ms,
            "asset_host": self.asset_host,
            "asset_port": self.asset_port,
            "backend": self.backend.value,
            "app_url": self.app_url,
            "headless": self.headless,
            "ui_latency_ms": self.ui_latency_ms,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HarnessConfig":
        data = data.copy()
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigurationError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "HarnessConfig":
        env = os.environ if environ is None else environ
        data: Dict[str, Any] = {}

        int_vars = {
            "attempts": "HOMEHARNESS_ATTEMPTS",
            "wait_timeout_ms": "HOMEHARNESS_WAIT_TIMEOUT_MS",
            "poll_interval_ms": "HOMEHARNESS_POLL_INTERVAL_MS",
            "asset_port": "HOMEHARNESS_ASSET_PORT",
            "ui_latency_ms": "HOMEHARNESS_UI_LATENCY_MS",
        }
        for key, var in int_vars.items():
            raw = env.get(var)
            if raw is None or raw == "":
                continue
            try:
                data[key] = int(raw)
            except ValueError:
                raise ConfigurationError(f"{var} must be an integer, got {raw!r}")

        if env.get("HOMEHARNESS_ASSET_HOST"):
            data["asset_host"] = env["HOMEHARNESS_ASSET_HOST"]
        if env.get("HOMEHARNESS_BACKEND"):
            data["backend"] = env["HOMEHARNESS_BACKEND"].lower()
        if env.get("HOMEHARNESS_APP_URL"):
            data["app_url"] = env["HOMEHARNESS_APP_URL"]
        if env.get("HOMEHARNESS_HEADLESS"):
            data["headless"] = env["HOMEHARNESS_HEADLESS"].lower() in ("true", "1", "yes")

        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls.from_dict(data)
