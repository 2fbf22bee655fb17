"""
Scenario registry.

A scenario is a named body taking a ScenarioSession, plus the settings
overrides its application starts with. Modules under this package register
their scenarios with the `scenario` decorator on import.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..settings import SettingsOverrides

ScenarioBody = Callable[[Any], None]


@dataclass
class Scenario:
    name: str
    body: ScenarioBody
    description: str = ""
    settings: Dict[str, bool] = field(default_factory=dict)
    attempts: Optional[int] = None  # None = use the configured budget
    skip_reason: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.skip_reason is not None

    def resolve_settings(self) -> SettingsOverrides:
        """Validated overrides; raises ConfigurationError for bad names or values."""
        return SettingsOverrides.from_mapping(self.settings)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "settings": dict(self.settings),
            "attempts": self.attempts,
            "skip_reason": self.skip_reason,
        }


class ScenarioRegistry:

    def __init__(self):
        self._scenarios: Dict[str, Scenario] = {}

    def register(self, item: Scenario) -> Scenario:
        if item.name in self._scenarios:
            raise ValueError(f"Scenario already registered: {item.name}")
        self._scenarios[item.name] = item
        return item

    def get(self, name: str) -> Scenario:
        try:
            return self._scenarios[name]
        except KeyError:
            raise KeyError(f"Unknown scenario: {name}") from None

    def all(self) -> List[Scenario]:
        return list(self._scenarios.values())

    def names(self) -> List[str]:
        return list(self._scenarios)

    def __contains__(self, name: str) -> bool:
        return name in self._scenarios

    def __len__(self) -> int:
        return len(self._scenarios)


registry = ScenarioRegistry()


def scenario(
    name: Optional[str] = None,
    settings: Optional[Dict[str, bool]] = None,
    attempts: Optional[int] = None,
    skip: Optional[str] = None,
):
    """Register the decorated function as a scenario body."""
    def decorator(func: ScenarioBody) -> ScenarioBody:
        registry.register(Scenario(
            name=name or func.__name__,
            body=func,
            description=(func.__doc__ or "").strip().split("\n")[0],
            settings=dict(settings or {}),
            attempts=attempts,
            skip_reason=skip,
        ))
        return func
    return decorator


def load_scenarios() -> ScenarioRegistry:
    """Import the built-in scenario modules and return the populated registry."""
    from . import home_screen  # noqa: F401
    return registry


__all__ = ["Scenario", "ScenarioRegistry", "registry", "scenario", "load_scenarios"]
