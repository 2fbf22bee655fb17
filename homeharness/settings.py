"""
Feature flag overrides applied to the application before a scenario attempt.

Each scenario starts from the defaults below and may override any of them;
the resulting object is frozen and handed to a fresh application per attempt.
"""
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, StrictBool, ValidationError

from .errors import ConfigurationError


class SettingsOverrides(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    tabs_tray_rewrite_enabled: StrictBool = True
    is_recent_tabs_feature_enabled: StrictBool = True
    is_recently_visited_feature_enabled: StrictBool = True
    is_recent_bookmarks_feature_enabled: StrictBool = True
    is_pocket_enabled: StrictBool = True
    is_jump_back_in_cfr_enabled: StrictBool = False
    is_home_onboarding_dialog_enabled: StrictBool = False

    @classmethod
    def from_mapping(cls, overrides: Mapping[str, Any]) -> "SettingsOverrides":
        try:
            return cls(**dict(overrides))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid settings overrides: {_summarize(e)}") from e

    def with_exceptions(self, **changes: Any) -> "SettingsOverrides":
        """Copy with changes applied, validated like the constructor."""
        return SettingsOverrides.from_mapping({**self.model_dump(), **changes})

    def to_dict(self) -> dict:
        return self.model_dump()


def _summarize(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item["loc"])
        parts.append(f"{loc}: {item['msg']}")
    return "; ".join(parts)
