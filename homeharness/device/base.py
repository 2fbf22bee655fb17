"""
Device capability the robots drive.

A Device exposes element lookup, taps, text entry and system keys. Robots
never talk to an application directly; swapping the backend (simulated app,
Playwright page) does not change a single robot.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Locator:
    """
    Selects UI elements.

    Any combination of fields may be set; an element matches when every set
    field matches. `text_contains` is a case-sensitive substring match.
    """
    resource_id: Optional[str] = None
    text: Optional[str] = None
    text_contains: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self):
        if not any((self.resource_id, self.text, self.text_contains, self.description)):
            raise ValueError("Locator needs at least one criterion")

    def matches(self, element: "UiElement") -> bool:
        if self.resource_id is not None and element.resource_id != self.resource_id:
            return False
        if self.text is not None and element.text != self.text:
            return False
        if self.text_contains is not None and self.text_contains not in element.text:
            return False
        if self.description is not None and element.description != self.description:
            return False
        return True

    def describe(self) -> str:
        parts = []
        if self.resource_id:
            parts.append(f"id={self.resource_id}")
        if self.text:
            parts.append(f"text={self.text!r}")
        if self.text_contains:
            parts.append(f"text~={self.text_contains!r}")
        if self.description:
            parts.append(f"desc={self.description!r}")
        return ", ".join(parts)


def by_id(resource_id: str, **kwargs) -> Locator:
    return Locator(resource_id=resource_id, **kwargs)


@dataclass(frozen=True)
class UiElement:
    """A snapshot of one on-screen element."""
    resource_id: str
    text: str = ""
    description: str = ""
    selected: bool = False
    checked: Optional[bool] = None


class Device(ABC):
    """Element lookup and gesture dispatch for one application instance."""

    @abstractmethod
    def find_all(self, locator: Locator) -> List[UiElement]:
        """Every currently visible element matching `locator`, in screen order."""

    def find(self, locator: Locator) -> Optional[UiElement]:
        found = self.find_all(locator)
        return found[0] if found else None

    def exists(self, locator: Locator) -> bool:
        return self.find(locator) is not None

    @abstractmethod
    def tap(self, locator: Locator) -> bool:
        """Tap the first match. Returns False when nothing matched."""

    @abstractmethod
    def type_text(self, locator: Locator, text: str) -> bool:
        """Replace the text of the first matching input."""

    @abstractmethod
    def press_enter(self):
        pass

    @abstractmethod
    def press_back(self):
        pass

    @abstractmethod
    def scroll_to(self, locator: Locator) -> bool:
        """Bring the first match into view. Returns False when it is not on the screen."""

    def close(self):
        pass
