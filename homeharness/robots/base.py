"""
Screen base class, the closed set of screen kinds, and the action decorator
that turns screen methods into edges of the screen graph.

Destinations are named by ScreenKind rather than by class, so mutually
referential screens (home <-> browser <-> tab drawer) never import each other;
the class is looked up from the registry when a transition resolves.
"""
import functools
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Tuple, Type, TypeVar

from ..device.base import Locator, UiElement
from ..errors import NavigationFailure, VerificationFailure
from .transition import Transition

if TYPE_CHECKING:
    from ..session import ScenarioSession

SelfScreen = TypeVar("SelfScreen", bound="Screen")


class ScreenKind(Enum):
    HOME = "home"
    PRIVATE_HOME = "private_home"
    NAVIGATION_TOOLBAR = "navigation_toolbar"
    BROWSER = "browser"
    TAB_DRAWER = "tab_drawer"
    THREE_DOT_MENU = "three_dot_menu"
    CUSTOMIZE_HOME = "customize_home"


_SCREENS: Dict[ScreenKind, Type["Screen"]] = {}
_ARRIVAL = object()


def screen(kind: ScreenKind):
    """Register a Screen subclass as the implementation of `kind`."""
    def decorator(cls):
        if kind in _SCREENS:
            raise RuntimeError(f"{kind.value} is already implemented by {_SCREENS[kind].__name__}")
        cls.kind = kind
        _SCREENS[kind] = cls
        return cls
    return decorator


def screen_class(kind: ScreenKind) -> Type["Screen"]:
    try:
        return _SCREENS[kind]
    except KeyError:
        raise RuntimeError(f"No screen registered for {kind.value}") from None


def action(destination: ScreenKind, resolve: bool = False):
    """
    Mark a screen method as a navigation to `destination`.

    The decorated method performs the UI gestures; the wrapper returns a
    Transition to `destination`, or with resolve=True the already-verified
    destination screen.
    """
    def decorator(func: Callable[..., None]):
        @functools.wraps(func)
        def wrapper(self: "Screen", *args, **kwargs):
            self._session.ensure_no_pending_transition()
            func(self, *args, **kwargs)
            transition = Transition(self._session, self, destination, func.__name__)
            if resolve:
                return transition.to(lambda arrived: arrived)
            return transition

        wrapper.__screen_edge__ = destination
        return wrapper
    return decorator


def screen_graph() -> List[Tuple[ScreenKind, str, ScreenKind]]:
    """Every declared edge as (source, action name, destination), grouped by screen."""
    edges = []
    for kind, cls in _SCREENS.items():
        for name in dir(cls):
            destination = getattr(getattr(cls, name), "__screen_edge__", None)
            if destination is not None:
                edges.append((kind, name, destination))
    return edges


class Screen:
    """
    A verified screen state.

    Instances only come from `arrive`, which waits for the screen's entry
    point; constructing one directly raises TypeError.
    """
    kind: ScreenKind
    ENTRY: Locator

    def __init__(self, session: "ScenarioSession", _token: Any = None):
        if _token is not _ARRIVAL:
            raise TypeError(
                f"{type(self).__name__} is obtained through ScenarioSession.enter or Transition.to"
            )
        self._session = session

    @classmethod
    def is_showing(cls, session: "ScenarioSession") -> bool:
        return session.device.exists(cls.ENTRY)

    @classmethod
    def arrive(cls, session: "ScenarioSession", action: str = "enter"):
        if not session.wait(lambda: cls.is_showing(session)):
            raise NavigationFailure(
                action,
                f"{cls.__name__} did not appear within {session.config.wait_timeout_ms}ms",
                screen=cls.__name__,
            )
        return cls(session, _ARRIVAL)

    @property
    def device(self):
        return self._session.device

    # ==================== Verification Helpers ====================

    def _is_present(self, locator: Locator, scroll: bool = False) -> bool:
        if scroll and not self.device.scroll_to(locator):
            return False
        return self.device.exists(locator)

    def _verify(self: SelfScreen, condition: Callable[[], Any], expected: str) -> SelfScreen:
        self._session.ensure_no_pending_transition()
        if not self._session.wait(condition):
            raise VerificationFailure(expected, screen=type(self).__name__)
        return self

    def _verify_displayed(self: SelfScreen, locator: Locator, expected: str = "", scroll: bool = False) -> SelfScreen:
        return self._verify(
            lambda: self._is_present(locator, scroll),
            expected or f"{locator.describe()} to be displayed",
        )

    def _verify_not_displayed(self: SelfScreen, locator: Locator, expected: str = "", scroll: bool = False) -> SelfScreen:
        # Absence only counts once the screen's own entry element has rendered;
        # an overlay such as the first-run dialog does not qualify
        return self._verify(
            lambda: self.device.exists(self.ENTRY) and not self._is_present(locator, scroll),
            expected or f"{locator.describe()} not to be displayed",
        )

    def _verify_shown(self: SelfScreen, locator: Locator, shown: bool, what: str, scroll: bool = False) -> SelfScreen:
        if shown:
            return self._verify_displayed(locator, f"{what} to be displayed", scroll)
        return self._verify_not_displayed(locator, f"{what} not to be displayed", scroll)

    # ==================== Interaction Helpers ====================

    def _find(self, locator: Locator, action: str, scroll: bool = False) -> UiElement:
        self._session.ensure_no_pending_transition()

        def lookup():
            if scroll:
                self.device.scroll_to(locator)
            return self.device.find(locator)

        element = self._session.wait(lookup)
        if element is None:
            raise NavigationFailure(action, f"{locator.describe()} not found", screen=type(self).__name__)
        return element

    def _find_all(self, locator: Locator) -> List[UiElement]:
        self._session.ensure_no_pending_transition()
        return self._session.wait(lambda: self.device.find_all(locator)) or []

    def _tap(self, locator: Locator, action: str, scroll: bool = False):
        # A stale screen must not reach the device while a transition is pending
        self._session.ensure_no_pending_transition()

        def attempt():
            if scroll:
                self.device.scroll_to(locator)
            return self.device.tap(locator)

        if not self._session.wait(attempt):
            raise NavigationFailure(action, f"could not tap {locator.describe()}", screen=type(self).__name__)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"
