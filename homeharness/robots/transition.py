"""
Transition - a navigation that has happened in the UI but has not yet been
verified as having landed on its destination screen.
"""
from typing import TYPE_CHECKING, Callable, Generic, TypeVar

from ..errors import UnresolvedTransitionError

if TYPE_CHECKING:
    from ..session import ScenarioSession
    from .base import ScreenKind

S = TypeVar("S")
T = TypeVar("T")
R = TypeVar("R")


class Transition(Generic[S, T]):
    """
    Pending navigation from screen `S` to a screen of kind `destination`.

    The only way to obtain the destination screen is `to(block)`, which waits
    for the destination's entry point and hands the screen to `block`. Until
    then the session refuses any other robot call.
    """

    def __init__(self, session: "ScenarioSession", origin: S, destination: "ScreenKind", action: str):
        self.origin = origin
        self.destination = destination
        self.action = action
        self._session = session
        self._resolved = False
        session.begin_transition(self)

    @property
    def resolved(self) -> bool:
        return self._resolved

    def to(self, block: Callable[[T], R]) -> R:
        if self._resolved:
            raise UnresolvedTransitionError(f"Transition '{self.action}' was already resolved")
        self._resolved = True
        self._session.end_transition(self)

        from .base import screen_class
        screen = screen_class(self.destination).arrive(self._session, action=self.action)
        return block(screen)

    def __repr__(self) -> str:
        state = "resolved" if self._resolved else "pending"
        return f"<Transition {self.action}: {type(self.origin).__name__} -> {self.destination.value} ({state})>"
