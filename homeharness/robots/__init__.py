"""
Screen robots.

Importing this package registers every screen kind, so transitions can
resolve any destination in the graph.
"""
from .base import Screen, ScreenKind, action, screen, screen_class, screen_graph
from .browser import BrowserScreen
from .customize_home import CustomizeHomeScreen
from .home import HomeScreen
from .menu import ThreeDotMenuScreen
from .private_home import PrivateHomeScreen
from .tab_drawer import TabDrawerScreen
from .toolbar import NavigationToolbarScreen
from .transition import Transition


def home_screen(session) -> HomeScreen:
    return session.enter(HomeScreen)


def navigation_toolbar(session) -> NavigationToolbarScreen:
    return session.enter(NavigationToolbarScreen)


__all__ = [
    "Screen",
    "ScreenKind",
    "Transition",
    "action",
    "screen",
    "screen_class",
    "screen_graph",
    "home_screen",
    "navigation_toolbar",
    "BrowserScreen",
    "CustomizeHomeScreen",
    "HomeScreen",
    "NavigationToolbarScreen",
    "PrivateHomeScreen",
    "TabDrawerScreen",
    "ThreeDotMenuScreen",
]
