"""
Three-dot menu robot.
"""
from ..app import ids
from ..device.base import by_id
from .base import Screen, ScreenKind, action, screen


@screen(ScreenKind.THREE_DOT_MENU)
class ThreeDotMenuScreen(Screen):
    ENTRY = by_id(ids.MENU_SHEET)

    @action(ScreenKind.CUSTOMIZE_HOME)
    def open_customize_home(self):
        self._tap(by_id(ids.MENU_CUSTOMIZE_HOME), "open_customize_home")

    @action(ScreenKind.HOME)
    def close_menu(self):
        self.device.press_back()
