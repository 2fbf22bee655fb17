"""
Navigation toolbar robot.

Reachable wherever the URL bar is showing (home or browser); its only job is
getting a URL loaded.
"""
from ..app import ids
from ..device.base import by_id
from ..errors import NavigationFailure
from .base import Screen, ScreenKind, action, screen


@screen(ScreenKind.NAVIGATION_TOOLBAR)
class NavigationToolbarScreen(Screen):
    ENTRY = by_id(ids.TOOLBAR_URL)

    @action(ScreenKind.BROWSER)
    def enter_url_and_enter_to_browser(self, url: str):
        name = "enter_url_and_enter_to_browser"
        self._tap(self.ENTRY, name)
        edit = by_id(ids.TOOLBAR_EDIT_URL)
        self._find(edit, name)
        if not self._session.wait(lambda: self.device.type_text(edit, url)):
            raise NavigationFailure(name, f"could not type into {edit.describe()}", screen=type(self).__name__)
        self.device.press_enter()
