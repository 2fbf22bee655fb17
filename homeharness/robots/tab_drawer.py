"""
Tab drawer robot.
"""
from ..app import ids
from ..device.base import by_id
from ..errors import NavigationFailure
from .base import Screen, ScreenKind, action, screen


@screen(ScreenKind.TAB_DRAWER)
class TabDrawerScreen(Screen):
    ENTRY = by_id(ids.TAB_TRAY)

    def verify_existing_open_tabs(self, *titles: str) -> "TabDrawerScreen":
        for title in titles:
            self._verify_displayed(by_id(ids.TAB_ITEM, text=title), f"open tab titled {title!r}")
        return self

    def verify_no_open_tabs(self) -> "TabDrawerScreen":
        return self._verify_displayed(by_id(ids.TAB_TRAY_EMPTY), "empty tab drawer")

    def close_tab_with_title(self, title: str) -> "TabDrawerScreen":
        """Close one tab while others remain; the drawer stays open."""
        name = "close_tab_with_title"
        self._tap(by_id(ids.TAB_CLOSE, description=title), name)
        closed = self._session.wait(
            lambda: self.is_showing(self._session) and not self.device.exists(by_id(ids.TAB_ITEM, text=title))
        )
        if not closed:
            raise NavigationFailure(
                name,
                f"tab {title!r} did not close with the drawer still open (use close_last_tab for the last tab)",
                screen=type(self).__name__,
            )
        return self

    @action(ScreenKind.HOME)
    def close_last_tab(self):
        """Close the only remaining tab, which dismisses the drawer."""
        name = "close_last_tab"
        tabs = self._find_all(by_id(ids.TAB_ITEM))
        if len(tabs) != 1:
            raise NavigationFailure(name, f"expected exactly one open tab, found {len(tabs)}", screen=type(self).__name__)
        self._tap(by_id(ids.TAB_CLOSE, description=tabs[0].text), name)

    @action(ScreenKind.BROWSER)
    def open_tab(self, title: str):
        self._tap(by_id(ids.TAB_ITEM, text=title), "open_tab")

    @action(ScreenKind.HOME)
    def close_tab_drawer(self):
        self.device.press_back()
