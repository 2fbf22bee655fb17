"""
Browser screen robot: a loaded page with the toolbar showing its URL.
"""
from ..app import ids
from ..device.base import Locator, by_id
from .base import Screen, ScreenKind, action, screen


@screen(ScreenKind.BROWSER)
class BrowserScreen(Screen):
    ENTRY = by_id(ids.ENGINE_VIEW)

    def verify_url(self, expected: str) -> "BrowserScreen":
        """The URL bar contains `expected`."""
        return self._verify_displayed(
            Locator(resource_id=ids.TOOLBAR_URL, text_contains=expected),
            f"URL containing {expected!r}",
        )

    def verify_page_content(self, expected: str) -> "BrowserScreen":
        return self._verify_displayed(
            Locator(resource_id=ids.PAGE_CONTENT, text_contains=expected),
            f"page content {expected!r}",
        )

    def verify_page_title(self, title: str) -> "BrowserScreen":
        return self._verify_displayed(by_id(ids.ENGINE_VIEW, text=title), f"page titled {title!r}")

    def verify_tab_counter(self, count: str) -> "BrowserScreen":
        return self._verify_displayed(by_id(ids.TAB_COUNTER, text=count), f"tab counter to read {count}")

    @action(ScreenKind.HOME)
    def go_to_homescreen(self):
        self._tap(by_id(ids.HOME_BUTTON), "go_to_homescreen")

    @action(ScreenKind.TAB_DRAWER)
    def open_tab_drawer(self):
        self._tap(by_id(ids.TAB_COUNTER), "open_tab_drawer")

    @action(ScreenKind.NAVIGATION_TOOLBAR, resolve=True)
    def open_navigation_toolbar(self):
        self._find(by_id(ids.TOOLBAR_URL), "open_navigation_toolbar")
