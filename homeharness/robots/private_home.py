"""
Private browsing home screen robot.
"""
from ..app import ids
from ..device.base import Locator, by_id
from .base import Screen, ScreenKind, action, screen


@screen(ScreenKind.PRIVATE_HOME)
class PrivateHomeScreen(Screen):
    ENTRY = by_id(ids.PRIVATE_SESSION_DESCRIPTION)

    def verify_private_browsing_home_screen(self) -> "PrivateHomeScreen":
        self._verify_displayed(self.ENTRY, "private session description")
        self._verify_displayed(by_id(ids.COMMON_MYTHS_LINK), "'Common myths about private browsing' link")
        return self._verify(
            lambda: self._private_button_checked(),
            "private browsing button to be switched on",
        )

    def verify_tab_counter(self, count: str) -> "PrivateHomeScreen":
        return self._verify_displayed(by_id(ids.TAB_COUNTER, text=count), f"tab counter to read {count}")

    def _private_button_checked(self) -> bool:
        button = self.device.find(Locator(resource_id=ids.PRIVATE_BROWSING_BUTTON))
        return button is not None and button.checked is True

    @action(ScreenKind.BROWSER)
    def open_common_myths_link(self):
        self._tap(by_id(ids.COMMON_MYTHS_LINK), "open_common_myths_link")

    @action(ScreenKind.HOME, resolve=True)
    def toggle_private_browsing_mode(self):
        self._tap(by_id(ids.PRIVATE_BROWSING_BUTTON), "toggle_private_browsing_mode")

    @action(ScreenKind.NAVIGATION_TOOLBAR, resolve=True)
    def open_navigation_toolbar(self):
        self._find(by_id(ids.TOOLBAR_URL), "open_navigation_toolbar")

    @action(ScreenKind.TAB_DRAWER)
    def open_tab_drawer(self):
        self._tap(by_id(ids.TAB_COUNTER), "open_tab_drawer")
