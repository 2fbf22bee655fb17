"""
Customize-home settings robot: toggles for the optional home sections.
"""
from ..app import ids
from ..device.base import UiElement, by_id
from .base import Screen, ScreenKind, action, screen

SECTION_TOGGLES = {
    "jump_back_in": ids.TOGGLE_JUMP_BACK_IN,
    "recent_bookmarks": ids.TOGGLE_RECENT_BOOKMARKS,
    "recently_visited": ids.TOGGLE_RECENTLY_VISITED,
    "pocket": ids.TOGGLE_POCKET,
}


@screen(ScreenKind.CUSTOMIZE_HOME)
class CustomizeHomeScreen(Screen):
    ENTRY = by_id(ids.CUSTOMIZE_HOME_PANEL)

    def click_jump_back_in_button(self) -> "CustomizeHomeScreen":
        return self._toggle("jump_back_in")

    def click_recent_bookmarks_button(self) -> "CustomizeHomeScreen":
        return self._toggle("recent_bookmarks")

    def click_recent_searches_button(self) -> "CustomizeHomeScreen":
        return self._toggle("recently_visited")

    def click_pocket_button(self) -> "CustomizeHomeScreen":
        return self._toggle("pocket")

    def verify_section_toggle(self, section: str, enabled: bool) -> "CustomizeHomeScreen":
        locator = by_id(self._toggle_id(section))

        def check():
            element = self.device.find(locator)
            return element is not None and element.checked is enabled

        state = "on" if enabled else "off"
        return self._verify(check, f"{section} toggle to be {state}")

    @action(ScreenKind.HOME)
    def go_back_to_home_screen(self):
        self.device.press_back()

    def _toggle(self, section: str) -> "CustomizeHomeScreen":
        name = f"toggle {section}"
        locator = by_id(self._toggle_id(section))
        before: UiElement = self._find(locator, name)
        self._tap(locator, name)

        def flipped():
            element = self.device.find(locator)
            return element is not None and element.checked is not before.checked

        # Back-to-back toggles must each see the previous switch settle
        return self._verify(flipped, f"{section} toggle to change state")

    @staticmethod
    def _toggle_id(section: str) -> str:
        try:
            return SECTION_TOGGLES[section]
        except KeyError:
            raise ValueError(f"Unknown home section: {section}") from None
