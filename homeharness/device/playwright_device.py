"""
Device backed by a Playwright page.

Drives a web build of the application in a real rendering engine. Resource
ids map to `data-testid` attributes; descriptions, selection and toggle state
map to the matching ARIA attributes.
"""
from typing import Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import urlencode

from ..logging_config import get_logger
from ..settings import SettingsOverrides
from .base import Device, Locator, UiElement

logger = get_logger("homeharness.device.playwright")

TEST_ID_ATTRIBUTE = "data-testid"


def _parse_checked(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    return value == "true"


class PlaywrightDevice(Device):
    """Maps the locator vocabulary onto a Playwright sync-API page."""

    def __init__(self, page, closers: Optional[List[Callable[[], Any]]] = None):
        self.page = page
        self._closers = closers or []

    @classmethod
    def launch(
        cls,
        app_url: str,
        settings: SettingsOverrides,
        headless: bool = True,
        timeout_ms: int = 30000,
        viewport: Optional[Dict[str, int]] = None,
    ) -> "PlaywrightDevice":
        """Start Chromium, open the application with `settings` as query parameters."""
        from playwright.sync_api import sync_playwright

        playwright = sync_playwright().start()
        try:
            browser = playwright.chromium.launch(headless=headless)
            context = browser.new_context(viewport=viewport or {"width": 412, "height": 915})
            page = context.new_page()
            page.set_default_timeout(timeout_ms)
            flags = {k: str(v).lower() for k, v in settings.to_dict().items()}
            separator = "&" if "?" in app_url else "?"
            page.goto(f"{app_url}{separator}{urlencode(flags)}")
        except Exception:
            playwright.stop()
            raise

        logger.info(f"Playwright device opened {app_url}")
        return cls(page, closers=[context.close, browser.close, playwright.stop])

    # ==================== Lookup ====================

    def _selector(self, locator: Locator) -> str:
        if locator.resource_id:
            return f'[{TEST_ID_ATTRIBUTE}="{locator.resource_id}"]'
        return f"[{TEST_ID_ATTRIBUTE}]"

    def _snapshot(self, handle) -> UiElement:
        return UiElement(
            resource_id=handle.get_attribute(TEST_ID_ATTRIBUTE) or "",
            text=(handle.inner_text() or "").strip(),
            description=handle.get_attribute("aria-label") or "",
            selected=handle.get_attribute("aria-selected") == "true",
            checked=_parse_checked(handle.get_attribute("aria-checked")),
        )

    def _matching(self, locator: Locator) -> List[Tuple[Any, UiElement]]:
        matches = []
        for handle in self.page.locator(self._selector(locator)).all():
            if not handle.is_visible():
                continue
            element = self._snapshot(handle)
            if locator.matches(element):
                matches.append((handle, element))
        return matches

    def find_all(self, locator: Locator) -> List[UiElement]:
        return [element for _, element in self._matching(locator)]

    # ==================== Gestures ====================

    def tap(self, locator: Locator) -> bool:
        matches = self._matching(locator)
        if not matches:
            return False
        matches[0][0].click()
        return True

    def type_text(self, locator: Locator, text: str) -> bool:
        matches = self._matching(locator)
        if not matches:
            return False
        matches[0][0].fill(text)
        return True

    def press_enter(self):
        self.page.keyboard.press("Enter")

    def press_back(self):
        self.page.go_back()

    def scroll_to(self, locator: Locator) -> bool:
        for handle in self.page.locator(self._selector(locator)).all():
            if locator.matches(self._snapshot(handle)):
                handle.scroll_into_view_if_needed()
                return True
        return False

    def close(self):
        for closer in self._closers:
            try:
                closer()
            except Exception as e:
                logger.error(f"Error closing Playwright device: {e}")
        self._closers = []
