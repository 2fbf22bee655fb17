import pytest
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

sys.path.insert(0, str(Path(__file__).parent.parent))

from homeharness.device.base import Locator, by_id
from homeharness.device.playwright_device import PlaywrightDevice
from homeharness.settings import SettingsOverrides


def make_handle(testid, text="", label=None, selected=None, checked=None, visible=True):
    attrs = {
        "data-testid": testid,
        "aria-label": label,
        "aria-selected": selected,
        "aria-checked": checked,
    }
    handle = MagicMock()
    handle.get_attribute.side_effect = lambda name: attrs.get(name)
    handle.inner_text.return_value = text
    handle.is_visible.return_value = visible
    return handle


def make_page(handles):
    """A page whose locator() returns the handles matching the test-id selector."""
    def locator(selector):
        result = MagicMock()
        if selector == "[data-testid]":
            result.all.return_value = list(handles)
        else:
            wanted = selector.split('"')[1]
            result.all.return_value = [h for h in handles if h.get_attribute("data-testid") == wanted]
        return result

    page = MagicMock()
    page.locator.side_effect = locator
    return page


class TestPlaywrightDeviceLookup:
    def test_find_all_by_id(self):
        page = make_page([
            make_handle("top_site_item", text="Wikipedia"),
            make_handle("top_site_item", text="Google"),
            make_handle("homepage_wordmark", text="Firefox"),
        ])
        device = PlaywrightDevice(page)
        found = device.find_all(by_id("top_site_item"))
        assert [e.text for e in found] == ["Wikipedia", "Google"]
        page.locator.assert_any_call('[data-testid="top_site_item"]')

    def test_invisible_elements_skipped(self):
        page = make_page([
            make_handle("item", text="shown"),
            make_handle("item", text="hidden", visible=False),
        ])
        assert [e.text for e in PlaywrightDevice(page).find_all(by_id("item"))] == ["shown"]

    def test_text_only_locator(self):
        page = make_page([make_handle("a", text="Hello"), make_handle("b", text="World")])
        element = PlaywrightDevice(page).find(Locator(text="World"))
        assert element.resource_id == "b"

    def test_aria_attributes(self):
        page = make_page([
            make_handle("toggle", text="Pocket", label="Pocket switch", selected="true", checked="false"),
        ])
        element = PlaywrightDevice(page).find(by_id("toggle"))
        assert element.description == "Pocket switch"
        assert element.selected is True
        assert element.checked is False

    def test_checked_absent(self):
        page = make_page([make_handle("plain")])
        assert PlaywrightDevice(page).find(by_id("plain")).checked is None

    def test_text_is_stripped(self):
        page = make_page([make_handle("t", text="  Jump back in \n")])
        assert PlaywrightDevice(page).exists(by_id("t", text="Jump back in"))


class TestPlaywrightDeviceGestures:
    def test_tap_clicks_first_match(self):
        first = make_handle("close", label="Tab A")
        second = make_handle("close", label="Tab B")
        device = PlaywrightDevice(make_page([first, second]))
        assert device.tap(by_id("close", description="Tab B"))
        second.click.assert_called_once()
        first.click.assert_not_called()

    def test_tap_nothing(self):
        assert not PlaywrightDevice(make_page([])).tap(by_id("missing"))

    def test_type_text(self):
        field = make_handle("url_edit")
        device = PlaywrightDevice(make_page([field]))
        assert device.type_text(by_id("url_edit"), "http://127.0.0.1/pages/generic1.html")
        field.fill.assert_called_once_with("http://127.0.0.1/pages/generic1.html")

    def test_keys(self):
        page = make_page([])
        device = PlaywrightDevice(page)
        device.press_enter()
        device.press_back()
        page.keyboard.press.assert_called_once_with("Enter")
        page.go_back.assert_called_once()

    def test_scroll_to(self):
        offscreen = make_handle("pocket_header", visible=False)
        device = PlaywrightDevice(make_page([offscreen]))
        assert device.scroll_to(by_id("pocket_header"))
        offscreen.scroll_into_view_if_needed.assert_called_once()
        assert not device.scroll_to(by_id("other"))


class TestPlaywrightDeviceLifecycle:
    def test_close_runs_closers_in_order(self):
        order = []
        device = PlaywrightDevice(MagicMock(), closers=[lambda: order.append("context"), lambda: order.append("browser")])
        device.close()
        assert order == ["context", "browser"]

    def test_close_continues_after_error(self):
        last = MagicMock()
        device = PlaywrightDevice(MagicMock(), closers=[MagicMock(side_effect=RuntimeError("gone")), last])
        device.close()
        last.assert_called_once()

    def test_close_twice(self):
        closer = MagicMock()
        device = PlaywrightDevice(MagicMock(), closers=[closer])
        device.close()
        device.close()
        closer.assert_called_once()

    def test_launch_passes_settings(self):
        pytest.importorskip("playwright.sync_api")
        with patch("playwright.sync_api.sync_playwright") as sync_playwright:
            playwright = sync_playwright.return_value.start.return_value
            page = playwright.chromium.launch.return_value.new_context.return_value.new_page.return_value

            device = PlaywrightDevice.launch(
                "http://localhost:3000/home",
                SettingsOverrides(is_pocket_enabled=False),
                headless=True,
                timeout_ms=2000,
            )

        assert device.page is page
        page.set_default_timeout.assert_called_once_with(2000)
        url = page.goto.call_args.args[0]
        assert url.startswith("http://localhost:3000/home?")
        assert "is_pocket_enabled=false" in url
        assert "tabs_tray_rewrite_enabled=true" in url
