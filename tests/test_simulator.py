import pytest
import sys
from pathlib import Path
from unittest.mock import MagicMock

import requests

sys.path.insert(0, str(Path(__file__).parent.parent))

from homeharness.app import AppView, SimulatedBrowserApp
from homeharness.app import content, ids
from homeharness.device.base import Locator, by_id
from homeharness.device.simulated import SimulatedDevice
from homeharness.settings import SettingsOverrides


def resource_ids(app, include_offscreen=False):
    return [e.resource_id for e in app.elements(include_offscreen=include_offscreen)]


def fake_http(status_code=200, text=""):
    http = MagicMock()
    http.get.return_value = MagicMock(status_code=status_code, text=text)
    return http


class TestHomeRendering:
    def test_default_home(self):
        app = SimulatedBrowserApp()
        visible = resource_ids(app)
        assert ids.HOMEPAGE_WORDMARK in visible
        assert visible.count(ids.TOP_SITE_ITEM) == len(content.DEFAULT_TOP_SITES)
        assert ids.COLLECTIONS_HEADER in visible
        assert ids.JUMP_BACK_IN_HEADER not in visible

    def test_onboarding_covers_home(self):
        app = SimulatedBrowserApp(SettingsOverrides(is_home_onboarding_dialog_enabled=True))
        assert resource_ids(app) == [ids.ONBOARDING_DIALOG, ids.ONBOARDING_CLOSE]

    def test_pocket_below_fold(self):
        app = SimulatedBrowserApp()
        assert ids.POCKET_STORIES_HEADER not in resource_ids(app)
        assert ids.POCKET_STORIES_HEADER in resource_ids(app, include_offscreen=True)

        device = SimulatedDevice(app)
        assert device.scroll_to(by_id(ids.POCKET_STORIES_HEADER))
        assert ids.POCKET_STORIES_HEADER in resource_ids(app)

    def test_scroll_to_missing_element(self):
        app = SimulatedBrowserApp(SettingsOverrides(is_pocket_enabled=False))
        assert not SimulatedDevice(app).scroll_to(by_id(ids.POCKET_STORIES_HEADER))

    def test_customize_button_needs_a_section(self):
        app = SimulatedBrowserApp(SettingsOverrides(is_pocket_enabled=False))
        assert ids.CUSTOMIZE_HOMEPAGE_BUTTON not in resource_ids(app, include_offscreen=True)
        app.open_url("https://example.com/a")
        app.view = AppView.HOME
        assert ids.CUSTOMIZE_HOMEPAGE_BUTTON in resource_ids(app, include_offscreen=True)

    def test_private_home(self):
        app = SimulatedBrowserApp()
        device = SimulatedDevice(app)
        assert device.tap(by_id(ids.PRIVATE_BROWSING_BUTTON))
        visible = resource_ids(app)
        assert ids.PRIVATE_SESSION_DESCRIPTION in visible
        assert ids.COMMON_MYTHS_LINK in visible
        assert ids.HOMEPAGE_WORDMARK not in visible

    def test_jump_back_in_capped(self):
        app = SimulatedBrowserApp()
        for i in range(6):
            app.open_url(f"https://example.com/{i}")
        app.view = AppView.HOME
        recent = [e for e in app.elements() if e.resource_id == ids.RECENT_TAB_ITEM]
        assert len(recent) == SimulatedBrowserApp.MAX_RECENT_TABS
        assert recent[0].description == "https://example.com/5"

    def test_jump_back_in_cfr(self):
        app = SimulatedBrowserApp(SettingsOverrides(is_jump_back_in_cfr_enabled=True))
        app.open_url("https://example.com/a")
        app.view = AppView.HOME
        assert ids.JUMP_BACK_IN_CFR in resource_ids(app)


class TestNavigation:
    def test_open_remote_url_skips_network(self):
        http = fake_http()
        app = SimulatedBrowserApp(http=http)
        app.open_url("https://getpocket.com/explore")
        http.get.assert_not_called()
        assert app.view is AppView.BROWSER
        assert app.selected_tab.title == "https://getpocket.com/explore"

    def test_open_local_url_fetches_page(self):
        http = fake_http(text='<title>Test_Page_1</title><p id="content">Page content: 1</p>')
        app = SimulatedBrowserApp(http=http)
        app.open_url("http://127.0.0.1:9999/pages/generic1.html")
        tab = app.selected_tab
        assert tab.title == "Test_Page_1"
        assert tab.content == "Page content: 1"
        assert app.history[-1] == ("http://127.0.0.1:9999/pages/generic1.html", "Test_Page_1")

    def test_local_404(self):
        app = SimulatedBrowserApp(http=fake_http(status_code=404))
        app.open_url("http://localhost:1/pages/nothing.html")
        assert app.selected_tab.title == "Page not found"

    def test_connection_error(self):
        http = MagicMock()
        http.get.side_effect = requests.ConnectionError("refused")
        app = SimulatedBrowserApp(http=http)
        app.open_url("http://127.0.0.1:1/pages/generic1.html")
        assert app.selected_tab.title == "Unable to connect"

    def test_private_tabs_stay_out_of_history(self):
        app = SimulatedBrowserApp()
        app.private_mode = True
        app.open_url("https://example.com/secret")
        assert app.history == []
        assert app.tabs[0].private

    def test_toolbar_entry(self):
        app = SimulatedBrowserApp()
        device = SimulatedDevice(app)
        assert device.tap(by_id(ids.TOOLBAR_URL))
        assert app.view is AppView.TOOLBAR_EDIT
        assert device.type_text(by_id(ids.TOOLBAR_EDIT_URL), "example.com/page")
        device.press_enter()
        assert app.view is AppView.BROWSER
        assert app.selected_tab.url == "http://example.com/page"

    def test_type_text_only_into_url_field(self):
        app = SimulatedBrowserApp()
        assert not SimulatedDevice(app).type_text(by_id(ids.HOMEPAGE_WORDMARK), "x")

    def test_tap_missing_element(self):
        app = SimulatedBrowserApp()
        assert not SimulatedDevice(app).tap(by_id(ids.TAB_CLOSE))

    def test_closing_last_tab_dismisses_drawer(self):
        app = SimulatedBrowserApp()
        device = SimulatedDevice(app)
        app.open_url("https://example.com/a")
        device.tap(by_id(ids.TAB_COUNTER))
        assert app.view is AppView.TAB_DRAWER
        device.tap(by_id(ids.TAB_CLOSE, description="https://example.com/a"))
        assert app.tabs == []
        assert app.view is AppView.HOME

    def test_back_from_drawer_returns_to_origin(self):
        app = SimulatedBrowserApp()
        device = SimulatedDevice(app)
        app.open_url("https://example.com/a")
        device.tap(by_id(ids.TAB_COUNTER))
        device.press_back()
        assert app.view is AppView.BROWSER

    def test_customize_toggles(self):
        app = SimulatedBrowserApp()
        device = SimulatedDevice(app)
        device.tap(by_id(ids.MENU_BUTTON))
        device.tap(by_id(ids.MENU_CUSTOMIZE_HOME))
        assert app.view is AppView.CUSTOMIZE_HOME
        assert device.find(by_id(ids.TOGGLE_POCKET)).checked is True
        device.tap(by_id(ids.TOGGLE_POCKET))
        assert device.find(by_id(ids.TOGGLE_POCKET)).checked is False
        device.press_back()
        assert app.view is AppView.HOME
        assert ids.POCKET_STORIES_HEADER not in resource_ids(app, include_offscreen=True)


class TestLatency:
    def test_elements_hidden_while_rendering(self):
        app = SimulatedBrowserApp(ui_latency=10.0)
        assert app.elements()
        SimulatedDevice(app).tap(by_id(ids.MENU_BUTTON))
        assert not app.is_settled
        assert app.elements() == []

    def test_taps_ignored_while_rendering(self):
        app = SimulatedBrowserApp(ui_latency=10.0)
        device = SimulatedDevice(app)
        device.tap(by_id(ids.MENU_BUTTON))
        assert not device.tap(by_id(ids.MENU_CUSTOMIZE_HOME))
        assert app.view is AppView.MENU


class TestLocator:
    def test_requires_criterion(self):
        with pytest.raises(ValueError):
            Locator()

    def test_text_contains(self):
        app = SimulatedBrowserApp()
        device = SimulatedDevice(app)
        assert device.exists(Locator(resource_id=ids.TOP_SITE_ITEM, text_contains="Article"))
        assert not device.exists(Locator(resource_id=ids.TOP_SITE_ITEM, text_contains="article"))

    def test_describe(self):
        assert by_id("x", text="y").describe() == "id=x, text='y'"
