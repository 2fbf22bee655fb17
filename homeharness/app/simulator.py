"""
SimulatedBrowserApp - a scriptable stand-in for the browser application.

Models the views a home-screen scenario walks through: home (normal and
private), toolbar editing, the browser, the tab drawer, the three-dot menu and
the customize-home panel. State lives entirely in this object, so a fresh
instance per attempt is a fresh application.

Pages on local hosts are fetched over HTTP; anything else is "loaded" without
touching the network and shows its URL as the title.
"""
import html
import re
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple
from urllib.parse import urlparse

import requests

from ..logging_config import get_logger
from ..settings import SettingsOverrides
from ..device.base import UiElement
from . import content, ids

logger = get_logger("homeharness.app")

_TITLE_RE = re.compile(r"<title>(.*?)</title>", re.IGNORECASE | re.DOTALL)
_CONTENT_RE = re.compile(r"<p[^>]*\bid=\"content\"[^>]*>(.*?)</p>", re.IGNORECASE | re.DOTALL)


class AppView(Enum):
    HOME = "home"
    BROWSER = "browser"
    TOOLBAR_EDIT = "toolbar_edit"
    TAB_DRAWER = "tab_drawer"
    MENU = "menu"
    CUSTOMIZE_HOME = "customize_home"


@dataclass
class SimulatedTab:
    id: int
    url: str
    title: str = ""
    content: str = ""
    private: bool = False
    last_accessed: int = 0


@dataclass
class HomePreferences:
    """Home sections the user can toggle from the customize-home panel."""
    show_jump_back_in: bool = True
    show_recent_bookmarks: bool = True
    show_recently_visited: bool = True
    show_pocket: bool = True

    @classmethod
    def from_settings(cls, settings: SettingsOverrides) -> "HomePreferences":
        return cls(
            show_jump_back_in=settings.is_recent_tabs_feature_enabled,
            show_recent_bookmarks=settings.is_recent_bookmarks_feature_enabled,
            show_recently_visited=settings.is_recently_visited_feature_enabled,
            show_pocket=settings.is_pocket_enabled,
        )


# (element, below the fold)
Rendered = List[Tuple[UiElement, bool]]


class SimulatedBrowserApp:
    LOCAL_HOSTS = {"127.0.0.1", "localhost", "::1"}
    MAX_RECENT_TABS = 4
    MAX_RECENTLY_VISITED = 9

    def __init__(
        self,
        settings: Optional[SettingsOverrides] = None,
        ui_latency: float = 0.0,
        page_timeout: float = 5.0,
        http: Optional[requests.Session] = None,
    ):
        self.settings = settings or SettingsOverrides()
        self.ui_latency = ui_latency
        self.page_timeout = page_timeout
        self.prefs = HomePreferences.from_settings(self.settings)
        self.view = AppView.HOME
        self.private_mode = False
        self.onboarding_visible = self.settings.is_home_onboarding_dialog_enabled
        self.tabs: List[SimulatedTab] = []
        self.history: List[Tuple[str, str]] = []  # (url, title), most recent last
        self.selected_topics: set = set()
        self.edit_text = ""
        self._selected_id: Optional[int] = None
        self._return_view = AppView.HOME
        self._next_tab_id = 1
        self._clock = 0
        self._scrolled = False
        self._settled_at = 0.0
        self._http = http or requests.Session()
        self._handlers: Dict[str, Callable[[UiElement], None]] = {
            ids.ONBOARDING_CLOSE: lambda e: self._dismiss_onboarding(),
            ids.PRIVATE_BROWSING_BUTTON: lambda e: self._toggle_private_mode(),
            ids.TOOLBAR_URL: lambda e: self._start_editing(),
            ids.MENU_BUTTON: lambda e: self._show(AppView.MENU),
            ids.TAB_COUNTER: lambda e: self._show(AppView.TAB_DRAWER),
            ids.HOME_BUTTON: lambda e: self._show(AppView.HOME),
            ids.JUMP_BACK_IN_SHOW_ALL: lambda e: self._show(AppView.TAB_DRAWER),
            ids.RECENT_TAB_ITEM: self._open_recent_tab,
            ids.CUSTOMIZE_HOMEPAGE_BUTTON: lambda e: self._show(AppView.CUSTOMIZE_HOME),
            ids.MENU_CUSTOMIZE_HOME: lambda e: self._show(AppView.CUSTOMIZE_HOME),
            ids.COMMON_MYTHS_LINK: lambda e: self.open_url(content.COMMON_MYTHS_URL, new_tab=True),
            ids.POCKET_STORY_ITEM: self._open_pocket_story,
            ids.POCKET_DISCOVER_MORE: lambda e: self.open_url(content.POCKET_DISCOVER_MORE_URL, new_tab=True),
            ids.POCKET_LEARN_MORE: lambda e: self.open_url(content.POCKET_LEARN_MORE_URL, new_tab=True),
            ids.POCKET_TOPIC_ITEM: self._toggle_topic,
            ids.TAB_ITEM: self._select_tab_item,
            ids.TAB_CLOSE: self._close_tab_item,
            ids.TOGGLE_JUMP_BACK_IN: lambda e: self._toggle_pref("show_jump_back_in"),
            ids.TOGGLE_RECENT_BOOKMARKS: lambda e: self._toggle_pref("show_recent_bookmarks"),
            ids.TOGGLE_RECENTLY_VISITED: lambda e: self._toggle_pref("show_recently_visited"),
            ids.TOGGLE_POCKET: lambda e: self._toggle_pref("show_pocket"),
        }

    def close(self):
        self._http.close()

    # ==================== UI Tree ====================

    @property
    def is_settled(self) -> bool:
        return time.monotonic() >= self._settled_at

    def elements(self, include_offscreen: bool = False) -> List[UiElement]:
        """Visible elements in screen order; empty while a transition is rendering."""
        if not self.is_settled:
            return []
        return [
            element for element, below_fold in self._render()
            if include_offscreen or self._scrolled or not below_fold
        ]

    def _render(self) -> Rendered:
        renderers = {
            AppView.HOME: self._render_home,
            AppView.BROWSER: self._render_browser,
            AppView.TOOLBAR_EDIT: self._render_toolbar_edit,
            AppView.TAB_DRAWER: self._render_tab_drawer,
            AppView.MENU: self._render_menu,
            AppView.CUSTOMIZE_HOME: self._render_customize_home,
        }
        return renderers[self.view]()

    def _render_toolbar(self, url_text: str) -> Rendered:
        return [
            (UiElement(ids.TOOLBAR), False),
            (UiElement(ids.TOOLBAR_URL, text=url_text), False),
            (UiElement(ids.MENU_BUTTON, description="Menu"), False),
            (UiElement(ids.TAB_COUNTER, text=str(len(self.mode_tabs())), description="Tabs open"), False),
        ]

    def _render_home(self) -> Rendered:
        if self.onboarding_visible:
            return [
                (UiElement(ids.ONBOARDING_DIALOG, text="Welcome to Firefox"), False),
                (UiElement(ids.ONBOARDING_CLOSE, description="Close"), False),
            ]

        out = self._render_toolbar("Search or enter address")
        out.append((UiElement(
            ids.PRIVATE_BROWSING_BUTTON, description="Private browsing", checked=self.private_mode,
        ), False))

        if self.private_mode:
            out.append((UiElement(ids.PRIVATE_SESSION_DESCRIPTION, text=content.PRIVATE_SESSION_TEXT), False))
            out.append((UiElement(ids.COMMON_MYTHS_LINK, text="Common myths about private browsing"), False))
            return out

        out.append((UiElement(ids.HOMEPAGE_WORDMARK, text="Firefox"), False))
        for title in content.DEFAULT_TOP_SITES:
            out.append((UiElement(ids.TOP_SITE_ITEM, text=title), False))

        if self.jump_back_in_visible:
            out.append((UiElement(ids.JUMP_BACK_IN_HEADER, text="Jump back in"), False))
            out.append((UiElement(ids.JUMP_BACK_IN_SHOW_ALL, text="Show all"), False))
            if self.settings.is_jump_back_in_cfr_enabled:
                out.append((UiElement(ids.JUMP_BACK_IN_CFR, text=content.JUMP_BACK_IN_CFR_TEXT), False))
            for tab in self.recent_tabs():
                out.append((UiElement(ids.RECENT_TAB_ITEM, text=tab.title, description=tab.url), False))

        if self.recently_visited_visible:
            out.append((UiElement(ids.RECENTLY_VISITED_HEADER, text="Recently visited"), False))
            for url, title in reversed(self.history[-self.MAX_RECENTLY_VISITED:]):
                out.append((UiElement(ids.RECENTLY_VISITED_ITEM, text=title, description=url), False))

        out.append((UiElement(ids.COLLECTIONS_HEADER, text="Collections"), False))
        out.append((UiElement(
            ids.NO_COLLECTIONS_TEXT,
            text="Collect the things that matter to you.\nGroup together similar searches, sites, "
                 "and tabs for quick access later.",
        ), False))

        if self.pocket_visible:
            out.append((UiElement(ids.POCKET_STORIES_HEADER, text="Thought-provoking stories"), True))
            for story in content.POCKET_STORIES:
                out.append((UiElement(ids.POCKET_STORY_ITEM, text=story.title, description=story.publisher), True))
            out.append((UiElement(ids.POCKET_DISCOVER_MORE, text="Discover more"), True))
            out.append((UiElement(ids.POCKET_TOPICS_HEADER, text="Stories by topic"), True))
            for topic in content.POCKET_TOPICS:
                out.append((UiElement(
                    ids.POCKET_TOPIC_ITEM, text=topic, selected=topic in self.selected_topics,
                ), True))
            out.append((UiElement(ids.POCKET_POWERED_BY, text="Powered by Pocket."), True))
            out.append((UiElement(ids.POCKET_LEARN_MORE, text="Learn more"), True))

        if self.customize_button_visible:
            out.append((UiElement(ids.CUSTOMIZE_HOMEPAGE_BUTTON, text="Customize homepage"), True))
        return out

    def _render_browser(self) -> Rendered:
        tab = self.selected_tab
        out = self._render_toolbar(tab.url if tab else "")
        out.append((UiElement(ids.HOME_BUTTON, description="Home screen"), False))
        if tab:
            out.append((UiElement(ids.ENGINE_VIEW, text=tab.title, description=tab.url), False))
            out.append((UiElement(ids.PAGE_CONTENT, text=tab.content), False))
        return out

    def _render_toolbar_edit(self) -> Rendered:
        return [
            (UiElement(ids.TOOLBAR), False),
            (UiElement(ids.TOOLBAR_EDIT_URL, text=self.edit_text), False),
        ]

    def _render_tab_drawer(self) -> Rendered:
        out: Rendered = [(UiElement(ids.TAB_TRAY, text="Private tabs" if self.private_mode else "Open tabs"), False)]
        tabs = self.mode_tabs()
        if not tabs:
            out.append((UiElement(ids.TAB_TRAY_EMPTY, text="No open tabs"), False))
        for tab in tabs:
            out.append((UiElement(
                ids.TAB_ITEM, text=tab.title, description=tab.url, selected=tab.id == self._selected_id,
            ), False))
            out.append((UiElement(ids.TAB_CLOSE, text="Close tab", description=tab.title), False))
        return out

    def _render_menu(self) -> Rendered:
        return [
            (UiElement(ids.MENU_SHEET), False),
            (UiElement(ids.MENU_CUSTOMIZE_HOME, text="Customize homepage"), False),
        ]

    def _render_customize_home(self) -> Rendered:
        return [
            (UiElement(ids.CUSTOMIZE_HOME_PANEL, text="Homepage"), False),
            (UiElement(ids.TOGGLE_JUMP_BACK_IN, text="Jump back in", checked=self.prefs.show_jump_back_in), False),
            (UiElement(ids.TOGGLE_RECENT_BOOKMARKS, text="Recent bookmarks",
                       checked=self.prefs.show_recent_bookmarks), False),
            (UiElement(ids.TOGGLE_RECENTLY_VISITED, text="Recently visited",
                       checked=self.prefs.show_recently_visited), False),
            (UiElement(ids.TOGGLE_POCKET, text="Pocket", checked=self.prefs.show_pocket), False),
        ]

    # ==================== Derived State ====================

    def mode_tabs(self) -> List[SimulatedTab]:
        return [t for t in self.tabs if t.private == self.private_mode]

    def recent_tabs(self) -> List[SimulatedTab]:
        normal = [t for t in self.tabs if not t.private]
        normal.sort(key=lambda t: t.last_accessed, reverse=True)
        return normal[:self.MAX_RECENT_TABS]

    @property
    def selected_tab(self) -> Optional[SimulatedTab]:
        for tab in self.tabs:
            if tab.id == self._selected_id:
                return tab
        return None

    @property
    def jump_back_in_visible(self) -> bool:
        return self.prefs.show_jump_back_in and bool(self.recent_tabs())

    @property
    def recently_visited_visible(self) -> bool:
        return self.prefs.show_recently_visited and bool(self.history)

    @property
    def pocket_visible(self) -> bool:
        return self.prefs.show_pocket

    @property
    def customize_button_visible(self) -> bool:
        # No bookmarks exist in the simulation, so that section never renders
        return self.jump_back_in_visible or self.recently_visited_visible or self.pocket_visible

    # ==================== Input ====================

    def tap(self, element: UiElement) -> bool:
        if element not in self.elements():
            return False
        handler = self._handlers.get(element.resource_id)
        if handler is None:
            return False
        handler(element)
        self._changed()
        return True

    def type_text(self, element: UiElement, text: str) -> bool:
        if element.resource_id != ids.TOOLBAR_EDIT_URL or element not in self.elements():
            return False
        self.edit_text = text
        self._changed()
        return True

    def press_enter(self):
        if self.view is not AppView.TOOLBAR_EDIT or not self.edit_text.strip():
            return
        url = self.edit_text.strip()
        if "://" not in url:
            url = f"http://{url}"
        self.open_url(url, new_tab=self._return_view is AppView.HOME or self.selected_tab is None)
        self._changed()

    def press_back(self):
        if self.view is AppView.HOME:
            if self.onboarding_visible:
                self._dismiss_onboarding()
        elif self.view is AppView.CUSTOMIZE_HOME:
            self.view = AppView.HOME
        elif self.view is AppView.BROWSER:
            self.view = AppView.HOME
        else:
            self.view = self._valid_return_view()
        self._scrolled = False
        self._changed()

    def scroll_to(self, element: UiElement) -> bool:
        for rendered, below_fold in self._render():
            if rendered == element:
                if below_fold:
                    self._scrolled = True
                return True
        return False

    # ==================== Navigation ====================

    def open_url(self, url: str, new_tab: bool = True):
        title, body = self._fetch(url)
        if new_tab or self.selected_tab is None:
            tab = SimulatedTab(id=self._next_tab_id, url=url, private=self.private_mode)
            self._next_tab_id += 1
            self.tabs.append(tab)
        else:
            tab = self.selected_tab
            tab.url = url
        tab.title, tab.content = title, body
        if not tab.private:
            self.history = [h for h in self.history if h[0] != url]
            self.history.append((url, title))
        self._select(tab)
        self.view = AppView.BROWSER
        self._scrolled = False
        logger.debug(f"Loaded {url} in tab {tab.id} ({title})")

    def _fetch(self, url: str) -> Tuple[str, str]:
        host = urlparse(url).hostname
        if host not in self.LOCAL_HOSTS:
            return url, ""
        try:
            response = self._http.get(url, timeout=self.page_timeout)
        except requests.RequestException as e:
            logger.warning(f"Page load failed for {url}: {e}")
            return "Unable to connect", ""
        if response.status_code != 200:
            return "Page not found", ""
        title_match = _TITLE_RE.search(response.text)
        content_match = _CONTENT_RE.search(response.text)
        title = html.unescape(title_match.group(1).strip()) if title_match else url
        body = html.unescape(content_match.group(1).strip()) if content_match else ""
        return title, body

    def _show(self, view: AppView):
        if view in (AppView.TAB_DRAWER, AppView.MENU):
            self._return_view = self.view
        self.view = view
        self._scrolled = False

    def _valid_return_view(self) -> AppView:
        if self._return_view is AppView.BROWSER and self.selected_tab is None:
            return AppView.HOME
        if self._return_view in (AppView.HOME, AppView.BROWSER):
            return self._return_view
        return AppView.HOME

    def _start_editing(self):
        self._return_view = self.view
        tab = self.selected_tab
        self.edit_text = tab.url if self.view is AppView.BROWSER and tab else ""
        self.view = AppView.TOOLBAR_EDIT

    def _select(self, tab: SimulatedTab):
        self._clock += 1
        tab.last_accessed = self._clock
        self._selected_id = tab.id

    def _dismiss_onboarding(self):
        self.onboarding_visible = False

    def _toggle_private_mode(self):
        self.private_mode = not self.private_mode
        recent = sorted(self.mode_tabs(), key=lambda t: t.last_accessed, reverse=True)
        self._selected_id = recent[0].id if recent else None

    def _toggle_pref(self, name: str):
        setattr(self.prefs, name, not getattr(self.prefs, name))

    def _toggle_topic(self, element: UiElement):
        if element.text in self.selected_topics:
            self.selected_topics.discard(element.text)
        else:
            self.selected_topics.add(element.text)

    def _open_pocket_story(self, element: UiElement):
        for story in content.POCKET_STORIES:
            if story.title == element.text:
                self.open_url(story.url, new_tab=True)
                return

    def _open_recent_tab(self, element: UiElement):
        for tab in self.tabs:
            if tab.url == element.description and not tab.private:
                self._select(tab)
                self.view = AppView.BROWSER
                return

    def _tab_for(self, element: UiElement, by_title: bool) -> Optional[SimulatedTab]:
        for tab in self.mode_tabs():
            if by_title and tab.title == element.description:
                return tab
            if not by_title and tab.url == element.description and tab.title == element.text:
                return tab
        return None

    def _select_tab_item(self, element: UiElement):
        tab = self._tab_for(element, by_title=False)
        if tab:
            self._select(tab)
            self.view = AppView.BROWSER

    def _close_tab_item(self, element: UiElement):
        tab = self._tab_for(element, by_title=True)
        if tab is None:
            return
        self.tabs.remove(tab)
        if self._selected_id == tab.id:
            recent = sorted(self.mode_tabs(), key=lambda t: t.last_accessed, reverse=True)
            self._selected_id = recent[0].id if recent else None
        if not self.mode_tabs():
            # The tray dismisses itself once the last tab is gone
            self.view = AppView.HOME
        logger.debug(f"Closed tab {tab.id} ({tab.title})")

    def _changed(self):
        self._settled_at = time.monotonic() + self.ui_latency
