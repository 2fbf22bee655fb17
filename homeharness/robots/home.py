"""
Home screen robot (normal browsing mode).
"""
from ..app import ids
from ..device.base import Locator, by_id
from ..errors import NavigationFailure, VerificationFailure
from .base import Screen, ScreenKind, action, screen


@screen(ScreenKind.HOME)
class HomeScreen(Screen):
    ENTRY = by_id(ids.HOMEPAGE_WORDMARK)

    @classmethod
    def is_showing(cls, session) -> bool:
        # The first-run dialog covers the home screen until dismissed
        device = session.device
        return device.exists(cls.ENTRY) or device.exists(by_id(ids.ONBOARDING_DIALOG))

    def dismiss_onboarding(self) -> "HomeScreen":
        self._session.ensure_no_pending_transition()
        if self.device.exists(by_id(ids.ONBOARDING_DIALOG)):
            self._tap(by_id(ids.ONBOARDING_CLOSE), "dismiss_onboarding")
        return self._verify_displayed(self.ENTRY, "home screen after dismissing onboarding")

    # ==================== Verifications ====================

    def verify_home_wordmark(self) -> "HomeScreen":
        return self._verify_displayed(self.ENTRY, "homepage wordmark to be displayed")

    def verify_home_private_browsing_button(self) -> "HomeScreen":
        return self._verify_displayed(by_id(ids.PRIVATE_BROWSING_BUTTON), "private browsing button to be displayed")

    def verify_existing_top_sites_tabs(self, title: str) -> "HomeScreen":
        return self._verify_displayed(by_id(ids.TOP_SITE_ITEM, text=title), f"top site {title!r} to be displayed")

    def verify_collections_header(self) -> "HomeScreen":
        return self._verify_displayed(by_id(ids.COLLECTIONS_HEADER, text="Collections"), "collections header")

    def verify_no_collections_text(self) -> "HomeScreen":
        return self._verify_displayed(by_id(ids.NO_COLLECTIONS_TEXT), "empty collections description")

    def verify_jump_back_in_section_is_displayed(self) -> "HomeScreen":
        return self._verify_displayed(by_id(ids.JUMP_BACK_IN_HEADER), "'Jump back in' section to be displayed")

    def verify_jump_back_in_section_is_not_displayed(self) -> "HomeScreen":
        return self._verify_not_displayed(by_id(ids.JUMP_BACK_IN_HEADER), "'Jump back in' section not to be displayed")

    def verify_jump_back_in_item_title(self, title: str) -> "HomeScreen":
        return self._verify_displayed(
            by_id(ids.RECENT_TAB_ITEM, text=title), f"'Jump back in' item titled {title!r}"
        )

    def verify_jump_back_in_item_with_url(self, url: str) -> "HomeScreen":
        return self._verify_displayed(
            by_id(ids.RECENT_TAB_ITEM, description=url), f"'Jump back in' item for {url}"
        )

    def verify_jump_back_in_show_all_button(self) -> "HomeScreen":
        return self._verify_displayed(by_id(ids.JUMP_BACK_IN_SHOW_ALL), "'Jump back in' show all button")

    def verify_jump_back_in_message(self) -> "HomeScreen":
        return self._verify_displayed(
            Locator(resource_id=ids.JUMP_BACK_IN_CFR, text_contains="pick up where you left off"),
            "'Jump back in' contextual hint",
        )

    def verify_thought_provoking_stories(self, shown: bool = True) -> "HomeScreen":
        return self._verify_shown(by_id(ids.POCKET_STORIES_HEADER), shown, "'Thought-provoking stories'", scroll=True)

    def verify_pocket_recommended_stories_items(self) -> "HomeScreen":
        locator = by_id(ids.POCKET_STORY_ITEM)
        return self._verify(
            lambda: self._is_present(locator, scroll=True) and len(self.device.find_all(locator)) > 1,
            "several Pocket recommended stories",
        )

    def verify_discover_more_stories_button(self) -> "HomeScreen":
        return self._verify_displayed(by_id(ids.POCKET_DISCOVER_MORE), "'Discover more' button", scroll=True)

    def verify_stories_by_topic(self, shown: bool = True) -> "HomeScreen":
        return self._verify_shown(by_id(ids.POCKET_TOPICS_HEADER), shown, "'Stories by topic'", scroll=True)

    def verify_stories_by_topic_items(self) -> "HomeScreen":
        locator = by_id(ids.POCKET_TOPIC_ITEM)
        return self._verify(
            lambda: self._is_present(locator, scroll=True) and len(self.device.find_all(locator)) > 1,
            "several 'Stories by topic' items",
        )

    def verify_stories_by_topic_item_state(self, is_selected: bool, position: int) -> "HomeScreen":
        state = "selected" if is_selected else "not selected"

        def check():
            items = self._scrolled_items(ids.POCKET_TOPIC_ITEM)
            return len(items) >= position and items[position - 1].selected == is_selected

        return self._verify(check, f"'Stories by topic' item {position} to be {state}")

    def verify_powered_by_pocket(self) -> "HomeScreen":
        return self._verify_displayed(by_id(ids.POCKET_POWERED_BY), "'Powered by Pocket' footer", scroll=True)

    def verify_customize_homepage_button(self, shown: bool) -> "HomeScreen":
        return self._verify_shown(by_id(ids.CUSTOMIZE_HOMEPAGE_BUTTON), shown, "'Customize homepage' button", scroll=True)

    def verify_navigation_toolbar(self) -> "HomeScreen":
        return self._verify_displayed(by_id(ids.TOOLBAR_URL), "navigation toolbar")

    def verify_home_menu_button(self) -> "HomeScreen":
        return self._verify_displayed(by_id(ids.MENU_BUTTON), "three-dot menu button")

    def verify_tab_button(self) -> "HomeScreen":
        return self._verify_displayed(by_id(ids.TAB_COUNTER), "tabs button")

    def verify_tab_counter(self, count: str) -> "HomeScreen":
        return self._verify_displayed(by_id(ids.TAB_COUNTER, text=count), f"tab counter to read {count}")

    # ==================== Interactions ====================

    def scroll_to_pocket_provoking_stories(self) -> "HomeScreen":
        self._find(by_id(ids.POCKET_STORIES_HEADER), "scroll_to_pocket_provoking_stories", scroll=True)
        return self

    def get_provoking_story_publisher(self, position: int) -> str:
        items = self._scrolled_items(ids.POCKET_STORY_ITEM)
        if len(items) < position:
            self._find(by_id(ids.POCKET_STORY_ITEM), "get_provoking_story_publisher", scroll=True)
            items = self.device.find_all(by_id(ids.POCKET_STORY_ITEM))
        if len(items) < position:
            raise NavigationFailure(
                "get_provoking_story_publisher",
                f"only {len(items)} Pocket stories are displayed, asked for #{position}",
                screen=type(self).__name__,
            )
        return items[position - 1].description

    def click_stories_by_topic_item(self, position: int) -> "HomeScreen":
        item = self._nth(ids.POCKET_TOPIC_ITEM, position, "click_stories_by_topic_item")
        self._tap(by_id(ids.POCKET_TOPIC_ITEM, text=item.text), "click_stories_by_topic_item", scroll=True)
        return self

    # ==================== Navigation ====================

    @action(ScreenKind.PRIVATE_HOME, resolve=True)
    def toggle_private_browsing_mode(self):
        self._tap(by_id(ids.PRIVATE_BROWSING_BUTTON), "toggle_private_browsing_mode")

    @action(ScreenKind.NAVIGATION_TOOLBAR, resolve=True)
    def open_navigation_toolbar(self):
        self._find(by_id(ids.TOOLBAR_URL), "open_navigation_toolbar")

    @action(ScreenKind.THREE_DOT_MENU)
    def open_three_dot_menu(self):
        self._tap(by_id(ids.MENU_BUTTON), "open_three_dot_menu")

    @action(ScreenKind.CUSTOMIZE_HOME)
    def open_customize_homepage(self):
        self._tap(by_id(ids.CUSTOMIZE_HOMEPAGE_BUTTON), "open_customize_homepage", scroll=True)

    @action(ScreenKind.TAB_DRAWER)
    def open_tab_drawer(self):
        self._tap(by_id(ids.TAB_COUNTER), "open_tab_drawer")

    @action(ScreenKind.TAB_DRAWER)
    def click_jump_back_in_show_all_button(self):
        self._tap(by_id(ids.JUMP_BACK_IN_SHOW_ALL), "click_jump_back_in_show_all_button")

    @action(ScreenKind.BROWSER)
    def click_pocket_story_item(self, publisher: str, position: int):
        item = self._nth(ids.POCKET_STORY_ITEM, position, "click_pocket_story_item")
        if item.description != publisher:
            raise VerificationFailure(
                f"Pocket story #{position} to be from {publisher!r}, found {item.description!r}",
                screen=type(self).__name__,
            )
        self._tap(by_id(ids.POCKET_STORY_ITEM, text=item.text), "click_pocket_story_item", scroll=True)

    @action(ScreenKind.BROWSER)
    def click_pocket_discover_more_button(self):
        self._tap(by_id(ids.POCKET_DISCOVER_MORE), "click_pocket_discover_more_button", scroll=True)

    @action(ScreenKind.BROWSER)
    def click_pocket_learn_more_link(self):
        self._tap(by_id(ids.POCKET_LEARN_MORE), "click_pocket_learn_more_link", scroll=True)

    # ==================== Internal Helpers ====================

    def _scrolled_items(self, resource_id: str):
        self._session.ensure_no_pending_transition()
        locator = by_id(resource_id)
        self.device.scroll_to(locator)
        return self.device.find_all(locator)

    def _nth(self, resource_id: str, position: int, action_name: str):
        self._find(by_id(resource_id), action_name, scroll=True)
        items = self.device.find_all(by_id(resource_id))
        if len(items) < position:
            raise NavigationFailure(
                action_name,
                f"only {len(items)} {resource_id} elements are displayed, asked for #{position}",
                screen=type(self).__name__,
            )
        return items[position - 1]
