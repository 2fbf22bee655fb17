"""
Home screen scenarios: first-run items, private browsing, jump back in,
Pocket and the customize-homepage entry points.
"""
from ..app.content import POCKET_RECOMMENDED_STORIES_UTM_PARAM
from ..robots import home_screen, navigation_toolbar
from . import scenario

KNOWN_HOME_DEFECT = "Deferred: fails on the application, see https://bugzilla.mozilla.org/show_bug.cgi?id=1844580"

ONBOARDING = {"is_home_onboarding_dialog_enabled": True}
POCKET_ONLY = {
    **ONBOARDING,
    "is_recent_tabs_feature_enabled": False,
    "is_recently_visited_feature_enabled": False,
}


@scenario(settings=ONBOARDING, skip=KNOWN_HOME_DEFECT)
def home_screen_items(session):
    """Every first-run home screen element is present."""
    home_screen(session).dismiss_onboarding()

    (home_screen(session)
        .verify_home_wordmark()
        .verify_home_private_browsing_button()
        .verify_existing_top_sites_tabs("Wikipedia")
        .verify_existing_top_sites_tabs("Top Articles")
        .verify_existing_top_sites_tabs("Google")
        .verify_collections_header()
        .verify_no_collections_text()
        .scroll_to_pocket_provoking_stories()
        .verify_thought_provoking_stories(True)
        .verify_stories_by_topic_items()
        .verify_customize_homepage_button(True)
        .verify_navigation_toolbar()
        .verify_home_menu_button()
        .verify_tab_button()
        .verify_tab_counter("0"))


@scenario(settings=ONBOARDING)
def private_browsing_home_screen_items(session):
    """Private home shows its description and links to the common myths article."""
    home_screen(session).dismiss_onboarding()
    private_home = home_screen(session).toggle_private_browsing_mode()

    private_home.verify_private_browsing_home_screen().open_common_myths_link().to(
        lambda browser: browser.verify_url("common-myths-about-private-browsing")
    )


@scenario(settings={
    "is_recently_visited_feature_enabled": False,
    "is_pocket_enabled": False,
})
def jump_back_in_section(session):
    """Jump back in follows open tabs and disappears with the last one."""
    first_page = session.get_page(4)
    second_page = session.get_page(1)

    navigation_toolbar(session).enter_url_and_enter_to_browser(first_page.url).to(
        lambda browser: browser
            .verify_page_title(first_page.title)
            .verify_page_content(first_page.content)
            .verify_url(first_page.url)
    ).go_to_homescreen().to(
        lambda home: home
            .verify_jump_back_in_section_is_displayed()
            .verify_jump_back_in_item_title(first_page.title)
            .verify_jump_back_in_item_with_url(first_page.url)
            .verify_jump_back_in_show_all_button()
    ).click_jump_back_in_show_all_button().to(
        lambda drawer: drawer.verify_existing_open_tabs(first_page.title)
    ).close_tab_drawer().to(lambda home: home)

    navigation_toolbar(session).enter_url_and_enter_to_browser(second_page.url).to(
        lambda browser: browser
            .verify_page_content(second_page.content)
            .verify_url(second_page.url)
    ).go_to_homescreen().to(
        lambda home: home
            .verify_jump_back_in_section_is_displayed()
            .verify_jump_back_in_item_title(second_page.title)
            .verify_jump_back_in_item_with_url(second_page.url)
    ).open_tab_drawer().to(
        lambda drawer: drawer.close_tab_with_title(second_page.title)
    ).close_tab_drawer().to(lambda home: home)

    (home_screen(session)
        .verify_jump_back_in_section_is_displayed()
        .verify_jump_back_in_item_title(first_page.title)
        .verify_jump_back_in_item_with_url(first_page.url)
        .open_tab_drawer()
        .to(lambda drawer: drawer.close_last_tab())
        .to(lambda home: home))

    home_screen(session).verify_jump_back_in_section_is_not_displayed()


@scenario(settings={"is_jump_back_in_cfr_enabled": True})
def jump_back_in_contextual_hint(session):
    """The jump back in hint shows the first time the section appears."""
    page = session.get_page(1)

    navigation_toolbar(session).enter_url_and_enter_to_browser(page.url).to(
        lambda browser: browser
    ).go_to_homescreen().to(
        lambda home: home.verify_jump_back_in_message()
    )


@scenario(settings=POCKET_ONLY, skip=KNOWN_HOME_DEFECT)
def pocket_section(session):
    """Pocket stories, topics and footer show, and hide once Pocket is switched off."""
    home_screen(session).dismiss_onboarding()

    (home_screen(session)
        .verify_thought_provoking_stories(True)
        .scroll_to_pocket_provoking_stories()
        .verify_pocket_recommended_stories_items()
        .verify_discover_more_stories_button()
        .verify_stories_by_topic(True)
        .verify_powered_by_pocket()
        .open_three_dot_menu()
        .to(lambda menu: menu)
        .open_customize_home()
        .to(lambda customize: customize.click_pocket_button())
        .go_back_to_home_screen()
        .to(lambda home: home
            .verify_thought_provoking_stories(False)
            .verify_stories_by_topic(False)))


@scenario(settings=POCKET_ONLY, skip=KNOWN_HOME_DEFECT)
def open_pocket_story_item(session):
    """A recommended story opens with the Pocket campaign parameter."""
    home_screen(session).dismiss_onboarding()

    home = (home_screen(session)
        .verify_thought_provoking_stories(True)
        .scroll_to_pocket_provoking_stories())
    publisher = home.get_provoking_story_publisher(1)

    home.click_pocket_story_item(publisher, 1).to(
        lambda browser: browser.verify_url(POCKET_RECOMMENDED_STORIES_UTM_PARAM)
    )


@scenario(settings=POCKET_ONLY)
def pocket_discover_more_button(session):
    """'Discover more' opens Pocket's explore page."""
    home_screen(session).dismiss_onboarding()

    (home_screen(session)
        .scroll_to_pocket_provoking_stories()
        .verify_discover_more_stories_button()
        .click_pocket_discover_more_button()
        .to(lambda browser: browser.verify_url("getpocket.com/explore")))


@scenario(settings=POCKET_ONLY, skip=KNOWN_HOME_DEFECT)
def select_pocket_stories_by_topic(session):
    """Tapping a topic selects it."""
    home_screen(session).dismiss_onboarding()

    (home_screen(session)
        .verify_stories_by_topic_item_state(False, 1)
        .click_stories_by_topic_item(1)
        .verify_stories_by_topic_item_state(True, 1))


@scenario(settings=POCKET_ONLY)
def pocket_learn_more_button(session):
    """'Learn more' in the Pocket footer opens the Pocket page on mozilla.org."""
    home_screen(session).dismiss_onboarding()

    (home_screen(session)
        .verify_powered_by_pocket()
        .click_pocket_learn_more_link()
        .to(lambda browser: browser.verify_url("mozilla.org/en-US/firefox/pocket")))


@scenario()
def customize_homepage_button(session):
    """The customize button hides with every optional section and returns with any one of them."""
    page = session.get_page(1)

    (navigation_toolbar(session)
        .enter_url_and_enter_to_browser(page.url)
        .to(lambda browser: browser)
        .go_to_homescreen()
        .to(lambda home: home)
        .open_customize_homepage()
        .to(lambda customize: customize
            .click_jump_back_in_button()
            .click_recent_bookmarks_button()
            .click_recent_searches_button()
            .click_pocket_button())
        .go_back_to_home_screen()
        .to(lambda home: home.verify_customize_homepage_button(False))
        .open_three_dot_menu()
        .to(lambda menu: menu)
        .open_customize_home()
        .to(lambda customize: customize.click_jump_back_in_button())
        .go_back_to_home_screen()
        .to(lambda home: home.verify_customize_homepage_button(True)))


@scenario(settings={"is_pocket_enabled": False})
def pocket_section_reenabled(session):
    """Pocket switched off by override is absent, and returns once re-enabled from settings."""
    (home_screen(session)
        .verify_thought_provoking_stories(False)
        .verify_stories_by_topic(False)
        .open_three_dot_menu()
        .to(lambda menu: menu)
        .open_customize_home()
        .to(lambda customize: customize
            .verify_section_toggle("pocket", False)
            .click_pocket_button()
            .verify_section_toggle("pocket", True))
        .go_back_to_home_screen()
        .to(lambda home: home
            .verify_thought_provoking_stories(True)
            .verify_stories_by_topic(True)))
