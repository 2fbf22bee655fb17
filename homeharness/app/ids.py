"""
Resource ids of the elements robots locate.

The simulated app renders these ids and the Playwright backend maps them to
data-testid attributes, so both backends share one UI contract.
"""

# Onboarding
ONBOARDING_DIALOG = "onboarding_dialog"
ONBOARDING_CLOSE = "onboarding_close_button"

# Home
HOMEPAGE_WORDMARK = "homepage_wordmark"
PRIVATE_BROWSING_BUTTON = "private_browsing_button"
TOP_SITE_ITEM = "top_site_item"
COLLECTIONS_HEADER = "collections_header"
NO_COLLECTIONS_TEXT = "no_collections_description"
JUMP_BACK_IN_HEADER = "jump_back_in_header"
JUMP_BACK_IN_SHOW_ALL = "jump_back_in_show_all_button"
RECENT_TAB_ITEM = "recent_tab_item"
JUMP_BACK_IN_CFR = "jump_back_in_cfr_message"
RECENTLY_VISITED_HEADER = "recently_visited_header"
RECENTLY_VISITED_ITEM = "recently_visited_item"
POCKET_STORIES_HEADER = "pocket_stories_header"
POCKET_STORY_ITEM = "pocket_story_item"
POCKET_DISCOVER_MORE = "pocket_discover_more_button"
POCKET_TOPICS_HEADER = "pocket_topics_header"
POCKET_TOPIC_ITEM = "pocket_topic_item"
POCKET_POWERED_BY = "pocket_powered_by"
POCKET_LEARN_MORE = "pocket_learn_more_link"
CUSTOMIZE_HOMEPAGE_BUTTON = "customize_homepage_button"

# Private home
PRIVATE_SESSION_DESCRIPTION = "private_session_description"
COMMON_MYTHS_LINK = "private_session_common_myths"

# Toolbar
TOOLBAR = "toolbar"
TOOLBAR_URL = "toolbar_url_view"
TOOLBAR_EDIT_URL = "toolbar_edit_url_view"
MENU_BUTTON = "menu_button"
TAB_COUNTER = "tab_counter"
HOME_BUTTON = "toolbar_home_button"

# Browser
ENGINE_VIEW = "engine_view"
PAGE_CONTENT = "page_content"

# Tab drawer
TAB_TRAY = "tab_tray"
TAB_ITEM = "tab_item"
TAB_CLOSE = "tab_close_button"
TAB_TRAY_EMPTY = "tab_tray_empty_view"

# Three-dot menu
MENU_SHEET = "menu_sheet"
MENU_CUSTOMIZE_HOME = "menu_customize_home"

# Customize home settings
CUSTOMIZE_HOME_PANEL = "customize_home_settings"
TOGGLE_JUMP_BACK_IN = "customize_jump_back_in"
TOGGLE_RECENT_BOOKMARKS = "customize_recent_bookmarks"
TOGGLE_RECENTLY_VISITED = "customize_recently_visited"
TOGGLE_POCKET = "customize_pocket"
