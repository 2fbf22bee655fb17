"""
Static content the simulated home screen shows in place of live feeds.
"""
from dataclasses import dataclass

POCKET_RECOMMENDED_STORIES_UTM_PARAM = "utm_source=pocket-newtab-android"
POCKET_DISCOVER_MORE_URL = "https://getpocket.com/explore?src=fx_android"
POCKET_LEARN_MORE_URL = "https://www.mozilla.org/en-US/firefox/pocket/"
COMMON_MYTHS_URL = "https://support.mozilla.org/en-US/kb/common-myths-about-private-browsing"

DEFAULT_TOP_SITES = ["Wikipedia", "Top Articles", "Google"]

JUMP_BACK_IN_CFR_TEXT = (
    "Your personalized Firefox homepage now makes it easier to pick up where you left off. "
    "Find your recent tabs, bookmarks, and search results."
)

PRIVATE_SESSION_TEXT = (
    "Firefox clears your search and browsing history when you quit the app or close all "
    "private tabs. While this doesn't make you anonymous to websites or your internet "
    "service provider, it makes it easier to keep what you do online private from anyone "
    "else who uses this device."
)


@dataclass(frozen=True)
class PocketStory:
    title: str
    publisher: str
    slug: str

    @property
    def url(self) -> str:
        return f"https://getpocket.com/explore/item/{self.slug}?{POCKET_RECOMMENDED_STORIES_UTM_PARAM}"


POCKET_STORIES = [
    PocketStory("The Science of Sleeping Well", "Wired", "the-science-of-sleeping-well"),
    PocketStory("How to Cook Rice Perfectly Every Time", "Bon Appetit", "how-to-cook-rice-perfectly"),
    PocketStory("Why We Procrastinate", "The Atlantic", "why-we-procrastinate"),
    PocketStory("A Walk Through the Oldest Forests", "National Geographic", "oldest-forests"),
    PocketStory("What Birds Know About Maps", "Smithsonian", "what-birds-know-about-maps"),
]

POCKET_TOPICS = [
    "Food",
    "Entertainment",
    "Self Improvement",
    "Travel",
    "Health",
    "Science",
]
