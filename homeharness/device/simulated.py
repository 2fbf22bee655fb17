"""
Device backed by the in-process simulated application.
"""
from typing import List

from ..app.simulator import SimulatedBrowserApp
from .base import Device, Locator, UiElement


class SimulatedDevice(Device):
    def __init__(self, app: SimulatedBrowserApp):
        self.app = app

    def find_all(self, locator: Locator) -> List[UiElement]:
        return [e for e in self.app.elements() if locator.matches(e)]

    def tap(self, locator: Locator) -> bool:
        element = self.find(locator)
        if element is None:
            return False
        return self.app.tap(element)

    def type_text(self, locator: Locator, text: str) -> bool:
        element = self.find(locator)
        if element is None:
            return False
        return self.app.type_text(element, text)

    def press_enter(self):
        self.app.press_enter()

    def press_back(self):
        self.app.press_back()

    def scroll_to(self, locator: Locator) -> bool:
        for element in self.app.elements(include_offscreen=True):
            if locator.matches(element):
                return self.app.scroll_to(element)
        return False

    def close(self):
        self.app.close()
