"""
Device backends the robots drive.

Backends live in their own modules (`simulated`, `playwright_device`) and are
imported where they are chosen, so importing the base types stays cheap.
"""
from .base import Device, Locator, UiElement, by_id

__all__ = ["Device", "Locator", "UiElement", "by_id"]
