"""
In-process model of the browser application's home-screen surface.

Used as the default Device backend so scenarios run without an emulator or
live network. Pages are still fetched over HTTP from the asset origin.
"""
from .simulator import AppView, SimulatedBrowserApp

__all__ = ["AppView", "SimulatedBrowserApp"]
