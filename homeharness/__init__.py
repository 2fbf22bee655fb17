"""
homeharness - home-screen UI regression harness.

Provides the infrastructure end-to-end home-screen scenarios are built on:
- Asset origin serving deterministic synthetic pages
- Retry executor re-running whole scenarios on transient UI failures
- Screen-state robots encoding the application's navigable screen graph
"""
__version__ = "0.1.0"
