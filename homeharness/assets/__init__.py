"""
Local asset origin serving deterministic synthetic pages.
"""
from .models import PageFixture
from .origin import AssetOrigin

__all__ = ["AssetOrigin", "PageFixture"]
