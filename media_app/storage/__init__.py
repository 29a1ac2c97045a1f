"""
Durable storage for media assets and view events.

Implements the Strategy Pattern for view event storage so analytics can
move to a dedicated backend without touching the services.
"""

from .strategies import ViewStorageStrategy, SQLAlchemyViewStorage
from .assets import AssetRepository

__all__ = [
    "ViewStorageStrategy",
    "SQLAlchemyViewStorage",
    "AssetRepository",
]
