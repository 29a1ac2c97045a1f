"""
Database models for the media service.

Streaming links are deliberately absent: they live only in the
in-memory link store and never touch the database.
"""

from .media import MediaAsset, MediaType, MediaViewLog

__all__ = ["MediaAsset", "MediaType", "MediaViewLog"]
