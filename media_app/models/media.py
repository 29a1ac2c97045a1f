import enum

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from media_app.database.connection import Base


class MediaType(str, enum.Enum):
    """Kinds of media an asset can hold"""
    VIDEO = "video"
    AUDIO = "audio"


class MediaAsset(Base):
    """
    A playable media asset.

    file_url is the real storage location; clients never see it directly,
    they are redirected to it through a short-lived streaming link.
    """
    __tablename__ = "media_assets"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    title = Column(String, nullable=False)
    type = Column(String(10), nullable=False, index=True)
    file_url = Column(String, nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class MediaViewLog(Base):
    """
    One view event (append-only).

    Analytics are computed by aggregating over this table; rows are never
    updated or deleted. Timestamps are stored as naive UTC.
    """
    __tablename__ = "media_view_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    media_id = Column(Integer, ForeignKey("media_assets.id"), nullable=False, index=True)
    viewed_by_ip = Column(String, nullable=False)
    timestamp = Column(DateTime, nullable=False, index=True)

    __table_args__ = (
        Index("ix_media_view_log_media_id_ip", "media_id", "viewed_by_ip"),
    )
