from pydantic import BaseModel, Field, ConfigDict
from typing import Any, Dict, List, Optional
from datetime import datetime


class MediaCreate(BaseModel):
    """
    Incoming asset payload.

    Fields are untyped and optional at the schema level so that missing,
    blank or non-string values reach MediaService and are rejected there
    with a 400, the same way an invalid type is.
    """
    title: Optional[Any] = Field(None, description="Display title")
    type: Optional[Any] = Field(None, description='Either "video" or "audio"')
    file_url: Optional[Any] = Field(None, description="Real storage location of the media")


class MediaResponse(BaseModel):
    id: int
    title: str
    type: str
    file_url: str
    created_at: Optional[datetime] = None

    # Pydantic V2 style configuration
    model_config = ConfigDict(from_attributes=True)


class MediaSummary(BaseModel):
    """Public view of an asset: never exposes file_url"""
    id: int
    title: str
    type: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class MediaCreatedResponse(BaseModel):
    message: str = "Media asset created successfully"
    mediaId: int
    media: MediaResponse


class MediaListResponse(BaseModel):
    message: str = "Media assets retrieved successfully"
    count: int
    media: List[MediaResponse]


class MediaDetailResponse(BaseModel):
    message: str = "Media asset retrieved successfully"
    media: MediaResponse


class ViewLoggedResponse(BaseModel):
    message: str = "View logged successfully"
    viewId: int
    mediaId: int
    ip: str
    timestamp: datetime


class StreamUrlResponse(BaseModel):
    message: str = "Streaming URL generated successfully"
    streamUrl: str
    expiresAt: datetime
    media: MediaSummary


class SourceCount(BaseModel):
    viewed_by_ip: str
    view_count: int


class AnalyticsSnapshot(BaseModel):
    """Derived view analytics; recomputed on every request, never stored"""
    total_views: int
    unique_ips: int
    views_per_day: Dict[str, int]
    top_viewing_ips: List[SourceCount]
    last_updated: datetime


class AnalyticsResponse(BaseModel):
    media: MediaSummary
    analytics: AnalyticsSnapshot
