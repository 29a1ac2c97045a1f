from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from loguru import logger

from media_app.config import settings
from media_app.errors import NotFoundError
from media_app.links.store import utc_now
from media_app.models.media import MediaAsset
from media_app.schemas.media import (
    AnalyticsResponse,
    AnalyticsSnapshot,
    MediaSummary,
    SourceCount,
)
from media_app.storage.assets import AssetRepository
from media_app.storage.strategies import ViewStorageStrategy


@dataclass(frozen=True)
class RecordedView:
    view_id: int
    asset_id: int
    source_address: str
    timestamp: datetime


class ViewService:
    """
    View recorder and analytics aggregator.

    Recording only ever appends; analytics re-scan the stored events on
    every call, so a snapshot is a point-in-time estimate rather than a
    transactionally consistent view of concurrent writers.
    """

    def __init__(
        self,
        assets: AssetRepository,
        storage: ViewStorageStrategy,
        clock: Callable[[], datetime] = utc_now
    ):
        self.assets = assets
        self.storage = storage
        self.clock = clock

    def _now(self) -> datetime:
        # View timestamps are stored as naive UTC
        return self.clock().replace(tzinfo=None)

    async def record_view(
        self,
        asset_id: int,
        source_address: str,
        timestamp: Optional[datetime] = None
    ) -> RecordedView:
        """
        Record one view of an existing asset.

        Raises:
            NotFoundError: Asset does not exist
            StorageError: The view could not be stored
        """
        asset = await self.assets.get_asset(asset_id)
        if not asset:
            raise NotFoundError("Media not found")

        return await self.append_view(asset.id, source_address, timestamp)

    async def append_view(
        self,
        asset_id: int,
        source_address: str,
        timestamp: Optional[datetime] = None
    ) -> RecordedView:
        """Append a view for an asset the caller has already looked up"""
        timestamp = timestamp or self._now()
        view_id = await self.storage.append_view_event(asset_id, source_address, timestamp)
        logger.debug("Logged view {} of media {} from {}", view_id, asset_id, source_address)
        return RecordedView(
            view_id=view_id,
            asset_id=asset_id,
            source_address=source_address,
            timestamp=timestamp,
        )

    async def compute_analytics(self, asset_id: int) -> AnalyticsResponse:
        """
        Aggregate the view log of one asset.

        - total_views / unique_ips / top_viewing_ips cover the full history
        - views_per_day covers the trailing window, by calendar day, and
          leaves out days without views
        """
        asset: Optional[MediaAsset] = await self.assets.get_asset(asset_id)
        if not asset:
            raise NotFoundError("Media not found")

        now = self._now()
        since = (now - timedelta(days=settings.analytics_window_days)).date()

        total_views = await self.storage.count_views(asset.id)
        unique_ips = await self.storage.count_distinct_sources(asset.id)
        daily_views = await self.storage.count_views_by_day(asset.id, since)
        top_sources = await self.storage.top_sources_by_count(
            asset.id, limit=settings.analytics_top_sources_limit
        )

        return AnalyticsResponse(
            media=MediaSummary(id=asset.id, title=asset.title, type=asset.type),
            analytics=AnalyticsSnapshot(
                total_views=total_views,
                unique_ips=unique_ips,
                views_per_day={
                    day.isoformat(): count
                    for day, count in daily_views.items()
                    if count > 0
                },
                top_viewing_ips=[
                    SourceCount(viewed_by_ip=source, view_count=count)
                    for source, count in top_sources
                ],
                last_updated=self.clock(),
            ),
        )
