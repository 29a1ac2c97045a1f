"""
View event storage strategies using Strategy Pattern.

The view log is append-only; analytics are pure aggregations over it.
Implementations convert backend failures into StorageError and never retry.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import date, datetime, time
from typing import Dict, List, Tuple

from loguru import logger
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from media_app.errors import StorageError
from media_app.models.media import MediaViewLog


class ViewStorageStrategy(ABC):
    """
    Abstract base class for view event storage.

    This interface defines how view events are appended and aggregated.
    Every read re-scans the stored events; there is no caching layer.
    """

    @abstractmethod
    async def append_view_event(
        self,
        asset_id: int,
        source_address: str,
        timestamp: datetime
    ) -> int:
        """
        Append one view event.

        Args:
            asset_id: Viewed asset
            source_address: Network origin of the viewer
            timestamp: When the view happened (naive UTC)

        Returns:
            The new event ID
        """
        pass

    @abstractmethod
    async def count_views(self, asset_id: int) -> int:
        """Total view events for an asset (full history)"""
        pass

    @abstractmethod
    async def count_distinct_sources(self, asset_id: int) -> int:
        """Distinct source addresses for an asset (full history)"""
        pass

    @abstractmethod
    async def count_views_by_day(self, asset_id: int, since: date) -> Dict[date, int]:
        """
        Views per calendar day, for days on or after ``since``.

        Days without views are absent. Newest day first.
        """
        pass

    @abstractmethod
    async def top_sources_by_count(self, asset_id: int, limit: int = 10) -> List[Tuple[str, int]]:
        """
        Source addresses ranked by view count, descending.

        Ties keep first-seen order. Full history.
        """
        pass


class SQLAlchemyViewStorage(ViewStorageStrategy):
    """
    View storage on the service's relational database.

    Uses the request-scoped session, so a view appended earlier in the
    same request is visible to later analytics reads.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _storage_errors(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("View storage failed to {}: {}", action, e)
            raise StorageError(f"Failed to {action}") from e

    async def append_view_event(
        self,
        asset_id: int,
        source_address: str,
        timestamp: datetime
    ) -> int:
        with self._storage_errors("log view"):
            event = MediaViewLog(
                media_id=asset_id,
                viewed_by_ip=source_address,
                timestamp=timestamp,
            )
            self.db.add(event)
            self.db.commit()
            self.db.refresh(event)
            return event.id

    async def count_views(self, asset_id: int) -> int:
        with self._storage_errors("count views"):
            return self.db.query(func.count(MediaViewLog.id)).filter(
                MediaViewLog.media_id == asset_id
            ).scalar() or 0

    async def count_distinct_sources(self, asset_id: int) -> int:
        with self._storage_errors("count unique sources"):
            return self.db.query(
                func.count(func.distinct(MediaViewLog.viewed_by_ip))
            ).filter(
                MediaViewLog.media_id == asset_id
            ).scalar() or 0

    async def count_views_by_day(self, asset_id: int, since: date) -> Dict[date, int]:
        view_date = func.date(MediaViewLog.timestamp)

        with self._storage_errors("get daily analytics"):
            rows = self.db.query(
                view_date.label("view_date"),
                func.count(MediaViewLog.id).label("daily_views")
            ).filter(
                MediaViewLog.media_id == asset_id,
                MediaViewLog.timestamp >= datetime.combine(since, time.min)
            ).group_by(
                view_date
            ).order_by(
                view_date.desc()
            ).all()

        # SQLite's DATE() yields ISO strings, other backends yield dates
        return {
            day if isinstance(day, date) else date.fromisoformat(day): count
            for day, count in rows
        }

    async def top_sources_by_count(self, asset_id: int, limit: int = 10) -> List[Tuple[str, int]]:
        view_count = func.count(MediaViewLog.id)

        with self._storage_errors("get top sources"):
            rows = self.db.query(
                MediaViewLog.viewed_by_ip,
                view_count.label("view_count")
            ).filter(
                MediaViewLog.media_id == asset_id
            ).group_by(
                MediaViewLog.viewed_by_ip
            ).order_by(
                view_count.desc(),
                func.min(MediaViewLog.id)
            ).limit(limit).all()

        return [(source, count) for source, count in rows]
