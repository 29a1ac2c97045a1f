"""
FastAPI dependencies for dependency injection.

The link store is a process-wide singleton; repositories and services are
built per request around the request's database session.

Pattern: Dependency Injection
- Loose coupling between components
- Easy to test (override get_link_store / get_db)
"""

from datetime import timedelta
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from media_app.config import settings
from media_app.database.connection import get_db
from media_app.links.link_id_factory import LinkIdFactory
from media_app.links.store import LinkStore
from media_app.services.link_service import StreamLinkService
from media_app.services.media_service import MediaService
from media_app.services.view_service import ViewService
from media_app.storage.assets import AssetRepository
from media_app.storage.strategies import SQLAlchemyViewStorage, ViewStorageStrategy


@lru_cache()
def get_link_store() -> LinkStore:
    """
    Get the streaming link store (singleton).

    @lru_cache ensures every request shares one store.
    """
    return LinkStore(
        ttl=timedelta(seconds=settings.stream_link_ttl_seconds),
        id_strategy=LinkIdFactory.create_strategy(),
    )


def get_asset_repository(db: Session = Depends(get_db)) -> AssetRepository:
    return AssetRepository(db)


def get_view_storage(db: Session = Depends(get_db)) -> ViewStorageStrategy:
    return SQLAlchemyViewStorage(db)


def get_media_service(
    assets: AssetRepository = Depends(get_asset_repository)
) -> MediaService:
    return MediaService(assets)


def get_view_service(
    assets: AssetRepository = Depends(get_asset_repository),
    storage: ViewStorageStrategy = Depends(get_view_storage)
) -> ViewService:
    return ViewService(assets=assets, storage=storage)


def get_stream_link_service(
    assets: AssetRepository = Depends(get_asset_repository),
    views: ViewService = Depends(get_view_service),
    store: LinkStore = Depends(get_link_store)
) -> StreamLinkService:
    """
    Get StreamLinkService with all dependencies injected.

    FastAPI caches get_db per request, so the repository, the view
    storage and the service all share one session.
    """
    return StreamLinkService(assets=assets, views=views, store=store)
