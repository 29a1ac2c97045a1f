"""
Asset repository: the durable home of media asset records.
"""

from typing import List, Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from media_app.errors import StorageError
from media_app.models.media import MediaAsset


class AssetRepository:
    """Reads and inserts MediaAsset rows; SQLAlchemy failures become StorageError"""

    def __init__(self, db: Session):
        self.db = db

    async def get_asset(self, asset_id: int) -> Optional[MediaAsset]:
        try:
            return self.db.query(MediaAsset).filter(MediaAsset.id == asset_id).first()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to load media {}: {}", asset_id, e)
            raise StorageError() from e

    async def list_assets(self) -> List[MediaAsset]:
        try:
            return self.db.query(MediaAsset).order_by(
                MediaAsset.created_at.desc(),
                MediaAsset.id.desc()
            ).all()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to list media assets: {}", e)
            raise StorageError() from e

    async def create_asset(self, title: str, media_type: str, file_url: str) -> MediaAsset:
        asset = MediaAsset(title=title, type=media_type, file_url=file_url)
        try:
            self.db.add(asset)
            self.db.commit()
            self.db.refresh(asset)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Error creating media asset: {}", e)
            raise StorageError("Failed to create media asset") from e
        return asset
