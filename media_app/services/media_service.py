from typing import Any, List

from loguru import logger

from media_app.errors import MediaValidationError, NotFoundError
from media_app.models.media import MediaAsset, MediaType
from media_app.schemas.media import MediaCreate
from media_app.storage.assets import AssetRepository


def _text(value: Any) -> str:
    """Stripped string value; anything else counts as missing"""
    return value.strip() if isinstance(value, str) else ""


class MediaService:
    """Create, list and fetch media assets"""

    def __init__(self, assets: AssetRepository):
        self.assets = assets

    async def create_asset(self, media_data: MediaCreate) -> MediaAsset:
        """
        Validate and store a new asset.

        All validation happens before the insert, so a rejected payload
        leaves no trace in the database.
        """
        title = _text(media_data.title)
        file_url = _text(media_data.file_url)
        media_type = media_data.type
        if isinstance(media_type, str):
            media_type = media_type.strip()

        if not title or media_type in (None, "") or not file_url:
            raise MediaValidationError("Title, type, and file_url are required")

        if media_type not in [t.value for t in MediaType]:
            raise MediaValidationError('Type must be either "video" or "audio"')

        asset = await self.assets.create_asset(title, media_type, file_url)
        logger.info("Created media asset {} ({})", asset.id, asset.type)
        return asset

    async def list_assets(self) -> List[MediaAsset]:
        """All assets, newest first"""
        return await self.assets.list_assets()

    async def get_asset(self, asset_id: int) -> MediaAsset:
        asset = await self.assets.get_asset(asset_id)
        if not asset:
            raise NotFoundError("Media not found")
        return asset
