from typing import Optional

from loguru import logger

from media_app.config import settings
from media_app.errors import NotFoundError, StorageError
from media_app.links.store import LinkStore
from media_app.schemas.media import MediaSummary, StreamUrlResponse
from media_app.services.view_service import ViewService
from media_app.storage.assets import AssetRepository


class StreamLinkService:
    """
    Issues and redeems short-lived streaming links.

    The link store is injected, never created here: one store is shared by
    the whole process, while tests hand each case its own.
    """

    def __init__(
        self,
        assets: AssetRepository,
        views: ViewService,
        store: LinkStore,
        single_use: Optional[bool] = None,
        record_view_on_redeem: Optional[bool] = None
    ):
        self.assets = assets
        self.views = views
        self.store = store
        self.single_use = settings.single_use_links if single_use is None else single_use
        self.record_view_on_redeem = (
            settings.record_view_on_redeem
            if record_view_on_redeem is None
            else record_view_on_redeem
        )

    @staticmethod
    def public_path(link_id: str) -> str:
        return f"{settings.stream_path_prefix}/{link_id}"

    async def issue_link(self, asset_id: int, source_address: str) -> StreamUrlResponse:
        """
        Mint a streaming link for an asset.

        Flow:
        1. Look up the asset (NotFoundError if missing, nothing recorded)
        2. Record the issuance as a view; a storage failure here is logged
           and does not block the link
        3. Insert the link (sweeping expired ones in the same pass)
        """
        asset = await self.assets.get_asset(asset_id)
        if not asset:
            raise NotFoundError("Media not found")

        try:
            await self.views.append_view(asset.id, source_address)
        except StorageError as e:
            logger.error("Error logging view for media {}: {}", asset.id, e)

        link = self.store.issue(asset.id, asset.file_url)

        return StreamUrlResponse(
            streamUrl=self.public_path(link.link_id),
            expiresAt=link.expires_at,
            media=MediaSummary(id=asset.id, title=asset.title, type=asset.type),
        )

    async def resolve_link(self, link_id: str, source_address: Optional[str] = None) -> str:
        """
        Redeem a link and return the location to redirect to.

        Raises:
            NotFoundError: Link never existed, was swept, or was consumed
            LinkExpiredError: Link existed but its TTL elapsed
        """
        link = self.store.resolve(link_id, consume=self.single_use)

        if self.record_view_on_redeem:
            try:
                await self.views.append_view(link.asset_id, source_address or "unknown")
            except StorageError as e:
                logger.error("Error logging redemption view for media {}: {}", link.asset_id, e)

        return link.target_location
