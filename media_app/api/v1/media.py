from fastapi import APIRouter, Depends, Request, status
from media_app.auth import Principal, get_current_principal
from media_app.schemas.media import (
    AnalyticsResponse,
    MediaCreate,
    MediaCreatedResponse,
    MediaDetailResponse,
    MediaListResponse,
    MediaResponse,
    StreamUrlResponse,
    ViewLoggedResponse,
)
from media_app.services.link_service import StreamLinkService
from media_app.services.media_service import MediaService
from media_app.services.view_service import ViewService
from media_app.errors import NotFoundError
from media_app.dependencies import get_media_service, get_stream_link_service, get_view_service

router = APIRouter(prefix="/media", tags=["media"])


def client_address(request: Request) -> str:
    return request.client.host if request.client and request.client.host else "unknown"


def parse_media_id(media_id: str) -> int:
    """Path media id; anything that is not an integer names no asset"""
    try:
        return int(media_id)
    except ValueError:
        raise NotFoundError("Media not found")


@router.post("", response_model=MediaCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_media(
    media_data: MediaCreate,
    media_service: MediaService = Depends(get_media_service),
    principal: Principal = Depends(get_current_principal)
):
    """Create a media asset (requires a bearer token)"""
    asset = await media_service.create_asset(media_data)
    return MediaCreatedResponse(mediaId=asset.id, media=MediaResponse.model_validate(asset))


@router.get("", response_model=MediaListResponse)
async def list_media(
    media_service: MediaService = Depends(get_media_service),
    principal: Principal = Depends(get_current_principal)
):
    """List media assets, newest first"""
    assets = await media_service.list_assets()
    return MediaListResponse(
        count=len(assets),
        media=[MediaResponse.model_validate(asset) for asset in assets],
    )


@router.get("/{media_id}", response_model=MediaDetailResponse)
async def get_media(
    media_id: int = Depends(parse_media_id),
    media_service: MediaService = Depends(get_media_service),
    principal: Principal = Depends(get_current_principal)
):
    asset = await media_service.get_asset(media_id)
    return MediaDetailResponse(media=MediaResponse.model_validate(asset))


@router.post("/{media_id}/view", response_model=ViewLoggedResponse)
async def log_view(
    request: Request,
    media_id: int = Depends(parse_media_id),
    view_service: ViewService = Depends(get_view_service)
):
    """Record an explicit view of a media asset"""
    view = await view_service.record_view(media_id, client_address(request))
    return ViewLoggedResponse(
        viewId=view.view_id,
        mediaId=view.asset_id,
        ip=view.source_address,
        timestamp=view.timestamp,
    )


@router.get("/{media_id}/analytics", response_model=AnalyticsResponse)
async def get_analytics(
    media_id: int = Depends(parse_media_id),
    view_service: ViewService = Depends(get_view_service),
    principal: Principal = Depends(get_current_principal)
):
    """View analytics for a media asset (recomputed on every call)"""
    return await view_service.compute_analytics(media_id)


@router.get("/{media_id}/stream-url", response_model=StreamUrlResponse)
async def get_stream_url(
    request: Request,
    media_id: int = Depends(parse_media_id),
    link_service: StreamLinkService = Depends(get_stream_link_service)
):
    """
    Issue a streaming link valid for the configured TTL.

    Issuing the link counts as a view of the asset.
    """
    return await link_service.issue_link(media_id, client_address(request))
