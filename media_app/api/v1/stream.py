from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse
from media_app.services.link_service import StreamLinkService
from media_app.dependencies import get_stream_link_service
from media_app.api.v1.media import client_address

router = APIRouter(prefix="/media/stream", tags=["stream"])


@router.get("/{link_id}")
async def redeem_stream_link(
    link_id: str,
    request: Request,
    link_service: StreamLinkService = Depends(get_stream_link_service)
):
    """
    Redirect a streaming link to the media's real location.

    404 when the link is unknown (or already swept), 410 when it was held
    but has expired. Both are raised by the service and rendered by the
    application's error handler.
    """
    target = await link_service.resolve_link(link_id, client_address(request))
    return RedirectResponse(url=target, status_code=status.HTTP_302_FOUND)
