import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from shortlink_app.dependencies import get_url_service
from shortlink_app.services.url_service import URLService

router = APIRouter(tags=["redirect"])

logger = logging.getLogger(__name__)


@router.get("/go/{code}")
async def redirect_to_target_url(
    code: str,
    url_service: URLService = Depends(get_url_service)
):
    """
    Redirect to the original URL (302).
    
    An unknown code raises NotFoundError, which the app turns into a 404.
    """
    target_url = await url_service.resolve(code)
    logger.debug("Redirecting %s -> %s", code, target_url)
    return RedirectResponse(url=target_url, status_code=status.HTTP_302_FOUND)
