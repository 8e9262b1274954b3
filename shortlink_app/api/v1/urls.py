from fastapi import APIRouter, Depends, Request
from shortlink_app.config import Settings
from shortlink_app.dependencies import get_settings, get_url_service
from shortlink_app.schemas.url import ShortenResponse, UrlMapping
from shortlink_app.services.url_builder import build_short_url
from shortlink_app.services.url_service import URLService

router = APIRouter(tags=["urls"])


@router.get("/shorten/{path:path}", response_model=ShortenResponse)
async def shorten_url(
    path: str,
    request: Request,
    url_service: URLService = Depends(get_url_service),
    settings: Settings = Depends(get_settings)
):
    """
    Shorten the URL given as the rest of the path.
    
    GET /shorten/https://example.com/a/b?x=1 stores
    "https://example.com/a/b?x=1": the query string belongs to the
    target URL, not to this endpoint.
    """
    # Raw query string only: request.url is rebuilt from the decoded path,
    # so an encoded "?" (%3F) inside the target would show up there as a query
    target_url = path
    query_string = request.scope["query_string"].decode("latin-1")
    if query_string:
        target_url = f"{path}?{query_string}"
    
    mapping = await url_service.shorten(target_url)
    
    base_url = settings.base_url or str(request.base_url)
    return ShortenResponse(
        code=mapping.code,
        target_url=mapping.target_url,
        short_url=build_short_url(mapping.code, base_url)
    )


@router.get("/info/{code}", response_model=UrlMapping)
async def get_url_info(
    code: str,
    url_service: URLService = Depends(get_url_service)
):
    """Get the stored mapping for a short code"""
    return await url_service.describe(code)
