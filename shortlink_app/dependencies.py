"""
FastAPI dependencies for dependency injection.

Settings and the URL service are built once by main.create_app and kept on
app.state; these functions hand them to the routes. Nothing here is a
module-level singleton, so every app (and every test) owns its own store
and service.
"""

from fastapi import Request

from shortlink_app.config import Settings
from shortlink_app.services.url_service import URLService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_url_service(request: Request) -> URLService:
    """URLService wired with the app's store and short code strategy"""
    return request.app.state.url_service
