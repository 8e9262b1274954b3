from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime, timezone


class UrlMapping(BaseModel):
    """A stored (code, target_url) pair.
    
    from_attributes=True lets the SQL store build it straight from a UrlRecord.
    """
    code: str = Field(..., description="URL-safe short code")
    target_url: str = Field(..., description="The original URL")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(from_attributes=True, frozen=True)


class ShortenResponse(BaseModel):
    """Body returned by GET /shorten/{path}"""
    code: str
    target_url: str
    short_url: str


class HealthResponse(BaseModel):
    status: str
    environment: str
    store_backend: str
