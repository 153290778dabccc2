"""
API Request and Response Schemas

This module defines all Pydantic models for API requests and responses.

Design Principles:
- Request models: Define input validation
- Response models: Define output structure
- long_url is a plain string here: URL well-formedness is checked by the
  resolution service so that it can answer with a 400, not a 422
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.core.validators import MAX_SHORT_CODE_LENGTH, MAX_URL_LENGTH, SHORT_CODE_PATTERN


class ShortenRequest(BaseModel):
    """Request model for URL shortening endpoint."""
    long_url: str = Field(
        ...,
        min_length=1,
        max_length=MAX_URL_LENGTH,
        description="The long URL to shorten"
    )
    custom_code: Optional[str] = Field(
        default=None,
        min_length=1,
        max_length=MAX_SHORT_CODE_LENGTH,
        pattern=SHORT_CODE_PATTERN,
        description="Optional custom short code (alphanumeric)"
    )


class ShortenResponse(BaseModel):
    """Response model for URL shortening endpoint."""
    short_code: str = Field(..., description="The short code")
    long_url: str = Field(..., description="The original long URL")
    short_url: str = Field(..., description="The complete short URL")
    created_at: datetime


class StatsResponse(BaseModel):
    """Response model for statistics endpoint."""
    short_code: str
    long_url: str
    click_count: int
    created_at: datetime
    expires_at: Optional[datetime] = None
