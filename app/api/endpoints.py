"""
FastAPI Endpoints for URL Shortener Service

This module defines all REST API endpoints with minimal logic.
Endpoints only handle:
- Request validation (Pydantic models)
- Rate limiting
- Error handling and HTTP responses
- Delegating to the resolution service

Design Principles:
- Thin endpoints: Only validation and rate limiting
- Service layer: All business logic
- Error handling: InvalidURLError -> 400, CodeTakenError -> 409,
  absent -> 404, anything else -> generic 500 without internal details
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from app.api.dependencies import get_resolution_service
from app.api.schemas import ShortenRequest, ShortenResponse, StatsResponse
from app.core.exceptions import CodeTakenError, InvalidURLError
from app.core.rate_limit import RATE_LIMITS, limiter
from app.core.setting import settings
from app.core.validators import sanitize_short_code
from app.services.resolution_service import ResolutionService

logger = logging.getLogger(__name__)

router = APIRouter()

GENERIC_ERROR_DETAIL = "Internal server error"


def require_valid_code(short_code: str) -> str:
    """Return the sanitized short code or raise a 400."""
    sanitized_code = sanitize_short_code(short_code)
    if not sanitized_code:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid short code format: '{short_code}'. Short codes must contain only alphanumeric characters."
        )
    return sanitized_code


@router.post(
    "/api/shorten",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a short URL",
    description="Takes a long URL (and optionally a custom code) and returns its short code"
)
@limiter.limit(RATE_LIMITS["shorten"])
async def create_short_url(
    request: Request,  # Required for rate limiting (slowapi expects parameter named 'request')
    body: ShortenRequest,
    service: ResolutionService = Depends(get_resolution_service)
) -> ShortenResponse:
    """
    Create a new short URL from a long URL.

    Returns:
        ShortenResponse with short_code, long_url, short_url and created_at
    """
    try:
        record = await service.create_short_url(body.long_url, body.custom_code)
    except InvalidURLError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except CodeTakenError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Failed to create short URL: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=GENERIC_ERROR_DETAIL
        )

    return ShortenResponse(
        short_code=record.short_code,
        long_url=record.long_url,
        short_url=f"{settings.BASE_URL.rstrip('/')}/{record.short_code}",
        created_at=record.created_at
    )


@router.get(
    "/api/stats/{short_code}",
    response_model=StatsResponse,
    summary="Get URL statistics",
    description="Returns the click count, creation date and expiry of a short URL"
)
@limiter.limit(RATE_LIMITS["stats"])
async def get_url_stats(
    short_code: str,
    request: Request,  # Required for rate limiting
    service: ResolutionService = Depends(get_resolution_service)
) -> StatsResponse:
    """
    Get statistics for a short URL.

    Raises:
        HTTPException 400: If short code format is invalid
        HTTPException 404: If short code not found
        HTTPException 429: If rate limit exceeded
    """
    short_code = require_valid_code(short_code)

    try:
        record = await service.get_url_stats(short_code)
    except Exception as e:
        logger.error(f"Failed to read stats for {short_code}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=GENERIC_ERROR_DETAIL
        )

    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="URL not found"
        )

    return StatsResponse(
        short_code=record.short_code,
        long_url=record.long_url,
        click_count=record.click_count,
        created_at=record.created_at,
        expires_at=record.expires_at
    )


@router.get(
    "/{short_code}",
    status_code=status.HTTP_302_FOUND,
    summary="Redirect to original URL",
    description="Takes a short code and redirects to the original long URL"
)
@limiter.limit(RATE_LIMITS["redirect"])
async def redirect_to_url(
    short_code: str,
    request: Request,
    service: ResolutionService = Depends(get_resolution_service)
) -> RedirectResponse:
    """
    Redirect to the original URL for a given short code.

    Returns:
        RedirectResponse (HTTP 302) to original URL

    Raises:
        HTTPException 400: If short code format is invalid
        HTTPException 404: If short code not found or expired
        HTTPException 429: If rate limit exceeded
    """
    short_code = require_valid_code(short_code)

    try:
        long_url = await service.get_long_url(short_code)
    except Exception as e:
        logger.error(f"Failed to resolve {short_code}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=GENERIC_ERROR_DETAIL
        )

    if not long_url:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="URL not found or expired"
        )

    return RedirectResponse(
        url=long_url,
        status_code=status.HTTP_302_FOUND
    )
