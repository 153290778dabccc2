"""
Input Validators and Sanitizers

This module provides validation and sanitization functions for user inputs.

Security Considerations:
- Only http/https targets are accepted, so the redirect endpoint can never
  be turned into a javascript: or file: launcher
- Short codes are restricted to alphanumerics before they reach the store
- Length limits prevent DoS attacks
"""

import re
from typing import Optional
from urllib.parse import urlparse

MAX_URL_LENGTH = 2048
# Shared bound for generated and custom codes; fits the urls.short_code column
MAX_SHORT_CODE_LENGTH = 20

SHORT_CODE_PATTERN = r'^[0-9a-zA-Z]+$'


def is_valid_url(url: str) -> bool:
    """
    Check that a string is a well-formed absolute http(s) URL.

    Args:
        url: The URL string to validate

    Returns:
        True if valid and safe, False otherwise
    """
    if not url or not isinstance(url, str):
        return False

    if not validate_url_length(url):
        return False

    if any(ch.isspace() for ch in url):
        return False

    try:
        result = urlparse(url)

        if not result.scheme or not result.netloc:
            return False

        if result.scheme.lower() not in {'http', 'https'}:
            return False

        domain = result.hostname or ''
        if domain != 'localhost' and '.' not in domain:
            return False

        # Raises ValueError for out-of-range ports
        result.port

        return True
    except ValueError:
        return False


def sanitize_short_code(short_code: str) -> Optional[str]:
    """
    Sanitize and validate short code format.

    Short codes only contain alphanumeric characters. Generated codes are
    lowercase hex, custom codes may use the full [0-9a-zA-Z] range.

    Args:
        short_code: The short code to sanitize

    Returns:
        Sanitized short code if valid, None otherwise
    """
    if not short_code or not isinstance(short_code, str):
        return None

    short_code = short_code.strip()

    if len(short_code) > MAX_SHORT_CODE_LENGTH:
        return None

    if not re.match(SHORT_CODE_PATTERN, short_code):
        return None

    return short_code


def validate_url_length(url: str, max_length: int = MAX_URL_LENGTH) -> bool:
    """
    Validate URL length to prevent DoS attacks.

    Args:
        url: The URL to validate
        max_length: Maximum allowed length (default: 2048 per RFC 7230)

    Returns:
        True if URL length is valid, False otherwise
    """
    return bool(url) and len(url) <= max_length
