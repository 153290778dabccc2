"""
Custom Exceptions

This module defines custom exceptions for better error handling
and more specific error messages.

Only InvalidURLError and CodeTakenError are meant to reach API consumers
as distinct errors. Everything else is reported as a generic failure.
"""

from typing import Optional


class URLShortenerException(Exception):
    """Base exception for URL shortener service."""
    pass


class InvalidURLError(URLShortenerException):
    """Raised when URL validation fails."""

    def __init__(self, url: str, reason: str = "Invalid URL format"):
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {url}")


class CodeTakenError(URLShortenerException):
    """Raised when a requested custom short code is already in use."""

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"Custom short code '{short_code}' already exists")


class DuplicateKeyError(URLShortenerException):
    """Raised by the record store when a short code already has a record."""

    def __init__(self, short_code: str, original_error: Optional[Exception] = None):
        self.short_code = short_code
        self.original_error = original_error
        super().__init__(f"Record for short code '{short_code}' already exists")


class DatabaseError(URLShortenerException):
    """Raised when database operations fail."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(f"Database error: {message}")
