"""
Short Code Generation

Short codes are a prefix of the SHA-256 hex digest of the URL text, so the
same URL always maps to the same code and needs no counter or coordination
between instances.

Trade-off: truncation makes collisions between distinct URLs possible. The
creation path treats an occupied generated code as "already shortened".
"""

import hashlib

from app.core.validators import MAX_SHORT_CODE_LENGTH

DEFAULT_CODE_LENGTH = 7


def generate_short_code(url: str, length: int = DEFAULT_CODE_LENGTH) -> str:
    """
    Map a URL to its short code.

    Args:
        url: The URL to hash (hashed as UTF-8 bytes)
        length: Number of hex characters to keep (1..MAX_SHORT_CODE_LENGTH)

    Returns:
        Lowercase hex short code of exactly `length` characters

    Example:
        generate_short_code("https://example.com/a/b") -> first 7 hex chars of
        sha256("https://example.com/a/b")
    """
    if not 1 <= length <= MAX_SHORT_CODE_LENGTH:
        raise ValueError(
            f"Short code length must be between 1 and {MAX_SHORT_CODE_LENGTH}, got {length}"
        )

    digest = hashlib.sha256(url.encode("utf-8")).hexdigest()
    return digest[:length]
