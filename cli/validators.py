"""Input validators for CLI commands."""

import re

from mesh.resolver import is_uuid

MIN_RATING = 1
MAX_RATING = 5

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class RatingValidationError(ValueError):
    """Raised when a rating is not an integer in the accepted range."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(
            f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}"
        )


def parse_rating(raw: str) -> int:
    """Parse a base-10 rating string.

    Args:
        raw: Rating as typed by the user

    Returns:
        The rating as an int

    Raises:
        RatingValidationError: If not an integer in [1, 5]
    """
    text = (raw or "").strip()
    if not _INTEGER_RE.fullmatch(text):
        raise RatingValidationError(raw)

    rating = int(text, 10)
    if not MIN_RATING <= rating <= MAX_RATING:
        raise RatingValidationError(raw)
    return rating


def validate_agent_id(agent_id: str) -> bool:
    """Validate that an agent id has the UUID shape.

    Args:
        agent_id: Agent id to validate

    Returns:
        True if valid
    """
    return is_uuid(agent_id)


def validate_alias(alias: str) -> bool:
    """Validate an alias name (letters, digits, dot, dash, underscore).

    Args:
        alias: Alias to validate

    Returns:
        True if valid
    """
    return bool(re.match(r"^[\w][\w.-]{0,63}$", alias))


def validate_url(url: str) -> bool:
    """Validate a URL format.

    Args:
        url: URL string to validate

    Returns:
        True if valid
    """
    pattern = re.compile(
        r'^https?://'  # http:// or https://
        r'(?:(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+[A-Z]{2,6}\.?|'  # domain
        r'localhost|'  # localhost
        r'\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})'  # or IP
        r'(?::\d+)?'  # optional port
        r'(?:/?|[/?]\S+)$', re.IGNORECASE)
    return bool(pattern.match(url))


def validate_token(token: str) -> bool:
    """Validate a platform token shape (non-blank, no whitespace, sane length).

    Args:
        token: Token to validate

    Returns:
        True if valid
    """
    if not token or len(token) < 8:
        return False
    return not any(ch.isspace() for ch in token)
