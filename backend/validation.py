"""
Validation of link collections before they are written to the store.

Every check is a pure function over its input. ``validate_collection`` is
fail-fast: it reports the first violation in index order and nothing else.
"""
from collections.abc import Mapping
from typing import Any, Iterator, List
from urllib.parse import urlparse

from .models import (
    CATEGORIES,
    MAX_LINKS,
    MAX_NAME_LENGTH,
    MAX_URL_LENGTH,
    REQUIRED_FIELDS,
    LinkViolation,
    ValidationReason,
)

ALLOWED_SCHEMES = {"http", "https"}


def is_valid_name(name: Any) -> bool:
    return isinstance(name, str) and 1 <= len(name.strip()) <= MAX_NAME_LENGTH


def is_valid_url(url: Any) -> bool:
    """
    True for an absolute http(s) URL of at most 2048 characters.
    Anything urlparse chokes on (bad IPv6 literal, out of range port) is
    treated as invalid rather than raised.
    """
    if not isinstance(url, str):
        return False
    candidate = url.strip()
    if not 1 <= len(candidate) <= MAX_URL_LENGTH:
        return False
    try:
        parsed = urlparse(candidate)
        parsed.port
    except ValueError:
        return False
    if parsed.scheme not in ALLOWED_SCHEMES:
        return False
    if any(ch.isspace() for ch in parsed.netloc):
        return False
    return bool(parsed.hostname)


def is_valid_category(category: Any) -> bool:
    return isinstance(category, str) and category in CATEGORIES


def missing_fields(link: Mapping) -> List[str]:
    # absent, non-string and empty values all count as missing
    return [
        field
        for field in REQUIRED_FIELDS
        if not isinstance(link.get(field), str) or not link.get(field)
    ]


def _check_link(index: int, link: Any, seen: set) -> LinkViolation | None:
    if not isinstance(link, Mapping):
        return LinkViolation(
            reason=ValidationReason.NOT_AN_OBJECT,
            index=index,
            message=f"Invalid link at index {index}",
        )

    missing = missing_fields(link)
    if missing:
        return LinkViolation(
            reason=ValidationReason.MISSING_FIELDS,
            index=index,
            fields=missing,
            message=f"Missing required fields in link at index {index}: {', '.join(missing)}",
        )

    name = link["name"]
    if not is_valid_name(name):
        return LinkViolation(
            reason=ValidationReason.INVALID_NAME,
            index=index,
            fields=["name"],
            message=f"Invalid name in link at index {index}: must be 1-{MAX_NAME_LENGTH} characters",
        )

    key = name.lower()
    if key in seen:
        return LinkViolation(
            reason=ValidationReason.DUPLICATE_NAME,
            index=index,
            fields=["name"],
            message=f"Duplicate name in link at index {index}: '{name}' is already used",
        )
    seen.add(key)

    if not is_valid_url(link["url"]):
        return LinkViolation(
            reason=ValidationReason.INVALID_URL,
            index=index,
            fields=["url"],
            message=(
                f"Invalid URL in link at index {index}: must be an http or https URL "
                f"of at most {MAX_URL_LENGTH} characters"
            ),
        )

    if not is_valid_category(link["category"]):
        return LinkViolation(
            reason=ValidationReason.INVALID_CATEGORY,
            index=index,
            fields=["category"],
            message=(
                f"Invalid category in link at index {index}: must be one of "
                f"{', '.join(sorted(CATEGORIES))}"
            ),
        )

    return None


def iter_violations(items: Any) -> Iterator[LinkViolation]:
    """
    Yield every violation in ``items``, at most one per link, in index order.
    A collection-level failure (not a list, too many links) is yielded alone.
    """
    if not isinstance(items, (list, tuple)):
        yield LinkViolation(
            reason=ValidationReason.NOT_AN_ARRAY,
            message="Invalid input: expected array",
        )
        return
    if len(items) > MAX_LINKS:
        yield LinkViolation(
            reason=ValidationReason.TOO_MANY,
            message=f"Too many links: {len(items)} given, maximum is {MAX_LINKS}",
        )
        return

    seen: set = set()
    for index, link in enumerate(items):
        violation = _check_link(index, link, seen)
        if violation is not None:
            yield violation


def validate_collection(items: Any) -> LinkViolation | None:
    """Return the first violation in ``items``, or None if it can be saved."""
    return next(iter_violations(items), None)
