from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

from .errors import InvalidLinkError


def extract_note_id(link: str) -> str:
    """Return the ``id`` query parameter of a Bear link such as
    ``bear://x-callback-url/open-note?id=ABC123``."""

    try:
        parts = urlsplit(link.strip())
    except (AttributeError, ValueError) as exc:
        raise InvalidLinkError(link) from exc

    if not parts.scheme:
        raise InvalidLinkError(link)

    values = parse_qs(parts.query).get("id")
    if not values or not values[0]:
        raise InvalidLinkError(link)
    return values[0]
