"""Keyword lookup for ``{{PEXELS:query}}`` stock-photo placeholders."""

import logging
import re

logger = logging.getLogger(__name__)

PEXELS_PATTERN = re.compile(r"\{\{PEXELS:([^}]+)\}\}")

_PHOTO = "https://images.unsplash.com/photo-{}?w=1920"

# Keyword -> stock photo; first matching keyword wins
STOCK_PHOTOS: dict[str, str] = {
    "weather": _PHOTO.format("1504608524841-42fe6f032b4b"),
    "storm": _PHOTO.format("1504608524841-42fe6f032b4b"),
    "rain": _PHOTO.format("1534088568595-a066f410bcda"),
    "clouds": _PHOTO.format("1534088568595-a066f410bcda"),
    "sports": _PHOTO.format("1461896836934-ffe607ba8211"),
    "stadium": _PHOTO.format("1461896836934-ffe607ba8211"),
    "breaking": _PHOTO.format("1504711434969-e33886168f5c"),
    "news": _PHOTO.format("1495020689067-958852a7765e"),
    "newspaper": _PHOTO.format("1495020689067-958852a7765e"),
    "concert": _PHOTO.format("1493225457124-a3eb161ffa5f"),
    "music": _PHOTO.format("1493225457124-a3eb161ffa5f"),
    "party": _PHOTO.format("1514525253161-7a46d19cd819"),
    "crowd": _PHOTO.format("1514525253161-7a46d19cd819"),
    "technology": _PHOTO.format("1518770660439-4636190af475"),
    "tech": _PHOTO.format("1518770660439-4636190af475"),
    "business": _PHOTO.format("1460925895917-afdab827c52f"),
    "finance": _PHOTO.format("1460925895917-afdab827c52f"),
    "night": _PHOTO.format("1507400492013-162706c8c05e"),
    "holiday": _PHOTO.format("1482517967863-00e15c9b44be"),
    "christmas": _PHOTO.format("1482517967863-00e15c9b44be"),
    "mountain": _PHOTO.format("1506905925346-21bda4d32df4"),
    "landscape": _PHOTO.format("1506905925346-21bda4d32df4"),
    "nature": _PHOTO.format("1506905925346-21bda4d32df4"),
}

# Used when no keyword matches
GENERIC_PHOTO = _PHOTO.format("1506905925346-21bda4d32df4")


def get_stock_photo_url(query: str) -> str:
    """Stock photo for a query: exact keyword, then substring, then the generic photo."""
    text = " ".join(query.lower().split())
    if text in STOCK_PHOTOS:
        return STOCK_PHOTOS[text]

    words = set(re.findall(r"[a-z]+", text))
    for keyword, url in STOCK_PHOTOS.items():
        if keyword in words:
            return url
    for keyword, url in STOCK_PHOTOS.items():
        if keyword in text:
            return url

    logger.debug("No stock photo keyword in %r, using generic photo", query)
    return GENERIC_PHOTO


def resolve_stock_placeholders(text: str) -> str:
    return PEXELS_PATTERN.sub(lambda match: get_stock_photo_url(match.group(1).strip()), text)
