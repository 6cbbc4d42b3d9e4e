"""
Link generation tools.

Itinerary images are placeholders from picsum.photos seeded by destination,
so the same destination always renders the same picture.
"""

import logging
from urllib.parse import quote

logger = logging.getLogger(__name__)

IMAGE_BASE_URL = "https://picsum.photos/seed"
IMAGE_WIDTH = 800
IMAGE_HEIGHT = 600

# Characters encodeURIComponent leaves untouched besides alphanumerics and "-_.~"
_URI_COMPONENT_SAFE = "!*'()"


def encode_uri_component(value: str) -> str:
    """Percent-encode a value the way browsers' encodeURIComponent does."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_image_url(destination: str, width: int = IMAGE_WIDTH, height: int = IMAGE_HEIGHT) -> str:
    """
    Generate a placeholder image URL for a destination.

    Args:
        destination: "City, Country" string from the itinerary
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        picsum.photos URL seeded with the encoded destination
    """
    url = f"{IMAGE_BASE_URL}/{encode_uri_component(destination)}/{width}/{height}"
    logger.debug(f"Generated image link: {url}")
    return url
