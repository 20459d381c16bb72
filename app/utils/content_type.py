"""
Content-Type detection utilities.
Auto-detect image MIME types from file extensions.
"""

import mimetypes
from typing import Optional


# Fallback when neither the extension nor the client tells us anything.
# The vision model needs an image type, so default to JPEG.
DEFAULT_IMAGE_TYPE = "image/jpeg"

# Types that carry no information about the payload
GENERIC_TYPES = {"application/octet-stream", ""}


def detect_content_type(filename: str, provided_type: Optional[str] = None) -> str:
    """
    Detect Content-Type from filename extension.

    A specific client-provided type wins; otherwise the extension is used,
    with 'image/jpeg' as last resort.

    Args:
        filename: Filename (e.g., "bottle.png")
        provided_type: Optional Content-Type sent by the client for the part

    Returns:
        MIME type string (e.g., "image/png")

    Examples:
        >>> detect_content_type("bottle.png")
        'image/png'

        >>> detect_content_type("snapshot", "image/webp")
        'image/webp'

        >>> detect_content_type("snapshot")
        'image/jpeg'
    """
    # Client supplied a specific type (not generic)
    if provided_type and provided_type not in GENERIC_TYPES:
        return provided_type

    guessed_type, _ = mimetypes.guess_type(filename)

    return guessed_type or DEFAULT_IMAGE_TYPE
