"""Media CDN URL helpers.

Pure string templates over the CDN's public naming convention; nothing
here touches the network.
"""

from .config import get_cloudinary_cloud_name

DELIVERY_BASE_URL = "https://res.cloudinary.com"
UPLOAD_BASE_URL = "https://api.cloudinary.com/v1_1"
RESOURCE_KINDS = ("image", "video")


def _check_kind(kind: str) -> None:
    if kind not in RESOURCE_KINDS:
        raise ValueError(f"Unknown resource kind {kind!r}; expected one of {RESOURCE_KINDS}")


def media_url(media_reference: str, kind: str = "video", cloud_name: str | None = None) -> str:
    """Build the poster/thumbnail URL for a stored media reference.

    Args:
        media_reference: CDN public id of the asset.
        kind: 'image' or 'video'.
        cloud_name: Override for the configured cloud name.

    Returns:
        Delivery URL ending in ``.jpg``.
    """
    _check_kind(kind)
    cloud = cloud_name or get_cloudinary_cloud_name()
    return f"{DELIVERY_BASE_URL}/{cloud}/{kind}/upload/{media_reference}.jpg"


def upload_url(kind: str = "video", cloud_name: str | None = None) -> str:
    """Endpoint that accepts uploads of the given kind."""
    _check_kind(kind)
    cloud = cloud_name or get_cloudinary_cloud_name()
    return f"{UPLOAD_BASE_URL}/{cloud}/{kind}/upload"
