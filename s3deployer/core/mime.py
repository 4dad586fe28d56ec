"""Content-type detection for uploads.

Two lookups in order: the file extension, then the file content on disk.
Detection is best effort; callers get ``None`` instead of an error.
"""

from __future__ import annotations

import logging
import mimetypes

import filetype

from s3deployer.models.asset import Asset

logger = logging.getLogger(__name__)


def mime_from_extension(extension: str) -> str | None:
    if not extension:
        return None
    mime, _ = mimetypes.guess_type(f"asset.{extension}", strict=False)
    return mime or None


def mime_from_content(asset: Asset) -> str | None:
    return filetype.guess_mime(str(asset.full_path)) or None


def detect_mime_type(asset: Asset) -> str | None:
    """Return the asset's content type, or None if it cannot be resolved."""
    try:
        mime = mime_from_extension(asset.extension)
    except (TypeError, ValueError) as exc:
        logger.debug("Extension MIME lookup failed for %r: %s", asset, exc)
        mime = None
    if mime:
        return mime

    try:
        mime = mime_from_content(asset)
    except (OSError, TypeError, ValueError) as exc:
        logger.debug("Content MIME lookup failed for %r: %s", asset, exc)
        return None
    return mime
