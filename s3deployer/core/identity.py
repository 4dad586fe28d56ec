"""Object-key and cache-key derivation.

Pattern: ``<filename>_<suffix>[.<extension>]`` where the suffix is the
modification timestamp, the MD5 digest or the SHA-1 digest of the asset,
depending on the change trigger. Same asset state, same key.
"""

from __future__ import annotations

from s3deployer.models.asset import Asset
from s3deployer.models.triggers import ChangeTrigger

# Namespace for this deployer's entries in a shared cache backend.
CACHE_KEY_PREFIX = "ph_awss3_"


def version_suffix(asset: Asset, trigger: ChangeTrigger | str | None = None) -> str:
    """Return the version suffix of ``asset`` for ``trigger``."""
    mode = ChangeTrigger.parse(trigger)
    if mode is ChangeTrigger.MD5:
        return asset.md5()
    if mode is ChangeTrigger.SHA1:
        return asset.sha1()
    return str(int(asset.modified_timestamp))


def compute_object_key(asset: Asset, trigger: ChangeTrigger | str | None = None) -> str:
    """Return the object key an asset is stored under.

    ``logo.png`` modified at 1700000000 maps to ``logo_1700000000.png``.
    """
    ext = f".{asset.extension}" if asset.extension else ""
    return f"{asset.filename}_{version_suffix(asset, trigger)}{ext}"


def derive_cache_key(object_key: str) -> str:
    """Return the lookup-cache key for an object key."""
    return CACHE_KEY_PREFIX + object_key
