"""Change-trigger modes that decide when an asset gets a new object key."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class ChangeTrigger(str, Enum):
    """Signal used as the version suffix of an object key.

    One deployer instance uses exactly one trigger for its whole lifetime.
    """

    FILEMTIME = "filemtime"
    MD5 = "md5"
    SHA1 = "sha1"

    @classmethod
    def parse(cls, value: Any) -> ChangeTrigger:
        """Resolve a configured value, falling back to ``FILEMTIME``.

        Unset values fall back silently; unrecognised values fall back
        with a warning.
        """
        if isinstance(value, cls):
            return value
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.FILEMTIME
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.warning(
                "Unknown changes_trigger %r; falling back to %s",
                value,
                cls.FILEMTIME.value,
            )
            return cls.FILEMTIME
