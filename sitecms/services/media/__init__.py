from __future__ import annotations

import logging
from typing import Iterable

from sitecms.connections.media import MediaStore


logger = logging.getLogger(__name__)


def release_asset(media: MediaStore | None, public_id: str | None, resource_type: str = "image") -> bool:
    """Best-effort delete of a media asset.

    Cleanup never decides the outcome of the primary operation: failures are
    logged and reported as False.
    """
    if not media or not public_id:
        return False
    try:
        media.delete(public_id, resource_type)
    except Exception:
        logger.warning("Failed to release media asset %s", public_id, exc_info=True)
        return False
    return True


def release_assets(media: MediaStore | None, public_ids: Iterable[str], resource_type: str = "image") -> int:
    released = 0
    for public_id in public_ids:
        if release_asset(media, public_id, resource_type):
            released += 1
    return released
