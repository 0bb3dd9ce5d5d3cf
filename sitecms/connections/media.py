"""Media store backed by Cloudinary.

Assets are addressed by their Cloudinary `public_id` and a resource type
(image, video, raw). Every call is a plain request/response round trip.
"""
import logging
import os
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

import cloudinary
import cloudinary.api
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from fastapi import FastAPI

from sitecms.utils.base.errors import MediaStoreError
from sitecms.utils.config import settings


logger = logging.getLogger(__name__)


class MediaStore:
    def store(self, local_path: str, folder: str | None = None) -> dict[str, Any]:
        """Upload a local file and remove it afterwards, whatever the outcome."""
        try:
            result = cloudinary.uploader.upload(
                local_path,
                folder=folder or settings.upload_folder,
                resource_type="auto",
            )
        except CloudinaryError as exc:
            raise MediaStoreError(f"Cloudinary upload failed: {exc}") from exc
        finally:
            _discard(local_path)

        return {
            "public_id": result.get("public_id"),
            "url": result.get("secure_url"),
            "resource_type": result.get("resource_type"),
            "format": result.get("format"),
            "width": result.get("width"),
            "height": result.get("height"),
            "bytes": result.get("bytes"),
        }

    def delete(self, public_id: str, resource_type: str = "image") -> dict[str, Any]:
        try:
            result = cloudinary.uploader.destroy(public_id, resource_type=resource_type)
        except CloudinaryError as exc:
            raise MediaStoreError(f"Cloudinary deletion failed: {exc}") from exc

        outcome = result.get("result")
        if outcome not in ("ok", "not found"):
            raise MediaStoreError("Cloudinary deletion failed: Failed to delete file from Cloudinary")
        return {
            "success": True,
            "message": "File deleted successfully" if outcome == "ok" else "File not found",
            "result": outcome,
        }

    def describe(self, public_id: str, resource_type: str = "image") -> dict[str, Any]:
        try:
            result = cloudinary.api.resource(public_id, resource_type=resource_type)
        except CloudinaryError as exc:
            raise MediaStoreError(f"Failed to get file details: {exc}") from exc

        return {
            "public_id": result.get("public_id"),
            "url": result.get("secure_url"),
            "format": result.get("format"),
            "resource_type": result.get("resource_type"),
            "type": result.get("type"),
            "created_at": result.get("created_at"),
            "bytes": result.get("bytes"),
            "width": result.get("width"),
            "height": result.get("height"),
            "folder": result.get("folder"),
        }

    def list(self, folder: str, resource_type: str = "image", max_results: int = 500) -> list[dict[str, Any]]:
        try:
            result = cloudinary.api.resources(
                type="upload",
                prefix=folder,
                resource_type=resource_type,
                max_results=max_results,
            )
        except CloudinaryError as exc:
            raise MediaStoreError(f"Failed to get files from folder: {exc}") from exc

        return [
            {
                "public_id": resource.get("public_id"),
                "url": resource.get("secure_url"),
                "format": resource.get("format"),
                "created_at": resource.get("created_at"),
                "bytes": resource.get("bytes"),
                "width": resource.get("width"),
                "height": resource.get("height"),
            }
            for resource in result.get("resources", [])
        ]


def _discard(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
    except OSError:
        logger.warning("Could not remove local upload %s", path, exc_info=True)


_media_store: Optional[MediaStore] = None


def get_media_store() -> MediaStore:
    assert _media_store is not None, "Media store not initialized"
    return _media_store


def init_media() -> None:
    global _media_store
    cloudinary.config(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret,
        secure=True,
    )
    _media_store = MediaStore()


def close_media() -> None:
    global _media_store
    _media_store = None


@asynccontextmanager
async def media_lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_media()
    try:
        yield
    finally:
        close_media()
