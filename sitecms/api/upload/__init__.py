import contextlib
import logging
import os
import shutil
import tempfile

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse

from sitecms.connections.media import MediaStore, get_media_store
from sitecms.services.auth import require_admin
from sitecms.utils.base.errors import MediaStoreError, ValidationFailed
from sitecms.utils.base.response import success_response
from sitecms.utils.config import settings


logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])

ALLOWED_EXTENSIONS = frozenset({"jpeg", "jpg", "png", "gif", "webp"})


def _stage(upload: UploadFile) -> str:
    """Validate an incoming image and spool it to a temp file for the media store."""
    extension = os.path.splitext(upload.filename or "")[1].lower().lstrip(".")
    content_type = upload.content_type or ""
    if extension not in ALLOWED_EXTENSIONS or not content_type.startswith("image/"):
        raise ValidationFailed(
            f"Only image files are allowed ({', '.join(sorted(ALLOWED_EXTENSIONS))}). "
            f"Uploaded file type: {extension or 'unknown'}"
        )

    with tempfile.NamedTemporaryFile(delete=False, suffix=f".{extension}") as staged:
        shutil.copyfileobj(upload.file, staged)
        size = staged.tell()

    if size > settings.upload_max_bytes:
        os.unlink(staged.name)
        limit_mb = settings.upload_max_bytes / (1024 * 1024)
        raise ValidationFailed(f"File too large. Maximum size is {limit_mb:g}MB")
    return staged.name


@router.post("/single")
def upload_single(
    file: UploadFile | None = File(None),
    folder: str | None = None,
    media: MediaStore = Depends(get_media_store),
) -> JSONResponse:
    """ADMIN: Upload one image (form field `file`)."""
    if file is None:
        raise ValidationFailed("No file uploaded")
    result = media.store(_stage(file), folder=folder)
    return success_response(result, "File uploaded successfully")


@router.post("/multiple")
def upload_multiple(
    files: list[UploadFile] | None = File(None),
    folder: str | None = None,
    media: MediaStore = Depends(get_media_store),
) -> JSONResponse:
    """ADMIN: Upload up to the configured number of images (form field `files`)."""
    if not files:
        raise ValidationFailed("No files uploaded")
    if len(files) > settings.upload_max_files:
        raise ValidationFailed(f"Too many files. Maximum is {settings.upload_max_files}")

    staged: list[str] = []
    results = []
    try:
        for upload in files:
            staged.append(_stage(upload))
        for path in staged:
            results.append(media.store(path, folder=folder))
    except MediaStoreError:
        logger.warning("Multiple upload stopped after %d of %d files", len(results), len(files))
        raise
    finally:
        for path in staged:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(path)
    return success_response(
        {"files": results, "count": len(results)},
        f"{len(results)} file(s) uploaded successfully",
    )


@router.delete("/{public_id:path}")
def delete_file(public_id: str, resource_type: str = "image", media: MediaStore = Depends(get_media_store)) -> JSONResponse:
    """ADMIN: Delete an asset; a missing asset is reported, not an error."""
    result = media.delete(public_id, resource_type)
    return success_response(result, result["message"])


@router.get("/file/{public_id:path}")
def get_file(public_id: str, resource_type: str = "image", media: MediaStore = Depends(get_media_store)) -> JSONResponse:
    """ADMIN: Metadata of one asset."""
    return success_response(media.describe(public_id, resource_type), "File details retrieved successfully")


@router.get("/folder/{folder:path}")
def get_folder(
    folder: str,
    resource_type: str = "image",
    max_results: int = 500,
    media: MediaStore = Depends(get_media_store),
) -> JSONResponse:
    """ADMIN: Assets stored under a folder prefix."""
    files = media.list(folder, resource_type, max_results)
    return success_response({"files": files, "count": len(files)}, "Folder files retrieved successfully")
