from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from sitecms.models.gallery import Gallery
from sitecms.services.auth import require_admin
from sitecms.services.content import assign, get_by_id
from sitecms.utils.base.pagination import paginate
from sitecms.utils.base.response import success_response
from sitecms.utils.base.schemas import ImageBody


router = APIRouter()

IMMUTABLE_FIELDS = ("gallery_id",)


class CreateGalleryBody(BaseModel):
    image: ImageBody
    title: str = Field(max_length=150)
    tag: str | None = Field(None, max_length=50)
    description: str | None = Field(None, max_length=500)
    alt_text: str | None = Field(None, max_length=100)
    category: str | None = Field(None, max_length=50)
    width: int | None = Field(None, ge=1)
    height: int | None = Field(None, ge=1)
    file_size: int | None = Field(None, ge=0)
    format: str | None = None
    is_active: bool = True


class UpdateGalleryBody(BaseModel):
    image: ImageBody | None = None
    title: str | None = Field(None, max_length=150)
    tag: str | None = Field(None, max_length=50)
    description: str | None = Field(None, max_length=500)
    alt_text: str | None = Field(None, max_length=100)
    category: str | None = Field(None, max_length=50)
    width: int | None = Field(None, ge=1)
    height: int | None = Field(None, ge=1)
    file_size: int | None = Field(None, ge=0)
    format: str | None = None
    is_active: bool | None = None


@router.post("")
def create(body: CreateGalleryBody, _=Depends(require_admin)) -> JSONResponse:
    """ADMIN: Add an image to the gallery."""
    image = Gallery(**body.model_dump(exclude_none=True))
    image.save()
    return success_response(image.to_output(), "Gallery image created successfully", status_code=201)


@router.get("")
def list_all(
    tag: str | None = None,
    category: str | None = None,
    is_active: bool | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(0, ge=0),
) -> JSONResponse:
    """PUBLIC: Gallery images newest first."""
    query = Gallery.objects
    if tag:
        query = query.filter(tag=tag.strip().lower())
    if category:
        query = query.filter(category=category)
    if is_active is not None:
        query = query.filter(is_active=is_active)
    images, pagination = paginate(query, page=page, limit=limit)
    return success_response(
        {"images": [i.to_output() for i in images], "pagination": pagination},
        "Gallery images retrieved successfully",
    )


@router.get("/{id}")
def get_one(id: str) -> JSONResponse:
    """PUBLIC: Gallery image by store id."""
    image = get_by_id(Gallery, id, "Gallery image")
    return success_response(image.to_output(), "Gallery image retrieved successfully")


@router.put("/{id}")
def update(id: str, body: UpdateGalleryBody, _=Depends(require_admin)) -> JSONResponse:
    """ADMIN: Replace the supplied top-level fields."""
    image = get_by_id(Gallery, id, "Gallery image")
    assign(image, body.model_dump(exclude_unset=True), immutable=IMMUTABLE_FIELDS)
    image.save()
    return success_response(image.to_output(), "Gallery image updated successfully")


@router.delete("/{id}")
def delete(id: str, _=Depends(require_admin)) -> JSONResponse:
    """ADMIN: Remove a gallery image."""
    image = get_by_id(Gallery, id, "Gallery image")
    image.delete()
    return success_response(None, "Gallery image deleted successfully")
