from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from sitecms.models.business import Business
from sitecms.services.auth import require_admin
from sitecms.services.content import assign, get_by_slug, render_business
from sitecms.utils.base.fields import ObjectIdStr, Slug
from sitecms.utils.base.pagination import paginate
from sitecms.utils.base.response import success_response
from sitecms.utils.base.schemas import ImageBody


router = APIRouter()

IMMUTABLE_FIELDS = ("business_id",)


class GalleryImageBody(BaseModel):
    image_title: str = Field(max_length=100)
    image_src: ImageBody


class StatBody(BaseModel):
    unique_key: str = Field(min_length=1)
    title: str = Field(max_length=100)
    stat_value: str = Field(max_length=50)


class CallToActionBody(BaseModel):
    title: str | None = Field(None, max_length=150)
    description: str | None = Field(None, max_length=500)
    button_title: str | None = Field(None, max_length=50)
    is_active: bool = True


class CreateBusinessBody(BaseModel):
    slug: Slug | None = None
    business_title: str = Field(max_length=150)
    business_overview: str = Field(max_length=700)
    business_description: str
    business_tagline: str | None = Field(None, max_length=200)
    cta_title: str | None = Field(None, max_length=100)
    cta_href: str | None = None
    business_gallery: list[GalleryImageBody] = []
    business_testimonials: list[ObjectIdStr] = []
    project_types: list[str] = []
    project_details: list[ObjectIdStr] = []
    hero_image: ImageBody
    featured_image: ImageBody
    business_stats: list[StatBody] = []
    call_to_action_section: CallToActionBody | None = None


class UpdateBusinessBody(BaseModel):
    slug: Slug | None = None
    business_title: str | None = Field(None, max_length=150)
    business_overview: str | None = Field(None, max_length=700)
    business_description: str | None = None
    business_tagline: str | None = Field(None, max_length=200)
    cta_title: str | None = Field(None, max_length=100)
    cta_href: str | None = None
    business_gallery: list[GalleryImageBody] | None = None
    business_testimonials: list[ObjectIdStr] | None = None
    project_types: list[str] | None = None
    project_details: list[ObjectIdStr] | None = None
    hero_image: ImageBody | None = None
    featured_image: ImageBody | None = None
    business_stats: list[StatBody] | None = None
    call_to_action_section: CallToActionBody | None = None


@router.post("")
def create(body: CreateBusinessBody, _=Depends(require_admin)) -> JSONResponse:
    """ADMIN: Create a business; slug defaults to one derived from the title."""
    business = Business(**body.model_dump(exclude_none=True))
    business.save()
    return success_response(render_business(business), "Business created successfully", status_code=201)


@router.get("")
def list_all(
    project_type: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(0, ge=0),
) -> JSONResponse:
    """PUBLIC: Businesses newest first, optionally only those offering `project_type`."""
    query = Business.objects
    if project_type:
        query = query.filter(project_types=project_type)
    businesses, pagination = paginate(query, page=page, limit=limit)
    return success_response(
        {"businesses": [render_business(b) for b in businesses], "pagination": pagination},
        "Businesses retrieved successfully",
    )


@router.get("/{slug}")
def get_one(slug: str) -> JSONResponse:
    """PUBLIC: Business by slug with testimonials and projects resolved."""
    business = get_by_slug(Business, slug, "Business")
    return success_response(render_business(business), "Business retrieved successfully")


@router.put("/{slug}")
def update(slug: str, body: UpdateBusinessBody, _=Depends(require_admin)) -> JSONResponse:
    """ADMIN: Replace the supplied top-level fields."""
    business = get_by_slug(Business, slug, "Business")
    assign(business, body.model_dump(exclude_unset=True), immutable=IMMUTABLE_FIELDS)
    business.save()
    return success_response(render_business(business), "Business updated successfully")


@router.delete("/{slug}")
def delete(slug: str, _=Depends(require_admin)) -> JSONResponse:
    """ADMIN: Remove a business; projects and testimonials pointing at it are left as they are."""
    business = get_by_slug(Business, slug, "Business")
    business.delete()
    return success_response(None, "Business deleted successfully")
