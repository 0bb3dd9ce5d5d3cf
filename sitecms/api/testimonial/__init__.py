from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from sitecms.models.testimonial import Testimonial
from sitecms.services.auth import require_admin
from sitecms.services.content import assign, get_by_id, render_testimonial, require_business, require_project
from sitecms.utils.base.fields import Slug
from sitecms.utils.base.pagination import paginate
from sitecms.utils.base.response import success_response
from sitecms.utils.base.schemas import OptionalImageBody


router = APIRouter()

IMMUTABLE_FIELDS = ("testimonial_id",)


class CreateTestimonialBody(BaseModel):
    project_slug: Slug | None = None
    business_slug: Slug | None = None
    name: str = Field(max_length=100)
    image: OptionalImageBody | None = None
    message: str = Field(max_length=1000)


class UpdateTestimonialBody(BaseModel):
    project_slug: Slug | None = None
    business_slug: Slug | None = None
    name: str | None = Field(None, max_length=100)
    image: OptionalImageBody | None = None
    message: str | None = Field(None, max_length=1000)


def _check_references(fields: dict, current: Testimonial | None = None) -> None:
    project_slug = fields.get("project_slug")
    if project_slug and (current is None or project_slug != current.project_slug):
        require_project(project_slug)
    business_slug = fields.get("business_slug")
    if business_slug and (current is None or business_slug != current.business_slug):
        require_business(business_slug)


@router.post("")
def create(body: CreateTestimonialBody, _=Depends(require_admin)) -> JSONResponse:
    """ADMIN: Create a testimonial; referenced project/business slugs must exist."""
    fields = body.model_dump(exclude_none=True)
    _check_references(fields)
    testimonial = Testimonial(**fields)
    testimonial.save()
    return success_response(testimonial.to_output(), "Testimonial created successfully", status_code=201)


@router.get("")
def list_all(
    project_slug: str | None = None,
    business_slug: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(0, ge=0),
) -> JSONResponse:
    """PUBLIC: Testimonials newest first."""
    query = Testimonial.objects
    if project_slug:
        query = query.filter(project_slug=project_slug.strip().lower())
    if business_slug:
        query = query.filter(business_slug=business_slug.strip().lower())
    testimonials, pagination = paginate(query, page=page, limit=limit)
    return success_response(
        {"testimonials": [t.to_output() for t in testimonials], "pagination": pagination},
        "Testimonials retrieved successfully",
    )


@router.get("/{id}")
def get_one(id: str) -> JSONResponse:
    """PUBLIC: Testimonial by store id, with project and business resolved."""
    testimonial = get_by_id(Testimonial, id, "Testimonial")
    return success_response(render_testimonial(testimonial), "Testimonial retrieved successfully")


@router.put("/{id}")
def update(id: str, body: UpdateTestimonialBody, _=Depends(require_admin)) -> JSONResponse:
    """ADMIN: Replace the supplied top-level fields; changed references are re-checked."""
    testimonial = get_by_id(Testimonial, id, "Testimonial")
    fields = body.model_dump(exclude_unset=True)
    _check_references(fields, testimonial)
    assign(testimonial, fields, immutable=IMMUTABLE_FIELDS)
    testimonial.save()
    return success_response(testimonial.to_output(), "Testimonial updated successfully")


@router.delete("/{id}")
def delete(id: str, _=Depends(require_admin)) -> JSONResponse:
    """ADMIN: Remove a testimonial."""
    testimonial = get_by_id(Testimonial, id, "Testimonial")
    testimonial.delete()
    return success_response(None, "Testimonial deleted successfully")
