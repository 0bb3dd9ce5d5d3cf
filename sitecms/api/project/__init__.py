from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from sitecms.models.project import Project
from sitecms.services.auth import require_admin
from sitecms.services.content import assign, get_by_slug, render_project, require_business
from sitecms.utils.base.fields import Slug
from sitecms.utils.base.pagination import paginate
from sitecms.utils.base.response import success_response
from sitecms.utils.base.schemas import ImageBody


router = APIRouter()

IMMUTABLE_FIELDS = ("project_id",)


class ProjectImageBody(BaseModel):
    ranking: int = Field(ge=1)
    url: str
    public_id: str


class ProjectDetailBody(BaseModel):
    image: ImageBody
    title: str = Field(max_length=150)
    description: str


class ProjectDocumentBody(BaseModel):
    image: ImageBody
    title: str = Field(max_length=150)
    description: str = Field(max_length=500)
    file_name: str
    file_link: ImageBody
    button_title: str = Field("Download", max_length=50)
    download_message: str | None = Field(None, max_length=200)


class CreateProjectBody(BaseModel):
    business_name_slug: Slug
    project_name: str = Field(max_length=150)
    project_description: str
    project_type: str
    project_features: list[str] = []
    project_images: list[ProjectImageBody] = []
    slug: Slug | None = None
    hero_image: ImageBody
    project_detail: ProjectDetailBody
    project_document: list[ProjectDocumentBody] = []


class UpdateProjectBody(BaseModel):
    business_name_slug: Slug | None = None
    project_name: str | None = Field(None, max_length=150)
    project_description: str | None = None
    project_type: str | None = None
    project_features: list[str] | None = None
    project_images: list[ProjectImageBody] | None = None
    slug: Slug | None = None
    hero_image: ImageBody | None = None
    project_detail: ProjectDetailBody | None = None
    project_document: list[ProjectDocumentBody] | None = None


@router.post("")
def create(body: CreateProjectBody, _=Depends(require_admin)) -> JSONResponse:
    """ADMIN: Create a project under an existing business."""
    require_business(body.business_name_slug)
    project = Project(**body.model_dump(exclude_none=True))
    project.save()
    return success_response(project.to_output(), "Project created successfully", status_code=201)


@router.get("")
def list_all(
    business_slug: str | None = None,
    project_type: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(0, ge=0),
) -> JSONResponse:
    """PUBLIC: Projects newest first, filterable by business and type."""
    query = Project.objects
    if business_slug:
        query = query.filter(business_name_slug=business_slug.strip().lower())
    if project_type:
        query = query.filter(project_type=project_type)
    projects, pagination = paginate(query, page=page, limit=limit)
    return success_response(
        {"projects": [p.to_output() for p in projects], "pagination": pagination},
        "Projects retrieved successfully",
    )


@router.get("/{slug}")
def get_one(slug: str) -> JSONResponse:
    """PUBLIC: Project by slug, with its business resolved (null when gone)."""
    project = get_by_slug(Project, slug, "Project")
    return success_response(render_project(project), "Project retrieved successfully")


@router.put("/{slug}")
def update(slug: str, body: UpdateProjectBody, _=Depends(require_admin)) -> JSONResponse:
    """ADMIN: Replace the supplied top-level fields; a new business slug must exist."""
    project = get_by_slug(Project, slug, "Project")
    fields = body.model_dump(exclude_unset=True)
    if fields.get("business_name_slug") and fields["business_name_slug"] != project.business_name_slug:
        require_business(fields["business_name_slug"])
    assign(project, fields, immutable=IMMUTABLE_FIELDS)
    project.save()
    return success_response(project.to_output(), "Project updated successfully")


@router.delete("/{slug}")
def delete(slug: str, _=Depends(require_admin)) -> JSONResponse:
    """ADMIN: Remove a project."""
    project = get_by_slug(Project, slug, "Project")
    project.delete()
    return success_response(None, "Project deleted successfully")
