from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from sitecms.connections.media import MediaStore, get_media_store
from sitecms.models.home_settings import MAX_FEATURES, MAX_METRICS
from sitecms.services.auth import require_admin
from sitecms.services.site_settings import home_settings
from sitecms.utils.base.fields import ObjectIdStr
from sitecms.utils.base.response import success_response
from sitecms.utils.base.schemas import ImageBody


router = APIRouter()


class FeatureBody(BaseModel):
    key: str = Field(min_length=1)
    title: str = Field(max_length=100)
    description: str = Field(max_length=300)
    image: ImageBody


class MetricBody(BaseModel):
    key: str = Field(min_length=1)
    title: str = Field(max_length=100)
    metric_value: str = Field(max_length=50)


class CreateHomeSettingsBody(BaseModel):
    hero_title: str = Field(max_length=200)
    hero_description: str = Field(max_length=500)
    featured_projects: list[ObjectIdStr] = []
    feature_title: str = Field(max_length=200)
    feature_description: str = Field(max_length=500)
    features: list[FeatureBody] = Field([], max_length=MAX_FEATURES)
    legacy_title: str = Field(max_length=200)
    legacy_description: str = Field(max_length=1000)
    legacy_award_title: str | None = Field(None, max_length=100)
    legacy_award_years: str | None = Field(None, max_length=50)
    top_testimonial: ObjectIdStr | None = None
    metrics: list[MetricBody] = Field([], max_length=MAX_METRICS)
    is_active: bool | None = None


class UpdateHomeSettingsBody(BaseModel):
    hero_title: str | None = Field(None, max_length=200)
    hero_description: str | None = Field(None, max_length=500)
    featured_projects: list[ObjectIdStr] | None = None
    feature_title: str | None = Field(None, max_length=200)
    feature_description: str | None = Field(None, max_length=500)
    features: list[FeatureBody] | None = Field(None, max_length=MAX_FEATURES)
    legacy_title: str | None = Field(None, max_length=200)
    legacy_description: str | None = Field(None, max_length=1000)
    legacy_award_title: str | None = Field(None, max_length=100)
    legacy_award_years: str | None = Field(None, max_length=50)
    top_testimonial: ObjectIdStr | None = None
    metrics: list[MetricBody] | None = Field(None, max_length=MAX_METRICS)
    is_active: bool | None = None


@router.post("")
def create(body: CreateHomeSettingsBody, _=Depends(require_admin)) -> JSONResponse:
    """ADMIN: Create the home page settings; referenced projects/testimonial must exist."""
    document = home_settings.create(body.model_dump(exclude_none=True))
    return success_response(home_settings.render(document), "Home settings created successfully", status_code=201)


@router.get("")
def read() -> JSONResponse:
    """PUBLIC: Home page settings with featured projects and top testimonial resolved."""
    document = home_settings.read()
    return success_response(home_settings.render(document), "Home settings retrieved successfully")


@router.put("")
def update(
    body: UpdateHomeSettingsBody,
    _=Depends(require_admin),
    media: MediaStore = Depends(get_media_store),
) -> JSONResponse:
    """ADMIN: Partial update; lists are replaced and dropped feature images released."""
    document = home_settings.update(body.model_dump(exclude_unset=True), media=media)
    return success_response(home_settings.render(document), "Home settings updated successfully")


@router.delete("")
def delete(_=Depends(require_admin), media: MediaStore = Depends(get_media_store)) -> JSONResponse:
    """ADMIN: Remove the home page settings and release every feature image."""
    home_settings.delete(media=media)
    return success_response(None, "Home settings deleted successfully")
