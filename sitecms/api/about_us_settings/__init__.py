from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from sitecms.models.about_us_settings import MAX_VALUES, MIN_HISTORY_YEAR
from sitecms.services.auth import require_admin
from sitecms.services.site_settings import about_us_settings
from sitecms.utils.base.fields import ObjectIdStr
from sitecms.utils.base.response import success_response
from sitecms.utils.base.schemas import ImageBody


router = APIRouter()


class ValueBody(BaseModel):
    unique_key: str = Field(min_length=1)
    title: str = Field(max_length=100)
    description: str = Field(max_length=500)


class HistoryBody(BaseModel):
    year: int = Field(ge=MIN_HISTORY_YEAR)
    title: str = Field(max_length=100)
    description: str = Field(max_length=500)


class StatisticBody(BaseModel):
    unique_key: str = Field(min_length=1)
    title: str = Field(max_length=100)
    stat_value: str = Field(max_length=50)


class LeaderBody(BaseModel):
    unique_key: str = Field(min_length=1)
    name: str = Field(max_length=100)
    designation: str = Field(max_length=100)
    profile_image: ImageBody


class CreateAboutUsSettingsBody(BaseModel):
    hero_description: str = Field(max_length=500)
    mission_statement: str = Field(max_length=200)
    mission_description: str = Field(max_length=1000)
    values: list[ValueBody] = Field([], max_length=MAX_VALUES)
    history: list[HistoryBody] = []
    company_statistics: list[StatisticBody] = []
    leadership_details: list[LeaderBody] = []
    featured_testimonial: ObjectIdStr | None = None


class UpdateAboutUsSettingsBody(BaseModel):
    hero_description: str | None = Field(None, max_length=500)
    mission_statement: str | None = Field(None, max_length=200)
    mission_description: str | None = Field(None, max_length=1000)
    values: list[ValueBody] | None = Field(None, max_length=MAX_VALUES)
    history: list[HistoryBody] | None = None
    company_statistics: list[StatisticBody] | None = None
    leadership_details: list[LeaderBody] | None = None
    featured_testimonial: ObjectIdStr | None = None


@router.post("")
def create(body: CreateAboutUsSettingsBody, _=Depends(require_admin)) -> JSONResponse:
    """ADMIN: Create the about page settings."""
    document = about_us_settings.create(body.model_dump(exclude_none=True))
    return success_response(about_us_settings.render(document), "About us settings created successfully", status_code=201)


@router.get("")
def read() -> JSONResponse:
    """PUBLIC: About page settings with the featured testimonial resolved."""
    document = about_us_settings.read()
    return success_response(about_us_settings.render(document), "About us settings retrieved successfully")


@router.put("")
def update(body: UpdateAboutUsSettingsBody, _=Depends(require_admin)) -> JSONResponse:
    """ADMIN: Partial update; list fields are replaced wholesale."""
    document = about_us_settings.update(body.model_dump(exclude_unset=True))
    return success_response(about_us_settings.render(document), "About us settings updated successfully")


@router.delete("")
def delete(_=Depends(require_admin)) -> JSONResponse:
    """ADMIN: Remove the about page settings."""
    about_us_settings.delete()
    return success_response(None, "About us settings deleted successfully")
