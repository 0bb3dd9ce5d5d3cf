from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, EmailStr, Field

from sitecms.connections.media import MediaStore, get_media_store
from sitecms.services.auth import require_admin
from sitecms.services.site_settings import website_settings
from sitecms.utils.base.fields import Phone
from sitecms.utils.base.response import success_response
from sitecms.utils.base.schemas import ImageBody, OptionalImageBody


router = APIRouter()


class AddressBody(BaseModel):
    street: str
    city: str
    state: str
    pincode: str = Field(pattern=r"^\d{6}$")
    country: str = "India"


class BusinessInfoBody(BaseModel):
    name: str = Field(max_length=200)
    address: AddressBody
    phone: Phone
    email: EmailStr


class BusinessInfoPatch(BaseModel):
    name: str | None = Field(None, max_length=200)
    address: AddressBody | None = None
    phone: Phone | None = None
    email: EmailStr | None = None


class SocialMediaBody(BaseModel):
    facebook: str | None = None
    instagram: str | None = None
    twitter: str | None = None
    linkedin: str | None = None
    youtube: str | None = None
    whatsapp: Phone | None = None


class SeoBody(BaseModel):
    meta_title: str | None = Field(None, max_length=60)
    meta_description: str | None = Field(None, max_length=160)
    meta_keywords: list[str] | None = None


class CreateWebsiteSettingsBody(BaseModel):
    title: str = Field(max_length=100)
    tagline: str | None = Field(None, max_length=200)
    description: str | None = Field(None, max_length=500)
    logo: ImageBody
    favicon: OptionalImageBody | None = None
    business_info: BusinessInfoBody
    social_media: SocialMediaBody | None = None
    seo: SeoBody | None = None
    copyright: str | None = None
    is_active: bool | None = None


class UpdateWebsiteSettingsBody(BaseModel):
    title: str | None = Field(None, max_length=100)
    tagline: str | None = Field(None, max_length=200)
    description: str | None = Field(None, max_length=500)
    logo: OptionalImageBody | None = None
    favicon: OptionalImageBody | None = None
    business_info: BusinessInfoPatch | None = None
    social_media: SocialMediaBody | None = None
    seo: SeoBody | None = None
    copyright: str | None = None
    is_active: bool | None = None


@router.post("/settings")
def create(body: CreateWebsiteSettingsBody, _=Depends(require_admin)) -> JSONResponse:
    """ADMIN: Create the website settings; only one may exist."""
    document = website_settings.create(body.model_dump(exclude_none=True))
    return success_response(website_settings.render(document), "Website settings created successfully", status_code=201)


@router.get("/settings")
def read() -> JSONResponse:
    """PUBLIC: Website identity, contact info, social links and SEO."""
    document = website_settings.read()
    return success_response(website_settings.render(document), "Website settings retrieved successfully")


@router.put("/settings")
def update(
    body: UpdateWebsiteSettingsBody,
    _=Depends(require_admin),
    media: MediaStore = Depends(get_media_store),
) -> JSONResponse:
    """ADMIN: Partial update; nested objects merge, a replaced logo/favicon is released."""
    document = website_settings.update(body.model_dump(exclude_unset=True), media=media)
    return success_response(website_settings.render(document), "Website settings updated successfully")


@router.delete("/settings")
def delete(_=Depends(require_admin), media: MediaStore = Depends(get_media_store)) -> JSONResponse:
    """ADMIN: Remove the website settings and release logo and favicon."""
    website_settings.delete(media=media)
    return success_response(None, "Website settings deleted successfully")
