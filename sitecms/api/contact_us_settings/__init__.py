from typing import Literal

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, EmailStr, Field

from sitecms.services.auth import require_admin
from sitecms.services.site_settings import contact_form_config, contact_us_settings
from sitecms.utils.base.fields import Phone
from sitecms.utils.base.response import success_response


router = APIRouter()


class HeadOfficeBody(BaseModel):
    unique_key: str = Field(min_length=1)
    office_name: str = Field(max_length=200)
    office_address: str = Field(max_length=500)
    office_email: EmailStr
    office_mobile: Phone


class FormFieldBody(BaseModel):
    enabled: bool | None = None
    mandatory: bool | None = None
    label: str | None = None
    placeholder: str | None = None
    type: Literal["text", "email", "tel", "textarea"] | None = None
    rows: int | None = Field(None, ge=3, le=10)


class FormFieldsBody(BaseModel):
    name: FormFieldBody | None = None
    email: FormFieldBody | None = None
    phone: FormFieldBody | None = None
    subject: FormFieldBody | None = None
    message: FormFieldBody | None = None
    company: FormFieldBody | None = None


class CreateContactUsSettingsBody(BaseModel):
    hero_description: str = Field(max_length=500)
    email: EmailStr
    email_message: str | None = Field(None, max_length=300)
    address: str = Field(max_length=500)
    head_office_details: list[HeadOfficeBody] = []
    contact_us_form_fields: FormFieldsBody | None = None
    google_map_pin_link: str | None = None
    is_active: bool | None = None


class UpdateContactUsSettingsBody(BaseModel):
    hero_description: str | None = Field(None, max_length=500)
    email: EmailStr | None = None
    email_message: str | None = Field(None, max_length=300)
    address: str | None = Field(None, max_length=500)
    head_office_details: list[HeadOfficeBody] | None = None
    contact_us_form_fields: FormFieldsBody | None = None
    google_map_pin_link: str | None = None
    is_active: bool | None = None


@router.post("")
def create(body: CreateContactUsSettingsBody, _=Depends(require_admin)) -> JSONResponse:
    """ADMIN: Create the contact page settings; supplied form field configs merge over the defaults."""
    document = contact_us_settings.create(body.model_dump(exclude_none=True))
    return success_response(contact_us_settings.render(document), "Contact us settings created successfully", status_code=201)


@router.get("")
def read() -> JSONResponse:
    """PUBLIC: Contact page settings."""
    document = contact_us_settings.read()
    return success_response(contact_us_settings.render(document), "Contact us settings retrieved successfully")


@router.get("/form-config")
def form_config() -> JSONResponse:
    """PUBLIC: Enabled contact form fields and which of them are mandatory."""
    document = contact_us_settings.read()
    return success_response(contact_form_config(document), "Form configuration retrieved successfully")


@router.put("")
def update(body: UpdateContactUsSettingsBody, _=Depends(require_admin)) -> JSONResponse:
    """ADMIN: Partial update; form field configs merge per field name."""
    document = contact_us_settings.update(body.model_dump(exclude_unset=True))
    return success_response(contact_us_settings.render(document), "Contact us settings updated successfully")


@router.delete("")
def delete(_=Depends(require_admin)) -> JSONResponse:
    """ADMIN: Remove the contact page settings."""
    contact_us_settings.delete()
    return success_response(None, "Contact us settings deleted successfully")
