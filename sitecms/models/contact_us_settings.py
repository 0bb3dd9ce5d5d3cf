from mongoengine import BooleanField, EmailField, EmbeddedDocumentField, IntField, ListField, StringField

from sitecms.models.base import BaseEmbeddedDocument, SingletonDocument, ensure_unique
from sitecms.utils.base.fields import PHONE_PATTERN


class HeadOffice(BaseEmbeddedDocument):
    unique_key = StringField(required=True, null=False)
    office_name = StringField(required=True, null=False, max_length=200)
    office_address = StringField(required=True, null=False, max_length=500)
    office_email = EmailField(required=True, null=False)
    office_mobile = StringField(required=True, null=False, regex=PHONE_PATTERN)


class ContactFormField(BaseEmbeddedDocument):
    """Embedded: presentation and requiredness of one contact-form input."""
    enabled = BooleanField(required=True, null=False, default=True)
    mandatory = BooleanField(required=True, null=False, default=True)
    label = StringField(required=False, null=True)
    placeholder = StringField(required=False, null=True)
    type = StringField(required=True, null=False, default="text", choices=("text", "email", "tel", "textarea"))
    rows = IntField(required=False, null=True, min_value=3, max_value=10)


def _form_field(label: str, placeholder: str, type: str = "text", enabled: bool = True, mandatory: bool = True, **extra):
    return lambda: ContactFormField(
        enabled=enabled,
        mandatory=mandatory,
        label=label,
        placeholder=placeholder,
        type=type,
        **extra,
    )


class ContactFormFields(BaseEmbeddedDocument):
    name = EmbeddedDocumentField(ContactFormField, default=_form_field("Name", "Enter your name"))
    email = EmbeddedDocumentField(ContactFormField, default=_form_field("Email", "Enter your email", type="email"))
    phone = EmbeddedDocumentField(ContactFormField, default=_form_field("Phone", "Enter your phone number", type="tel"))
    subject = EmbeddedDocumentField(ContactFormField, default=_form_field("Subject", "Enter subject", mandatory=False))
    message = EmbeddedDocumentField(
        ContactFormField,
        default=_form_field("Message", "Enter your message", type="textarea", rows=5),
    )
    company = EmbeddedDocumentField(
        ContactFormField,
        default=_form_field("Company", "Enter your company name", enabled=False, mandatory=False),
    )


class ContactUsSettings(SingletonDocument):
    """Contact page content and contact-form configuration.

    Fields:
    - hero_description/email/email_message/address (str)
    - head_office_details (list[HeadOffice]): keyed by unique_key
    - contact_us_form_fields (ContactFormFields)
    - google_map_pin_link (str)
    - is_active (bool)
    """
    hero_description = StringField(required=True, null=False, max_length=500)
    email = EmailField(required=True, null=False)
    email_message = StringField(required=False, null=True, max_length=300)
    address = StringField(required=True, null=False, max_length=500)
    head_office_details = ListField(EmbeddedDocumentField(HeadOffice), null=False, default=list)
    contact_us_form_fields = EmbeddedDocumentField(ContactFormFields, null=False, default=ContactFormFields)
    google_map_pin_link = StringField(required=False, null=True, regex=r"(?i)^https://(www\.)?google\.com/maps/.+")
    is_active = BooleanField(required=True, null=False, default=True)

    meta = {
        "collection": "contact_us_settings",
    }

    def clean(self):
        if self.email:
            self.email = self.email.strip().lower()
        ensure_unique(self.head_office_details, "unique_key", "Office unique keys must be unique")

    def enabled_form_fields(self) -> dict:
        form = self.contact_us_form_fields or ContactFormFields()
        return {
            name: self._sanitize_value(getattr(form, name))
            for name in form._fields_ordered
            if getattr(form, name) is not None and getattr(form, name).enabled
        }

    def mandatory_form_fields(self) -> list[str]:
        form = self.contact_us_form_fields or ContactFormFields()
        return [
            name for name in form._fields_ordered
            if getattr(form, name) is not None and getattr(form, name).enabled and getattr(form, name).mandatory
        ]
