from mongoengine import BooleanField, EmailField, EmbeddedDocumentField, ListField, StringField

from sitecms.models.base import BaseEmbeddedDocument, ImageAsset, OptionalImageAsset, SingletonDocument
from sitecms.utils.base.fields import PHONE_PATTERN, PINCODE_PATTERN


class Address(BaseEmbeddedDocument):
    street = StringField(required=True, null=False)
    city = StringField(required=True, null=False)
    state = StringField(required=True, null=False)
    pincode = StringField(required=True, null=False, regex=PINCODE_PATTERN)
    country = StringField(required=True, null=False, default="India")


class BusinessInfo(BaseEmbeddedDocument):
    name = StringField(required=True, null=False, max_length=200)
    address = EmbeddedDocumentField(Address, required=True, null=False)
    phone = StringField(required=True, null=False, regex=PHONE_PATTERN)
    email = EmailField(required=True, null=False)


class SocialMedia(BaseEmbeddedDocument):
    facebook = StringField(required=False, null=True, regex=r"(?i)^(https?://)?(www\.)?facebook\.com/.+")
    instagram = StringField(required=False, null=True, regex=r"(?i)^(https?://)?(www\.)?instagram\.com/.+")
    twitter = StringField(required=False, null=True, regex=r"(?i)^(https?://)?(www\.)?twitter\.com/.+")
    linkedin = StringField(required=False, null=True, regex=r"(?i)^(https?://)?(www\.)?linkedin\.com/.+")
    youtube = StringField(required=False, null=True, regex=r"(?i)^(https?://)?(www\.)?youtube\.com/.+")
    whatsapp = StringField(required=False, null=True, regex=PHONE_PATTERN)


class Seo(BaseEmbeddedDocument):
    meta_title = StringField(required=False, null=True, max_length=60)
    meta_description = StringField(required=False, null=True, max_length=160)
    meta_keywords = ListField(StringField(), null=False, default=list)


class WebsiteSettings(SingletonDocument):
    """Global website identity: branding, business contact info, social links, SEO.

    Fields:
    - title/tagline/description (str)
    - logo (ImageAsset, required), favicon (OptionalImageAsset)
    - business_info (BusinessInfo)
    - social_media (SocialMedia), seo (Seo)
    - copyright (str), is_active (bool)
    """
    title = StringField(required=True, null=False, max_length=100)
    tagline = StringField(required=False, null=True, max_length=200)
    description = StringField(required=False, null=True, max_length=500)
    logo = EmbeddedDocumentField(ImageAsset, required=True, null=False)
    favicon = EmbeddedDocumentField(OptionalImageAsset, required=False, null=True)
    business_info = EmbeddedDocumentField(BusinessInfo, required=True, null=False)
    social_media = EmbeddedDocumentField(SocialMedia, required=False, null=True)
    seo = EmbeddedDocumentField(Seo, required=False, null=True)
    copyright = StringField(required=False, null=True, default="© 2025 All rights reserved")
    is_active = BooleanField(required=True, null=False, default=True)

    meta = {
        "collection": "website_settings",
    }

    def clean(self):
        if self.business_info and self.business_info.email:
            self.business_info.email = self.business_info.email.strip().lower()
