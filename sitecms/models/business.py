from mongoengine import (
    BooleanField,
    EmbeddedDocumentField,
    ListField,
    ObjectIdField,
    StringField,
)

from sitecms.models.base import BaseDocument, BaseEmbeddedDocument, ImageAsset, ensure_unique
from sitecms.services.identifiers import BUSINESS_PREFIX, generate_code, slugify
from sitecms.utils.base.fields import SLUG_PATTERN


class BusinessGalleryImage(BaseEmbeddedDocument):
    image_title = StringField(required=True, null=False, max_length=100)
    image_src = EmbeddedDocumentField(ImageAsset, required=True, null=False)


class BusinessStat(BaseEmbeddedDocument):
    """Embedded: headline statistic, keyed by `unique_key` within the business."""
    unique_key = StringField(required=True, null=False)
    title = StringField(required=True, null=False, max_length=100)
    stat_value = StringField(required=True, null=False, max_length=50)


class CallToActionSection(BaseEmbeddedDocument):
    title = StringField(required=False, null=True, max_length=150)
    description = StringField(required=False, null=True, max_length=500)
    button_title = StringField(required=False, null=True, max_length=50)
    is_active = BooleanField(required=True, null=False, default=True)


class Business(BaseDocument):
    """Business line presented on the website.

    Fields:
    - business_id (str, unique): Generated BUS code
    - slug (str, unique): URL key, derived from business_title when absent
    - business_title/overview/description/tagline (str)
    - cta_title/cta_href (str)
    - business_gallery (list[BusinessGalleryImage])
    - business_testimonials/project_details (list[ObjectId]): soft references
    - project_types (list[str])
    - hero_image/featured_image (ImageAsset)
    - business_stats (list[BusinessStat])
    - call_to_action_section (CallToActionSection)
    """
    business_id = StringField(required=True, null=False, unique=True)
    slug = StringField(required=True, null=False, unique=True, regex=SLUG_PATTERN)
    business_title = StringField(required=True, null=False, max_length=150)
    business_overview = StringField(required=True, null=False, max_length=700)
    business_description = StringField(required=True, null=False)
    business_tagline = StringField(required=False, null=True, max_length=200)
    cta_title = StringField(required=False, null=True, max_length=100)
    cta_href = StringField(required=False, null=True)

    business_gallery = ListField(EmbeddedDocumentField(BusinessGalleryImage), null=False, default=list)
    business_testimonials = ListField(ObjectIdField(), null=False, default=list)
    project_types = ListField(StringField(), null=False, default=list)
    project_details = ListField(ObjectIdField(), null=False, default=list)

    hero_image = EmbeddedDocumentField(ImageAsset, required=True, null=False)
    featured_image = EmbeddedDocumentField(ImageAsset, required=True, null=False)
    business_stats = ListField(EmbeddedDocumentField(BusinessStat), null=False, default=list)
    call_to_action_section = EmbeddedDocumentField(CallToActionSection, required=False, null=True)

    meta = {
        "collection": "businesses",
        "indexes": [
            {"fields": ["project_types"]},
            {"fields": ["-created_at"]},
        ],
    }

    def clean(self):
        if not self.business_id:
            self.business_id = generate_code(BUSINESS_PREFIX)
        if not self.slug and self.business_title:
            self.slug = slugify(self.business_title)
        ensure_unique(self.business_stats, "unique_key", "All business stat unique keys must be unique")
