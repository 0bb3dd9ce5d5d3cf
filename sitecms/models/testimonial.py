from mongoengine import EmbeddedDocumentField, StringField

from sitecms.models.base import BaseDocument, OptionalImageAsset
from sitecms.services.identifiers import TESTIMONIAL_PREFIX, generate_code


class Testimonial(BaseDocument):
    """Client testimonial, optionally tied to a project and/or business by slug.

    Fields:
    - testimonial_id (str, unique): Generated TST code, immutable
    - project_slug/business_slug (str|None): Soft references
    - name (str), message (str)
    - image (OptionalImageAsset)
    """
    testimonial_id = StringField(required=True, null=False, unique=True)
    project_slug = StringField(required=False, null=True)
    business_slug = StringField(required=False, null=True)
    name = StringField(required=True, null=False, max_length=100)
    image = EmbeddedDocumentField(OptionalImageAsset, required=False, null=True)
    message = StringField(required=True, null=False, max_length=1000)

    meta = {
        "collection": "testimonials",
        "indexes": [
            {"fields": ["project_slug"]},
            {"fields": ["business_slug"]},
            {"fields": ["-created_at"]},
        ],
    }

    def clean(self):
        if not self.testimonial_id:
            self.testimonial_id = generate_code(TESTIMONIAL_PREFIX)
        if self.project_slug:
            self.project_slug = self.project_slug.strip().lower()
        if self.business_slug:
            self.business_slug = self.business_slug.strip().lower()
