from mongoengine import BooleanField, EmbeddedDocumentField, IntField, StringField

from sitecms.models.base import BaseDocument, ImageAsset
from sitecms.services.identifiers import GALLERY_PREFIX, generate_code


class Gallery(BaseDocument):
    """Gallery image entry.

    Fields:
    - gallery_id (str, unique): Generated GAL code, immutable
    - image (ImageAsset)
    - title/description/alt_text/category (str)
    - tag (str): Stored lowercase
    - width/height/file_size (int), format (str, uppercase)
    - is_active (bool)
    """
    gallery_id = StringField(required=True, null=False, unique=True)
    image = EmbeddedDocumentField(ImageAsset, required=True, null=False)
    title = StringField(required=True, null=False, max_length=150)
    tag = StringField(required=False, null=True, max_length=50)
    description = StringField(required=False, null=True, max_length=500)
    alt_text = StringField(required=False, null=True, max_length=100)
    category = StringField(required=False, null=True, max_length=50)
    width = IntField(required=False, null=True, min_value=1)
    height = IntField(required=False, null=True, min_value=1)
    file_size = IntField(required=False, null=True, min_value=0)
    format = StringField(required=False, null=True)
    is_active = BooleanField(required=True, null=False, default=True)

    meta = {
        "collection": "gallery",
        "indexes": [
            {"fields": ["tag"]},
            {"fields": ["category"]},
            {"fields": ["is_active"]},
            {"fields": ["-created_at"]},
        ],
    }

    def clean(self):
        if not self.gallery_id:
            self.gallery_id = generate_code(GALLERY_PREFIX)
        if self.tag:
            self.tag = self.tag.strip().lower()
        if self.format:
            self.format = self.format.strip().upper()
