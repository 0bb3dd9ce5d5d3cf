from mongoengine import EmbeddedDocumentField, IntField, ListField, StringField

from sitecms.models.base import BaseDocument, BaseEmbeddedDocument, ImageAsset, ensure_unique
from sitecms.services.identifiers import PROJECT_PREFIX, generate_code, slugify
from sitecms.utils.base.fields import SLUG_PATTERN


class ProjectImage(BaseEmbeddedDocument):
    """Embedded: gallery image; `ranking` orders images and is unique per project."""
    ranking = IntField(required=True, null=False, min_value=1)
    url = StringField(required=True, null=False)
    public_id = StringField(required=True, null=False)


class ProjectDetail(BaseEmbeddedDocument):
    image = EmbeddedDocumentField(ImageAsset, required=True, null=False)
    title = StringField(required=True, null=False, max_length=150)
    description = StringField(required=True, null=False)


class ProjectDocument(BaseEmbeddedDocument):
    """Embedded: downloadable document (brochure, floor plan...)."""
    image = EmbeddedDocumentField(ImageAsset, required=True, null=False)
    title = StringField(required=True, null=False, max_length=150)
    description = StringField(required=True, null=False, max_length=500)
    file_name = StringField(required=True, null=False)
    file_link = EmbeddedDocumentField(ImageAsset, required=True, null=False)
    button_title = StringField(required=False, null=True, default="Download", max_length=50)
    download_message = StringField(required=False, null=True, max_length=200)


class Project(BaseDocument):
    """Project delivered under a business.

    Fields:
    - project_id (str, unique): Generated PRJ code, immutable
    - business_name_slug (str): Soft reference to Business.slug
    - project_name/description/type (str)
    - project_features (list[str])
    - project_images (list[ProjectImage])
    - slug (str, unique): URL key, derived from project_name when absent
    - hero_image (ImageAsset), project_detail (ProjectDetail)
    - project_document (list[ProjectDocument])
    """
    project_id = StringField(required=True, null=False, unique=True)
    business_name_slug = StringField(required=True, null=False)
    project_name = StringField(required=True, null=False, max_length=150)
    project_description = StringField(required=True, null=False)
    project_type = StringField(required=True, null=False)
    project_features = ListField(StringField(), null=False, default=list)
    project_images = ListField(EmbeddedDocumentField(ProjectImage), null=False, default=list)
    slug = StringField(required=True, null=False, unique=True, regex=SLUG_PATTERN)
    hero_image = EmbeddedDocumentField(ImageAsset, required=True, null=False)
    project_detail = EmbeddedDocumentField(ProjectDetail, required=True, null=False)
    project_document = ListField(EmbeddedDocumentField(ProjectDocument), null=False, default=list)

    meta = {
        "collection": "projects",
        "indexes": [
            {"fields": ["business_name_slug"]},
            {"fields": ["project_type"]},
            {"fields": ["-created_at"]},
        ],
    }

    def clean(self):
        if not self.project_id:
            self.project_id = generate_code(PROJECT_PREFIX)
        if self.business_name_slug:
            self.business_name_slug = self.business_name_slug.strip().lower()
        if not self.slug and self.project_name:
            self.slug = slugify(self.project_name)
        ensure_unique(self.project_images, "ranking", "All image rankings must be unique")
