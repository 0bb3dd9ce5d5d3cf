from mongoengine import BooleanField, EmbeddedDocumentField, ListField, ObjectIdField, StringField

from sitecms.models.base import (
    BaseEmbeddedDocument,
    ImageAsset,
    SingletonDocument,
    ensure_max_items,
    ensure_unique,
)


MAX_FEATURES = 3
MAX_METRICS = 3


class HomeFeature(BaseEmbeddedDocument):
    """Embedded: feature card, keyed by `key`; its image lives in the media store."""
    key = StringField(required=True, null=False)
    title = StringField(required=True, null=False, max_length=100)
    description = StringField(required=True, null=False, max_length=300)
    image = EmbeddedDocumentField(ImageAsset, required=True, null=False)


class HomeMetric(BaseEmbeddedDocument):
    key = StringField(required=True, null=False)
    title = StringField(required=True, null=False, max_length=100)
    metric_value = StringField(required=True, null=False, max_length=50)


class HomeSettings(SingletonDocument):
    """Landing page content.

    Fields:
    - hero_title/hero_description (str)
    - featured_projects (list[ObjectId]): Soft references to Project
    - feature_title/feature_description (str), features (list[HomeFeature], max 3)
    - legacy_title/legacy_description/legacy_award_title/legacy_award_years (str)
    - top_testimonial (ObjectId|None): Soft reference to Testimonial
    - metrics (list[HomeMetric], max 3)
    - is_active (bool)
    """
    hero_title = StringField(required=True, null=False, max_length=200)
    hero_description = StringField(required=True, null=False, max_length=500)
    featured_projects = ListField(ObjectIdField(), null=False, default=list)

    feature_title = StringField(required=True, null=False, max_length=200)
    feature_description = StringField(required=True, null=False, max_length=500)
    features = ListField(EmbeddedDocumentField(HomeFeature), null=False, default=list)

    legacy_title = StringField(required=True, null=False, max_length=200)
    legacy_description = StringField(required=True, null=False, max_length=1000)
    legacy_award_title = StringField(required=False, null=True, max_length=100)
    legacy_award_years = StringField(required=False, null=True, max_length=50)

    top_testimonial = ObjectIdField(required=False, null=True)
    metrics = ListField(EmbeddedDocumentField(HomeMetric), null=False, default=list)
    is_active = BooleanField(required=True, null=False, default=True)

    meta = {
        "collection": "home_settings",
    }

    def clean(self):
        ensure_max_items(self.features, MAX_FEATURES, f"Features array cannot have more than {MAX_FEATURES} items")
        ensure_max_items(self.metrics, MAX_METRICS, f"Metrics array cannot have more than {MAX_METRICS} items")
        ensure_unique(self.features, "key", "Feature keys must be unique")
        ensure_unique(self.metrics, "key", "Metric keys must be unique")

    def asset_ids(self) -> list[str]:
        return [f.image.public_id for f in self.features or [] if f.image and f.image.public_id]
