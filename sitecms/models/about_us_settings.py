from datetime import datetime, timezone

from mongoengine import EmbeddedDocumentField, IntField, ListField, ObjectIdField, StringField, ValidationError

from sitecms.models.base import (
    BaseEmbeddedDocument,
    ImageAsset,
    SingletonDocument,
    ensure_max_items,
    ensure_unique,
)


MAX_VALUES = 4
MIN_HISTORY_YEAR = 1900


class CompanyValue(BaseEmbeddedDocument):
    unique_key = StringField(required=True, null=False)
    title = StringField(required=True, null=False, max_length=100)
    description = StringField(required=True, null=False, max_length=500)


class HistoryEntry(BaseEmbeddedDocument):
    year = IntField(required=True, null=False, min_value=MIN_HISTORY_YEAR)
    title = StringField(required=True, null=False, max_length=100)
    description = StringField(required=True, null=False, max_length=500)


class CompanyStatistic(BaseEmbeddedDocument):
    unique_key = StringField(required=True, null=False)
    title = StringField(required=True, null=False, max_length=100)
    stat_value = StringField(required=True, null=False, max_length=50)


class Leader(BaseEmbeddedDocument):
    unique_key = StringField(required=True, null=False)
    name = StringField(required=True, null=False, max_length=100)
    designation = StringField(required=True, null=False, max_length=100)
    profile_image = EmbeddedDocumentField(ImageAsset, required=True, null=False)


class AboutUsSettings(SingletonDocument):
    """About page content.

    Fields:
    - hero_description/mission_statement/mission_description (str)
    - values (list[CompanyValue], max 4), history (list[HistoryEntry], unique years)
    - company_statistics (list[CompanyStatistic]), leadership_details (list[Leader])
    - featured_testimonial (ObjectId|None): Soft reference to Testimonial
    """
    hero_description = StringField(required=True, null=False, max_length=500)
    mission_statement = StringField(required=True, null=False, max_length=200)
    mission_description = StringField(required=True, null=False, max_length=1000)
    values = ListField(EmbeddedDocumentField(CompanyValue), null=False, default=list)
    history = ListField(EmbeddedDocumentField(HistoryEntry), null=False, default=list)
    company_statistics = ListField(EmbeddedDocumentField(CompanyStatistic), null=False, default=list)
    leadership_details = ListField(EmbeddedDocumentField(Leader), null=False, default=list)
    featured_testimonial = ObjectIdField(required=False, null=True)

    meta = {
        "collection": "about_us_settings",
    }

    def clean(self):
        ensure_max_items(self.values, MAX_VALUES, f"Maximum {MAX_VALUES} values are allowed")
        ensure_unique(self.values, "unique_key", "All value unique keys must be unique")
        ensure_unique(self.history, "year", "All history years must be unique")
        ensure_unique(self.company_statistics, "unique_key", "All company statistic unique keys must be unique")
        ensure_unique(self.leadership_details, "unique_key", "All leadership unique keys must be unique")

        max_year = datetime.now(timezone.utc).year + 10
        for entry in self.history or []:
            if entry.year is not None and entry.year > max_year:
                raise ValidationError("Year cannot be more than 10 years in the future")
