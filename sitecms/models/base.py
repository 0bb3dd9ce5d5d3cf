from datetime import datetime, timezone
from typing import Any, Iterable
from bson.objectid import ObjectId
from mongoengine import Document, DateTimeField, EmbeddedDocument, StringField, ValidationError


SINGLETON_KEY = "singleton"


class BaseDocumentMixin:
    def _sanitize_value(self, value: Any) -> Any:
        if isinstance(value, Document):
            return value.to_output() if hasattr(value, "to_output") else str(value.id)
        elif isinstance(value, EmbeddedDocument):
            value = {k: self._sanitize_value(getattr(value, k)) for k in value._fields}
        if isinstance(value, list):
            return [self._sanitize_value(v) for v in value]
        if isinstance(value, dict):
            return {k: self._sanitize_value(v) for k, v in value.items()}
        if isinstance(value, datetime):
            return value.isoformat()
        if isinstance(value, ObjectId):
            return str(value)
        return value

    def to_output(self, fields=None, exclude=None):
        data: dict[str, Any] = {}
        exclude = exclude or []
        fields = fields or self._fields.keys()

        for field in fields:
            if field in exclude or field == "id":
                continue
            value = getattr(self, field)
            data[field] = self._sanitize_value(value)

        data["id"] = str(self.id)
        return data


class BaseEmbeddedDocument(EmbeddedDocument, BaseDocumentMixin):
    meta = {
        "abstract": True,
    }


class BaseDocument(Document, BaseDocumentMixin):
    created_at = DateTimeField(default=lambda: datetime.now(timezone.utc), null=False)
    updated_at = DateTimeField(default=lambda: datetime.now(timezone.utc), null=False)

    meta = {
        "abstract": True,
    }

    def save(self, *args, **kwargs):
        self.updated_at = datetime.now(timezone.utc)
        return super().save(*args, **kwargs)


class SingletonDocument(BaseDocument):
    """Document kind of which at most one instance may exist.

    The constant `singleton_key` carries a unique index, so a second insert
    fails at the store even when two creations race past the existence check.
    """
    singleton_key = StringField(required=True, null=False, default=SINGLETON_KEY, unique=True)

    meta = {
        "abstract": True,
    }

    def to_output(self, fields=None, exclude=None):
        exclude = list(exclude or []) + ["singleton_key"]
        return super().to_output(fields=fields, exclude=exclude)


class ImageAsset(BaseEmbeddedDocument):
    """Embedded: a media-store asset reference (delivery url + public_id)."""
    url = StringField(required=True, null=False)
    public_id = StringField(required=True, null=False)


class OptionalImageAsset(BaseEmbeddedDocument):
    url = StringField(required=False, null=True)
    public_id = StringField(required=False, null=True)


def ensure_unique(items: Iterable[Any] | None, attr: str, message: str) -> None:
    """Raise a ValidationError when two list entries share the same `attr`."""
    keys = [getattr(item, attr) for item in (items or [])]
    if len(keys) != len(set(keys)):
        raise ValidationError(message)


def ensure_max_items(items: list | None, limit: int, message: str) -> None:
    if items and len(items) > limit:
        raise ValidationError(message)
