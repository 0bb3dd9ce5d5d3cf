"""Create-if-absent lifecycle shared by the site settings documents.

Each settings kind is either Absent or Present. `create` only moves
Absent -> Present, `update`/`delete` only act on the Present instance and
never need an identifier.

Updates follow an explicit per-field merge policy:
- REPLACE (default): the supplied value replaces the stored one, arrays included.
- SHALLOW: a supplied object is merged over the stored object one level deep.
- KEYED: a supplied object of named sub-configs is merged sub-config by
  sub-config; names the document does not already hold are ignored.

`create` applies the SHALLOW and KEYED policies over the field defaults.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Iterable, TypeVar

from mongoengine import EmbeddedDocument, NotUniqueError

from sitecms.connections.media import MediaStore
from sitecms.models.base import SingletonDocument
from sitecms.services.media import release_assets
from sitecms.utils.base import MergePolicy
from sitecms.utils.base.errors import Conflict, NotFound


logger = logging.getLogger(__name__)

TDocument = TypeVar("TDocument", bound=SingletonDocument)

PROTECTED_FIELDS = frozenset({"id", "singleton_key", "created_at", "updated_at"})


def _as_dict(value: Any) -> dict[str, Any]:
    if isinstance(value, EmbeddedDocument):
        return value.to_mongo().to_dict()
    if isinstance(value, dict):
        return dict(value)
    return {}


def merge_value(policy: MergePolicy, current: Any, incoming: Any) -> Any:
    """Combine a stored value with an update according to `policy`."""
    if policy is MergePolicy.REPLACE or not isinstance(incoming, dict):
        return incoming

    merged = _as_dict(current)
    if policy is MergePolicy.SHALLOW:
        return {**merged, **incoming}

    for name, sub_config in incoming.items():
        existing = merged.get(name)
        if existing and isinstance(sub_config, dict):
            merged[name] = {**_as_dict(existing), **sub_config}
    return merged


class SingletonRegistry(Generic[TDocument]):
    """Lifecycle of one singleton document kind.

    Hooks:
    - check_references(payload): validates soft references before a write
    - stale_assets(document, payload): media ids an update will orphan
    - owned_assets(document): media ids to release when the document goes away
    - render(document): API representation
    """

    def __init__(
        self,
        document: type[TDocument],
        label: str,
        merge_policies: dict[str, MergePolicy] | None = None,
        check_references: Callable[[dict[str, Any]], None] | None = None,
        stale_assets: Callable[[TDocument, dict[str, Any]], Iterable[str]] | None = None,
        owned_assets: Callable[[TDocument], Iterable[str]] | None = None,
        render: Callable[[TDocument], dict[str, Any]] | None = None,
    ) -> None:
        self.document = document
        self.label = label
        self.merge_policies = merge_policies or {}
        self.check_references = check_references
        self.stale_assets = stale_assets
        self.owned_assets = owned_assets
        self._render = render

    def render(self, document: TDocument) -> dict[str, Any]:
        if self._render:
            return self._render(document)
        return document.to_output()

    def _current(self) -> TDocument | None:
        return self.document.objects.first()

    @staticmethod
    def _assign(document: TDocument, key: str, value: Any) -> None:
        field = document._fields[key]
        setattr(document, key, None if value is None else field.to_python(value))

    def create(self, payload: dict[str, Any]) -> TDocument:
        already_exists = f"{self.label} already exist. Please use update endpoint."
        if self._current():
            raise Conflict(already_exists)
        if self.check_references:
            self.check_references(payload)

        fields = {k: v for k, v in payload.items() if k not in PROTECTED_FIELDS}
        document = self.document(
            **{k: v for k, v in fields.items() if self.merge_policies.get(k, MergePolicy.REPLACE) is MergePolicy.REPLACE}
        )
        # Merged fields start from the document defaults.
        for key, policy in self.merge_policies.items():
            if key in fields:
                self._assign(document, key, merge_value(policy, getattr(document, key), fields[key]))
        try:
            document.save()
        except NotUniqueError:
            # Lost a creation race; the unique singleton_key index decided.
            raise Conflict(already_exists)
        return document

    def read(self) -> TDocument:
        document = self._current()
        if not document:
            raise NotFound(f"{self.label} not found")
        return document

    def update(self, payload: dict[str, Any], media: MediaStore | None = None) -> TDocument:
        document = self._current()
        if not document:
            raise NotFound(f"{self.label} not found. Please create settings first.")
        if self.check_references:
            self.check_references(payload)

        if self.stale_assets:
            release_assets(media, self.stale_assets(document, payload))

        for key, value in payload.items():
            field = document._fields.get(key)
            if field is None or key in PROTECTED_FIELDS:
                continue
            policy = self.merge_policies.get(key, MergePolicy.REPLACE)
            self._assign(document, key, merge_value(policy, getattr(document, key), value))

        document.save()
        return document

    def delete(self, media: MediaStore | None = None) -> None:
        document = self._current()
        if not document:
            raise NotFound(f"{self.label} not found")

        if self.owned_assets:
            release_assets(media, self.owned_assets(document))
        document.delete()
        logger.info("%s deleted", self.label)
