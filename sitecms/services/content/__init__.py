"""Helpers shared by the content collections and settings documents.

References between documents are soft: a slug or an id stored as a plain
value. They are checked when written and resolved when read; a reference
whose target has since been deleted simply resolves to nothing.
"""
from __future__ import annotations

from typing import Any, Iterable, Type

from bson import ObjectId
from mongoengine import Document

from sitecms.models.business import Business
from sitecms.models.project import Project
from sitecms.models.testimonial import Testimonial
from sitecms.utils.base.errors import NotFound
from sitecms.utils.base.fields import parse_object_id


def assign(document: Document, payload: dict[str, Any], immutable: Iterable[str] = ()) -> Document:
    """Replace each supplied top-level field; identity fields are skipped."""
    skip = {"id", "created_at", "updated_at", *immutable}
    for key, value in payload.items():
        field = document._fields.get(key)
        if field is None or key in skip:
            continue
        setattr(document, key, None if value is None else field.to_python(value))
    return document


def get_by_id(model: Type[Document], id: str, label: str) -> Document:
    document = model.objects(id=parse_object_id(id, label.lower())).first()
    if not document:
        raise NotFound(f"{label} not found")
    return document


def get_by_slug(model: Type[Document], slug: str, label: str) -> Document:
    document = model.objects(slug=slug.strip().lower()).first()
    if not document:
        raise NotFound(f"{label} not found")
    return document


def require_business(slug: str) -> Business:
    business = Business.objects(slug=slug.strip().lower()).first()
    if not business:
        raise NotFound("Business not found with the provided slug")
    return business


def require_project(slug: str) -> Project:
    project = Project.objects(slug=slug.strip().lower()).first()
    if not project:
        raise NotFound("Project not found with the provided slug")
    return project


def require_ids(model: Type[Document], ids: Iterable[str | ObjectId], label: str) -> None:
    """Every id must name an existing document."""
    wanted = {ObjectId(str(i)) for i in ids}
    if not wanted:
        return
    found = model.objects(id__in=list(wanted)).count()
    if found != len(wanted):
        raise NotFound(f"One or more {label} not found")


def resolve_ids(model: Type[Document], ids: Iterable[ObjectId] | None) -> list[dict[str, Any]]:
    """Outputs of the referenced documents in reference order; dangling ids are dropped."""
    ids = list(ids or [])
    if not ids:
        return []
    by_id = {doc.id: doc for doc in model.objects(id__in=ids)}
    return [by_id[i].to_output() for i in ids if i in by_id]


def resolve_id(model: Type[Document], id: ObjectId | None) -> dict[str, Any] | None:
    if not id:
        return None
    document = model.objects(id=id).first()
    return document.to_output() if document else None


def resolve_slug(model: Type[Document], slug: str | None) -> dict[str, Any] | None:
    if not slug:
        return None
    document = model.objects(slug=slug).first()
    return document.to_output() if document else None


def render_business(business: Business) -> dict[str, Any]:
    data = business.to_output()
    data["business_testimonials"] = resolve_ids(Testimonial, business.business_testimonials)
    data["project_details"] = resolve_ids(Project, business.project_details)
    return data


def render_project(project: Project) -> dict[str, Any]:
    data = project.to_output()
    data["business"] = resolve_slug(Business, project.business_name_slug)
    return data


def render_testimonial(testimonial: Testimonial) -> dict[str, Any]:
    data = testimonial.to_output()
    data["project"] = resolve_slug(Project, testimonial.project_slug)
    data["business"] = resolve_slug(Business, testimonial.business_slug)
    return data
