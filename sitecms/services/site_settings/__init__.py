"""The four site settings documents wired to `SingletonRegistry`."""
from __future__ import annotations

from typing import Any

from sitecms.models.about_us_settings import AboutUsSettings
from sitecms.models.contact_us_settings import ContactUsSettings
from sitecms.models.home_settings import HomeSettings
from sitecms.models.project import Project
from sitecms.models.testimonial import Testimonial
from sitecms.models.website_settings import WebsiteSettings
from sitecms.services.content import require_ids, resolve_id, resolve_ids
from sitecms.services.singleton import SingletonRegistry
from sitecms.utils.base import MergePolicy


def _replaced_asset(current: Any, incoming: Any) -> str | None:
    """public_id of `current` when `incoming` names a different asset."""
    if not current or not current.public_id or not isinstance(incoming, dict):
        return None
    new_id = incoming.get("public_id")
    if new_id and new_id != current.public_id:
        return current.public_id
    return None


# Website

def website_stale_assets(document: WebsiteSettings, payload: dict[str, Any]) -> list[str]:
    stale = [
        _replaced_asset(document.logo, payload.get("logo")),
        _replaced_asset(document.favicon, payload.get("favicon")),
    ]
    return [public_id for public_id in stale if public_id]


def website_owned_assets(document: WebsiteSettings) -> list[str]:
    return [asset.public_id for asset in (document.logo, document.favicon) if asset and asset.public_id]


website_settings = SingletonRegistry(
    WebsiteSettings,
    "Website settings",
    merge_policies={
        "logo": MergePolicy.SHALLOW,
        "favicon": MergePolicy.SHALLOW,
        "business_info": MergePolicy.SHALLOW,
        "social_media": MergePolicy.SHALLOW,
        "seo": MergePolicy.SHALLOW,
    },
    stale_assets=website_stale_assets,
    owned_assets=website_owned_assets,
)


# Home

def home_stale_assets(document: HomeSettings, payload: dict[str, Any]) -> list[str]:
    """Images of features that the new list drops or re-images."""
    incoming = payload.get("features")
    if not isinstance(incoming, list):
        return []

    incoming_by_key = {item.get("key"): item for item in incoming if isinstance(item, dict)}
    stale = []
    for feature in document.features or []:
        if not feature.image or not feature.image.public_id:
            continue
        replacement = incoming_by_key.get(feature.key)
        if replacement is None:
            stale.append(feature.image.public_id)
        elif _replaced_asset(feature.image, replacement.get("image")):
            stale.append(feature.image.public_id)
    return stale


def home_owned_assets(document: HomeSettings) -> list[str]:
    return document.asset_ids()


def check_home_references(payload: dict[str, Any]) -> None:
    if payload.get("featured_projects"):
        require_ids(Project, payload["featured_projects"], "featured projects")
    if payload.get("top_testimonial"):
        require_ids(Testimonial, [payload["top_testimonial"]], "top testimonial")


def render_home(document: HomeSettings) -> dict[str, Any]:
    data = document.to_output()
    data["featured_projects"] = resolve_ids(Project, document.featured_projects)
    data["top_testimonial"] = resolve_id(Testimonial, document.top_testimonial)
    return data


home_settings = SingletonRegistry(
    HomeSettings,
    "Home settings",
    check_references=check_home_references,
    stale_assets=home_stale_assets,
    owned_assets=home_owned_assets,
    render=render_home,
)


# Contact us

contact_us_settings = SingletonRegistry(
    ContactUsSettings,
    "Contact us settings",
    merge_policies={"contact_us_form_fields": MergePolicy.KEYED},
)


def contact_form_config(document: ContactUsSettings) -> dict[str, Any]:
    return {
        "fields": document.enabled_form_fields(),
        "mandatory_fields": document.mandatory_form_fields(),
    }


# About us

def check_about_references(payload: dict[str, Any]) -> None:
    if payload.get("featured_testimonial"):
        require_ids(Testimonial, [payload["featured_testimonial"]], "featured testimonial")


def render_about(document: AboutUsSettings) -> dict[str, Any]:
    data = document.to_output()
    data["featured_testimonial"] = resolve_id(Testimonial, document.featured_testimonial)
    return data


about_us_settings = SingletonRegistry(
    AboutUsSettings,
    "About us settings",
    check_references=check_about_references,
    render=render_about,
)
