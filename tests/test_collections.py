import re
from datetime import datetime, timedelta, timezone

from bson import ObjectId
from conftest import image

from sitecms.models.gallery import Gallery
from sitecms.models.testimonial import Testimonial


def _create_business(client, headers, payload, **overrides):
    r = client.post("/api/v1/business", json={**payload, **overrides}, headers=headers)
    assert r.status_code == 201, r.json()
    return r.json()["data"]


def _create_project(client, headers, payload, **overrides):
    r = client.post("/api/v1/project", json={**payload, **overrides}, headers=headers)
    assert r.status_code == 201, r.json()
    return r.json()["data"]


# Business

def test_business_slug_and_code_are_derived(client, admin_headers, business_payload):
    data = _create_business(client, admin_headers, business_payload, business_title="Café México!")

    assert data["slug"] == "caf-mxico"
    assert re.fullmatch(r"BUS\d{9}", data["business_id"])
    assert client.get("/api/v1/business/caf-mxico").json()["data"]["business_title"] == "Café México!"


def test_duplicate_business_slug_conflicts(client, admin_headers, business_payload):
    _create_business(client, admin_headers, business_payload)

    r = client.post("/api/v1/business", json=business_payload, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Duplicate field value entered"


def test_business_stat_keys_must_be_unique(client, admin_headers, business_payload):
    stat = {"unique_key": "units", "title": "Units", "stat_value": "1"}
    r = client.post("/api/v1/business", json={**business_payload, "business_stats": [stat, stat]}, headers=admin_headers)
    assert r.status_code == 400


def test_business_resolves_referenced_projects_and_testimonials(
    client, admin_headers, business_payload, project_payload
):
    _create_business(client, admin_headers, business_payload)
    project = _create_project(client, admin_headers, project_payload)
    testimonial = Testimonial(name="Asha", message="Lovely home")
    testimonial.save()

    client.put(
        "/api/v1/business/residential-homes",
        json={"project_details": [project["id"]], "business_testimonials": [str(testimonial.id), str(ObjectId())]},
        headers=admin_headers,
    )

    data = client.get("/api/v1/business/residential-homes").json()["data"]
    assert [p["slug"] for p in data["project_details"]] == ["green-valley"]
    assert [t["name"] for t in data["business_testimonials"]] == ["Asha"]


def test_business_list_filters_by_project_type(client, admin_headers, business_payload):
    _create_business(client, admin_headers, business_payload)
    _create_business(
        client, admin_headers, business_payload, business_title="Office Spaces", project_types=["commercial"]
    )

    data = client.get("/api/v1/business?project_type=commercial").json()["data"]
    assert [b["slug"] for b in data["businesses"]] == ["office-spaces"]
    assert data["pagination"]["total"] == 1


def test_business_update_keeps_generated_code(client, admin_headers, business_payload):
    created = _create_business(client, admin_headers, business_payload)

    r = client.put(
        "/api/v1/business/residential-homes",
        json={"business_id": "BUS000000000", "business_tagline": "Homes first"},
        headers=admin_headers,
    )
    assert r.json()["data"]["business_id"] == created["business_id"]
    assert r.json()["data"]["business_tagline"] == "Homes first"


def test_business_writes_require_admin(client, user_headers, business_payload):
    assert client.post("/api/v1/business", json=business_payload).status_code == 401
    assert client.post("/api/v1/business", json=business_payload, headers=user_headers).status_code == 403


# Project

def test_project_requires_existing_business(client, admin_headers, project_payload):
    r = client.post("/api/v1/project", json=project_payload, headers=admin_headers)
    assert r.status_code == 404
    assert r.json()["message"] == "Business not found with the provided slug"


def test_project_read_denormalizes_business(client, admin_headers, business_payload, project_payload):
    _create_business(client, admin_headers, business_payload)
    created = _create_project(client, admin_headers, project_payload)
    assert re.fullmatch(r"PRJ\d{9}", created["project_id"])

    data = client.get("/api/v1/project/green-valley").json()["data"]
    assert data["business"]["slug"] == "residential-homes"

    # Deletes do not cascade; the dangling reference resolves to null.
    client.delete("/api/v1/business/residential-homes", headers=admin_headers)
    data = client.get("/api/v1/project/green-valley").json()["data"]
    assert data["business"] is None
    assert data["business_name_slug"] == "residential-homes"


def test_project_update_rechecks_changed_business(client, admin_headers, business_payload, project_payload):
    _create_business(client, admin_headers, business_payload)
    created = _create_project(client, admin_headers, project_payload)

    moved = client.put(
        "/api/v1/project/green-valley", json={"business_name_slug": "nowhere"}, headers=admin_headers
    )
    assert moved.status_code == 404

    renamed = client.put(
        "/api/v1/project/green-valley",
        json={"project_id": "PRJ000000000", "project_name": "Green Valley Phase 2"},
        headers=admin_headers,
    )
    assert renamed.status_code == 200
    assert renamed.json()["data"]["project_id"] == created["project_id"]
    assert renamed.json()["data"]["slug"] == "green-valley"


def test_project_image_rankings_must_be_unique(client, admin_headers, business_payload, project_payload):
    _create_business(client, admin_headers, business_payload)
    project_payload["project_images"] = [{"ranking": 1, **image("p/1")}, {"ranking": 1, **image("p/2")}]

    r = client.post("/api/v1/project", json=project_payload, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["message"] == "All image rankings must be unique"


def test_project_list_filters(client, admin_headers, business_payload, project_payload):
    _create_business(client, admin_headers, business_payload)
    _create_project(client, admin_headers, project_payload)
    _create_project(client, admin_headers, project_payload, project_name="Sky Towers", project_type="commercial")

    data = client.get("/api/v1/project?business_slug=Residential-Homes&project_type=commercial").json()["data"]
    assert [p["slug"] for p in data["projects"]] == ["sky-towers"]


def test_unknown_project_slug_is_not_found(client):
    r = client.get("/api/v1/project/missing")
    assert r.status_code == 404
    assert r.json()["message"] == "Project not found"


# Testimonial

def test_testimonial_checks_and_resolves_references(client, admin_headers, business_payload, project_payload):
    payload = {"name": "Asha", "message": "Lovely home", "project_slug": "green-valley"}
    assert client.post("/api/v1/testimonial", json=payload, headers=admin_headers).status_code == 404

    _create_business(client, admin_headers, business_payload)
    _create_project(client, admin_headers, project_payload)
    r = client.post("/api/v1/testimonial", json=payload, headers=admin_headers)
    assert r.status_code == 201
    created = r.json()["data"]
    assert re.fullmatch(r"TST\d{9}", created["testimonial_id"])

    data = client.get(f"/api/v1/testimonial/{created['id']}").json()["data"]
    assert data["project"]["slug"] == "green-valley"
    assert data["business"] is None


def test_testimonial_id_errors(client):
    malformed = client.get("/api/v1/testimonial/12345")
    assert malformed.status_code == 400
    assert malformed.json()["message"] == "Invalid testimonial ID"

    missing = client.get(f"/api/v1/testimonial/{ObjectId()}")
    assert missing.status_code == 404
    assert missing.json()["message"] == "Testimonial not found"


def test_testimonial_update_ignores_generated_code(client, admin_headers):
    created = client.post(
        "/api/v1/testimonial", json={"name": "Asha", "message": "Lovely"}, headers=admin_headers
    ).json()["data"]

    r = client.put(
        f"/api/v1/testimonial/{created['id']}",
        json={"testimonial_id": "TST000000000", "message": "Still lovely"},
        headers=admin_headers,
    )
    assert r.json()["data"]["testimonial_id"] == created["testimonial_id"]
    assert r.json()["data"]["message"] == "Still lovely"


# Gallery

def _seed_gallery(count):
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    for n in range(count):
        Gallery(
            image=image(f"gallery/{n}"),
            title=f"Image {n}",
            tag="Exterior" if n % 2 else "interior",
            created_at=start + timedelta(days=n),
        ).save()


def test_gallery_list_without_limit_is_a_single_page(client):
    _seed_gallery(5)

    for query in ("", "?limit=0"):
        data = client.get(f"/api/v1/gallery{query}").json()["data"]
        assert len(data["images"]) == 5
        assert data["pagination"] == {"total": 5, "page": 1, "limit": 5, "pages": 1}


def test_gallery_list_without_limit_ignores_requested_page(client):
    _seed_gallery(3)

    data = client.get("/api/v1/gallery?limit=0&page=5").json()["data"]
    assert len(data["images"]) == 3
    assert data["pagination"] == {"total": 3, "page": 1, "limit": 3, "pages": 1}


def test_gallery_list_paginates_newest_first(client):
    _seed_gallery(5)

    first = client.get("/api/v1/gallery?limit=2").json()["data"]
    assert first["pagination"] == {"total": 5, "page": 1, "limit": 2, "pages": 3}
    assert [i["title"] for i in first["images"]] == ["Image 4", "Image 3"]

    last = client.get("/api/v1/gallery?limit=2&page=3").json()["data"]
    assert [i["title"] for i in last["images"]] == ["Image 0"]


def test_gallery_filters(client):
    _seed_gallery(4)
    Gallery.objects(title="Image 0").update(set__is_active=False)

    exterior = client.get("/api/v1/gallery?tag=EXTERIOR").json()["data"]["images"]
    assert {i["title"] for i in exterior} == {"Image 1", "Image 3"}

    inactive = client.get("/api/v1/gallery?is_active=false").json()["data"]["images"]
    assert [i["title"] for i in inactive] == ["Image 0"]


def test_gallery_crud(client, admin_headers):
    r = client.post(
        "/api/v1/gallery",
        json={"image": image("gallery/x"), "title": "Lobby", "tag": "Interior", "format": "png"},
        headers=admin_headers,
    )
    assert r.status_code == 201
    created = r.json()["data"]
    assert created["tag"] == "interior"
    assert created["format"] == "PNG"
    assert re.fullmatch(r"GAL\d{9}", created["gallery_id"])

    updated = client.put(
        f"/api/v1/gallery/{created['id']}",
        json={"gallery_id": "GAL000000000", "title": "Main Lobby"},
        headers=admin_headers,
    ).json()["data"]
    assert updated["gallery_id"] == created["gallery_id"]
    assert updated["title"] == "Main Lobby"

    assert client.delete(f"/api/v1/gallery/{created['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/v1/gallery/{created['id']}").status_code == 404
    assert client.get("/api/v1/gallery/zzz").json()["message"] == "Invalid gallery image ID"
