import os

os.environ.setdefault("jwt_secret_key", "test-secret-key")
os.environ.setdefault("bcrypt_rounds", "4")
os.environ.setdefault("environment", "test")

import mongomock
import pytest
from fastapi.testclient import TestClient
from mongoengine import connect, disconnect

from main import app
from sitecms.connections.media import get_media_store
from sitecms.models.about_us_settings import AboutUsSettings
from sitecms.models.business import Business
from sitecms.models.contact_us_settings import ContactUsSettings
from sitecms.models.gallery import Gallery
from sitecms.models.home_settings import HomeSettings
from sitecms.models.project import Project
from sitecms.models.testimonial import Testimonial
from sitecms.models.user import User
from sitecms.models.website_settings import WebsiteSettings
from sitecms.services.auth import hash_password, issue_token
from sitecms.utils.base.errors import MediaStoreError


PASSWORD = "secret123"

DOCUMENTS = (
    User,
    Business,
    Project,
    Testimonial,
    Gallery,
    WebsiteSettings,
    HomeSettings,
    ContactUsSettings,
    AboutUsSettings,
)


class FakeMediaStore:
    """Records calls instead of talking to Cloudinary."""

    def __init__(self):
        self.stored = []
        self.deleted = []
        self.failing = set()

    def store(self, local_path, folder=None):
        self.stored.append((os.path.basename(local_path), folder))
        os.unlink(local_path)
        public_id = f"{folder or 'uploads'}/asset{len(self.stored)}"
        return {
            "public_id": public_id,
            "url": f"https://cdn.test/{public_id}.png",
            "resource_type": "image",
            "format": "png",
            "width": 10,
            "height": 10,
            "bytes": 4,
        }

    def delete(self, public_id, resource_type="image"):
        self.deleted.append(public_id)
        if public_id in self.failing:
            raise MediaStoreError("Cloudinary deletion failed: unreachable")
        return {"success": True, "message": "File deleted successfully", "result": "ok"}

    def describe(self, public_id, resource_type="image"):
        return {"public_id": public_id, "resource_type": resource_type}

    def list(self, folder, resource_type="image", max_results=500):
        return [{"public_id": f"{folder}/one"}, {"public_id": f"{folder}/two"}]


@pytest.fixture(scope="session", autouse=True)
def mongo():
    connect("sitecms_test", host="mongodb://localhost", mongo_client_class=mongomock.MongoClient, alias="default")
    yield
    disconnect(alias="default")


@pytest.fixture(autouse=True)
def clean_collections(mongo):
    for document in DOCUMENTS:
        document.drop_collection()
    yield


@pytest.fixture
def media():
    store = FakeMediaStore()
    app.dependency_overrides[get_media_store] = lambda: store
    yield store
    app.dependency_overrides.pop(get_media_store, None)


@pytest.fixture
def client(media):
    return TestClient(app)


def _make_user(user_id, email, phone, role="user", is_active=True):
    user = User(
        user_id=user_id,
        name=f"{role.title()} {user_id}",
        email=email,
        phone=phone,
        password=hash_password(PASSWORD),
        role=role,
        is_active=is_active,
    )
    user.save()
    return user


def bearer(user):
    token = issue_token({"user_id": user.user_id, "email": user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin():
    return _make_user("ADM01", "admin@acme.com", "9999999999", role="admin")


@pytest.fixture
def user():
    return _make_user("USR01", "user@acme.com", "9876500001")


@pytest.fixture
def make_user():
    return _make_user


@pytest.fixture
def admin_headers(admin):
    return bearer(admin)


@pytest.fixture
def user_headers(user):
    return bearer(user)


def image(public_id):
    return {"url": f"https://cdn.test/{public_id}.png", "public_id": public_id}


def feature(key, public_id):
    return {"key": key, "title": f"Feature {key}", "description": "Feature description", "image": image(public_id)}


@pytest.fixture
def website_payload():
    return {
        "title": "Acme Builders",
        "tagline": "Building trust",
        "logo": image("site/logo"),
        "favicon": image("site/favicon"),
        "business_info": {
            "name": "Acme Builders Pvt Ltd",
            "address": {"street": "1 Main Street", "city": "Pune", "state": "MH", "pincode": "411001"},
            "phone": "9876543210",
            "email": "Info@Acme.com",
        },
        "social_media": {"facebook": "https://facebook.com/acme"},
        "seo": {"meta_title": "Acme", "meta_keywords": ["construction"]},
    }


@pytest.fixture
def home_payload():
    return {
        "hero_title": "Welcome",
        "hero_description": "We build homes",
        "feature_title": "Why us",
        "feature_description": "Reasons",
        "features": [feature("a", "home/a"), feature("b", "home/b")],
        "legacy_title": "Legacy",
        "legacy_description": "Since 1990",
        "metrics": [{"key": "years", "title": "Years", "metric_value": "30+"}],
    }


@pytest.fixture
def contact_payload():
    return {
        "hero_description": "Reach out",
        "email": "Hello@Acme.com",
        "address": "1 Main Street, Pune",
        "head_office_details": [
            {
                "unique_key": "hq",
                "office_name": "Head Office",
                "office_address": "Pune",
                "office_email": "hq@acme.com",
                "office_mobile": "9876543210",
            }
        ],
    }


@pytest.fixture
def about_payload():
    return {
        "hero_description": "About Acme",
        "mission_statement": "Build well",
        "mission_description": "We build homes that last",
        "values": [{"unique_key": "trust", "title": "Trust", "description": "We keep our word"}],
        "history": [{"year": 1990, "title": "Founded", "description": "Started in Pune"}],
    }


@pytest.fixture
def business_payload():
    return {
        "business_title": "Residential Homes",
        "business_overview": "Homes for families",
        "business_description": "Long description",
        "project_types": ["residential"],
        "hero_image": image("business/hero"),
        "featured_image": image("business/featured"),
        "business_stats": [{"unique_key": "units", "title": "Units", "stat_value": "500"}],
    }


@pytest.fixture
def project_payload():
    return {
        "business_name_slug": "residential-homes",
        "project_name": "Green Valley",
        "project_description": "Gated community",
        "project_type": "residential",
        "project_images": [{"ranking": 1, **image("project/1")}, {"ranking": 2, **image("project/2")}],
        "hero_image": image("project/hero"),
        "project_detail": {"image": image("project/detail"), "title": "Detail", "description": "About"},
    }
