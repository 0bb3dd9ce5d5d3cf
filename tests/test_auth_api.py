from conftest import PASSWORD, bearer

from sitecms.models.user import User
from sitecms.services.auth import verify_token
from sitecms.utils.config import settings


def _login(client, user_id, password=PASSWORD):
    return client.post("/api/v1/auth/login", json={"user_id": user_id, "password": password})


def test_login_issues_token_that_resolves_to_the_same_user(client, user):
    r = _login(client, "usr01")
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["data"]["user"]["user_id"] == "USR01"
    assert "password" not in body["data"]["user"]

    token = body["data"]["token"]
    assert verify_token(token)["user_id"] == "USR01"
    assert r.cookies.get(settings.session_cookie_name) == token
    assert User.objects(user_id="USR01").first().last_login_time is not None


def test_login_rejects_wrong_password(client, user):
    r = _login(client, "USR01", "wrong-password")
    assert r.status_code == 401
    assert r.json() == {"success": False, "message": "Invalid credentials", "data": None}


def test_login_unknown_user(client):
    r = _login(client, "USR99")
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid credentials"


def test_deactivated_account_is_forbidden_with_correct_password(client, make_user):
    make_user("USR02", "off@acme.com", "9876500002", is_active=False)

    assert _login(client, "USR02").status_code == 403
    assert _login(client, "USR02", "wrong-password").status_code == 401


def test_register_requires_admin(client, user_headers):
    payload = {"name": "New Person", "email": "new@acme.com", "phone": "9876500003", "password": "secret123"}

    assert client.post("/api/v1/auth/register", json=payload).status_code == 401
    r = client.post("/api/v1/auth/register", json=payload, headers=user_headers)
    assert r.status_code == 403
    assert r.json()["message"] == "Access denied. Admin privileges required"


def test_register_once_then_conflict(client, admin_headers):
    payload = {"name": "New Person", "email": "New@Acme.com", "phone": "9876500003", "password": "secret123"}

    r = client.post("/api/v1/auth/register", json=payload, headers=admin_headers)
    assert r.status_code == 201
    created = r.json()["data"]["user"]
    assert created["role"] == "user"
    assert created["email"] == "new@acme.com"
    assert created["user_id"].startswith("USR")

    same_email = client.post("/api/v1/auth/register", json={**payload, "phone": "9876500004"}, headers=admin_headers)
    assert same_email.status_code == 400
    assert same_email.json()["message"] == "Email already registered"

    same_phone = client.post(
        "/api/v1/auth/register", json={**payload, "email": "other@acme.com"}, headers=admin_headers
    )
    assert same_phone.status_code == 400
    assert same_phone.json()["message"] == "Phone number already registered"


def test_register_validates_payload(client, admin_headers):
    r = client.post(
        "/api/v1/auth/register",
        json={"name": "N", "email": "not-an-email", "phone": "12345", "password": "x"},
        headers=admin_headers,
    )
    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Validation failed"
    assert {e["field"] for e in body["errors"]} >= {"name", "email", "phone", "password"}


def test_check_login_never_fails(client, user, user_headers):
    anonymous = client.get("/api/v1/auth/check-login")
    assert anonymous.status_code == 200
    assert anonymous.json()["data"] == {"is_logged_in": False}

    garbage = client.get("/api/v1/auth/check-login", headers={"Authorization": "Bearer not-a-token"})
    assert garbage.status_code == 200
    assert garbage.json()["data"]["is_logged_in"] is False

    r = client.get("/api/v1/auth/check-login", headers=user_headers)
    assert r.json()["data"]["is_logged_in"] is True
    assert r.json()["data"]["user"]["user_id"] == "USR01"


def test_check_login_reports_deactivated_session_as_logged_out(client, user, user_headers):
    user.is_active = False
    user.save()

    r = client.get("/api/v1/auth/check-login", headers=user_headers)
    assert r.json()["data"]["is_logged_in"] is False


def test_deactivation_revokes_existing_tokens(client, user, user_headers, admin):
    user.is_active = False
    user.save()

    r = client.get("/api/v1/users", headers=user_headers)
    assert r.status_code == 403
    assert r.json()["message"] == "Account is deactivated. Please contact support"


def test_logout_clears_cookie(client, user):
    _login(client, "USR01")
    assert client.cookies.get(settings.session_cookie_name)

    r = client.post("/api/v1/auth/logout")
    assert r.status_code == 200
    assert r.json()["message"] == "Logout successful"
    assert not client.cookies.get(settings.session_cookie_name)


def test_cookie_takes_precedence_over_header(client, user, admin):
    client.cookies.set(settings.session_cookie_name, bearer(user)["Authorization"].split(" ", 1)[1])

    r = client.get("/api/v1/users", headers=bearer(admin))
    assert r.status_code == 403


def test_missing_token_asks_to_login(client):
    r = client.get("/api/v1/users")
    assert r.status_code == 401
    assert r.json()["message"] == "Not authorized to access this route. Please login"
