PNG = b"\x89PNG\r\n\x1a\n0000"


def test_single_upload_goes_to_media_store(client, admin_headers, media):
    r = client.post(
        "/api/v1/upload/single?folder=site",
        files={"file": ("logo.png", PNG, "image/png")},
        headers=admin_headers,
    )
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["public_id"] == "site/asset1"
    assert data["url"].startswith("https://")
    assert media.stored[0][0].endswith(".png")
    assert media.stored[0][1] == "site"


def test_single_upload_rejects_non_images(client, admin_headers, media):
    r = client.post(
        "/api/v1/upload/single",
        files={"file": ("brochure.pdf", b"%PDF-1.4", "application/pdf")},
        headers=admin_headers,
    )
    assert r.status_code == 400
    assert r.json()["message"].startswith("Only image files are allowed")
    assert media.stored == []


def test_single_upload_without_file(client, admin_headers):
    r = client.post("/api/v1/upload/single", headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["message"] == "No file uploaded"


def test_multiple_upload(client, admin_headers, media):
    files = [("files", (f"photo{n}.jpg", PNG, "image/jpeg")) for n in range(3)]

    r = client.post("/api/v1/upload/multiple", files=files, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["data"]["count"] == 3
    assert r.json()["message"] == "3 file(s) uploaded successfully"


def test_multiple_upload_caps_file_count(client, admin_headers, media):
    files = [("files", (f"photo{n}.jpg", PNG, "image/jpeg")) for n in range(11)]

    r = client.post("/api/v1/upload/multiple", files=files, headers=admin_headers)
    assert r.status_code == 400
    assert media.stored == []


def test_delete_accepts_nested_public_ids(client, admin_headers, media):
    r = client.delete("/api/v1/upload/site/logo?resource_type=image", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["data"]["result"] == "ok"
    assert media.deleted == ["site/logo"]


def test_describe_and_list(client, admin_headers):
    described = client.get("/api/v1/upload/file/site/logo", headers=admin_headers).json()["data"]
    assert described["public_id"] == "site/logo"

    listed = client.get("/api/v1/upload/folder/site", headers=admin_headers).json()["data"]
    assert listed["count"] == 2


def test_upload_routes_require_admin(client, user_headers):
    r = client.post("/api/v1/upload/single", files={"file": ("logo.png", PNG, "image/png")}, headers=user_headers)
    assert r.status_code == 403
    assert client.delete("/api/v1/upload/site/logo").status_code == 401
