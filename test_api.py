"""Tests de la API HTTP completa sobre una base de datos SQLite temporal."""

from datetime import datetime

from fastapi.testclient import TestClient

from perfume_catalog.main import create_app

API = "/api/v1"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def _login(client, username, password):
    return client.post(f"{API}/auth/login", json={"username": username, "password": password})


# ─────────────────────────────────────────────────────────────────────────────
# Escenario completo categoría → marca → perfume
# ─────────────────────────────────────────────────────────────────────────────
def test_catalog_end_to_end(client, admin_headers):
    category = client.post(
        f"{API}/categories", json={"name": "Woody", "description": "Warm notes", "color": "#8B4513"}, headers=admin_headers
    )
    assert category.status_code == 201, category.text
    category_id = category.json()["id"]

    brand = client.post(f"{API}/brands", json={"name": "Oakmoss", "categoryId": category_id}, headers=admin_headers)
    assert brand.status_code == 201, brand.text
    assert brand.json()["categoryName"] == "Woody"
    brand_id = brand.json()["id"]

    perfume = client.post(
        f"{API}/perfumes", json={"name": "No.5", "number": 5, "brandId": brand_id}, headers=admin_headers
    )
    assert perfume.status_code == 201, perfume.text
    perfume_id = perfume.json()["id"]

    fetched = client.get(f"{API}/perfumes/{perfume_id}", headers=admin_headers).json()
    assert fetched == {
        "id": perfume_id,
        "name": "No.5",
        "number": 5,
        "brandId": brand_id,
        "brandName": "Oakmoss",
        "categoryId": category_id,
        "categoryName": "Woody",
    }

    assert client.delete(f"{API}/categories/{category_id}", headers=admin_headers).status_code == 409
    assert client.delete(f"{API}/brands/{brand_id}", headers=admin_headers).status_code == 409

    assert client.delete(f"{API}/perfumes/{perfume_id}", headers=admin_headers).status_code == 204
    assert client.delete(f"{API}/brands/{brand_id}", headers=admin_headers).status_code == 204
    assert client.delete(f"{API}/categories/{category_id}", headers=admin_headers).status_code == 204
    assert client.get(f"{API}/categories/{category_id}", headers=admin_headers).status_code == 404


def test_snake_case_bodies_are_accepted(client, admin_headers):
    category_id = client.post(
        f"{API}/categories", json={"name": "Floral", "color": "pink"}, headers=admin_headers
    ).json()["id"]

    brand = client.post(f"{API}/brands", json={"name": "Peony", "category_id": category_id}, headers=admin_headers)

    assert brand.status_code == 201
    assert brand.json()["categoryId"] == category_id


def test_duplicate_category_is_conflict(client, admin_headers):
    body = {"name": "Citrus", "color": "yellow"}

    assert client.post(f"{API}/categories", json=body, headers=admin_headers).status_code == 201
    second = client.post(f"{API}/categories", json=body, headers=admin_headers)

    assert second.status_code == 409
    assert second.json()["error"] == "Conflict"


def test_brand_with_unknown_category_is_not_found(client, admin_headers):
    response = client.post(f"{API}/brands", json={"name": "Orphan", "categoryId": 999}, headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "Category not found with ID: 999"


# ─────────────────────────────────────────────────────────────────────────────
# Control de acceso
# ─────────────────────────────────────────────────────────────────────────────
def test_user_cannot_write_but_can_read(client, user_headers):
    write = client.post(f"{API}/categories", json={"name": "Amber", "color": "gold"}, headers=user_headers)
    read = client.get(f"{API}/categories", headers=user_headers)

    assert write.status_code == 403
    assert write.json()["error"] == "Forbidden"
    assert read.status_code == 200


def test_missing_or_invalid_token_is_unauthorized(client):
    missing = client.get(f"{API}/categories")
    invalid = client.get(f"{API}/categories", headers={"Authorization": "Bearer not.a.token"})

    for response in (missing, invalid):
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"


def test_public_routes_need_no_token(client, admin_headers):
    client.post(f"{API}/categories", json={"name": "Aquatic", "color": "blue"}, headers=admin_headers)

    categories = client.get(f"{API}/public/categories")
    with_garbage_token = client.get(f"{API}/public/perfumes", headers={"Authorization": "Bearer garbage"})

    assert categories.status_code == 200
    assert [c["name"] for c in categories.json()] == ["Aquatic"]
    assert with_garbage_token.status_code == 200


def test_admin_routes_reject_users(client, user_headers, admin_headers):
    assert client.get(f"{API}/admin/dashboard", headers=user_headers).status_code == 403

    stats = client.get(f"{API}/admin/dashboard", headers=admin_headers)
    assert stats.status_code == 200
    assert stats.json() == {"totalCategories": 0, "totalBrands": 0, "totalPerfumes": 0}


# ─────────────────────────────────────────────────────────────────────────────
# Autenticación
# ─────────────────────────────────────────────────────────────────────────────
def test_login_errors_are_generic(client, admin_headers):
    unknown = _login(client, "ghost", "whatever")
    wrong = _login(client, "admin", "not-the-password")

    assert unknown.status_code == wrong.status_code == 400
    assert unknown.json() == wrong.json() == {
        "token": None,
        "username": None,
        "email": None,
        "message": "Invalid username or password",
    }


def test_register_then_validate_token(client):
    registered = client.post(f"{API}/auth/register", json={"username": "newbie", "password": "newbie-pass"})
    assert registered.status_code == 200
    body = registered.json()
    assert body["email"] == "newbie@example.com"

    valid = client.get(f"{API}/auth/validate", headers={"Authorization": f"Bearer {body['token']}"})
    invalid = client.get(f"{API}/auth/validate", headers={"Authorization": "Bearer nope"})
    absent = client.get(f"{API}/auth/validate")
    assert (valid.json(), invalid.json(), absent.json()) == (True, False, False)

    again = client.post(f"{API}/auth/register", json={"username": "newbie", "password": "other-pass"})
    assert again.status_code == 400
    assert again.json()["message"] == "Username already exists"


def test_register_rejects_usernames_that_are_not_email_safe(client):
    for username in ("with space", "me@home", ".dotted", "a..b"):
        response = client.post(f"{API}/auth/register", json={"username": username, "password": "secret-pass"})
        assert response.status_code == 400, username
        assert "username" in response.json()["errors"]

    assert client.post(f"{API}/auth/register", json={"username": "jane.doe", "password": "secret-pass"}).status_code == 200


def test_disabled_user_cannot_login(client, admin_headers):
    created = client.post(
        f"{API}/admin/users",
        json={"username": "temp", "email": "temp@perfumes.io", "password": "temp-pass"},
        headers=admin_headers,
    )
    assert created.status_code == 200, created.text
    user_id = created.json()["user"]["id"]

    assert client.post(f"{API}/admin/users/{user_id}/disable", headers=admin_headers).status_code == 200
    assert _login(client, "temp", "temp-pass").json()["message"] == "Invalid username or password"

    assert client.post(f"{API}/admin/users/{user_id}/enable", headers=admin_headers).status_code == 200
    assert _login(client, "temp", "temp-pass").status_code == 200


def test_self_service_profile_and_password(client, user_headers):
    profile = client.get(f"{API}/users/me", headers=user_headers)
    assert profile.json() == {"username": "reader", "email": "reader@example.com", "roles": ["USER"]}

    wrong = client.put(
        f"{API}/users/me/password",
        json={"currentPassword": "bad", "newPassword": "fresh-pass"},
        headers=user_headers,
    )
    right = client.put(
        f"{API}/users/me/password",
        json={"currentPassword": "reader-pass", "newPassword": "fresh-pass"},
        headers=user_headers,
    )

    assert wrong.status_code == 400
    assert right.status_code == 200
    assert _login(client, "reader", "fresh-pass").status_code == 200


# ─────────────────────────────────────────────────────────────────────────────
# Búsqueda
# ─────────────────────────────────────────────────────────────────────────────
def test_search_endpoints(client, admin_headers, user_headers):
    category_id = client.post(
        f"{API}/categories", json={"name": "Woody", "color": "brown"}, headers=admin_headers
    ).json()["id"]
    brand_id = client.post(
        f"{API}/brands", json={"name": "Oakmoss", "categoryId": category_id}, headers=admin_headers
    ).json()["id"]
    for name, number in (("Forest", 10), ("Bark", 20), ("Resin", 30)):
        client.post(f"{API}/perfumes", json={"name": name, "number": number, "brandId": brand_id}, headers=admin_headers)

    private = client.post(
        f"{API}/search", json={"searchTerm": "oak", "minNumber": 15, "maxNumber": 30}, headers=user_headers
    )
    public = client.post(f"{API}/public/perfumes/search", json={"brandName": "", "maxNumber": 10})

    assert [p["name"] for p in private.json()] == ["Bark", "Resin"]
    assert [p["name"] for p in public.json()] == ["Forest"]
    assert client.post(f"{API}/search", json={}).status_code == 401


def test_search_shortcut_routes(client, admin_headers, user_headers):
    category_id = client.post(
        f"{API}/categories", json={"name": "Woody", "color": "brown"}, headers=admin_headers
    ).json()["id"]
    oakmoss = client.post(
        f"{API}/brands", json={"name": "Oakmoss", "categoryId": category_id}, headers=admin_headers
    ).json()["id"]
    cedar = client.post(
        f"{API}/brands", json={"name": "Cedar Oak", "categoryId": category_id}, headers=admin_headers
    ).json()["id"]
    for name, number, brand_id in (("Forest", 10, oakmoss), ("Bark", 20, oakmoss), ("Resin", 30, cedar)):
        client.post(f"{API}/perfumes", json={"name": name, "number": number, "brandId": brand_id}, headers=admin_headers)

    by_term = client.get(f"{API}/search/OAK", headers=user_headers)
    by_brand = client.get(f"{API}/brand-name/Oakmoss", headers=user_headers)
    by_range = client.get(f"{API}/number-range", params={"minNumber": 20, "maxNumber": 30}, headers=user_headers)

    assert [p["name"] for p in by_term.json()] == ["Forest", "Bark", "Resin"]
    assert [p["name"] for p in by_brand.json()] == ["Forest", "Bark"]
    assert [p["name"] for p in by_range.json()] == ["Bark", "Resin"]
    assert client.get(f"{API}/brand-name/oakmoss", headers=user_headers).json() == []
    assert client.get(f"{API}/number-range", params={"minNumber": 1}, headers=user_headers).status_code == 400
    assert client.get(f"{API}/search/OAK").status_code == 401


# ─────────────────────────────────────────────────────────────────────────────
# Archivos
# ─────────────────────────────────────────────────────────────────────────────
def test_file_round_trip(client, admin_headers):
    upload = client.post(
        f"{API}/admin/upload", files={"file": ("logo.PNG", PNG_BYTES, "image/png")}, headers=admin_headers
    )
    assert upload.status_code == 200, upload.text
    body = upload.json()
    assert body["success"] is True
    assert body["filename"].endswith(".png")
    assert body["url"] == f"{API}/files/{body['filename']}"

    served = client.get(body["url"])
    assert served.status_code == 200
    assert served.content == PNG_BYTES
    assert served.headers["content-type"] == "image/png"
    assert "no-cache" in served.headers["cache-control"]

    deleted = client.delete(f"{API}/admin/files/{body['filename']}", headers=admin_headers)
    assert deleted.json()["deleted"] is True
    assert client.get(body["url"]).status_code == 404

    again = client.delete(f"{API}/admin/files/{body['filename']}", headers=admin_headers)
    assert again.status_code == 200
    assert again.json()["deleted"] is False


def test_upload_rejects_non_images_and_users(client, admin_headers, user_headers):
    text = client.post(
        f"{API}/admin/upload", files={"file": ("notes.txt", b"hello", "text/plain")}, headers=admin_headers
    )
    by_user = client.post(
        f"{API}/admin/upload", files={"file": ("logo.png", PNG_BYTES, "image/png")}, headers=user_headers
    )

    assert text.status_code == 400
    assert text.json()["message"] == "Only image files are allowed"
    assert by_user.status_code == 403


# ─────────────────────────────────────────────────────────────────────────────
# Formato de errores y salud
# ─────────────────────────────────────────────────────────────────────────────
def test_not_found_error_body(client, admin_headers):
    response = client.get(f"{API}/categories/12345", headers=admin_headers)
    body = response.json()

    assert response.status_code == 404
    assert body["status"] == 404
    assert body["error"] == "Not Found"
    assert body["message"] == "Category with ID 12345 not found."
    assert body["path"] == f"{API}/categories/12345"
    assert "timestamp" in body
    assert "errors" not in body


def test_validation_error_body_has_field_map(client, admin_headers):
    response = client.post(f"{API}/categories", json={"name": "A"}, headers=admin_headers)
    body = response.json()

    assert response.status_code == 400
    assert body["error"] == "Validation Failed"
    assert body["message"] == "Please check the input data"
    assert set(body["errors"]) == {"name", "color"}


def test_unknown_route_uses_structured_body(client):
    response = client.get(f"{API}/does-not-exist")

    assert response.status_code == 404
    assert response.json()["path"] == f"{API}/does-not-exist"


def test_health_is_public(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "UP"


def test_health_timestamps_come_from_the_app_clock(settings, clock):
    with TestClient(create_app(settings, clock=clock)) as frozen_client:
        login = frozen_client.post(f"{API}/auth/login", json={"username": "admin", "password": "admin-password"})
        headers = {"Authorization": f"Bearer {login.json()['token']}"}

        public = frozen_client.get("/health").json()
        admin = frozen_client.get(f"{API}/admin/system/health", headers=headers).json()

    for body in (public, admin):
        assert datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00")) == clock.now
