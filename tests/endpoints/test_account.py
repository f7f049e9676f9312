from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.crud.user_settings import user_settings as crud_user_settings
from tests.helpers.asserts import api_call, assert_error


def test_read_profile(client: TestClient, auth_headers, staff_user):
    response = api_call(client, "GET", "/api/user", headers=auth_headers)
    body = response.json()
    assert body["id"] == staff_user.id
    assert body["username"] == "staff1"
    assert body["name"] == "Staff Member 1"
    assert body["discord_id"] is None
    assert "password" not in body

def test_settings_default_without_row(client: TestClient, auth_headers):
    body = api_call(client, "GET", "/api/user/settings", headers=auth_headers).json()
    assert body["theme"] == "light"
    assert body["notifications_enabled"] is True
    assert body["email_notifications"] is False

def test_settings_partial_update_keeps_other_fields(client: TestClient, auth_headers, staff_user, db_session: Session):
    body = api_call(client, "POST", "/api/user/settings", headers=auth_headers, json={"theme": "dark"}).json()
    assert body["theme"] == "dark"
    assert body["notifications_enabled"] is True

    body = api_call(client, "POST", "/api/user/settings", headers=auth_headers,
                    json={"email_notifications": True, "theme": None}).json()
    assert body["theme"] == "dark"
    assert body["email_notifications"] is True

    stored = crud_user_settings.get_by_user(db_session, user_id=staff_user.id)
    assert stored.theme == "dark"
    assert stored.email_notifications is True

    body = api_call(client, "GET", "/api/user/settings", headers=auth_headers).json()
    assert body["theme"] == "dark"

def test_settings_rejects_unknown_theme(client: TestClient, auth_headers):
    response = client.post("/api/user/settings", headers=auth_headers, json={"theme": "neon"})
    assert_error(response, 422, "VALIDATION_ERROR")

def test_level_for_new_user(client: TestClient, auth_headers):
    body = api_call(client, "GET", "/api/user/level", headers=auth_headers).json()
    assert body == {"level": 1, "videosWatched": 0, "current": 0, "needed": 2, "progress": 0.0}

def test_account_routes_require_auth(client: TestClient):
    for path in ("/api/user", "/api/user/settings", "/api/user/level"):
        assert_error(client.get(path), 401, "UNAUTHENTICATED")
