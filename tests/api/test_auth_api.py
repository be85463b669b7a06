import uuid
from unittest.mock import AsyncMock

import pytest

from discuss_board.api.deps import (
    get_auth_service,
    get_moderation_service,
    get_setting_service,
)
from discuss_board.core.actor import Actor
from discuss_board.core.exceptions import AuthenticationError, ForbiddenError

NOW = "2026-01-02T03:04:05Z"


@pytest.fixture
def mock_auth_service(app):
    service = AsyncMock()
    app.dependency_overrides[get_auth_service] = lambda: service
    return service


def _token() -> dict:
    return {"access": "a", "refresh": "r", "expired_at": NOW, "refreshable_until": NOW}


def test_member_login_passes_client_details(client, mock_auth_service):
    mock_auth_service.member_login.return_value = {
        "id": uuid.uuid4(),
        "user_account_id": uuid.uuid4(),
        "nickname": "casey",
        "status": "active",
        "created_at": NOW,
        "updated_at": NOW,
        "token": _token(),
    }

    response = client.post(
        "/api/v1/auth/member/login",
        json={"email": "casey@example.com", "password": "secret-pass"},
        headers={"User-Agent": "pytest", "X-Forwarded-For": "203.0.113.9, 10.0.0.1"},
    )

    assert response.status_code == 200
    assert response.json()["token"]["access"] == "a"
    mock_auth_service.member_login.assert_awaited_once_with(
        email="casey@example.com",
        password="secret-pass",
        user_agent="pytest",
        ip_address="203.0.113.9",
    )


def test_member_login_wrong_password(client, mock_auth_service):
    mock_auth_service.member_login.side_effect = AuthenticationError("Invalid email or password")

    response = client.post(
        "/api/v1/auth/member/login", json={"email": "casey@example.com", "password": "nope"}
    )

    assert response.status_code == 401
    assert response.json() == {"detail": "Invalid email or password"}


def test_unverified_login_is_forbidden(client, mock_auth_service):
    mock_auth_service.member_login.side_effect = ForbiddenError("Account is not active")

    response = client.post(
        "/api/v1/auth/member/login", json={"email": "casey@example.com", "password": "secret"}
    )

    assert response.status_code == 403


class TestBearerResolution:
    def test_revoked_token_is_401(self, client, mock_auth_service):
        mock_auth_service.resolve_actor.side_effect = AuthenticationError("Session has been revoked")

        response = client.post("/api/v1/auth/logout", headers={"Authorization": "Bearer stale"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Session has been revoked"
        mock_auth_service.resolve_actor.assert_awaited_once_with("stale")

    def test_banned_account_is_403(self, client, mock_auth_service):
        mock_auth_service.resolve_actor.side_effect = ForbiddenError("Account is banned")

        response = client.post("/api/v1/auth/logout", headers={"Authorization": "Bearer token"})

        assert response.status_code == 403

    def test_logout_with_valid_token(self, client, mock_auth_service, member):
        mock_auth_service.resolve_actor.return_value = member

        response = client.post("/api/v1/auth/logout", headers={"Authorization": "Bearer token"})

        assert response.status_code == 200
        mock_auth_service.logout.assert_awaited_once_with(member)


class TestRoleGuards:
    def test_admin_routes_reject_members(self, client, app, login_as, member):
        service = AsyncMock()
        app.dependency_overrides[get_setting_service] = lambda: service
        login_as(member)

        response = client.patch("/api/v1/admin/settings", json={})

        assert response.status_code == 403
        assert response.json()["detail"] == "Administrator access required"
        service.search_settings.assert_not_called()

    def test_admin_routes_accept_administrators(self, client, app, login_as):
        service = AsyncMock()
        service.search_settings.return_value = {
            "pagination": {"current": 1, "limit": 20, "records": 0, "pages": 0},
            "data": [],
        }
        app.dependency_overrides[get_setting_service] = lambda: service
        login_as(
            Actor(
                role="administrator",
                user_account_id=uuid.uuid4(),
                member_id=uuid.uuid4(),
                administrator_id=uuid.uuid4(),
            )
        )

        response = client.patch("/api/v1/admin/settings", json={"key": "mail"})

        assert response.status_code == 200
        assert response.json()["data"] == []

    def test_moderation_actions_need_moderator(self, client, app, login_as, member):
        service = AsyncMock()
        app.dependency_overrides[get_moderation_service] = lambda: service
        login_as(member)

        response = client.post(
            "/api/v1/moderation-actions",
            json={"action_type": "warn", "action_reason": "x", "target_member_id": str(uuid.uuid4())},
        )

        assert response.status_code == 403
        service.create_action.assert_not_called()
