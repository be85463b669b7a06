import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from discuss_board.api.deps import get_post_service, get_tag_service
from discuss_board.core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError

NOW = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc).isoformat().replace("+00:00", "Z")


@pytest.fixture
def mock_post_service(app):
    service = AsyncMock()
    app.dependency_overrides[get_post_service] = lambda: service
    return service


@pytest.fixture
def mock_tag_service(app):
    service = AsyncMock()
    app.dependency_overrides[get_tag_service] = lambda: service
    return service


def _post(author_id, **overrides):
    post = {
        "id": uuid.uuid4(),
        "author_id": author_id,
        "title": "Hello",
        "body": "World",
        "business_status": "public",
        "is_locked": False,
        "tag_ids": [],
        "created_at": NOW,
        "updated_at": NOW,
        "deleted_at": None,
    }
    post.update(overrides)
    return post


def test_create_post(client, login_as, member, mock_post_service):
    login_as(member)
    tag_id = uuid.uuid4()
    mock_post_service.create_post.return_value = _post(member.member_id, tag_ids=[tag_id])

    response = client.post(
        "/api/v1/posts", json={"title": "Hello", "body": "World", "tag_ids": [str(tag_id)]}
    )

    assert response.status_code == 201
    data = response.json()
    assert data["tag_ids"] == [str(tag_id)]
    assert data["author_id"] == str(member.member_id)
    mock_post_service.create_post.assert_awaited_once_with(
        member, title="Hello", body="World", business_status="public", tag_ids=[tag_id]
    )


def test_create_post_requires_token(client, mock_post_service):
    response = client.post("/api/v1/posts", json={"title": "Hello", "body": "World"})

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
    mock_post_service.create_post.assert_not_called()


def test_guests_cannot_post(client, login_as, guest_actor, mock_post_service):
    login_as(guest_actor)

    response = client.post("/api/v1/posts", json={"title": "Hello", "body": "World"})

    assert response.status_code == 403
    assert response.json()["detail"] == "Member access required"


def test_create_post_rejects_invalid_body(client, login_as, member, mock_post_service):
    login_as(member)

    response = client.post("/api/v1/posts", json={"title": "", "body": "World"})

    assert response.status_code == 422


@pytest.mark.parametrize(
    "error,status_code",
    [
        (NotFoundError("Tag", uuid.uuid4()), 404),
        (ValidationError("Content contains a forbidden word"), 400),
        (ForbiddenError("Post is locked"), 403),
        (ConflictError("Duplicate"), 409),
    ],
)
def test_service_errors_map_to_status(client, login_as, member, mock_post_service, error, status_code):
    login_as(member)
    mock_post_service.update_post.side_effect = error

    response = client.put(f"/api/v1/posts/{uuid.uuid4()}", json={"title": "New"})

    assert response.status_code == status_code
    assert response.json()["detail"] == str(error)


def test_search_posts_uses_json_body(client, login_as, member, mock_post_service):
    login_as(member)
    mock_post_service.search_posts.return_value = {
        "pagination": {"current": 2, "limit": 5, "records": 6, "pages": 2},
        "data": [
            {
                "id": str(uuid.uuid4()),
                "title": "Hello",
                "business_status": "public",
                "author_id": str(member.member_id),
                "created_at": NOW,
                "updated_at": NOW,
                "deleted_at": None,
            }
        ],
    }

    response = client.patch("/api/v1/posts", json={"page": 2, "limit": 5, "keyword": "hel"})

    assert response.status_code == 200
    assert response.json()["pagination"]["pages"] == 2
    request = mock_post_service.search_posts.await_args.args[0]
    assert request.page == 2
    assert request.keyword == "hel"


def test_delete_post(client, login_as, member, mock_post_service):
    login_as(member)
    post_id = uuid.uuid4()

    response = client.delete(f"/api/v1/posts/{post_id}")

    assert response.status_code == 204
    mock_post_service.delete_post.assert_awaited_once_with(post_id, member)


def test_attach_tag(client, login_as, member, mock_tag_service):
    login_as(member)
    post_id, tag_id = uuid.uuid4(), uuid.uuid4()
    mock_tag_service.add_post_tag.return_value = {
        "id": uuid.uuid4(),
        "post_id": post_id,
        "tag_id": tag_id,
        "created_at": NOW,
    }

    response = client.post(f"/api/v1/posts/{post_id}/tags", json={"tag_id": str(tag_id)})

    assert response.status_code == 201
    assert response.json()["tag_id"] == str(tag_id)
