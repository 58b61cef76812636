# backend/tests/test_messages_and_media.py

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.api import deps
from app.core.config import settings
from app.core.exceptions import ImageAuthenticationError, ImageDeleteError
from app.crud import message_crud
from app.db.models.message_model import ContactMessage
from app.main import app
from app.schemas.image_schema import UploadedImage

API = "/api/v1"


@pytest.fixture
async def messages(db_session):
    rows = [
        ContactMessage(name="Ana", email="ana@example.com", message="Hello", region_code="AE"),
        ContactMessage(name="Luis", message="Prices?", mark_as_read=True),
        ContactMessage(name="Mia", message="Samples", is_ok_receive_communication=True),
    ]
    db_session.add_all(rows)
    await db_session.commit()
    return rows


async def test_messages_newest_first(client, messages):
    response = await client.get(f"{API}/messages/")

    assert response.status_code == 200
    assert [m["name"] for m in response.json()] == ["Mia", "Luis", "Ana"]


async def test_unread_only(client, messages):
    response = await client.get(f"{API}/messages/", params={"unread_only": True})
    assert [m["name"] for m in response.json()] == ["Mia", "Ana"]


async def test_mark_as_read_and_delete(client, messages):
    message_id = messages[0].id

    response = await client.patch(f"{API}/messages/{message_id}/read")
    assert response.status_code == 200
    assert response.json()["mark_as_read"] is True

    response = await client.delete(f"{API}/messages/{message_id}")
    assert response.status_code == 200

    response = await client.get(f"{API}/messages/")
    assert message_id not in [m["id"] for m in response.json()]

    response = await client.delete(f"{API}/messages/{message_id}")
    assert response.status_code == 404


async def test_mark_as_read_database_error_returns_500(client, messages, monkeypatch):
    async def failing_mark_as_read(db, db_message):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(message_crud, "mark_as_read", failing_mark_as_read)

    response = await client.patch(f"{API}/messages/{messages[0].id}/read")

    assert response.status_code == 500
    assert response.json()["detail"] == "Error updating message"


async def test_delete_message_database_error_returns_500(client, messages, monkeypatch):
    async def failing_delete(db, message_id):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(message_crud, "delete_message", failing_delete)

    response = await client.delete(f"{API}/messages/{messages[0].id}")
    assert response.status_code == 500
    assert response.json()["detail"] == "Error deleting message"

    response = await client.get(f"{API}/messages/")
    assert len(response.json()) == 3


async def test_dashboard_counts(client):
    await client.post(f"{API}/regions/", json={"name": "Dubai", "code": "AE"})
    await client.post(f"{API}/categories/", json={"name": "Rugs"})
    await client.post(f"{API}/categories/", json={"name": "Curtains"})

    response = await client.get(f"{API}/dashboard/")

    assert response.status_code == 200
    assert response.json() == {"categories": 2, "products": 0, "regions": 1}


# ========================================
# MEDIOS
# ========================================

class FakeUploadService:

    def __init__(self, error=None):
        self.error = error
        self.calls = []

    async def upload_image(self, data, file_name, max_dimension=None):
        self.calls.append((file_name, max_dimension))
        if self.error:
            raise self.error
        return UploadedImage(url=f"https://cdn.test/{file_name}", file_id="file_1", name=file_name)

    async def delete_image(self, file_id):
        self.calls.append(("delete", file_id))
        if self.error:
            raise self.error


@pytest.fixture
def fake_upload():
    def install(error=None):
        service = FakeUploadService(error)
        app.dependency_overrides[deps.get_upload_service] = lambda: service
        return service

    yield install
    app.dependency_overrides.pop(deps.get_upload_service, None)


async def test_media_upload_uses_library_dimension(client, fake_upload):
    service = fake_upload()

    response = await client.post(f"{API}/media/", files={"file": ("photo.png", b"img", "image/png")})

    assert response.status_code == 201
    assert response.json()["url"] == "https://cdn.test/photo.png"
    assert response.json()["fileId"] == "file_1"
    assert service.calls == [("photo.png", 1920)]


async def test_catalog_upload_uses_catalog_dimension(client, fake_upload):
    service = fake_upload()

    response = await client.post(f"{API}/media/catalog", files={"file": ("rug.jpg", b"img", "image/jpeg")})

    assert response.status_code == 201
    assert service.calls == [("rug.jpg", 800)]


async def test_media_upload_failure_returns_502(client, fake_upload):
    fake_upload(ImageAuthenticationError())

    response = await client.post(f"{API}/media/", files={"file": ("photo.png", b"img", "image/png")})

    assert response.status_code == 502
    assert response.json()["detail"] == "Authentication failed"


async def test_media_delete(client, fake_upload):
    service = fake_upload()

    response = await client.delete(f"{API}/media/file_1")

    assert response.status_code == 204
    assert service.calls == [("delete", "file_1")]


async def test_media_delete_failure_returns_502(client, fake_upload):
    fake_upload(ImageDeleteError())

    response = await client.delete(f"{API}/media/file_1")
    assert response.status_code == 502


async def test_media_upload_over_byte_limit_returns_413(client, fake_upload):
    service = fake_upload()
    app.dependency_overrides[deps.get_settings] = lambda: settings.model_copy(
        update={"IMAGE_MAX_UPLOAD_BYTES": 10}
    )

    response = await client.post(f"{API}/media/", files={"file": ("photo.png", b"x" * 11, "image/png")})

    assert response.status_code == 413
    assert response.json()["detail"] == "File too large. Limit: 10 bytes"
    assert service.calls == []

    response = await client.post(f"{API}/media/catalog", files={"file": ("rug.jpg", b"x" * 10, "image/jpeg")})
    assert response.status_code == 201
