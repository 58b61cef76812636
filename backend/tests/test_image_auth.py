# backend/tests/test_image_auth.py

import base64
import hashlib
import hmac

import pytest

from app.api import deps
from app.core.config import Settings
from app.core.exceptions import ConfigurationError
from app.main import app
from app.services.image_auth_service import get_authentication_parameters

AUTH_URL = "/api/v1/imagekit/auth"


def _expected_signature(private_key: str, expire: int) -> str:
    digest = hmac.new(private_key.encode(), str(expire).encode(), hashlib.sha1).digest()
    return base64.b64encode(digest).decode()


def test_signature_is_hmac_sha1_of_expire():
    params = get_authentication_parameters("private_test", "public_test", now=1_700_000_000.7)

    assert params.token == "public_test"
    assert params.expire == 1_700_003_600
    assert params.signature == _expected_signature("private_test", params.expire)


def test_each_call_gets_its_own_window():
    first = get_authentication_parameters("private_test", "public_test", now=1000)
    second = get_authentication_parameters("private_test", "public_test", now=2000)

    assert first.expire != second.expire
    assert first.signature != second.signature


def test_custom_ttl():
    params = get_authentication_parameters("k", "p", now=0, ttl=60)
    assert params.expire == 60


@pytest.mark.parametrize("private_key,public_key", [(None, "p"), ("k", None), ("", "")])
def test_missing_keys_raise_configuration_error(private_key, public_key):
    with pytest.raises(ConfigurationError):
        get_authentication_parameters(private_key, public_key)


# ========================================
# ENDPOINT
# ========================================

@pytest.fixture
def configured_keys():
    app.dependency_overrides[deps.get_settings] = lambda: Settings(
        IMAGEKIT_PRIVATE_KEY="private_test", IMAGEKIT_PUBLIC_KEY="public_test"
    )
    yield
    app.dependency_overrides.pop(deps.get_settings, None)


@pytest.fixture
def missing_keys():
    app.dependency_overrides[deps.get_settings] = lambda: Settings(
        IMAGEKIT_PRIVATE_KEY=None, IMAGEKIT_PUBLIC_KEY=None
    )
    yield
    app.dependency_overrides.pop(deps.get_settings, None)


async def test_preflight_returns_ok_with_cors_headers(client):
    response = await client.options(AUTH_URL)

    assert response.status_code == 200
    assert response.text == "ok"
    assert response.headers["access-control-allow-origin"] == "*"
    assert "content-type" in response.headers["access-control-allow-headers"]


async def test_get_returns_signed_parameters(client, configured_keys):
    response = await client.get(AUTH_URL)

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    body = response.json()
    assert set(body) == {"token", "expire", "signature"}
    assert body["token"] == "public_test"
    assert body["signature"] == _expected_signature("private_test", body["expire"])


async def test_get_without_keys_returns_500_error_body(client, missing_keys):
    response = await client.get(AUTH_URL)

    assert response.status_code == 500
    assert response.json() == {"error": "ImageKit credentials not configured"}
    assert response.headers["access-control-allow-origin"] == "*"
