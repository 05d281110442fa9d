from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from fontbranding import server
from fontbranding.branding.pipeline import SUCCESS_MESSAGE
from fontbranding.config import Settings

from conftest import FakeShopify, make_uploader


@pytest.fixture
def fake_shopify():
    return FakeShopify()


@pytest.fixture
def api(fake_shopify):
    settings = Settings(FILE_POLL_INTERVAL_SEC=0, FONTBRANDING_TOKEN="s3cret")
    server.app.dependency_overrides[server.get_app_settings] = lambda: settings
    server.app.dependency_overrides[server.get_shopify_client] = lambda: fake_shopify
    server.app.dependency_overrides[server.get_uploader] = lambda: make_uploader()
    yield TestClient(server.app)
    server.app.dependency_overrides.clear()


AUTH = {"Authorization": "Bearer s3cret"}


def test_healthz(api):
    assert api.get("/healthz").json() == {"status": "ok"}


def test_upload_font(api, fake_shopify):
    resp = api.post(
        "/branding/font",
        files={"fontFile": ("brand.woff2", b"wOF2" + b"\x00" * 100, "font/woff2")},
        headers=AUTH,
    )

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": SUCCESS_MESSAGE}
    assert fake_shopify.ops()[-1] == "checkoutBrandingUpsert"


def test_invalid_file_type(api, fake_shopify):
    resp = api.post(
        "/branding/font",
        files={"fontFile": ("brand.ttf", b"\x00\x01\x00\x00", "font/ttf")},
        headers=AUTH,
    )

    assert resp.status_code == 200
    assert resp.json() == {
        "success": False,
        "message": "Invalid file type",
        "error": "Only .woff and .woff2 files are allowed",
    }
    assert fake_shopify.calls == []


def test_missing_file_field(api):
    resp = api.post("/branding/font", data={"other": "x"}, headers=AUTH)

    assert resp.status_code == 200
    assert resp.json()["message"] == "No font file provided"


def test_wrong_token(api, fake_shopify):
    resp = api.post(
        "/branding/font",
        files={"fontFile": ("brand.woff2", b"wOF2", "font/woff2")},
        headers={"Authorization": "Bearer nope"},
    )

    assert resp.status_code == 401
    assert fake_shopify.calls == []


def test_unconfigured_shop_returns_503():
    settings = Settings(SHOPIFY_DOMAIN=None, SHOPIFY_TOKEN=None, FONTBRANDING_TOKEN=None)
    server.app.dependency_overrides[server.get_app_settings] = lambda: settings
    try:
        resp = TestClient(server.app).post(
            "/branding/font",
            files={"fontFile": ("brand.woff2", b"wOF2", "font/woff2")},
        )
    finally:
        server.app.dependency_overrides.clear()

    assert resp.status_code == 503


def test_dependencies_close_sessions():
    settings = Settings(SHOPIFY_DOMAIN="https://test-shop.myshopify.com", SHOPIFY_TOKEN="shpat_test")

    client_dep = server.get_shopify_client(settings)
    client = next(client_dep)
    client.session = Mock()
    client_dep.close()

    uploader_dep = server.get_uploader(settings)
    uploader = next(uploader_dep)
    uploader.session = Mock()
    uploader_dep.close()

    client.session.close.assert_called_once_with()
    uploader.session.close.assert_called_once_with()
