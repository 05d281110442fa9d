# src/fontbranding/server.py
"""
HTTP entry point for the admin surface.

Run:  uvicorn fontbranding.server:app --port 8000
"""
from typing import Iterator, Optional

from fastapi import Depends, FastAPI, File, Header, HTTPException, UploadFile

from fontbranding.branding.models import ActionResponse
from fontbranding.branding.pipeline import apply_checkout_font
from fontbranding.clients.shopify_client import ShopifyClient
from fontbranding.clients.upload_client import StagedUploadClient
from fontbranding.config import Settings, get_settings
from fontbranding.utils.logging import get_logger

log = get_logger("fontbranding.server")

app = FastAPI(title="FontBranding API", version="0.1.0")


# --- Dependencies (overridable in tests) ---
def get_app_settings() -> Settings:
    return get_settings()


def get_shopify_client(settings: Settings = Depends(get_app_settings)) -> Iterator[ShopifyClient]:
    try:
        client = ShopifyClient.from_settings(settings)
    except ValueError as e:
        log.error("Shopify client not configured: %s", e)
        raise HTTPException(status_code=503, detail=str(e))
    try:
        yield client
    finally:
        client.close()


def get_uploader(settings: Settings = Depends(get_app_settings)) -> Iterator[StagedUploadClient]:
    uploader = StagedUploadClient.from_settings(settings)
    try:
        yield uploader
    finally:
        uploader.close()


def check_auth(
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_app_settings),
) -> None:
    if settings.FONTBRANDING_TOKEN:
        if authorization != f"Bearer {settings.FONTBRANDING_TOKEN}":
            raise HTTPException(status_code=401, detail="Unauthorized")


@app.get("/healthz")
def healthz():
    return {"status": "ok"}


# Plain `def`: the pipeline blocks while polling, so it runs in the threadpool
@app.post("/branding/font", response_model=ActionResponse, response_model_exclude_none=True)
def upload_checkout_font(
    fontFile: Optional[UploadFile] = File(default=None),
    _auth: None = Depends(check_auth),
    settings: Settings = Depends(get_app_settings),
    client: ShopifyClient = Depends(get_shopify_client),
    uploader: StagedUploadClient = Depends(get_uploader),
):
    if fontFile is None:
        return apply_checkout_font(client, None, None, uploader=uploader, settings=settings)
    payload = fontFile.file.read()
    return apply_checkout_font(client, fontFile.filename, payload, uploader=uploader, settings=settings)
