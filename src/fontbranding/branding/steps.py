"""
fontbranding.branding.steps

The individual steps of the font -> checkout branding flow. Each step takes the output of the
previous one and either returns a value object or raises a FontBrandingError subclass.
"""
from __future__ import annotations

import time
from typing import Any, Callable, Dict, Optional

from fontbranding.branding.errors import (
    BindingError,
    InvalidFileTypeError,
    MissingFileError,
    NoActiveProfileError,
    ProcessingError,
    ProcessingTimeoutError,
    ProvisionError,
    RegistrationError,
    TransmissionError,
    join_user_errors,
)
from fontbranding.branding.models import (
    FONT_MIME_TYPES,
    BindingResult,
    CheckoutProfile,
    FileStatus,
    FontUploadRequest,
    ManagedFile,
    UploadTarget,
)
from fontbranding.clients.shopify_client import ShopifyClient
from fontbranding.clients.upload_client import StagedUploadClient, UploadError
from fontbranding.utils.logging import get_logger

log = get_logger("fontbranding.branding")

MAX_POLL_ATTEMPTS = 30
POLL_INTERVAL_SEC = 1.0
FONT_WEIGHT_BASE = 400
FONT_WEIGHT_BOLD = 700
PUBLISHED_PROFILE_QUERY = "is_published:true"


def mime_type_for(file_name: str) -> Optional[str]:
    lowered = file_name.lower()
    for ext, mime in FONT_MIME_TYPES.items():
        if lowered.endswith(ext):
            return mime
    return None


def build_upload_request(file_name: Optional[str], payload: Optional[bytes]) -> FontUploadRequest:
    if not file_name:
        raise MissingFileError()
    mime_type = mime_type_for(file_name)
    if mime_type is None:
        raise InvalidFileTypeError(file_name)
    if not payload:
        raise MissingFileError()
    return FontUploadRequest(file_name=file_name, mime_type=mime_type, size_bytes=len(payload))


def provision_upload(client: ShopifyClient, request: FontUploadRequest) -> UploadTarget:
    data = client.staged_uploads_create(request.file_name, request.mime_type, request.size_bytes)
    user_errors = data.get("userErrors") or []
    if user_errors:
        log.error("Staged upload user errors: %s", user_errors)
        raise ProvisionError("Failed to create upload target", join_user_errors(user_errors))

    targets = data.get("stagedTargets") or []
    if not targets or not targets[0]:
        raise ProvisionError("No upload target returned", "Failed to get upload URL")
    target = UploadTarget.from_graphql(targets[0])
    log.info("Staged upload URL: %s", target.url)
    return target


def transmit_asset(uploader: StagedUploadClient, target: UploadTarget, request: FontUploadRequest, payload: bytes) -> None:
    try:
        uploader.transmit(target.url, target.parameters, request.file_name, payload, request.mime_type)
    except UploadError as e:
        log.error("Upload failed: HTTP %s %s", e.status_code, (e.body or "")[:500])
        raise TransmissionError(e.status_code, e.body) from e


def register_asset(client: ShopifyClient, target: UploadTarget, request: FontUploadRequest) -> ManagedFile:
    data = client.file_create(target.resource_url, request.file_name)
    user_errors = data.get("userErrors") or []
    if user_errors:
        log.error("File create user errors: %s", user_errors)
        raise RegistrationError("Failed to create file asset", join_user_errors(user_errors))

    files = data.get("files") or []
    node = files[0] if files else None
    if not node or not node.get("id"):
        raise RegistrationError("No file created", "Failed to create file in Shopify")
    managed = ManagedFile.from_graphql(node)
    log.info("File created with ID: %s (status=%s)", managed.id, managed.status.value)
    return managed


def wait_until_ready(
    client: ShopifyClient,
    managed: ManagedFile,
    *,
    max_attempts: int = MAX_POLL_ATTEMPTS,
    interval: float = POLL_INTERVAL_SEC,
    sleep: Callable[[float], None] = time.sleep,
) -> ManagedFile:
    """
    Blocks until Shopify reports the file READY or FAILED.

    Starts from the status returned by fileCreate. While pending, waits `interval` seconds and
    re-queries, at most `max_attempts` times. Raises ProcessingTimeoutError after the last
    pending answer.
    """
    if managed.status is FileStatus.READY:
        return managed
    if managed.status is FileStatus.FAILED:
        raise ProcessingError(managed.id)

    for attempt in range(1, max_attempts + 1):
        sleep(interval)
        node = client.get_file(managed.id)
        status = FileStatus.parse((node or {}).get("fileStatus"))
        log.debug("File status check %d/%d: %s", attempt, max_attempts, status.value)

        if status is FileStatus.READY:
            log.info("File %s is ready after %d check(s)", managed.id, attempt)
            return ManagedFile(id=managed.id, status=status, url=(node or {}).get("url") or managed.url)
        if status is FileStatus.FAILED:
            log.error("File processing failed for %s", managed.id)
            raise ProcessingError(managed.id)

    log.error("File processing timeout for %s after %d checks", managed.id, max_attempts)
    raise ProcessingTimeoutError(managed.id, max_attempts)


def resolve_active_profile(client: ShopifyClient) -> CheckoutProfile:
    profiles = client.checkout_profiles(query=PUBLISHED_PROFILE_QUERY, first=1)
    node = profiles[0] if profiles else None
    if not node or not node.get("id"):
        raise NoActiveProfileError()
    profile = CheckoutProfile(id=node["id"], name=node.get("name") or "")
    log.info("Using checkout profile: %s (%s)", profile.id, profile.name)
    return profile


def _font_group(generic_file_id: str) -> Dict[str, Any]:
    return {
        "customFontGroup": {
            "base": {"genericFileId": generic_file_id, "weight": FONT_WEIGHT_BASE},
            "bold": {"genericFileId": generic_file_id, "weight": FONT_WEIGHT_BOLD},
        }
    }


def build_branding_input(generic_file_id: str) -> Dict[str, Any]:
    """One font file for both typography roles and both weights; buttons follow the primary font."""
    return {
        "designSystem": {
            "typography": {
                "primary": _font_group(generic_file_id),
                "secondary": _font_group(generic_file_id),
            }
        },
        "customizations": {
            "primaryButton": {"typography": {"font": "PRIMARY"}},
        },
    }


def apply_font_binding(client: ShopifyClient, profile: CheckoutProfile, managed: ManagedFile) -> BindingResult:
    data = client.checkout_branding_upsert(profile.id, build_branding_input(managed.id))
    user_errors = data.get("userErrors") or []
    if user_errors:
        log.error("Branding upsert user errors: %s", user_errors)
        raise BindingError("Failed to apply font to checkout", join_user_errors(user_errors))

    branding = data.get("checkoutBranding") or {}
    typography = (branding.get("designSystem") or {}).get("typography")
    return BindingResult(success=True, typography=typography)
