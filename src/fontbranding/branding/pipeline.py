"""
fontbranding.branding.pipeline

Upload a font file and apply it to the published checkout profile:

    validate -> stagedUploadsCreate -> POST to staged target -> fileCreate
             -> poll until READY -> checkoutProfiles -> checkoutBrandingUpsert

Every failure is turned into an ActionResponse; nothing is raised to the caller and nothing
that already happened on Shopify's side is rolled back.
"""
from __future__ import annotations

import time
from typing import Callable, Optional

from fontbranding.branding import steps
from fontbranding.branding.errors import FontBrandingError, UnexpectedError
from fontbranding.branding.models import ActionResponse
from fontbranding.clients.shopify_client import ShopifyClient
from fontbranding.clients.upload_client import StagedUploadClient
from fontbranding.config import Settings
from fontbranding.utils.logging import get_logger

log = get_logger("fontbranding.pipeline")

SUCCESS_MESSAGE = (
    "Font successfully applied to checkout! "
    "The new font will now appear on primary text, secondary text, and buttons."
)


def apply_checkout_font(
    client: ShopifyClient,
    file_name: Optional[str],
    payload: Optional[bytes],
    *,
    uploader: Optional[StagedUploadClient] = None,
    settings: Optional[Settings] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> ActionResponse:
    max_attempts = settings.FILE_POLL_MAX_ATTEMPTS if settings else steps.MAX_POLL_ATTEMPTS
    interval = settings.FILE_POLL_INTERVAL_SEC if settings else steps.POLL_INTERVAL_SEC
    step = "validate"

    log.info("Starting font upload for %r", file_name)
    try:
        request = steps.build_upload_request(file_name, payload)
        log.info("Processing file: %s, size: %d, type: %s", request.file_name, request.size_bytes, request.mime_type)

        step = "provision"
        target = steps.provision_upload(client, request)

        step = "transmit"
        if uploader is None:
            uploader = StagedUploadClient.from_settings(settings) if settings else StagedUploadClient()
        steps.transmit_asset(uploader, target, request, payload)
        log.info("File uploaded to staged target")

        step = "register"
        managed = steps.register_asset(client, target, request)

        step = "poll"
        managed = steps.wait_until_ready(client, managed, max_attempts=max_attempts, interval=interval, sleep=sleep)

        step = "resolve_profile"
        profile = steps.resolve_active_profile(client)

        step = "apply_binding"
        binding = steps.apply_font_binding(client, profile, managed)
        log.debug("Persisted checkout typography: %s", binding.typography)

    except FontBrandingError as e:
        log.error("Font branding failed at step=%s: %s | %s", e.step, e.message, e.error, extra={"step": e.step})
        return ActionResponse(success=False, message=e.message, error=e.error)
    except Exception as exc:
        err = UnexpectedError(exc, step=step)
        log.exception("Unexpected error at step=%s", step, extra={"step": step})
        return ActionResponse(success=False, message=err.message, error=err.error)

    log.info("Font successfully applied to checkout profile %s (file %s)", profile.id, managed.id)
    return ActionResponse(success=True, message=SUCCESS_MESSAGE)
