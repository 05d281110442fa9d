# src/fontbranding/clients/upload_client.py
from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple

import requests
from requests import Response

DEFAULT_TIMEOUT = (10, 60)  # (connect, read) seconds


class UploadError(RuntimeError):
    def __init__(self, message: str, response: Optional[Response] = None):
        super().__init__(message)
        self.response = response
        self.status_code = getattr(response, "status_code", None)
        self.body = response.text if response is not None else None


class StagedUploadClient:
    """
    Posts a binary file to a pre-signed staged upload target (Shopify's GCS/S3 bucket).

    The target is pre-signed, so no Shopify credentials are sent. Form fields go first in the
    order Shopify returned them, the file part goes last.
    """

    def __init__(self, session: Optional[requests.Session] = None, timeout=DEFAULT_TIMEOUT):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.log = logging.getLogger(__name__)

    @classmethod
    def from_settings(cls, settings) -> "StagedUploadClient":
        return cls(timeout=(10, settings.UPLOAD_TIMEOUT_SEC))

    def transmit(
        self,
        url: str,
        parameters: Iterable[Tuple[str, str]],
        file_name: str,
        payload: bytes,
        mime_type: str,
    ) -> Response:
        # requests encodes `data` fields before `files`, and keeps list order for both
        fields = [(name, value) for name, value in parameters]
        files = [("file", (file_name, payload, mime_type))]
        self.log.debug("POST staged upload %s (%d fields, %d bytes)", url, len(fields), len(payload))
        # A 3xx from the target counts as a failed upload
        resp = self.session.post(url, data=fields, files=files, timeout=self.timeout, allow_redirects=False)
        if not (200 <= resp.status_code < 300):
            raise UploadError(f"Staged upload failed: HTTP {resp.status_code}", resp)
        return resp

    def close(self) -> None:
        self.session.close()
