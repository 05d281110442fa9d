from typing import Any, Dict, List, Optional
from unittest.mock import Mock

import pytest

from fontbranding.clients.upload_client import UploadError

FILE_ID = "gid://x/GenericFile/1"
PROFILE = {"id": "gid://shopify/CheckoutProfile/7", "name": "Default checkout"}

STAGED_TARGET = {
    "url": "https://shopify-staged-uploads.storage.googleapis.com/",
    "resourceUrl": "https://shopify-staged-uploads.storage.googleapis.com/tmp/brand.woff2",
    "parameters": [
        {"name": "Content-Type", "value": "font/woff2"},
        {"name": "success_action_status", "value": "201"},
        {"name": "acl", "value": "private"},
        {"name": "key", "value": "tmp/brand.woff2"},
        {"name": "policy", "value": "eyJjb25kaXRpb25zIjpbXX0="},
    ],
}


class FakeShopify:
    """
    Stand-in for ShopifyClient. Records every GraphQL operation in `calls` and answers
    file status queries from `statuses` (last value repeats).
    """

    def __init__(
        self,
        staged: Optional[Dict[str, Any]] = None,
        created: Optional[Dict[str, Any]] = None,
        statuses: Optional[List[Optional[str]]] = None,
        profiles: Optional[List[Dict[str, Any]]] = None,
        upsert: Optional[Dict[str, Any]] = None,
    ):
        self.staged = staged if staged is not None else {"stagedTargets": [STAGED_TARGET], "userErrors": []}
        self.created = created if created is not None else {
            "files": [{"id": FILE_ID, "fileStatus": "UPLOADED"}],
            "userErrors": [],
        }
        self.statuses = list(statuses) if statuses is not None else ["READY"]
        self.profiles = profiles if profiles is not None else [PROFILE]
        self.upsert = upsert if upsert is not None else {
            "checkoutBranding": {"designSystem": {"typography": {"primary": {"base": {"sources": "url(brand.woff2)"}}}}},
            "userErrors": [],
        }
        self.calls: List[tuple] = []

    def staged_uploads_create(self, filename, mime_type, file_size, resource="FILE"):
        self.calls.append(("stagedUploadsCreate", filename, mime_type, file_size))
        return self.staged

    def file_create(self, original_source, filename, content_type="FILE"):
        self.calls.append(("fileCreate", original_source, filename))
        return self.created

    def get_file(self, file_id):
        self.calls.append(("getFile", file_id))
        idx = min(self.count("getFile") - 1, len(self.statuses) - 1)
        status = self.statuses[idx]
        if status is None:
            return None
        return {"id": file_id, "fileStatus": status, "url": "https://cdn.shopify.com/brand.woff2"}

    def checkout_profiles(self, query="is_published:true", first=1):
        self.calls.append(("checkoutProfiles", query, first))
        return self.profiles

    def checkout_branding_upsert(self, checkout_profile_id, branding_input):
        self.calls.append(("checkoutBrandingUpsert", checkout_profile_id, branding_input))
        return self.upsert

    def count(self, op: str) -> int:
        return sum(1 for c in self.calls if c[0] == op)

    def ops(self) -> List[str]:
        return [c[0] for c in self.calls]


def make_uploader(status_code: int = 201, body: str = ""):
    uploader = Mock()
    if 200 <= status_code < 300:
        uploader.transmit.return_value = Mock(status_code=status_code, text=body)
    else:
        uploader.transmit.side_effect = UploadError(
            f"Staged upload failed: HTTP {status_code}", Mock(status_code=status_code, text=body)
        )
    return uploader


@pytest.fixture
def shopify():
    return FakeShopify()


@pytest.fixture
def uploader():
    return make_uploader()


@pytest.fixture
def no_sleep():
    return Mock()


@pytest.fixture
def font_bytes():
    return b"wOF2" + b"\x00" * (50000 - 4)
