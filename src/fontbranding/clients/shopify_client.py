from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

import requests

from fontbranding.utils.logging import get_logger

log = get_logger("fontbranding.shopify")

DEFAULT_TIMEOUT = 20  # seconds


STAGED_UPLOADS_CREATE = """
mutation stagedUploadsCreate($input: [StagedUploadInput!]!) {
  stagedUploadsCreate(input: $input) {
    stagedTargets {
      url
      resourceUrl
      parameters { name value }
    }
    userErrors { field message }
  }
}
"""

FILE_CREATE = """
mutation fileCreate($files: [FileCreateInput!]!) {
  fileCreate(files: $files) {
    files {
      id
      fileStatus
      ... on GenericFile { url }
    }
    userErrors { field message }
  }
}
"""

FILE_STATUS = """
query getFile($id: ID!) {
  node(id: $id) {
    ... on GenericFile {
      id
      fileStatus
      url
    }
  }
}
"""

CHECKOUT_PROFILES = """
query checkoutProfiles($first: Int!, $query: String) {
  checkoutProfiles(first: $first, query: $query) {
    edges {
      node { id name }
    }
  }
}
"""

CHECKOUT_BRANDING_UPSERT = """
mutation checkoutBrandingUpsert($checkoutProfileId: ID!, $checkoutBrandingInput: CheckoutBrandingInput!) {
  checkoutBrandingUpsert(checkoutProfileId: $checkoutProfileId, checkoutBrandingInput: $checkoutBrandingInput) {
    checkoutBranding {
      designSystem {
        typography {
          primary { base { sources } bold { sources } }
          secondary { base { sources } bold { sources } }
        }
      }
    }
    userErrors { field message }
  }
}
"""


class ShopifyGraphQLError(RuntimeError):
    def __init__(self, errors: Any):
        super().__init__(f"Shopify GraphQL returned errors: {errors}")
        self.errors = errors


class ShopifyClient:
    def __init__(
        self,
        token: Optional[str] = None,
        domain: Optional[str] = None,
        api_version: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        # Support both SHOPIFY_TOKEN and legacy SHOPIFY_ACCESS_TOKEN
        token_env = token or os.getenv("SHOPIFY_TOKEN") or os.getenv("SHOPIFY_ACCESS_TOKEN")
        if not token_env:
            raise ValueError("Missing Shopify token. Set SHOPIFY_TOKEN or SHOPIFY_ACCESS_TOKEN.")
        domain_env = domain or os.getenv("SHOPIFY_DOMAIN")
        if not domain_env:
            raise ValueError("Missing Shopify domain. Set SHOPIFY_DOMAIN (e.g. https://yourshop.myshopify.com).")

        self.token = token_env
        self.domain = domain_env.rstrip("/")
        if not self.domain.startswith("http"):
            self.domain = "https://" + self.domain
        self.api_version = api_version or os.getenv("SHOPIFY_API_VERSION", "2025-01")
        self.timeout = timeout or DEFAULT_TIMEOUT

        self.base_url = f"{self.domain}/admin/api/{self.api_version}"
        self.session = session or requests.Session()
        self.session.headers.update({
            "X-Shopify-Access-Token": self.token,
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": "FontBranding/1.0 (+ShopifyClient)"
        })
        self.graphql_url = f"{self.base_url}/graphql.json"

    @classmethod
    def from_settings(cls, settings) -> "ShopifyClient":
        settings.require_shopify()
        return cls(
            token=settings.SHOPIFY_TOKEN,
            domain=settings.SHOPIFY_DOMAIN,
            api_version=settings.SHOPIFY_API_VERSION,
            timeout=settings.SHOPIFY_TIMEOUT_SEC,
        )

    def close(self) -> None:
        self.session.close()

    @staticmethod
    def _raise_http_error(resp: requests.Response) -> None:
        try:
            detail = resp.json()
        except ValueError:
            detail = resp.text
        raise requests.HTTPError(f"Shopify API error {resp.status_code}: {detail}", response=resp)

    # ---- Public methods ----

    def graphql_query(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Execute a GraphQL query/mutation against the Shopify Admin API.
        No retries: a failed call is reported to the caller as-is.
        """
        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables
        resp = self.session.post(self.graphql_url, json=payload, timeout=self.timeout)
        if not resp.ok:
            self._raise_http_error(resp)
        data = resp.json()
        if data.get("errors"):
            raise ShopifyGraphQLError(data["errors"])
        return data

    def _data(self, query: str, variables: Optional[Dict[str, Any]], root: str) -> Dict[str, Any]:
        result = self.graphql_query(query, variables)
        return (result.get("data") or {}).get(root) or {}

    def staged_uploads_create(self, filename: str, mime_type: str, file_size: int, resource: str = "FILE") -> Dict[str, Any]:
        """
        Ask Shopify for a pre-signed upload target. Returns the `stagedUploadsCreate` payload
        (`stagedTargets` + `userErrors`).
        """
        variables = {
            "input": [
                {
                    "resource": resource,
                    "filename": filename,
                    "mimeType": mime_type,
                    "fileSize": str(file_size),
                    "httpMethod": "POST",
                }
            ]
        }
        return self._data(STAGED_UPLOADS_CREATE, variables, "stagedUploadsCreate")

    def file_create(self, original_source: str, filename: str, content_type: str = "FILE") -> Dict[str, Any]:
        variables = {
            "files": [
                {
                    "originalSource": original_source,
                    "filename": filename,
                    "contentType": content_type,
                }
            ]
        }
        return self._data(FILE_CREATE, variables, "fileCreate")

    def get_file(self, file_id: str) -> Optional[Dict[str, Any]]:
        """Returns the GenericFile node (`id`, `fileStatus`, `url`) or None if Shopify has nothing yet."""
        result = self.graphql_query(FILE_STATUS, {"id": file_id})
        return (result.get("data") or {}).get("node")

    def checkout_profiles(self, query: str = "is_published:true", first: int = 1) -> List[Dict[str, Any]]:
        data = self._data(CHECKOUT_PROFILES, {"first": max(1, min(first, 250)), "query": query}, "checkoutProfiles")
        return [edge.get("node") or {} for edge in data.get("edges") or []]

    def checkout_branding_upsert(self, checkout_profile_id: str, branding_input: Dict[str, Any]) -> Dict[str, Any]:
        variables = {
            "checkoutProfileId": checkout_profile_id,
            "checkoutBrandingInput": branding_input,
        }
        return self._data(CHECKOUT_BRANDING_UPSERT, variables, "checkoutBrandingUpsert")
