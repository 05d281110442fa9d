#!/usr/bin/env python3
"""
GraphQL sanity test for checkout branding access.

Lists checkout profiles (published by default) so we can verify credentials and that the shop
is on a plan with checkout branding before trying a font upload.
"""
from __future__ import annotations

import argparse
import json
from typing import Any, Dict

from fontbranding.clients.shopify_client import ShopifyClient
from fontbranding.config import get_settings
from fontbranding.utils.logging import setup_logging, get_logger


def summarize_profile(node: Dict[str, Any]) -> str:
    return f"{node.get('name')} | id={node.get('id')}"


def main() -> None:
    parser = argparse.ArgumentParser(description="List Shopify checkout profiles via GraphQL Admin API.")
    parser.add_argument("--first", type=int, default=10, help="Number of profiles to request (max 250)")
    parser.add_argument("--query", default="is_published:true", help="Checkout profile search query string")
    parser.add_argument("--raw", action="store_true", help="Print raw profile JSON")
    args = parser.parse_args()

    settings = get_settings()
    settings.require_shopify()
    setup_logging(level=settings.LOG_LEVEL, json_output=(settings.LOG_FORMAT == "json"))
    log = get_logger("fontbranding.shopify.graphql")

    client = ShopifyClient.from_settings(settings)
    log.info("GraphQL checkoutProfiles: first=%s, query=\"%s\"", args.first, args.query)
    profiles = client.checkout_profiles(query=args.query or None, first=args.first)

    if args.raw:
        print(json.dumps(profiles, indent=2, ensure_ascii=False))
        return

    log.info("Shopify returned %d checkout profiles", len(profiles))
    if not profiles:
        print("No checkout profiles returned. Checkout branding requires Shopify Plus or a development store.")
        return

    print("Checkout profiles:")
    for idx, node in enumerate(profiles, start=1):
        print(f"{idx:02d}. {summarize_profile(node)}")


if __name__ == "__main__":
    main()
