#!/usr/bin/env python3
"""
Upload a .woff/.woff2 font and apply it to the published checkout profile.

Usage:
    uv run scripts/apply_checkout_font.py ./fonts/brand.woff2
    uv run scripts/apply_checkout_font.py ./fonts/brand.woff2 --max-attempts 60 --interval 2
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from fontbranding.branding.pipeline import apply_checkout_font
from fontbranding.clients.shopify_client import ShopifyClient
from fontbranding.clients.upload_client import StagedUploadClient
from fontbranding.config import get_settings
from fontbranding.utils.logging import setup_logging, get_logger


def main() -> None:
    parser = argparse.ArgumentParser(description="Apply a custom font to Shopify checkout branding.")
    parser.add_argument("path", type=Path, help="Path to a .woff or .woff2 file")
    parser.add_argument("--max-attempts", type=int, default=None, help="File status checks before giving up")
    parser.add_argument("--interval", type=float, default=None, help="Seconds between file status checks")
    parser.add_argument("--raw", action="store_true", help="Print the JSON response only")
    args = parser.parse_args()

    settings = get_settings()
    settings.require_shopify()
    setup_logging(level=settings.LOG_LEVEL, json_output=(settings.LOG_FORMAT == "json"))
    log = get_logger("fontbranding.cli")

    overrides = {}
    if args.max_attempts is not None:
        overrides["FILE_POLL_MAX_ATTEMPTS"] = max(1, args.max_attempts)
    if args.interval is not None:
        overrides["FILE_POLL_INTERVAL_SEC"] = max(0.0, args.interval)
    if overrides:
        settings = settings.model_copy(update=overrides)

    if not args.path.exists():
        print(f"❌ File not found: {args.path}")
        sys.exit(1)

    client = ShopifyClient.from_settings(settings)
    log.info("Uploading %s (%d bytes)", args.path.name, args.path.stat().st_size)
    result = apply_checkout_font(
        client,
        args.path.name,
        args.path.read_bytes(),
        uploader=StagedUploadClient.from_settings(settings),
        settings=settings,
    )

    if args.raw:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    elif result.success:
        print(f"✅ {result.message}")
    else:
        print(f"❌ {result.message}: {result.error}")

    if not result.success:
        sys.exit(1)


if __name__ == "__main__":
    main()
