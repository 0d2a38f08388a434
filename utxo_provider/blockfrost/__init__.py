"""Blockfrost REST access."""

from .client import BlockfrostClient, CLIENT_VERSION, MAINNET_URL, PREPROD_URL, PREVIEW_URL

__all__ = ["BlockfrostClient", "CLIENT_VERSION", "MAINNET_URL", "PREPROD_URL", "PREVIEW_URL"]
