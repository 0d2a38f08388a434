"""Chain data fetching."""

from .client import Provider
from .confirmation import ConfirmationWaiter, TxStatus
from .fetcher import BlockfrostProvider, describe_utxo
from .normalizer import UtxoNormalizer, parse_assets
from .pages import fetch_all_pages

__all__ = [
    "Provider", "BlockfrostProvider", "describe_utxo",
    "UtxoNormalizer", "parse_assets", "fetch_all_pages",
    "ConfirmationWaiter", "TxStatus",
]
