"""Blockfrost UTxO records → UTxO."""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from utxo_provider.blockfrost import BlockfrostClient
from utxo_provider.errors import FetchError, UnsupportedScriptError
from utxo_provider.plutus import ensure_double_wrapped
from utxo_provider.types import Assets, OutRef, ScriptKind, ScriptRef, UTxO

logger = logging.getLogger(__name__)

NATIVE_SCRIPT_TYPES = {"native", "timelock"}
PLUTUS_SCRIPT_TYPES = {
    "plutusv1": ScriptKind.PLUTUS_V1,
    "plutusv2": ScriptKind.PLUTUS_V2,
}


def parse_assets(amount: List[Dict[str, str]]) -> Assets:
    """Build assets from the API's (unit, decimal quantity) list, keeping order."""
    assets: Assets = {}
    for entry in amount:
        assets[entry["unit"]] = int(entry["quantity"])
    return assets


class UtxoNormalizer:
    """
    Converts Blockfrost UTxO records to UTxOs.

    Record structure:
        {"tx_hash": str, "output_index": int, "address": str,
         "amount": [{"unit": str, "quantity": str}],
         "data_hash": Optional[str], "inline_datum": Optional[str],
         "reference_script_hash": Optional[str]}
    """

    def __init__(self, client: BlockfrostClient):
        self.client = client

    async def normalize_all(self, records: List[Dict[str, Any]]) -> List[UTxO]:
        """
        Normalize records concurrently, preserving input order.

        The first failure cancels the lookups still in flight.
        """
        tasks = [asyncio.ensure_future(self.normalize(r)) for r in records]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            raise

    async def normalize(self, record: Dict[str, Any]) -> UTxO:
        inline_datum = record.get("inline_datum")
        script_hash = record.get("reference_script_hash")
        return UTxO(
            out_ref=OutRef(record["tx_hash"], int(record["output_index"])),
            address=record["address"],
            assets=parse_assets(record.get("amount", [])),
            datum_hash=None if inline_datum else record.get("data_hash"),
            datum=inline_datum or None,
            script_ref=await self.resolve_script_ref(script_hash) if script_hash else None,
        )

    async def resolve_script_ref(self, script_hash: str) -> ScriptRef:
        """Look up a reference script's kind, then its CBOR."""
        try:
            info = await self.client.get(f"/scripts/{script_hash}")
        except FetchError as e:
            raise FetchError(f"Could not fetch script {script_hash}. Try again.") from e
        script_type = str(info.get("type", "")).lower()

        if script_type in NATIVE_SCRIPT_TYPES:
            raise UnsupportedScriptError(f"Native script ref not supported: {script_hash}")
        kind = PLUTUS_SCRIPT_TYPES.get(script_type)
        if kind is None:
            raise UnsupportedScriptError(f"Unsupported script type {info.get('type')!r}: {script_hash}")

        try:
            result = await self.client.get(f"/scripts/{script_hash}/cbor")
        except FetchError as e:
            raise FetchError(f"Could not fetch script CBOR {script_hash}. Try again.") from e
        cbor: Optional[str] = result.get("cbor")
        if not cbor:
            raise FetchError(f"Script {script_hash} has no CBOR")

        logger.debug(f"Resolved {kind.value} reference script {script_hash[:16]}...")
        return ScriptRef(kind=kind, script=ensure_double_wrapped(cbor))
