"""UTxO and chain data fetching from Blockfrost."""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Union

import httpx

from utxo_provider.blockfrost import BlockfrostClient, MAINNET_URL
from utxo_provider.errors import (
    ApiError, DatumNotFoundError, FetchError, NotSingletonError, SubmitError, UnitNotFoundError,
)
from utxo_provider.plutus import datum_json_to_cbor
from utxo_provider.types import (
    AddressOrCredential, Delegation, OutRef, ProtocolParameters, Unit, UTxO, to_address_query,
)
from .confirmation import ConfirmationWaiter
from .normalizer import UtxoNormalizer
from .pages import fetch_all_pages

logger = logging.getLogger(__name__)

# Two holders are enough to tell an NFT from a shared unit
HOLDER_QUERY_COUNT = 2


class BlockfrostProvider:
    """Fetches UTxOs, datums and chain state from Blockfrost."""

    def __init__(
        self,
        url: str = MAINNET_URL,
        project_id: Optional[str] = None,
        max_concurrent_requests: int = 10,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client = BlockfrostClient(
            url=url,
            project_id=project_id,
            max_concurrent_requests=max_concurrent_requests,
            timeout=timeout,
            transport=transport,
        )
        self.normalizer = UtxoNormalizer(self.client)

    async def close(self):
        await self.client.close()

    async def __aenter__(self):
        await self.client.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def get_protocol_parameters(self) -> ProtocolParameters:
        r = await self.client.get("/epochs/latest/parameters")
        return ProtocolParameters(
            min_fee_a=int(r["min_fee_a"]),
            min_fee_b=int(r["min_fee_b"]),
            max_tx_size=int(r["max_tx_size"]),
            max_val_size=int(r["max_val_size"]),
            key_deposit=int(r["key_deposit"]),
            pool_deposit=int(r["pool_deposit"]),
            price_mem=float(r["price_mem"]),
            price_step=float(r["price_step"]),
            max_tx_ex_mem=int(r["max_tx_ex_mem"]),
            max_tx_ex_steps=int(r["max_tx_ex_steps"]),
            coins_per_utxo_byte=int(r["coins_per_utxo_size"]),
            collateral_percentage=int(r["collateral_percent"]),
            max_collateral_inputs=int(r["max_collateral_inputs"]),
            cost_models=r.get("cost_models") or {},
        )

    async def get_utxos(self, address_or_credential: AddressOrCredential) -> List[UTxO]:
        """Fetch all UTxOs at an address or payment credential."""
        query = to_address_query(address_or_credential)
        records = await fetch_all_pages(self.client, f"/addresses/{query}/utxos")
        return await self.normalizer.normalize_all(records)

    async def get_utxos_with_unit(self, address_or_credential: AddressOrCredential, unit: Unit) -> List[UTxO]:
        """Fetch UTxOs at an address or payment credential holding `unit`."""
        query = to_address_query(address_or_credential)
        records = await fetch_all_pages(self.client, f"/addresses/{query}/utxos/{unit}")
        return await self.normalizer.normalize_all(records)

    async def get_utxo_by_unit(self, unit: Unit) -> UTxO:
        """Fetch the one UTxO holding `unit`. The unit must have a single holder."""
        try:
            addresses = await self.client.get(f"/assets/{unit}/addresses", params={"count": HOLDER_QUERY_COUNT})
        except ApiError as e:
            raise UnitNotFoundError(f"Unit not found: {unit}") from e
        if not addresses:
            raise UnitNotFoundError(f"Unit not found: {unit}")
        if len(addresses) > 1:
            raise NotSingletonError(f"Unit {unit} needs to be an NFT or only held by one address.")

        utxos = await self.get_utxos_with_unit(addresses[0]["address"], unit)
        if len(utxos) > 1:
            raise NotSingletonError(f"Unit {unit} needs to be an NFT or only held by one address.")
        if not utxos:
            raise UnitNotFoundError(f"Unit not found: {unit}")
        return utxos[0]

    async def get_utxos_by_out_ref(self, out_refs: List[OutRef]) -> List[UTxO]:
        """
        Fetch the UTxOs named by `out_refs`.

        Each transaction is queried once however many of its outputs are
        requested. Transaction lookups return every output, so results are
        filtered back to the exact (tx_hash, output_index) pairs asked for.
        """
        tx_hashes = list(dict.fromkeys(ref.tx_hash for ref in out_refs))
        batches = await asyncio.gather(*(self._get_tx_outputs(h) for h in tx_hashes))

        wanted = {(ref.tx_hash, ref.output_index) for ref in out_refs}
        return [
            utxo
            for batch in batches
            for utxo in batch
            if (utxo.tx_hash, utxo.output_index) in wanted
        ]

    async def _get_tx_outputs(self, tx_hash: str) -> List[UTxO]:
        """All outputs of a transaction. Lookup failures give []."""
        try:
            result = await self.client.get(f"/txs/{tx_hash}/utxos")
        except FetchError as e:
            logger.warning(f"Skipping outputs of {tx_hash}: {e}")
            return []
        if not isinstance(result, dict):
            logger.warning(f"Skipping outputs of {tx_hash}: unexpected body")
            return []

        records = [{**output, "tx_hash": tx_hash} for output in result.get("outputs", [])]
        return await self.normalizer.normalize_all(records)

    async def get_delegation(self, reward_address: str) -> Delegation:
        try:
            result = await self.client.get(f"/accounts/{reward_address}")
        except ApiError as e:
            logger.debug(f"No delegation for {reward_address}: {e}")
            return Delegation(pool_id=None, rewards=0)
        return Delegation(
            pool_id=result.get("pool_id") or None,
            rewards=int(result.get("withdrawable_amount") or 0),
        )

    async def get_datum(self, datum_hash: str) -> str:
        """
        Fetch datum CBOR (hex) by hash.

        Falls back to the legacy JSON datum endpoint when no CBOR is served.
        """
        try:
            result = await self.client.get(f"/scripts/datum/{datum_hash}/cbor")
            if cbor := result.get("cbor"):
                return cbor
        except ApiError as e:
            if not e.is_not_found:
                raise

        try:
            result = await self.client.get(f"/scripts/datum/{datum_hash}")
        except ApiError as e:
            if e.is_not_found:
                raise DatumNotFoundError(f"No datum found for datum hash: {datum_hash}") from e
            raise
        json_value = result.get("json_value")
        if json_value is None:
            raise DatumNotFoundError(f"No datum found for datum hash: {datum_hash}")
        logger.debug(f"Converted legacy JSON datum {datum_hash[:16]}... to CBOR")
        return datum_json_to_cbor(json_value)

    async def is_tx_confirmed(self, tx_hash: str) -> bool:
        try:
            result = await self.client.get(f"/txs/{tx_hash}")
        except FetchError as e:
            logger.debug(f"Transaction {tx_hash} not confirmed yet: {e}")
            return False
        return bool(result)

    async def await_tx(self, tx_hash: str, check_interval: float = 3.0, timeout: Optional[float] = None) -> bool:
        """Wait until `tx_hash` is on chain. Raises AwaitTxTimeoutError past `timeout`."""
        waiter = ConfirmationWaiter(
            tx_hash,
            lambda: self.is_tx_confirmed(tx_hash),
            check_interval=check_interval,
            timeout=timeout,
        )
        return await waiter.wait()

    async def submit_tx(self, tx: Union[bytes, str]) -> str:
        """Submit a signed transaction (CBOR bytes or hex), returning its hash."""
        body = bytes.fromhex(tx) if isinstance(tx, str) else tx
        try:
            result: Any = await self.client.post_cbor("/tx/submit", body)
        except ApiError as e:
            if e.status_code == 400 and e.message:
                raise SubmitError(e.message, status_code=400) from e
            raise SubmitError("Could not submit transaction.", status_code=e.status_code) from e
        except FetchError as e:
            raise SubmitError("Could not submit transaction.") from e

        tx_hash = result if isinstance(result, str) else None
        if not tx_hash:
            raise SubmitError("Could not submit transaction.")
        logger.info(f"Submitted transaction {tx_hash}")
        return tx_hash


def describe_utxo(utxo: UTxO) -> Dict[str, Any]:
    """Flat dict view of a UTxO for logging and scripts."""
    return {
        "out_ref": str(utxo.out_ref),
        "address": utxo.address,
        "assets": {unit: str(qty) for unit, qty in utxo.assets.items()},
        "datum_hash": utxo.datum_hash,
        "datum": utxo.datum,
        "script_ref": utxo.script_ref.kind.value if utxo.script_ref else None,
    }
