"""Provider protocol for chain queries used by transaction builders."""

from typing import List, Optional, Protocol, Union, runtime_checkable

from utxo_provider.types import (
    AddressOrCredential, Delegation, OutRef, ProtocolParameters, Unit, UTxO,
)


@runtime_checkable
class Provider(Protocol):
    """
    Interface for chain data providers (Blockfrost, Kupo, etc.).

    Implementations return normalized UTxOs; quantities are Python ints.
    """

    async def get_protocol_parameters(self) -> ProtocolParameters:
        ...

    async def get_utxos(self, address_or_credential: AddressOrCredential) -> List[UTxO]:
        """Fetch all UTxOs at an address or payment credential."""
        ...

    async def get_utxos_with_unit(self, address_or_credential: AddressOrCredential, unit: Unit) -> List[UTxO]:
        """Fetch UTxOs at an address or credential holding a unit."""
        ...

    async def get_utxo_by_unit(self, unit: Unit) -> UTxO:
        """Fetch the single UTxO holding an NFT."""
        ...

    async def get_utxos_by_out_ref(self, out_refs: List[OutRef]) -> List[UTxO]:
        """Fetch exactly the UTxOs named by `out_refs` that exist."""
        ...

    async def get_delegation(self, reward_address: str) -> Delegation:
        ...

    async def get_datum(self, datum_hash: str) -> str:
        """Fetch datum CBOR (hex) by hash."""
        ...

    async def await_tx(self, tx_hash: str, check_interval: float = 3.0, timeout: Optional[float] = None) -> bool:
        ...

    async def submit_tx(self, tx: Union[bytes, str]) -> str:
        """Submit a signed transaction, returning its hash."""
        ...
