"""
Core types for the UTxO provider.

Plain frozen dataclasses. Uses pycardano for hashes and bech32.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union

from pycardano import ScriptHash, VerificationKeyHash
from pycardano.crypto.bech32 import encode as bech32_encode

LOVELACE = "lovelace"
HASH28_HEX_LENGTH = 56  # policy ids, key and script hashes
TX_HASH_HEX_LENGTH = 64  # 32 bytes

Address = str
Unit = str
Assets = Dict[Unit, int]


@dataclass(frozen=True)
class Token:
    """
    Cardano native token split out of a unit.

    Lovelace is represented with empty policy_id and name.
    Name is stored as hex (not decoded).
    """
    policy_id: str
    name: str  # hex encoded

    @property
    def is_lovelace(self) -> bool:
        return self.policy_id == "" and self.name == ""

    @property
    def unit(self) -> Unit:
        return LOVELACE if self.is_lovelace else f"{self.policy_id}{self.name}"

    @classmethod
    def from_unit(cls, unit: Unit) -> "Token":
        """Policy ID is always the first 56 hex chars of a unit."""
        if not unit or unit == LOVELACE:
            return cls(policy_id="", name="")
        return cls(policy_id=unit[:HASH28_HEX_LENGTH], name=unit[HASH28_HEX_LENGTH:])

    def __str__(self) -> str:
        if self.is_lovelace:
            return LOVELACE
        try:
            decoded = bytes.fromhex(self.name).decode("utf-8")
            return f"{self.policy_id[:8]}..{decoded}"
        except (ValueError, UnicodeDecodeError):
            return f"{self.policy_id[:8]}..{self.name[:8]}"


@dataclass(frozen=True)
class OutRef:
    """Output reference: transaction hash + output index."""
    tx_hash: str
    output_index: int

    def __post_init__(self):
        if len(self.tx_hash) != TX_HASH_HEX_LENGTH:
            raise ValueError(f"Transaction hash must be {TX_HASH_HEX_LENGTH} hex chars: {self.tx_hash!r}")
        if self.output_index < 0:
            raise ValueError(f"Output index must be non-negative: {self.output_index}")

    def __str__(self) -> str:
        return f"{self.tx_hash}#{self.output_index}"


class ScriptKind(Enum):
    PLUTUS_V1 = "PlutusV1"
    PLUTUS_V2 = "PlutusV2"


@dataclass(frozen=True)
class ScriptRef:
    """Reference script. `script` is double CBOR wrapped hex."""
    kind: ScriptKind
    script: str


@dataclass(frozen=True)
class UTxO:
    """
    Unspent transaction output.

    The indexer only returns a datum hash for non-inline datums, so at most
    one of `datum` and `datum_hash` is set.
    """
    out_ref: OutRef
    address: Address
    assets: Assets = field(default_factory=dict)
    datum_hash: Optional[str] = None
    datum: Optional[str] = None
    script_ref: Optional[ScriptRef] = None

    def __post_init__(self):
        if self.datum is not None and self.datum_hash is not None:
            raise ValueError(f"UTxO {self.out_ref} has both an inline datum and a datum hash")

    @property
    def tx_hash(self) -> str:
        return self.out_ref.tx_hash

    @property
    def output_index(self) -> int:
        return self.out_ref.output_index

    @property
    def lovelace(self) -> int:
        return self.assets.get(LOVELACE, 0)

    def __repr__(self) -> str:
        return f"UTxO({self.out_ref}, {len(self.assets)} assets)"


class CredentialType(Enum):
    KEY = "Key"
    SCRIPT = "Script"


@dataclass(frozen=True)
class Credential:
    """Payment credential: key hash or script hash (hex)."""
    type: CredentialType
    hash: str

    def __post_init__(self):
        if len(self.hash) != HASH28_HEX_LENGTH:
            raise ValueError(f"Credential hash must be {HASH28_HEX_LENGTH} hex chars: {self.hash!r}")

    def to_bech32(self) -> str:
        """Render as the bech32 form the address endpoints accept (CIP-0005)."""
        if self.type == CredentialType.KEY:
            return bech32_encode("addr_vkh", bytes(VerificationKeyHash.from_primitive(self.hash)))
        return bech32_encode("script", bytes(ScriptHash.from_primitive(self.hash)))


AddressOrCredential = Union[Address, Credential]


def to_address_query(address_or_credential: AddressOrCredential) -> str:
    """Address strings pass through; credentials become bech32."""
    if isinstance(address_or_credential, Credential):
        return address_or_credential.to_bech32()
    return address_or_credential


@dataclass(frozen=True)
class Delegation:
    pool_id: Optional[str]
    rewards: int


@dataclass(frozen=True)
class ProtocolParameters:
    min_fee_a: int
    min_fee_b: int
    max_tx_size: int
    max_val_size: int
    key_deposit: int
    pool_deposit: int
    price_mem: float
    price_step: float
    max_tx_ex_mem: int
    max_tx_ex_steps: int
    coins_per_utxo_byte: int
    collateral_percentage: int
    max_collateral_inputs: int
    cost_models: Dict[str, Any]
