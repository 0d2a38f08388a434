"""
Blockfrost-backed UTxO provider.

Structure:
    utxo_provider/
    ├── types.py          # OutRef, UTxO, ScriptRef, Credential, Token
    ├── errors.py         # Exception hierarchy
    ├── blockfrost/       # HTTP client
    ├── fetching/         # Pagination, normalization, provider
    └── plutus/           # Plutus Data codec, script wrapping

Usage:
    from utxo_provider import OutRef, UTxO
    from utxo_provider.fetching import BlockfrostProvider
    from utxo_provider.plutus import datum_json_to_cbor
"""

from .types import (
    LOVELACE, Credential, CredentialType, Delegation, OutRef, ProtocolParameters,
    ScriptKind, ScriptRef, Token, UTxO,
)
from .version import __version__

__all__ = [
    # Types
    "LOVELACE",
    "Credential",
    "CredentialType",
    "Delegation",
    "OutRef",
    "ProtocolParameters",
    "ScriptKind",
    "ScriptRef",
    "Token",
    "UTxO",
    "__version__",
]
