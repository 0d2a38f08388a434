"""Plutus Data encoding and script normalisation."""

from .data import (
    PlutusBytes, PlutusConstr, PlutusInteger, PlutusList, PlutusMap, PlutusValue,
    to_cbor, to_cbor_hex,
)
from .datum_json import datum_json_to_cbor, datum_json_to_plutus
from .scripts import ensure_double_wrapped

__all__ = [
    "PlutusBytes", "PlutusConstr", "PlutusInteger", "PlutusList", "PlutusMap", "PlutusValue",
    "to_cbor", "to_cbor_hex",
    "datum_json_to_cbor", "datum_json_to_plutus",
    "ensure_double_wrapped",
]
