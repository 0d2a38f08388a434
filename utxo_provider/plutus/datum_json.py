"""
Tagged JSON datum → Plutus Data.

Legacy indexer responses describe datums as JSON where the variant is implied
by which field is present. The checks below run in a fixed order that other
tooling relies on (int, bytes, map, list, constructor); do not reorder them.
A numeric "bytes" value is read through its decimal digits as hex.
"""

import logging
import re
from typing import Any, Optional

from utxo_provider.errors import UnsupportedDatumError
from .data import (
    PlutusBytes, PlutusConstr, PlutusInteger, PlutusList, PlutusMap, PlutusValue,
    to_cbor_hex,
)

logger = logging.getLogger(__name__)

# Plain decimal digits only; no underscores or other int() extras
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def _as_int(value: Any) -> Optional[int]:
    """Integer if the value is a number or integer-looking string, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and INTEGER_PATTERN.fullmatch(value.strip()):
        return int(value)
    return None


def _as_bytes(value: Any) -> bytes:
    # Numeric "bytes" values are read through their decimal digits as hex.
    text = value if isinstance(value, str) else str(value)
    try:
        return bytes.fromhex(text)
    except ValueError as e:
        raise UnsupportedDatumError(f"Invalid hex in bytes field: {value!r}") from e


def datum_json_to_plutus(json: Any) -> PlutusValue:
    """Convert a tagged JSON datum tree into a Plutus value."""
    if not isinstance(json, dict):
        raise UnsupportedDatumError(f"Unsupported datum shape: {json!r}")

    if "int" in json and (n := _as_int(json["int"])) is not None:
        return PlutusInteger(n)

    if "bytes" in json and (isinstance(json["bytes"], str) or _as_int(json["bytes"]) is not None):
        return PlutusBytes(_as_bytes(json["bytes"]))

    if isinstance(json.get("map"), list):
        pairs = []
        for pair in json["map"]:
            if not isinstance(pair, dict) or "k" not in pair or "v" not in pair:
                raise UnsupportedDatumError(f"Map entry needs 'k' and 'v': {pair!r}")
            pairs.append((datum_json_to_plutus(pair["k"]), datum_json_to_plutus(pair["v"])))
        return PlutusMap(tuple(pairs))

    if isinstance(json.get("list"), list):
        return PlutusList(tuple(datum_json_to_plutus(v) for v in json["list"]))

    if "constructor" in json and (constr := _as_int(json["constructor"])) is not None and constr >= 0:
        fields = json.get("fields")
        if not isinstance(fields, list):
            raise UnsupportedDatumError(f"Constructor {constr} needs a 'fields' list")
        return PlutusConstr(constr, tuple(datum_json_to_plutus(f) for f in fields))

    logger.debug(f"Unsupported datum shape with keys {sorted(json)}")
    raise UnsupportedDatumError(f"Unsupported datum shape: {json!r}")


def datum_json_to_cbor(json: Any) -> str:
    """Convert a tagged JSON datum into canonical Plutus Data CBOR (hex)."""
    return to_cbor_hex(datum_json_to_plutus(json))
