"""Plutus Data value type and its canonical CBOR encoding."""

from dataclasses import dataclass
from typing import Any, Tuple, Union

from cbor2 import CBORTag, dumps
from pycardano.plutus import get_tag
from pycardano.serialization import ByteString, IndefiniteList, default_encoder

# Tag for constructors outside the compact 121..127 / 1280..1400 ranges
GENERAL_CONSTR_TAG = 102


@dataclass(frozen=True)
class PlutusInteger:
    value: int


@dataclass(frozen=True)
class PlutusBytes:
    value: bytes


@dataclass(frozen=True)
class PlutusList:
    items: Tuple["PlutusValue", ...] = ()


@dataclass(frozen=True)
class PlutusMap:
    """Ordered key/value pairs. Duplicate keys are kept."""
    pairs: Tuple[Tuple["PlutusValue", "PlutusValue"], ...] = ()


@dataclass(frozen=True)
class PlutusConstr:
    constructor: int
    fields: Tuple["PlutusValue", ...] = ()

    def __post_init__(self):
        if self.constructor < 0:
            raise ValueError(f"Constructor must be non-negative: {self.constructor}")


PlutusValue = Union[PlutusInteger, PlutusBytes, PlutusList, PlutusMap, PlutusConstr]


class _Pairs:
    """Map body that cbor2 would otherwise collapse into a dict."""

    def __init__(self, pairs):
        self.pairs = pairs


def _encoder(encoder, value):
    # Indefinite lists and chunked byte strings are pycardano's; only
    # duplicate-key maps need their own head.
    if isinstance(value, _Pairs):
        encoder.encode_length(5, len(value.pairs))
        for k, v in value.pairs:
            encoder.encode(k)
            encoder.encode(v)
    else:
        default_encoder(encoder, value)


def _array(items) -> Any:
    return IndefiniteList(items) if items else []


def to_primitive(value: PlutusValue) -> Any:
    """Lower a Plutus value to cbor2/pycardano primitives."""
    if isinstance(value, PlutusInteger):
        return value.value
    if isinstance(value, PlutusBytes):
        return ByteString(value.value)
    if isinstance(value, PlutusList):
        return _array([to_primitive(v) for v in value.items])
    if isinstance(value, PlutusMap):
        return _Pairs([(to_primitive(k), to_primitive(v)) for k, v in value.pairs])
    if isinstance(value, PlutusConstr):
        fields = _array([to_primitive(f) for f in value.fields])
        tag = get_tag(value.constructor)
        if tag is not None:
            return CBORTag(tag, fields)
        return CBORTag(GENERAL_CONSTR_TAG, [value.constructor, fields])
    raise TypeError(f"Not a Plutus value: {type(value).__name__}")


def to_cbor(value: PlutusValue) -> bytes:
    """
    Canonical encoding, matching the ledger's own serialisation:
    non-empty lists and constructor fields are indefinite-length arrays,
    byte strings over 64 bytes are chunked.
    """
    return dumps(to_primitive(value), default=_encoder)


def to_cbor_hex(value: PlutusValue) -> str:
    return to_cbor(value).hex()
