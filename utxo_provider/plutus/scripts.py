"""Reference script CBOR normalisation."""

from io import BytesIO
from typing import Optional, Union

from cbor2 import CBORDecodeError, CBORDecoder, dumps


def _unwrap(data: bytes) -> Optional[bytes]:
    """Inner bytes if `data` is exactly one CBOR byte string, else None."""
    fp = BytesIO(data)
    try:
        value = CBORDecoder(fp).decode()
    except (CBORDecodeError, ValueError, EOFError):
        return None
    if not isinstance(value, bytes) or fp.tell() != len(data):
        return None
    return value


def ensure_double_wrapped(script: Union[bytes, str]) -> Union[bytes, str]:
    """
    Normalise a Plutus script to two CBOR byte-string layers.

    Existing layers are kept byte for byte, since re-encoding them would
    change the script hash:
    - two layers: returned unchanged
    - one layer: wrapped once more
    - flat script: wrapped twice

    Hex in, hex out; bytes in, bytes out.
    """
    as_hex = isinstance(script, str)
    data = bytes.fromhex(script) if as_hex else bytes(script)

    inner = _unwrap(data)
    if inner is None:
        wrapped = dumps(dumps(data))
    elif _unwrap(inner) is None:
        wrapped = dumps(data)
    else:
        return script

    return wrapped.hex() if as_hex else wrapped
