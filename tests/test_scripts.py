"""Tests for ensure_double_wrapped."""

import pytest
from cbor2 import dumps

from utxo_provider.plutus import ensure_double_wrapped

FLAT = bytes.fromhex("0100003232222533300400114a229309b2b1")
SINGLE = dumps(FLAT)
DOUBLE = dumps(SINGLE)


class TestEnsureDoubleWrapped:

    def test_single_wrapped_gains_one_layer(self):
        assert ensure_double_wrapped(SINGLE) == DOUBLE

    def test_double_wrapped_unchanged(self):
        assert ensure_double_wrapped(DOUBLE) == DOUBLE

    def test_raw_flat_wrapped_twice(self):
        assert ensure_double_wrapped(FLAT) == DOUBLE

    @pytest.mark.parametrize("script", [FLAT, SINGLE, DOUBLE, b"", b"\x40", dumps(DOUBLE)])
    def test_fixed_point(self, script):
        once = ensure_double_wrapped(script)
        assert ensure_double_wrapped(once) == once

    def test_hex_in_hex_out(self):
        assert ensure_double_wrapped(SINGLE.hex()) == DOUBLE.hex()
        assert ensure_double_wrapped(ensure_double_wrapped(SINGLE.hex())) == DOUBLE.hex()

    def test_trailing_bytes_are_not_a_layer(self):
        # A byte string followed by more data is not a wrapping layer
        script = SINGLE + b"\x00"
        assert ensure_double_wrapped(script) == dumps(dumps(script))

    def test_non_minimal_outer_head_kept(self):
        # 0x58 head for a length that would fit in the initial byte
        double = b"\x58" + bytes([len(SINGLE)]) + SINGLE
        assert ensure_double_wrapped(double) == double

    def test_chunked_inner_layer_kept(self):
        chunked = b"\x5f" + dumps(FLAT[:9]) + dumps(FLAT[9:]) + b"\xff"
        double = dumps(chunked)
        assert ensure_double_wrapped(double) == double

    def test_single_layer_kept_verbatim(self):
        single = b"\x58" + bytes([len(FLAT)]) + FLAT
        assert ensure_double_wrapped(single) == dumps(single)
