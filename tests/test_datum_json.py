"""Tests for the tagged JSON datum codec."""

import pytest

from utxo_provider.errors import UnsupportedDatumError
from utxo_provider.plutus import (
    PlutusBytes, PlutusConstr, PlutusInteger, PlutusList, PlutusMap,
    datum_json_to_cbor, datum_json_to_plutus, to_cbor_hex,
)


class TestVariants:

    @pytest.mark.parametrize("json, expected", [
        ({"int": 5}, "05"),
        ({"int": 0}, "00"),
        ({"int": -1}, "20"),
        ({"int": 1000}, "1903e8"),
        ({"int": 2**64}, "c249010000000000000000"),
        ({"bytes": "deadbeef"}, "44deadbeef"),
        ({"bytes": ""}, "40"),
        ({"list": [{"int": 1}, {"int": 2}]}, "9f0102ff"),
        ({"list": []}, "80"),
        ({"map": []}, "a0"),
        ({"constructor": 0, "fields": [{"bytes": "deadbeef"}]}, "d8799f44deadbeefff"),
        ({"constructor": 1, "fields": []}, "d87a80"),
    ])
    def test_encoding(self, json, expected):
        assert datum_json_to_cbor(json) == expected

    def test_list_value(self):
        assert datum_json_to_plutus({"list": [{"int": 1}, {"int": 2}]}) == PlutusList(
            (PlutusInteger(1), PlutusInteger(2))
        )

    def test_constructor_value(self):
        assert datum_json_to_plutus({"constructor": 0, "fields": [{"bytes": "deadbeef"}]}) == PlutusConstr(
            0, (PlutusBytes(bytes.fromhex("deadbeef")),)
        )

    def test_map_keeps_duplicate_keys(self):
        json = {"map": [
            {"k": {"int": 1}, "v": {"int": 2}},
            {"k": {"int": 1}, "v": {"int": 3}},
        ]}
        value = datum_json_to_plutus(json)

        assert value == PlutusMap((
            (PlutusInteger(1), PlutusInteger(2)),
            (PlutusInteger(1), PlutusInteger(3)),
        ))
        assert datum_json_to_cbor(json) == "a201020103"

    def test_long_map_uses_two_byte_head(self):
        json = {"map": [{"k": {"int": 0}, "v": {"int": 0}}] * 24}
        assert datum_json_to_cbor(json) == "b818" + "0000" * 24

    def test_nested(self):
        json = {"constructor": 0, "fields": [
            {"map": [{"k": {"bytes": "00"}, "v": {"list": [{"int": 1}]}}]},
        ]}
        assert datum_json_to_cbor(json) == "d8799fa141009f01ffff"


class TestConstructorTags:

    @pytest.mark.parametrize("constructor, expected", [
        (6, "d87f80"),
        (7, "d9050080"),
        (127, "d9057880"),
        (128, "d86682188080"),
    ])
    def test_tag_ranges(self, constructor, expected):
        assert to_cbor_hex(PlutusConstr(constructor)) == expected

    def test_general_tag_with_fields(self):
        assert to_cbor_hex(PlutusConstr(200, (PlutusInteger(1),))) == "d8668218c89f01ff"

    def test_negative_constructor_rejected(self):
        with pytest.raises(ValueError):
            PlutusConstr(-1)


class TestLongBytes:

    def test_chunked_over_64_bytes(self):
        data = "ab" * 65
        assert datum_json_to_cbor({"bytes": data}) == "5f5840" + "ab" * 64 + "41ab" + "ff"

    def test_exactly_64_bytes_not_chunked(self):
        assert datum_json_to_cbor({"bytes": "cd" * 64}) == "5840" + "cd" * 64


class TestPriority:

    def test_int_beats_bytes(self):
        assert datum_json_to_cbor({"int": 1, "bytes": "ff"}) == "01"

    def test_invalid_int_falls_through_to_bytes(self):
        assert datum_json_to_cbor({"int": "abc", "bytes": "ff"}) == "41ff"

    def test_underscored_int_falls_through_to_bytes(self):
        assert datum_json_to_cbor({"int": "1_000", "bytes": "ff"}) == "41ff"
        with pytest.raises(UnsupportedDatumError):
            datum_json_to_cbor({"int": "1_000"})

    def test_integer_string(self):
        assert datum_json_to_cbor({"int": "42"}) == "182a"

    def test_bool_is_not_an_int(self):
        with pytest.raises(UnsupportedDatumError):
            datum_json_to_cbor({"int": True})

    def test_numeric_bytes_read_as_hex_digits(self):
        assert datum_json_to_cbor({"bytes": 1234}) == "421234"

    def test_map_beats_list(self):
        assert datum_json_to_cbor({"list": [{"int": 1}], "map": []}) == "a0"

    def test_list_beats_constructor(self):
        assert datum_json_to_cbor({"constructor": 0, "fields": [], "list": []}) == "80"


class TestUnsupported:

    @pytest.mark.parametrize("json", [
        {},
        {"foo": 1},
        {"constructor": 0},
        {"constructor": -1, "fields": []},
        {"constructor": "x", "fields": []},
        {"map": [{"k": {"int": 1}}]},
        {"bytes": "xyz"},
        [],
        5,
    ])
    def test_rejected(self, json):
        with pytest.raises(UnsupportedDatumError):
            datum_json_to_cbor(json)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            datum_json_to_plutus({"nothing": None})
