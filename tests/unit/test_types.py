"""Tests for parameter types and fixed-size values."""

import pytest
from cryptography.hazmat.primitives.asymmetric import ec

from invokerpc.types import (
    ECPoint,
    ParameterType,
    TypedParameter,
    UInt160,
    UInt256,
    hex_to_bytes,
    make_schema,
)


class TestHexToBytes:
    def test_valid(self):
        assert hex_to_bytes("deadBEEF") == b"\xde\xad\xbe\xef"
        assert hex_to_bytes("") == b""

    @pytest.mark.parametrize("text", ["abc", "zz", "de ad", "0xdead"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            hex_to_bytes(text)


class TestParameterType:
    def test_codes(self):
        assert ParameterType.Signature == 0x00
        assert ParameterType.Map == 0x12
        assert ParameterType.Void == 0xFF

    def test_from_name(self):
        assert ParameterType.from_name("Hash160") is ParameterType.Hash160

    @pytest.mark.parametrize("name", ["boolean", "Float", "", None, 1])
    def test_from_name_unknown(self, name):
        with pytest.raises(ValueError):
            ParameterType.from_name(name)

    def test_is_composite(self):
        assert ParameterType.Array.is_composite
        assert ParameterType.Map.is_composite
        assert not ParameterType.String.is_composite

    def test_make_schema(self):
        schema = make_schema(["String", ParameterType.Integer])
        assert schema == (ParameterType.String, ParameterType.Integer)


class TestUInt:
    def test_parse_and_format(self):
        text = "0x" + "00" * 19 + "01"
        h = UInt160.parse(text)
        assert str(h) == text
        # stored little-endian
        assert h.to_bytes()[0] == 1

    def test_prefix_optional(self):
        digits = "ab" * 32
        assert UInt256.parse(digits) == UInt256.parse("0x" + digits)
        assert UInt256.parse("0X" + digits.upper()) == UInt256.parse(digits)

    @pytest.mark.parametrize("text", ["0x1234", "0x" + "zz" * 20, "0x" + "00" * 21])
    def test_parse_invalid(self, text):
        with pytest.raises(ValueError):
            UInt160.parse(text)

    def test_types_do_not_compare_equal(self):
        assert UInt160() != UInt256()
        assert UInt160() == UInt160(bytes(20))

    def test_wrong_length(self):
        with pytest.raises(ValueError):
            UInt160(b"\x01" * 19)


class TestECPoint:
    def test_parse_compressed(self, generator_hex):
        point = ECPoint.parse(generator_hex)
        assert str(point) == generator_hex

    def test_uncompressed_equals_compressed(self, generator_hex):
        point = ECPoint.parse(generator_hex)
        uncompressed = point.encode(compressed=False).hex()
        assert len(uncompressed) == 130
        assert ECPoint.parse(uncompressed) == point

    def test_matches_cryptography_key(self):
        key = ec.generate_private_key(ec.SECP256R1())
        point = ECPoint(key.public_key())
        assert ECPoint.decode(point.encode()) == point

    @pytest.mark.parametrize("text", ["", "02", "zz" * 33, "02" + "00" * 31])
    def test_parse_invalid(self, text):
        with pytest.raises(ValueError):
            ECPoint.parse(text)


class TestTypedParameter:
    def test_equality(self):
        assert TypedParameter(ParameterType.Integer, 1) == TypedParameter(ParameterType.Integer, 1)
        assert TypedParameter(ParameterType.Integer, 1) != TypedParameter(ParameterType.String, 1)

    def test_items_and_pairs(self):
        arr = TypedParameter(ParameterType.Array, [])
        assert arr.items == []
        with pytest.raises(TypeError):
            arr.pairs
        m = TypedParameter(ParameterType.Map, [])
        assert m.pairs == []

    def test_repr(self):
        assert repr(TypedParameter(ParameterType.Void)) == "Void"
        assert repr(TypedParameter(ParameterType.Boolean, True)) == "Boolean:True"
