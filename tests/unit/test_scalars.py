"""Tests for scalar parameter decoding."""

import pytest

from invokerpc.errors import (
    ErrorCode,
    IntegerParseError,
    ScalarDecodeError,
    UnsupportedParameterTypeError,
)
from invokerpc.scalars import SCALAR_TYPES, as_text, decode_scalar
from invokerpc.types import BigInteger, ECPoint, ParameterType, TypedParameter, UInt160, UInt256

T = ParameterType


class TestAsText:
    def test_scalars(self):
        assert as_text("abc") == "abc"
        assert as_text(True) == "true"
        assert as_text(False) == "false"
        assert as_text(12) == "12"
        assert as_text(3.0) == "3"
        assert as_text(2.5) == "2.5"

    def test_absent(self):
        with pytest.raises(ScalarDecodeError) as exc:
            as_text(None)
        assert "absent" in exc.value.message

    @pytest.mark.parametrize("raw", [[1, 2], {"a": 1}])
    def test_not_text(self, raw):
        with pytest.raises(ScalarDecodeError):
            as_text(raw)


class TestBoolean:
    @pytest.mark.parametrize("raw,expected", [
        ("true", True), ("False", False), (" TRUE ", True), (True, True), (False, False),
    ])
    def test_literals(self, raw, expected):
        assert decode_scalar(T.Boolean, raw) == TypedParameter(T.Boolean, expected)

    @pytest.mark.parametrize("raw", ["yes", "1", 1, ""])
    def test_invalid(self, raw):
        with pytest.raises(ScalarDecodeError):
            decode_scalar(T.Boolean, raw)


class TestInteger:
    def test_json_number(self):
        assert decode_scalar(T.Integer, 42).value == 42

    def test_integral_float(self):
        assert decode_scalar(T.Integer, 3.0).value == 3

    def test_json_number_above_int64_keeps_value(self):
        param = decode_scalar(T.Integer, 2 ** 64)
        assert param.value == 2 ** 64
        assert isinstance(param.value, BigInteger)

    @pytest.mark.parametrize("raw", [1e20, float("inf"), float("nan"), 2.5, -(2 ** 64)])
    def test_json_number_without_exact_integer_value(self, raw):
        with pytest.raises(IntegerParseError):
            decode_scalar(T.Integer, raw)

    def test_json_boolean_is_not_a_number(self):
        with pytest.raises(IntegerParseError):
            decode_scalar(T.Integer, True)

    def test_hex_text(self):
        param = decode_scalar(T.Integer, "0x10")
        assert param.value == 16
        assert isinstance(param.value, BigInteger)

    def test_invalid_literal(self):
        with pytest.raises(IntegerParseError) as exc:
            decode_scalar(T.Integer, "not-a-number")
        assert exc.value.code == ErrorCode.INTEGER_PARSE

    def test_absent(self):
        with pytest.raises(ScalarDecodeError):
            decode_scalar(T.Integer, None)


class TestHashes:
    def test_hash160(self):
        text = "0x" + "0123456789abcdef0123" * 2
        param = decode_scalar(T.Hash160, text)
        assert param.value == UInt160.parse(text)
        assert str(param.value) == text

    def test_hash256(self):
        text = "0x" + "ab" * 32
        assert decode_scalar(T.Hash256, text).value == UInt256.parse(text)

    @pytest.mark.parametrize("ptype", [T.Hash160, T.Hash256])
    def test_malformed(self, ptype):
        with pytest.raises(ScalarDecodeError):
            decode_scalar(ptype, "0x1234")


class TestBytes:
    @pytest.mark.parametrize("ptype", [T.ByteArray, T.Signature])
    def test_hex(self, ptype):
        assert decode_scalar(ptype, "deadbeef").value == b"\xde\xad\xbe\xef"

    def test_empty(self):
        assert decode_scalar(T.ByteArray, "").value == b""

    @pytest.mark.parametrize("raw", ["abc", "zz", "0xdead"])
    def test_malformed(self, raw):
        with pytest.raises(ScalarDecodeError):
            decode_scalar(T.ByteArray, raw)


class TestPublicKey:
    def test_compressed(self, generator_hex):
        param = decode_scalar(T.PublicKey, generator_hex)
        assert isinstance(param.value, ECPoint)
        assert str(param.value) == generator_hex

    def test_malformed(self):
        with pytest.raises(ScalarDecodeError):
            decode_scalar(T.PublicKey, "02abcd")


class TestText:
    @pytest.mark.parametrize("ptype", [T.String, T.InteropInterface])
    def test_verbatim(self, ptype):
        assert decode_scalar(ptype, "  hello ").value == "  hello "

    def test_number_as_text(self):
        assert decode_scalar(T.String, 5).value == "5"

    @pytest.mark.parametrize("raw", [None, ["a"], {"k": "v"}])
    def test_not_text(self, raw):
        with pytest.raises(ScalarDecodeError):
            decode_scalar(T.String, raw)


class TestVoid:
    @pytest.mark.parametrize("raw", [None, "x", [1], {"type": "Integer"}])
    def test_never_fails(self, raw):
        assert decode_scalar(T.Void, raw) == TypedParameter(T.Void, None)


class TestUnsupported:
    @pytest.mark.parametrize("ptype", [T.Array, T.Map, 0x20])
    def test_composite_or_unknown(self, ptype):
        with pytest.raises(UnsupportedParameterTypeError) as exc:
            decode_scalar(ptype, "x")
        assert exc.value.code == ErrorCode.UNSUPPORTED_TYPE

    def test_scalar_types_cover_the_rest(self):
        assert SCALAR_TYPES == set(ParameterType) - {T.Array, T.Map}
