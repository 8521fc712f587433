"""Tests for binding caller arguments to a contract schema."""

import pytest

from invokerpc.binder import bind_parameters
from invokerpc.errors import (
    CompositeShapeError,
    ErrorCode,
    ParameterBindingError,
    ParameterDecodeError,
)
from invokerpc.types import ParameterType, TypedParameter, make_schema

T = ParameterType


class TestBinding:
    def test_one_parameter_per_position(self):
        schema = make_schema(["String", "Integer", "Boolean"])
        params = bind_parameters(schema, ["a", "1", {"type": "Boolean", "value": "true"}])
        assert params == [
            TypedParameter(T.String, "a"),
            TypedParameter(T.Integer, 1),
            TypedParameter(T.Boolean, True),
        ]

    def test_missing_trailing_argument_uses_absent(self):
        schema = make_schema(["String", "Integer", "Array"])
        params = bind_parameters(schema, ["a", "1"])
        assert len(params) == 3
        assert params[2] == TypedParameter(T.Array, [])

    def test_missing_argument_that_cannot_be_absent(self):
        schema = make_schema(["String", "Integer", "Integer"])
        with pytest.raises(ParameterBindingError) as exc:
            bind_parameters(schema, ["a", "1"])
        err = exc.value
        assert err.position == 2
        assert err.declared_type is T.Integer
        assert err.data == {"position": 2, "type": "Integer"}
        assert err.code == ErrorCode.SCALAR_DECODE

    def test_error_keeps_cause_code(self):
        schema = make_schema(["Integer"])
        with pytest.raises(ParameterBindingError) as exc:
            bind_parameters(schema, ["not-a-number"])
        assert exc.value.code == ErrorCode.INTEGER_PARSE
        assert isinstance(exc.value, ParameterDecodeError)

    def test_extra_arguments_ignored(self):
        params = bind_parameters(make_schema(["String"]), ["a", "b", "c"])
        assert params == [TypedParameter(T.String, "a")]

    def test_no_arguments(self):
        assert bind_parameters(make_schema(["Void", "Array"]), None) == [
            TypedParameter(T.Void), TypedParameter(T.Array, []),
        ]

    def test_empty_schema(self):
        assert bind_parameters((), ["ignored"]) == []

    def test_arguments_must_be_a_list(self):
        with pytest.raises(CompositeShapeError):
            bind_parameters(make_schema(["String"]), {"0": "a"})

    def test_first_failure_aborts(self):
        schema = make_schema(["Hash160", "Integer"])
        with pytest.raises(ParameterBindingError) as exc:
            bind_parameters(schema, ["0x12", "nope!"])
        assert exc.value.position == 0
