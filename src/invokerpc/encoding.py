"""
invokerpc — JSON encoding of typed parameters

Inverse of the decoders: ``to_bare`` gives the value a caller would
submit for a position declared with the parameter's type, and
``to_envelope`` gives the self-describing ``{type, value}`` form used
for composite elements and RPC results.
"""

from typing import Any, Dict

from .errors import UnsupportedParameterTypeError
from .numeric import INT64_MAX, INT64_MIN
from .types import ParameterType, TypedParameter


class EncodeError(ValueError):
    """A parameter value has no JSON form the decoders accept."""


def encode_integer(value: int) -> str:
    if INT64_MIN <= value <= INT64_MAX:
        return str(int(value))
    if value < 0:
        raise EncodeError(f"negative integer outside 64 bits has no text form: {value}")
    return "0x" + format(value, "x")


def to_bare(param: TypedParameter) -> Any:
    t = param.type
    v = param.value
    if t == ParameterType.Boolean:
        return bool(v)
    if t == ParameterType.Integer:
        return encode_integer(v)
    if t in (ParameterType.Hash160, ParameterType.Hash256, ParameterType.PublicKey):
        return str(v)
    if t in (ParameterType.Signature, ParameterType.ByteArray):
        return bytes(v).hex()
    if t in (ParameterType.String, ParameterType.InteropInterface):
        return v
    if t == ParameterType.Array:
        return [to_envelope(p) for p in v]
    if t == ParameterType.Map:
        return [{"key": to_envelope(k), "value": to_envelope(val)} for k, val in v]
    if t == ParameterType.Void:
        return None
    raise UnsupportedParameterTypeError(t)


def to_envelope(param: TypedParameter) -> Dict[str, Any]:
    return {"type": param.type.name, "value": to_bare(param)}
