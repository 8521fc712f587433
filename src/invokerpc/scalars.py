"""
invokerpc — Scalar parameter decoding

Decodes one raw JSON value (as produced by ``json.loads``) into a
scalar contract parameter.  Every scalar rule except Void works on the
value's text form, see ``as_text``.
"""

from typing import Any, Callable, Dict

from .errors import ScalarDecodeError, UnsupportedParameterTypeError
from .numeric import interpret_number, parse_integer
from .types import ECPoint, ParameterType, TypedParameter, UInt160, UInt256, hex_to_bytes


def as_text(raw: Any) -> str:
    """Text form of a raw JSON scalar.

    Null means the caller supplied nothing for a value that needs one.
    Arrays and objects have no text form.
    """
    if raw is None:
        raise ScalarDecodeError("input required but absent")
    if isinstance(raw, str):
        return raw
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, int):
        return str(raw)
    if isinstance(raw, float):
        return str(int(raw)) if raw.is_integer() else repr(raw)
    raise ScalarDecodeError(f"expected a scalar value, got {type(raw).__name__}")


def _parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueError(f"not a boolean literal: {text!r}")


def _integer(raw: Any) -> int:
    # JSON numbers keep their numeric value; text goes through the literal rules
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return interpret_number(raw)
    return parse_integer(as_text(raw))


def _void(raw: Any) -> None:
    return None


# Each entry maps raw JSON -> value; ValueError means malformed text.
_SCALAR_DECODERS: Dict[ParameterType, Callable[[Any], Any]] = {
    ParameterType.Boolean: lambda raw: _parse_bool(as_text(raw)),
    ParameterType.Integer: _integer,
    ParameterType.Hash160: lambda raw: UInt160.parse(as_text(raw)),
    ParameterType.Hash256: lambda raw: UInt256.parse(as_text(raw)),
    ParameterType.Signature: lambda raw: hex_to_bytes(as_text(raw)),
    ParameterType.ByteArray: lambda raw: hex_to_bytes(as_text(raw)),
    ParameterType.PublicKey: lambda raw: ECPoint.parse(as_text(raw)),
    ParameterType.String: as_text,
    ParameterType.InteropInterface: as_text,
    ParameterType.Void: _void,
}

SCALAR_TYPES = frozenset(_SCALAR_DECODERS)


def decode_scalar(param_type: ParameterType, raw: Any) -> TypedParameter:
    """Decode ``raw`` as a scalar of ``param_type``.

    Raises:
        ScalarDecodeError: the text is malformed for the type, or absent.
        IntegerParseError: an Integer literal is neither decimal nor hex.
        UnsupportedParameterTypeError: ``param_type`` is not a scalar type.
    """
    decoder = _SCALAR_DECODERS.get(param_type)
    if decoder is None:
        raise UnsupportedParameterTypeError(param_type)
    try:
        value = decoder(raw)
    except ValueError as e:
        raise ScalarDecodeError(f"invalid {param_type.name} value: {e}") from e
    return TypedParameter(param_type, value)
