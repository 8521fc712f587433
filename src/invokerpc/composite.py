"""
invokerpc — Typed envelopes and composite parameters

A typed envelope is a self-describing value::

    {"type": "Integer", "value": "42"}

Array and Map elements are always envelopes, since their element types
are not declared by the contract schema:

    Array: [{"type": ..., "value": ...}, ...]
    Map:   [{"key": {"type": ..., "value": ...},
             "value": {"type": ..., "value": ...}}, ...]
"""

from typing import Any, List, Tuple

from .errors import CompositeShapeError, UnsupportedParameterTypeError
from .scalars import decode_scalar
from .types import ParameterType, TypedParameter


def read_envelope(raw: Any) -> TypedParameter:
    """Decode a ``{type, value}`` object using its own declared type."""
    if not isinstance(raw, dict) or "type" not in raw:
        raise CompositeShapeError("expected a {type, value} object")
    try:
        param_type = ParameterType.from_name(raw["type"])
    except ValueError:
        raise UnsupportedParameterTypeError(raw["type"]) from None
    return decode_raw(param_type, raw.get("value"))


def decode_array(raw: Any) -> TypedParameter:
    if raw is None:
        return TypedParameter(ParameterType.Array, [])
    if not isinstance(raw, list):
        raise CompositeShapeError(f"Array value must be a JSON array, got {type(raw).__name__}")
    items: List[TypedParameter] = [read_envelope(element) for element in raw]
    return TypedParameter(ParameterType.Array, items)


def decode_map(raw: Any) -> TypedParameter:
    if not isinstance(raw, list):
        raise CompositeShapeError(f"Map value must be a JSON array, got {type(raw).__name__}")
    pairs: List[Tuple[TypedParameter, TypedParameter]] = []
    for entry in raw:
        if not isinstance(entry, dict) or "key" not in entry or "value" not in entry:
            raise CompositeShapeError("Map entries must be {key, value} objects")
        pairs.append((read_envelope(entry["key"]), read_envelope(entry["value"])))
    return TypedParameter(ParameterType.Map, pairs)


def decode_raw(param_type: ParameterType, raw: Any) -> TypedParameter:
    """Decode ``raw`` strictly as ``param_type``, without envelope lookup."""
    if param_type == ParameterType.Array:
        return decode_array(raw)
    if param_type == ParameterType.Map:
        return decode_map(raw)
    return decode_scalar(param_type, raw)
