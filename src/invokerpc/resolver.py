"""
invokerpc — Parameter value resolution

Two-tier resolution of one raw value against its declared type:

  1. If the value is a typed envelope whose own type equals the declared
     type, the envelope's decoded value is used.
  2. Otherwise the value is decoded as a bare value of the declared type.

Failures of the envelope attempt only mean "not an envelope for this
position".  Failures of the bare decode are final.
"""

from typing import Any, Optional

from .composite import decode_raw, read_envelope
from .errors import ParameterDecodeError
from .types import ParameterType, TypedParameter


def try_envelope(declared: ParameterType, raw: Any) -> Optional[TypedParameter]:
    """Return the envelope's parameter if ``raw`` is one of type ``declared``."""
    if not isinstance(raw, dict):
        return None
    try:
        param = read_envelope(raw)
    except ParameterDecodeError:
        return None
    if param.type != declared:
        return None
    return param


def resolve_parameter(declared: ParameterType, raw: Any) -> TypedParameter:
    param = try_envelope(declared, raw)
    if param is not None:
        return param
    return decode_raw(declared, raw)
