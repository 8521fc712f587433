"""
invokerpc — JSON-RPC contract invocation with type-directed parameter decoding.

Callers send loosely typed JSON arguments; the decoders coerce them into
the typed parameters a contract's entry point declares.
"""

__version__ = "0.1.0"

from .binder import bind_parameters
from .composite import decode_raw, read_envelope
from .encoding import to_bare, to_envelope
from .errors import (
    CompositeShapeError,
    ErrorCode,
    IntegerParseError,
    InvocationFailedError,
    InvokeRPCError,
    KeyDerivationError,
    ParameterBindingError,
    ParameterDecodeError,
    ScalarDecodeError,
    SchemaNotFoundError,
    UnsupportedParameterTypeError,
)
from .numeric import parse_integer
from .resolver import resolve_parameter
from .types import BigInteger, ECPoint, ParameterType, TypedParameter, UInt160, UInt256

__all__ = [
    "bind_parameters", "decode_raw", "read_envelope", "to_bare", "to_envelope",
    "parse_integer", "resolve_parameter",
    "BigInteger", "ECPoint", "ParameterType", "TypedParameter", "UInt160", "UInt256",
    "CompositeShapeError", "ErrorCode", "IntegerParseError", "InvocationFailedError",
    "InvokeRPCError", "KeyDerivationError", "ParameterBindingError",
    "ParameterDecodeError", "ScalarDecodeError", "SchemaNotFoundError",
    "UnsupportedParameterTypeError",
]
