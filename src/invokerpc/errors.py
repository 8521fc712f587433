"""
invokerpc — Error hierarchy

Every error carries a stable numeric code so RPC callers can tell
decode-time failures (-12xx) apart from lookup failures (-11xx) and
downstream invocation failures (-13xx).  Transport failures use the
standard JSON-RPC 2.0 codes.
"""

from enum import IntEnum
from typing import Any, Dict, Optional


class ErrorCode(IntEnum):
    SCHEMA_NOT_FOUND = -1101
    INVALID_KEY = -1102
    INTEGER_PARSE = -1212
    UNSUPPORTED_TYPE = -1213
    SCALAR_DECODE = -1214
    COMPOSITE_SHAPE = -1215
    INVOCATION_FAILED = -1300

    # JSON-RPC 2.0 transport
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603
    RATE_LIMITED = -32000


class InvokeRPCError(Exception):
    """Base class for all errors with a stable error code."""

    code: int = ErrorCode.INVOCATION_FAILED

    def __init__(self, message: str, data: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.data = data

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"code": int(self.code), "message": self.message}
        if self.data is not None:
            d["data"] = self.data
        return d


class SchemaNotFoundError(InvokeRPCError):
    """The contract registry has no schema for the script hash."""

    code = ErrorCode.SCHEMA_NOT_FOUND

    def __init__(self, script_hash: Any):
        super().__init__(f"Smart contract doesn't exist: {script_hash}",
                         {"script_hash": str(script_hash)})
        self.script_hash = script_hash


class KeyDerivationError(InvokeRPCError):
    code = ErrorCode.INVALID_KEY


class InvocationFailedError(InvokeRPCError):
    """Raised when the broadcaster fails (not when it rejects)."""

    code = ErrorCode.INVOCATION_FAILED


# ---------------------------------------------------------------------------
# Decode errors
# ---------------------------------------------------------------------------

class ParameterDecodeError(InvokeRPCError):
    """Base class for failures turning a raw value into a typed parameter.

    The envelope attempt in the resolver swallows exactly this class.
    """

    code = ErrorCode.SCALAR_DECODE


class IntegerParseError(ParameterDecodeError):
    code = ErrorCode.INTEGER_PARSE

    def __init__(self, literal: Any):
        super().__init__(f"Parsing integer or BigInteger failed: {literal!r}")
        self.literal = literal


class UnsupportedParameterTypeError(ParameterDecodeError):
    code = ErrorCode.UNSUPPORTED_TYPE

    def __init__(self, param_type: Any):
        super().__init__(f"Wrong parameter type: {param_type!r}")
        self.param_type = param_type


class ScalarDecodeError(ParameterDecodeError):
    code = ErrorCode.SCALAR_DECODE


class CompositeShapeError(ParameterDecodeError):
    code = ErrorCode.COMPOSITE_SHAPE


class ParameterBindingError(ParameterDecodeError):
    """A parameter position failed to bind.

    Keeps the code of the underlying decode error and adds the position
    and declared type to ``data``.
    """

    def __init__(self, position: int, declared_type: Any, cause: ParameterDecodeError):
        type_name = getattr(declared_type, "name", str(declared_type))
        super().__init__(
            f"parameter {position} ({type_name}): {cause.message}",
            {"position": position, "type": type_name},
        )
        self.code = cause.code
        self.position = position
        self.declared_type = declared_type
        self.cause = cause


# ---------------------------------------------------------------------------
# Transport errors
# ---------------------------------------------------------------------------

class RequestParseError(InvokeRPCError):
    code = ErrorCode.PARSE_ERROR

    def __init__(self, message: str = "Invalid JSON"):
        super().__init__(message)


class InvalidRequestError(InvokeRPCError):
    code = ErrorCode.INVALID_REQUEST


class MethodNotFoundError(InvokeRPCError):
    code = ErrorCode.METHOD_NOT_FOUND

    def __init__(self, method: str):
        super().__init__(f"method not found: {method}")
        self.method = method


class InvalidParamsError(InvokeRPCError):
    """A request parameter is missing or cannot be parsed."""

    code = ErrorCode.INVALID_PARAMS


class InternalRPCError(InvokeRPCError):
    code = ErrorCode.INTERNAL_ERROR


class RateLimitedError(InvokeRPCError):
    code = ErrorCode.RATE_LIMITED

    def __init__(self, message: str = "rate limit exceeded"):
        super().__init__(message)
