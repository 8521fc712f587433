"""
invokerpc — Invocation parameter binding

Binds the caller's positional arguments to a contract's declared
parameter schema.  The result always has exactly one parameter per
schema position; missing trailing arguments are resolved from null.
"""

import logging
from typing import Any, List, Optional, Sequence

from .errors import CompositeShapeError, ParameterBindingError, ParameterDecodeError
from .resolver import resolve_parameter
from .types import ContractSchema, TypedParameter

logger = logging.getLogger("invokerpc.binder")

# Raw value used for schema positions the caller did not supply.
ABSENT = None


def bind_parameters(schema: ContractSchema, args: Optional[Sequence[Any]]) -> List[TypedParameter]:
    """Resolve ``args`` against ``schema`` in schema order.

    Raises:
        ParameterBindingError: a position failed to decode.  Carries the
            position, the declared type and the underlying error's code.
        CompositeShapeError: ``args`` is not a list.
    """
    if args is None:
        args = []
    if not isinstance(args, (list, tuple)):
        raise CompositeShapeError(f"arguments must be a JSON array, got {type(args).__name__}")
    if len(args) > len(schema):
        logger.debug("Ignoring %d argument(s) beyond the schema arity %d",
                     len(args) - len(schema), len(schema))

    bound: List[TypedParameter] = []
    for position, declared in enumerate(schema):
        raw = args[position] if position < len(args) else ABSENT
        try:
            bound.append(resolve_parameter(declared, raw))
        except ParameterDecodeError as e:
            raise ParameterBindingError(position, declared, e) from e
    logger.debug("Bound %d parameter(s): %s", len(bound), bound)
    return bound
