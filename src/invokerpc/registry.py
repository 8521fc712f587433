"""
invokerpc — Contract schema registry

The registry maps a contract's script hash to the ordered parameter
types its entry point declares.  It is passed to the invoker as a
collaborator; the in-memory implementation is seeded from config.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Mapping, Optional

from .errors import SchemaNotFoundError
from .types import ContractSchema, UInt160, make_schema

logger = logging.getLogger("invokerpc.registry")


class ContractRegistry(ABC):
    """Looks up contract entry-point schemas by script hash."""

    @abstractmethod
    def lookup(self, script_hash: UInt160) -> Optional[ContractSchema]:
        """Return the schema for *script_hash*, or ``None``."""

    def require(self, script_hash: UInt160) -> ContractSchema:
        schema = self.lookup(script_hash)
        if schema is None:
            raise SchemaNotFoundError(script_hash)
        return schema


class InMemoryContractRegistry(ContractRegistry):
    """Registry backed by a dict.  Schemas are immutable once published."""

    def __init__(self, contracts: Optional[Mapping[Any, Iterable[Any]]] = None):
        self._schemas: Dict[UInt160, ContractSchema] = {}
        self._lock = threading.Lock()
        for script_hash, types in (contracts or {}).items():
            self.register(script_hash, types)

    def register(self, script_hash: Any, types: Iterable[Any]) -> ContractSchema:
        """Publish a schema.  ``script_hash`` may be a UInt160 or its text."""
        if not isinstance(script_hash, UInt160):
            script_hash = UInt160.parse(script_hash)
        schema = make_schema(types)
        with self._lock:
            self._schemas[script_hash] = schema
        logger.debug("Registered contract %s with %d parameter(s)", script_hash, len(schema))
        return schema

    def lookup(self, script_hash: UInt160) -> Optional[ContractSchema]:
        return self._schemas.get(script_hash)

    def __len__(self) -> int:
        return len(self._schemas)

    def __contains__(self, script_hash: object) -> bool:
        return script_hash in self._schemas
