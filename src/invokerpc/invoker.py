"""
invokerpc — Contract invocation assembly

Combines the bound parameter list with the target contract and the
caller's key pair into a signed ``Invocation`` and hands it to a
broadcaster.  Usage::

    invoker = ContractInvoker(registry, LocalBroadcaster())
    txid = invoker.invoke(UInt160.parse("0x..."), KeyPair.from_hex(key), ["1", True])
"""

from __future__ import annotations

import hashlib
import json
import logging
import threading
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, List, Optional, Sequence

from .binder import bind_parameters
from .encoding import to_envelope
from .errors import InvocationFailedError, InvokeRPCError
from .keys import KeyPair
from .registry import ContractRegistry
from .types import TypedParameter, UInt160

logger = logging.getLogger("invokerpc.invoker")


@dataclass
class Invocation:
    """A signed call of a contract entry point."""
    script_hash: UInt160
    parameters: List[TypedParameter]
    signer: str = ""  # compressed public key hex
    signature: bytes = b""

    def payload(self) -> bytes:
        """Canonical bytes covered by the signature."""
        return json.dumps({
            "script_hash": str(self.script_hash),
            "parameters": [to_envelope(p) for p in self.parameters],
            "signer": self.signer,
        }, sort_keys=True, separators=(",", ":")).encode("utf-8")

    def compute_hash(self) -> bytes:
        return hashlib.sha256(self.payload()).digest()

    def sign(self, key_pair: KeyPair) -> bytes:
        self.signer = str(key_pair.public_key)
        self.signature = key_pair.sign(self.payload())
        return self.signature

    def to_dict(self) -> Dict[str, Any]:
        return {
            "script_hash": str(self.script_hash),
            "parameters": [to_envelope(p) for p in self.parameters],
            "signer": self.signer,
            "signature": self.signature.hex(),
            "hash": self.compute_hash().hex(),
        }


class Broadcaster(ABC):
    """Submits signed invocations downstream."""

    @abstractmethod
    def broadcast(self, invocation: Invocation) -> Optional[bytes]:
        """Return the transaction hash, or ``None`` if rejected."""


class LocalBroadcaster(Broadcaster):
    """In-process broadcaster that records accepted invocations.

    Only the most recent ``history`` invocations are kept.
    """

    def __init__(self, reject: bool = False, history: int = 1000):
        self.reject = reject
        self.accepted: Deque[Invocation] = deque(maxlen=history)
        self._lock = threading.Lock()

    def broadcast(self, invocation: Invocation) -> Optional[bytes]:
        if self.reject:
            logger.info("Rejected invocation of %s", invocation.script_hash)
            return None
        with self._lock:
            self.accepted.append(invocation)
        return invocation.compute_hash()


@dataclass
class ContractInvoker:
    registry: ContractRegistry
    broadcaster: Broadcaster = field(default_factory=LocalBroadcaster)

    def bind(self, script_hash: UInt160, args: Optional[Sequence[Any]]) -> List[TypedParameter]:
        """Bind *args* to the contract's schema without invoking."""
        schema = self.registry.require(script_hash)
        return bind_parameters(schema, args)

    def invoke(self, script_hash: UInt160, key_pair: KeyPair,
               args: Optional[Sequence[Any]]) -> Optional[str]:
        """Bind, sign and broadcast.  Returns the tx hash hex or ``None``."""
        invocation = Invocation(script_hash, self.bind(script_hash, args))
        invocation.sign(key_pair)
        try:
            txhash = self.broadcaster.broadcast(invocation)
        except InvokeRPCError:
            raise
        except Exception as e:
            logger.error("Broadcast of %s failed: %s", script_hash, e)
            raise InvocationFailedError(f"invocation failed: {e}") from e
        if txhash is None:
            return None
        logger.info("Invoked %s as %s: %s", script_hash, key_pair.public_key, txhash.hex())
        return txhash.hex()
