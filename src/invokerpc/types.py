"""
invokerpc — Contract parameter data model

Provides the closed set of contract parameter types, the typed
parameter value produced by the decoders, and the fixed-size value
types those parameters carry:

  - ``UInt160`` / ``UInt256``: 20 / 32 byte identifiers (script and
    transaction hashes), stored little-endian, printed big-endian with
    a ``0x`` prefix.
  - ``ECPoint``: a public key on secp256r1.
  - ``BigInteger``: an ``int`` that came from the
    arbitrary-precision path rather than the 64-bit one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, List, Tuple

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

_HEX_RE = re.compile(r"[0-9a-fA-F]*")


def hex_to_bytes(text: str) -> bytes:
    """Decode a hex string strictly: even length, hex digits only."""
    if not isinstance(text, str) or len(text) % 2 != 0 or not _HEX_RE.fullmatch(text):
        raise ValueError(f"invalid hex string: {text!r}")
    return bytes.fromhex(text)


class ParameterType(IntEnum):
    """Contract parameter types, valued with their on-chain codes."""
    Signature = 0x00
    Boolean = 0x01
    Integer = 0x02
    Hash160 = 0x03
    Hash256 = 0x04
    ByteArray = 0x05
    PublicKey = 0x06
    String = 0x07
    Array = 0x10
    Map = 0x12
    InteropInterface = 0xF0
    Void = 0xFF

    @classmethod
    def from_name(cls, name: Any) -> "ParameterType":
        if not isinstance(name, str) or name not in cls.__members__:
            raise ValueError(f"unknown parameter type: {name!r}")
        return cls.__members__[name]

    @property
    def is_composite(self) -> bool:
        return self in (ParameterType.Array, ParameterType.Map)


class BigInteger(int):
    """Marks an integer decoded through the arbitrary-precision path."""

    def __repr__(self) -> str:
        return f"BigInteger({int(self)})"


# ---------------------------------------------------------------------------
# Fixed-size identifiers
# ---------------------------------------------------------------------------

class _UIntBase:
    SIZE = 0
    __slots__ = ("_data",)

    def __init__(self, data: bytes = b""):
        data = bytes(data) if data else bytes(self.SIZE)
        if len(data) != self.SIZE:
            raise ValueError(
                f"{type(self).__name__} requires {self.SIZE} bytes, got {len(data)}"
            )
        self._data = data

    @classmethod
    def parse(cls, text: str):
        """Parse the canonical big-endian text, ``0x`` prefix optional."""
        if not isinstance(text, str):
            raise ValueError(f"{cls.__name__} text expected, got {type(text).__name__}")
        if text.startswith(("0x", "0X")):
            text = text[2:]
        if len(text) != cls.SIZE * 2:
            raise ValueError(f"{cls.__name__} requires {cls.SIZE * 2} hex digits: {text!r}")
        return cls(hex_to_bytes(text)[::-1])

    def to_bytes(self) -> bytes:
        """Little-endian bytes, as stored on chain."""
        return self._data

    def __str__(self) -> str:
        return "0x" + self._data[::-1].hex()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self})"

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and other._data == self._data

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._data))


class UInt160(_UIntBase):
    SIZE = 20
    __slots__ = ()


class UInt256(_UIntBase):
    SIZE = 32
    __slots__ = ()


# ---------------------------------------------------------------------------
# Public keys
# ---------------------------------------------------------------------------

class ECPoint:
    """A point on secp256r1 wrapping a ``cryptography`` public key."""

    CURVE = ec.SECP256R1

    def __init__(self, public_key: ec.EllipticCurvePublicKey):
        self.public_key = public_key

    @classmethod
    def decode(cls, data: bytes) -> "ECPoint":
        if len(data) not in (33, 65):
            raise ValueError(f"invalid point encoding length: {len(data)}")
        return cls(ec.EllipticCurvePublicKey.from_encoded_point(cls.CURVE(), data))

    @classmethod
    def parse(cls, text: str) -> "ECPoint":
        return cls.decode(hex_to_bytes(text))

    def encode(self, compressed: bool = True) -> bytes:
        fmt = (serialization.PublicFormat.CompressedPoint if compressed
               else serialization.PublicFormat.UncompressedPoint)
        return self.public_key.public_bytes(serialization.Encoding.X962, fmt)

    def __str__(self) -> str:
        return self.encode().hex()

    def __repr__(self) -> str:
        return f"ECPoint({self})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ECPoint) and other.encode() == self.encode()

    def __hash__(self) -> int:
        return hash(self.encode())


# ---------------------------------------------------------------------------
# Typed parameter
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TypedParameter:
    """A contract parameter with a value whose shape matches ``type``.

    Array values are lists of ``TypedParameter``; Map values are lists of
    ``(key, value)`` tuples of ``TypedParameter`` in input order. Void
    carries ``None``.
    """
    type: ParameterType
    value: Any = None

    @property
    def items(self) -> List["TypedParameter"]:
        if self.type != ParameterType.Array:
            raise TypeError(f"{self.type.name} parameter has no items")
        return self.value

    @property
    def pairs(self) -> List[Tuple["TypedParameter", "TypedParameter"]]:
        if self.type != ParameterType.Map:
            raise TypeError(f"{self.type.name} parameter has no pairs")
        return self.value

    def __repr__(self) -> str:
        if self.type == ParameterType.Void:
            return "Void"
        return f"{self.type.name}:{self.value!r}"


ContractSchema = Tuple[ParameterType, ...]


def make_schema(types: Any) -> ContractSchema:
    """Build a schema from ParameterType members or their names."""
    schema: List[ParameterType] = []
    for t in types:
        schema.append(t if isinstance(t, ParameterType) else ParameterType.from_name(t))
    return tuple(schema)

