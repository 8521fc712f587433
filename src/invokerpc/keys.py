"""
invokerpc — Key pairs and address derivation

Derives the public key, WIF export and address from a raw secp256r1
private key:

  - WIF      = Base58Check(0x80 || key || 0x01)
  - script   = 0x21 || compressed_pubkey || 0xAC   (single-sig check)
  - address  = Base58Check(version || RIPEMD160(SHA256(script)))

Base58Check appends the first four bytes of a double SHA-256.
"""

import hashlib
from typing import Dict

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from .errors import KeyDerivationError
from .types import ECPoint, UInt160, hex_to_bytes

DEFAULT_ADDRESS_VERSION = 0x17
PRIVATE_KEY_LENGTH = 32

_WIF_PREFIX = b"\x80"
_WIF_COMPRESSED_FLAG = b"\x01"
_PUSH_33_BYTES = b"\x21"
_CHECKSIG = b"\xac"

_B58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_B58_INDEX = {c: i for i, c in enumerate(_B58_ALPHABET)}


# ══════════════════════════════════════════════════════════════════════
#  Base58Check
# ══════════════════════════════════════════════════════════════════════

def base58_encode(data: bytes) -> str:
    num = int.from_bytes(data, "big")
    out = []
    while num > 0:
        num, rem = divmod(num, 58)
        out.append(_B58_ALPHABET[rem])
    # Leading zero bytes map to leading '1's
    pad = len(data) - len(data.lstrip(b"\x00"))
    return "1" * pad + "".join(reversed(out))


def base58_decode(text: str) -> bytes:
    num = 0
    for c in text:
        if c not in _B58_INDEX:
            raise ValueError(f"invalid base58 character: {c!r}")
        num = num * 58 + _B58_INDEX[c]
    body = num.to_bytes((num.bit_length() + 7) // 8, "big") if num else b""
    pad = len(text) - len(text.lstrip("1"))
    return b"\x00" * pad + body


def _checksum(data: bytes) -> bytes:
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()[:4]


def base58check_encode(payload: bytes) -> str:
    return base58_encode(payload + _checksum(payload))


def base58check_decode(text: str) -> bytes:
    raw = base58_decode(text)
    if len(raw) < 4:
        raise ValueError("base58check payload too short")
    payload, checksum = raw[:-4], raw[-4:]
    if _checksum(payload) != checksum:
        raise ValueError("base58check checksum mismatch")
    return payload


def hash160(data: bytes) -> bytes:
    """RIPEMD160(SHA256(data))."""
    return hashlib.new("ripemd160", hashlib.sha256(data).digest()).digest()


# ══════════════════════════════════════════════════════════════════════
#  Key pair
# ══════════════════════════════════════════════════════════════════════

class KeyPair:
    """A secp256r1 key pair built from raw private key bytes."""

    def __init__(self, private_key: bytes):
        if len(private_key) != PRIVATE_KEY_LENGTH:
            raise KeyDerivationError(
                f"private key must be {PRIVATE_KEY_LENGTH} bytes, got {len(private_key)}"
            )
        try:
            self._signing_key = ec.derive_private_key(
                int.from_bytes(private_key, "big"), ec.SECP256R1(),
            )
        except ValueError as e:
            raise KeyDerivationError(f"invalid private key: {e}") from e
        self.private_key = bytes(private_key)
        self.public_key = ECPoint(self._signing_key.public_key())

    @classmethod
    def from_hex(cls, text: str) -> "KeyPair":
        try:
            return cls(hex_to_bytes(text))
        except ValueError as e:
            raise KeyDerivationError(f"private key must be hex: {e}") from e

    @property
    def verification_script(self) -> bytes:
        return _PUSH_33_BYTES + self.public_key.encode() + _CHECKSIG

    @property
    def script_hash(self) -> UInt160:
        return UInt160(hash160(self.verification_script))

    def export(self) -> str:
        """Wallet import format of the private key."""
        return base58check_encode(_WIF_PREFIX + self.private_key + _WIF_COMPRESSED_FLAG)

    def address(self, version: int = DEFAULT_ADDRESS_VERSION) -> str:
        return base58check_encode(bytes([version]) + self.script_hash.to_bytes())

    def sign(self, message: bytes) -> bytes:
        """ECDSA/SHA-256 signature over *message*, DER encoded."""
        return self._signing_key.sign(message, ec.ECDSA(hashes.SHA256()))


def derive(private_key: bytes, address_version: int = DEFAULT_ADDRESS_VERSION) -> Dict[str, str]:
    """Derive ``{wif, address, privkey, pubkey}`` from raw key bytes."""
    kp = KeyPair(private_key)
    return {
        "wif": kp.export(),
        "address": kp.address(address_version),
        "privkey": kp.private_key.hex(),
        "pubkey": str(kp.public_key),
    }
