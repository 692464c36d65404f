"""
Key and address handling for DipCoin client.

Imports Sui Ed25519 keypairs from their exported forms, derives the wallet
address used as the caller's identity and produces Sui personal-message
signatures.
"""

import base64
import binascii
import hashlib
import logging
from typing import Union

import nacl.exceptions
import nacl.signing
from bech32 import bech32_decode, bech32_encode, convertbits

from .errors import KeyImportError, SigningError

logger = logging.getLogger(__name__)

SUI_PRIVATE_KEY_PREFIX = "suiprivkey"
ED25519_FLAG = 0x00
SIGNATURE_SCHEMES = {0x00: "ED25519", 0x01: "Secp256k1", 0x02: "Secp256r1"}

# IntentScope.PersonalMessage, IntentVersion.V0, AppId.Sui
PERSONAL_MESSAGE_INTENT = bytes([3, 0, 0])


def _blake2b256(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=32).digest()


def _uleb128(value: int) -> bytes:
    """BCS length prefix."""
    encoded = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            encoded.append(byte | 0x80)
        else:
            encoded.append(byte)
            return bytes(encoded)


class SuiKeypair:
    """Ed25519 keypair with Sui address derivation and message signing."""

    def __init__(self, signing_key: nacl.signing.SigningKey):
        self._signing_key = signing_key
        self._public_key = signing_key.verify_key.encode()
        self._address = "0x" + _blake2b256(bytes([ED25519_FLAG]) + self._public_key).hex()

    @classmethod
    def from_seed(cls, seed: bytes) -> "SuiKeypair":
        """Create a keypair from a 32-byte Ed25519 seed."""
        if len(seed) != 32:
            raise KeyImportError(f"Ed25519 seed must be 32 bytes, got {len(seed)}")
        return cls(nacl.signing.SigningKey(seed))

    @classmethod
    def generate(cls) -> "SuiKeypair":
        """Create a fresh random keypair."""
        return cls(nacl.signing.SigningKey.generate())

    @property
    def address(self) -> str:
        """Wallet address derived from the public key."""
        return self._address

    @property
    def public_key(self) -> bytes:
        return self._public_key

    def export_private_key(self) -> str:
        """Bech32 ``suiprivkey1...`` form of the secret seed."""
        payload = bytes([ED25519_FLAG]) + bytes(self._signing_key)
        return bech32_encode(SUI_PRIVATE_KEY_PREFIX, convertbits(payload, 8, 5))

    def sign_personal_message(self, message: bytes) -> str:
        """
        Sign a personal message the way Sui wallets do.

        Args:
            message: Raw message bytes

        Returns:
            Base64 serialized signature (flag || signature || public key)

        Raises:
            SigningError: If the message cannot be signed
        """
        if not isinstance(message, (bytes, bytearray)):
            raise SigningError(f"Message must be bytes, got {type(message).__name__}")

        digest = _blake2b256(self._intent_message(bytes(message)))
        try:
            signature = self._signing_key.sign(digest).signature
        except (nacl.exceptions.CryptoError, TypeError, ValueError) as e:
            raise SigningError(f"Failed to sign message: {e}") from e

        serialized = bytes([ED25519_FLAG]) + signature + self._public_key
        return base64.b64encode(serialized).decode("ascii")

    def verify_personal_message(self, message: bytes, serialized_signature: str) -> bool:
        """Check a serialized signature produced by ``sign_personal_message``."""
        try:
            raw = base64.b64decode(serialized_signature, validate=True)
        except (binascii.Error, ValueError):
            return False
        if len(raw) != 97 or raw[0] != ED25519_FLAG:
            return False

        signature, public_key = raw[1:65], raw[65:]
        digest = _blake2b256(self._intent_message(bytes(message)))
        try:
            nacl.signing.VerifyKey(public_key).verify(digest, signature)
        except nacl.exceptions.BadSignatureError:
            return False
        return True

    @staticmethod
    def _intent_message(message: bytes) -> bytes:
        return PERSONAL_MESSAGE_INTENT + _uleb128(len(message)) + message

    def __repr__(self) -> str:
        return f"SuiKeypair(address={self._address})"


def _decode_bech32(secret: str) -> bytes:
    hrp, data = bech32_decode(secret)
    if hrp != SUI_PRIVATE_KEY_PREFIX or data is None:
        raise KeyImportError("Invalid suiprivkey string")
    decoded = convertbits(data, 5, 8, False)
    if decoded is None:
        raise KeyImportError("Invalid suiprivkey payload")
    return bytes(decoded)


def _decode_legacy(secret: str) -> bytes:
    """Hex (optionally 0x-prefixed) or base64 encoded key material."""
    hex_text = secret[2:] if secret.lower().startswith("0x") else secret
    if len(hex_text) == 64:
        try:
            return bytes.fromhex(hex_text)
        except ValueError:
            pass

    try:
        return base64.b64decode(secret, validate=True)
    except (binascii.Error, ValueError):
        raise KeyImportError("Private key is neither suiprivkey, hex nor base64") from None


def from_exported_keypair(secret: str) -> SuiKeypair:
    """
    Import a keypair from an exported private key string.

    Supported forms: ``suiprivkey1...`` (Bech32), base64 of flag + seed
    (33 bytes) or of a bare seed (32 bytes), and 32-byte hex.

    Raises:
        KeyImportError: If the key is malformed or not an Ed25519 key
    """
    if not isinstance(secret, str) or not secret.strip():
        raise KeyImportError("Private key cannot be empty")

    secret = secret.strip()
    if secret.lower().startswith(SUI_PRIVATE_KEY_PREFIX):
        raw = _decode_bech32(secret.lower())
        if len(raw) != 33:
            raise KeyImportError(f"Invalid suiprivkey length: {len(raw)} bytes")
    else:
        raw = _decode_legacy(secret)

    if len(raw) == 33:
        flag, raw = raw[0], raw[1:]
        if flag != ED25519_FLAG:
            scheme = SIGNATURE_SCHEMES.get(flag, f"0x{flag:02x}")
            raise KeyImportError(f"Unsupported signature scheme: {scheme}")
    elif len(raw) == 64:
        # Legacy exports carry seed || public key
        raw = raw[:32]

    if len(raw) != 32:
        raise KeyImportError(f"Invalid private key length: {len(raw)} bytes")

    return SuiKeypair.from_seed(raw)


def resolve_keypair(
    private_key: Union[str, SuiKeypair, nacl.signing.SigningKey],
) -> SuiKeypair:
    """Accept a key string or a pre-built keypair and return a SuiKeypair."""
    if isinstance(private_key, SuiKeypair):
        return private_key
    if isinstance(private_key, nacl.signing.SigningKey):
        return SuiKeypair(private_key)
    if isinstance(private_key, str):
        return from_exported_keypair(private_key)
    raise KeyImportError(f"Unsupported private key type: {type(private_key).__name__}")
