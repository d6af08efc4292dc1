"""Private keys, public keys and signatures bound together by a short key id."""

import logging
from dataclasses import dataclass, field

from . import primitive
from .digest import DEFAULT_CHUNK_SIZE, KEY_ID_SIZE, derive_key_id, message_digest
from .errors import InvalidSignatureError, KeyIdMismatchError, NilInputError

_LOG = logging.getLogger(__name__)


class KeyId(bytes):
    """Six-byte fingerprint of a public key; renders as lowercase hex."""

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return f"KeyId({self.hex()!r})"


def _check_width(name: str, value: bytes, size: int) -> None:
    if len(value) != size:
        raise ValueError(f"{name} must be {size} bytes, got {len(value)}")


class _Artifact:
    """Shared validation for the three key id carrying artifacts."""

    _payload_size = 0

    def __post_init__(self):
        object.__setattr__(self, "key_id", KeyId(self.key_id))
        object.__setattr__(self, "raw", bytes(self.raw))
        _check_width("key_id", self.key_id, KEY_ID_SIZE)
        _check_width("raw", self.raw, self._payload_size)


@dataclass(frozen=True)
class Signature(_Artifact):
    """An ed25519 signature tagged with the id of the key that produced it."""

    key_id: KeyId
    raw: bytes

    _payload_size = primitive.SIGNATURE_SIZE


@dataclass(frozen=True)
class PublicKey(_Artifact):
    key_id: KeyId
    raw: bytes

    _payload_size = primitive.PUBLIC_KEY_SIZE

    def verify(self, message, signature, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bool:
        """Verify *signature* over the bytes read from *message*.

        Returns False for a well-formed signature that does not match the
        message; that outcome is not an error.

        Raises:
            NilInputError: If *message* is None.
            InvalidSignatureError: If *signature* is not a ``Signature``.
            KeyIdMismatchError: If *signature* was made by a different key.
                Checked before the message is read.
        """
        if message is None:
            raise NilInputError("nil reader")
        if not isinstance(signature, Signature):
            raise InvalidSignatureError("invalid signature")
        if signature.key_id != self.key_id:
            raise KeyIdMismatchError(
                f"invalid signature (key id mismatch): signed by {signature.key_id}, "
                f"verifying with {self.key_id}"
            )
        digest = message_digest(message, chunk_size)
        ok = primitive.verify(digest, self.raw, signature.raw)
        _LOG.debug("verify key_id=%s ok=%s", self.key_id, ok)
        return ok


@dataclass(frozen=True)
class PrivateKey(_Artifact):
    """An ed25519 private key (64-byte seed||public layout) and its key id."""

    key_id: KeyId
    raw: bytes = field(repr=False)

    _payload_size = primitive.PRIVATE_KEY_SIZE

    def sign(self, message, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Signature:
        """Sign the SHA-512 digest of the bytes read from *message*.

        Raises:
            NilInputError: If *message* is None.
        """
        digest = message_digest(message, chunk_size)
        signature = Signature(self.key_id, primitive.sign(digest, self.raw))
        _LOG.debug("signed message key_id=%s", self.key_id)
        return signature

    def public(self) -> PublicKey:
        return PublicKey(self.key_id, primitive.public_from_private(self.raw))


def generate_keypair() -> tuple[PrivateKey, PublicKey]:
    """Generate a fresh keypair sharing one key id."""
    private_bytes, public_bytes = primitive.generate_keypair()
    key_id = KeyId(derive_key_id(public_bytes))
    _LOG.debug("generated keypair key_id=%s", key_id)
    return PrivateKey(key_id, private_bytes), PublicKey(key_id, public_bytes)
