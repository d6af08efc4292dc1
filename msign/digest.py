"""Hashing glue between caller streams and the signing primitive.

Two widths are used: SHA-512 digests whole messages before they reach
ed25519, SHA-256 (truncated) labels keys and guards encoded records
against transcription errors.
"""

import hashlib
import io

from .errors import NilInputError

CHECKSUM_SIZE = 6
KEY_ID_SIZE = 6
DEFAULT_CHUNK_SIZE = 64 * 1024


def _as_stream(message):
    if message is None:
        raise NilInputError("nil reader")
    if isinstance(message, (bytes, bytearray, memoryview)):
        return io.BytesIO(message)
    return message


def message_digest(message, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
    """Stream *message* through SHA-512 and return the 64-byte digest.

    Args:
        message: A binary readable (anything with ``read(n)``) or raw bytes.
        chunk_size: Read size used while draining the stream.

    Raises:
        NilInputError: If *message* is None.

    Exceptions raised by the stream's ``read`` propagate unchanged.
    """
    stream = _as_stream(message)
    h = hashlib.sha512()
    for chunk in iter(lambda: stream.read(chunk_size), b""):
        h.update(chunk)
    return h.digest()


def narrow_hash(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def checksum(covered: bytes) -> bytes:
    """Return the record checksum: first 6 bytes of SHA-256 over *covered*."""
    return narrow_hash(covered)[:CHECKSUM_SIZE]


def derive_key_id(public_bytes: bytes) -> bytes:
    """Derive the 6-byte key id from raw public key bytes."""
    return narrow_hash(public_bytes)[:KEY_ID_SIZE]
