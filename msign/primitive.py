"""Ed25519 primitive provider backed by PyNaCl.

Private key material uses the expanded 64-byte layout: the 32-byte seed
followed by the 32-byte public key.
"""

from nacl.exceptions import BadSignatureError
from nacl.signing import SigningKey, VerifyKey

SEED_SIZE = 32
PRIVATE_KEY_SIZE = 64
PUBLIC_KEY_SIZE = 32
SIGNATURE_SIZE = 64


def generate_keypair() -> tuple[bytes, bytes]:
    """Generate a random ed25519 keypair, returning (private, public) bytes."""
    signing_key = SigningKey.generate()
    public = bytes(signing_key.verify_key)
    return bytes(signing_key) + public, public


def public_from_private(private_bytes: bytes) -> bytes:
    return bytes(private_bytes[SEED_SIZE:])


def halves_agree(private_bytes: bytes) -> bool:
    """Return True if the stored public half is the one derived from the seed."""
    derived = bytes(SigningKey(bytes(private_bytes[:SEED_SIZE])).verify_key)
    return derived == bytes(private_bytes[SEED_SIZE:])


def sign(digest: bytes, private_bytes: bytes) -> bytes:
    """Sign *digest* with the seed half of *private_bytes*; 64-byte signature.

    The stored public half is not consulted; imported private keys are
    rejected unless ``halves_agree`` holds.
    """
    signing_key = SigningKey(bytes(private_bytes[:SEED_SIZE]))
    return signing_key.sign(digest).signature


def verify(digest: bytes, public_bytes: bytes, signature_bytes: bytes) -> bool:
    """Return True if *signature_bytes* is a valid signature over *digest*."""
    try:
        VerifyKey(public_bytes).verify(digest, signature_bytes)
    except BadSignatureError:
        return False
    return True
