"""msign: versioned, checksummed text encoding for ed25519 keys and signatures."""

from .codec import (
    decode,
    encode,
    export,
    import_private_key,
    import_public_key,
    import_signature,
)
from .errors import (
    InvalidFormatError,
    InvalidSignatureError,
    KeyIdMismatchError,
    MsignError,
    NilInputError,
    UnknownTypeError,
)
from .keys import KeyId, PrivateKey, PublicKey, Signature, generate_keypair
from .schema import ArtifactKind

__all__ = [
    "ArtifactKind",
    "KeyId",
    "PrivateKey",
    "PublicKey",
    "Signature",
    "generate_keypair",
    "encode",
    "decode",
    "export",
    "import_private_key",
    "import_public_key",
    "import_signature",
    "MsignError",
    "NilInputError",
    "InvalidFormatError",
    "InvalidSignatureError",
    "KeyIdMismatchError",
    "UnknownTypeError",
]
