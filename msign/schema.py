"""Binary record layouts per artifact kind and format version.

Every record starts with a one-byte version. Private keys and signatures
follow it with a 6-byte checksum; public keys do not. Then comes the
6-byte key id and the primitive's raw bytes::

    KEY  version(1) checksum(6) keyid(6) private(64)
    PUB  version(1) keyid(6) public(32)
    SIG  version(1) checksum(6) keyid(6) signature(64)

A future format version is a new ``RecordSchema`` entry in ``SCHEMAS``.
"""

from dataclasses import dataclass
from enum import Enum

from . import primitive
from .digest import CHECKSUM_SIZE, KEY_ID_SIZE, checksum

VERSION_SIZE = 1
VERSION_ONE = 1
CURRENT_VERSION = VERSION_ONE


class ArtifactKind(Enum):
    PRIVATE_KEY = "private key"
    PUBLIC_KEY = "public key"
    SIGNATURE = "signature"

    def __str__(self) -> str:
        return self.value


PREFIXES = {
    ArtifactKind.PRIVATE_KEY: "KEY:",
    ArtifactKind.PUBLIC_KEY: "PUB:",
    ArtifactKind.SIGNATURE: "SIG:",
}


@dataclass(frozen=True)
class RecordSchema:
    """Fixed layout of one (kind, version) record."""

    kind: ArtifactKind
    version: int
    checksum_size: int
    id_size: int
    payload_size: int

    @property
    def prefix(self) -> str:
        return PREFIXES[self.kind]

    @property
    def checksummed(self) -> bool:
        return self.checksum_size > 0

    @property
    def checksum_slice(self) -> slice:
        return slice(VERSION_SIZE, VERSION_SIZE + self.checksum_size)

    @property
    def id_slice(self) -> slice:
        start = VERSION_SIZE + self.checksum_size
        return slice(start, start + self.id_size)

    @property
    def payload_slice(self) -> slice:
        start = self.id_slice.stop
        return slice(start, start + self.payload_size)

    @property
    def size(self) -> int:
        return self.payload_slice.stop

    def covered(self, record: bytes) -> bytes:
        """Bytes protected by the checksum: everything after the checksum field."""
        return bytes(record[self.id_slice.start:])

    def pack(self, key_id: bytes, payload: bytes) -> bytes:
        """Lay out *key_id* and *payload*, filling the checksum field if any."""
        record = bytearray(self.size)
        record[0] = self.version
        record[self.id_slice] = key_id
        record[self.payload_slice] = payload
        if self.checksummed:
            record[self.checksum_slice] = checksum(self.covered(record))
        return bytes(record)

    def checksum_matches(self, record: bytes) -> bool:
        return checksum(self.covered(record)) == bytes(record[self.checksum_slice])

    def unpack(self, record: bytes) -> tuple[bytes, bytes]:
        """Return (key_id, payload) copied out of their fixed offsets."""
        return bytes(record[self.id_slice]), bytes(record[self.payload_slice])


SCHEMAS = {
    ArtifactKind.PRIVATE_KEY: {
        VERSION_ONE: RecordSchema(
            ArtifactKind.PRIVATE_KEY,
            VERSION_ONE,
            CHECKSUM_SIZE,
            KEY_ID_SIZE,
            primitive.PRIVATE_KEY_SIZE,
        ),
    },
    ArtifactKind.PUBLIC_KEY: {
        VERSION_ONE: RecordSchema(
            ArtifactKind.PUBLIC_KEY,
            VERSION_ONE,
            0,
            KEY_ID_SIZE,
            primitive.PUBLIC_KEY_SIZE,
        ),
    },
    ArtifactKind.SIGNATURE: {
        VERSION_ONE: RecordSchema(
            ArtifactKind.SIGNATURE,
            VERSION_ONE,
            CHECKSUM_SIZE,
            KEY_ID_SIZE,
            primitive.SIGNATURE_SIZE,
        ),
    },
}


def schema_for(kind: ArtifactKind, version: int = CURRENT_VERSION):
    """Return the schema for *kind* at *version*, or None if unsupported."""
    return SCHEMAS[kind].get(version)
