"""Text encoding of keys and signatures: one prefixed base64 line per artifact.

A line is the record's prefix tag (``KEY:``, ``PUB:`` or ``SIG:``), the
binary record in unpadded URL-safe base64, and a single ``\\n``. The
checksum is a transcription guard, not an authentication mechanism.
"""

import base64
import binascii
import io
import logging
import re

from . import primitive
from .digest import derive_key_id
from .errors import InvalidFormatError, NilInputError, UnknownTypeError
from .keys import PrivateKey, PublicKey, Signature
from .schema import VERSION_SIZE, ArtifactKind, schema_for

_LOG = logging.getLogger(__name__)

_LINE_END = "\n"
_BASE64_URLSAFE_RE = re.compile(r"^[A-Za-z0-9_-]*$")

_KINDS = {
    PrivateKey: ArtifactKind.PRIVATE_KEY,
    PublicKey: ArtifactKind.PUBLIC_KEY,
    Signature: ArtifactKind.SIGNATURE,
}

_FACTORIES = {kind: cls for cls, kind in _KINDS.items()}


def _kind_of(item) -> ArtifactKind:
    kind = _KINDS.get(type(item))
    if kind is None:
        raise UnknownTypeError(f"unknown export type: {type(item).__name__}")
    return kind


def _b64encode(record: bytes) -> str:
    return base64.urlsafe_b64encode(record).rstrip(b"=").decode("ascii")


def _b64decode(body: str, kind: ArtifactKind) -> bytes:
    if not _BASE64_URLSAFE_RE.match(body):
        raise InvalidFormatError(kind, "body is not unpadded URL-safe base64")
    try:
        return base64.urlsafe_b64decode(body + "=" * (-len(body) % 4))
    except binascii.Error as e:
        raise InvalidFormatError(kind, f"base64 decode failed: {e}") from e


def encode(item) -> str:
    """Return the full text line for a key or signature, newline included.

    Raises:
        UnknownTypeError: If *item* is not a PrivateKey, PublicKey or Signature.
    """
    kind = _kind_of(item)
    schema = schema_for(kind)
    record = schema.pack(item.key_id, item.raw)
    return schema.prefix + _b64encode(record) + _LINE_END


def _is_binary(sink) -> bool:
    return isinstance(sink, (io.RawIOBase, io.BufferedIOBase))


def export(sink, item, binary: bool | None = None) -> None:
    """Write *item* as one line to *sink*.

    With *binary* left as None, ``io`` binary streams (``io.BytesIO``, files
    opened with ``"wb"``) receive ASCII bytes and every other sink receives
    ``str``. Pass ``binary=True`` for duck-typed byte sinks such as socket
    wrappers. Exceptions raised by the sink propagate unchanged, so a
    failing write may leave a partial line.

    Raises:
        NilInputError: If *sink* is None.
        UnknownTypeError: If *item* is not a key or signature.
    """
    if sink is None:
        raise NilInputError("nil writer")
    kind = _kind_of(item)
    schema = schema_for(kind)
    parts = (
        schema.prefix,
        _b64encode(schema.pack(item.key_id, item.raw)),
        _LINE_END,
    )
    if binary is None:
        binary = _is_binary(sink)
    for part in parts:
        sink.write(part.encode("ascii") if binary else part)


def decode(line: str, kind: ArtifactKind):
    """Parse one complete text line (terminator included) into an artifact.

    Raises:
        EOFError: If *line* does not end with a newline.
        InvalidFormatError: If the line is not a valid record of *kind*.
    """
    if not line.endswith(_LINE_END):
        raise EOFError(f"{kind} line ended before its newline")
    prefix = schema_for(kind).prefix
    if not line.startswith(prefix):
        _LOG.debug("rejected %s record: prefix mismatch", kind)
        raise InvalidFormatError(kind, f"missing {prefix!r} prefix")

    body = line[len(prefix):].rstrip("\r\n")
    record = _b64decode(body, kind)
    if len(record) <= VERSION_SIZE:
        raise InvalidFormatError(kind, "record too short for a version byte")

    schema = schema_for(kind, record[0])
    if schema is None:
        _LOG.debug("rejected %s record: unsupported version %d", kind, record[0])
        raise InvalidFormatError(kind, f"unsupported version {record[0]}")
    if len(record) < schema.size:
        raise InvalidFormatError(
            kind, f"record is {len(record)} bytes, expected {schema.size}"
        )

    key_id, payload = schema.unpack(record)
    if schema.checksummed:
        if not schema.checksum_matches(record):
            _LOG.debug("rejected %s record: checksum mismatch", kind)
            raise InvalidFormatError(kind, "checksum mismatch")
    elif derive_key_id(record[schema.payload_slice.start:]) != key_id:
        # Public records carry no checksum; the key id is their guard.
        _LOG.debug("rejected %s record: key id does not match key", kind)
        raise InvalidFormatError(kind, "key id does not match public key")
    if kind is ArtifactKind.PRIVATE_KEY and not primitive.halves_agree(payload):
        _LOG.debug("rejected %s record: public half does not match seed", kind)
        raise InvalidFormatError(kind, "public half does not match seed")

    return _FACTORIES[kind](key_id, payload)


def _read_line(source, kind: ArtifactKind) -> str:
    if source is None:
        raise NilInputError("nil reader")
    line = source.readline()
    if isinstance(line, (bytes, bytearray)):
        try:
            line = bytes(line).decode("ascii")
        except UnicodeDecodeError as e:
            raise InvalidFormatError(kind, "line is not ASCII") from e
    return line


def import_private_key(source) -> PrivateKey:
    """Read one ``KEY:`` line from *source* (anything with ``readline()``).

    Raises:
        NilInputError: If *source* is None.
        EOFError: If the stream ends before the line's newline.
        InvalidFormatError: If the line is not a valid private key record.
    """
    return decode(_read_line(source, ArtifactKind.PRIVATE_KEY), ArtifactKind.PRIVATE_KEY)


def import_public_key(source) -> PublicKey:
    """Read one ``PUB:`` line from *source*. Errors as ``import_private_key``."""
    return decode(_read_line(source, ArtifactKind.PUBLIC_KEY), ArtifactKind.PUBLIC_KEY)


def import_signature(source) -> Signature:
    """Read one ``SIG:`` line from *source*. Errors as ``import_private_key``."""
    return decode(_read_line(source, ArtifactKind.SIGNATURE), ArtifactKind.SIGNATURE)
