"""Tests for message digesting, checksums and the record schema table."""

import hashlib
import io

import pytest

from msign import NilInputError
from msign.digest import checksum, derive_key_id, message_digest
from msign.schema import SCHEMAS, ArtifactKind, schema_for


class TestMessageDigest:
    def test_matches_sha512(self):
        data = b"x" * 100_000
        assert message_digest(io.BytesIO(data)) == hashlib.sha512(data).digest()

    def test_small_chunks(self):
        data = bytes(range(256))
        assert message_digest(io.BytesIO(data), chunk_size=3) == hashlib.sha512(data).digest()

    def test_empty_message(self):
        assert message_digest(b"") == hashlib.sha512(b"").digest()

    def test_memoryview_input(self):
        assert message_digest(memoryview(b"abc")) == hashlib.sha512(b"abc").digest()

    def test_nil_message(self):
        with pytest.raises(NilInputError):
            message_digest(None)


class TestNarrowHash:
    def test_checksum_is_truncated_sha256(self):
        assert checksum(b"abc") == hashlib.sha256(b"abc").digest()[:6]

    def test_key_id_is_truncated_sha256(self):
        pub = bytes(32)
        assert derive_key_id(pub) == hashlib.sha256(pub).digest()[:6]


class TestSchema:
    @pytest.mark.parametrize(
        "kind,size,checksummed",
        [
            (ArtifactKind.PRIVATE_KEY, 77, True),
            (ArtifactKind.PUBLIC_KEY, 39, False),
            (ArtifactKind.SIGNATURE, 77, True),
        ],
    )
    def test_version_one_layouts(self, kind, size, checksummed):
        schema = schema_for(kind)
        assert schema.version == 1
        assert schema.size == size
        assert schema.checksummed is checksummed

    def test_prefixes(self):
        assert schema_for(ArtifactKind.PRIVATE_KEY).prefix == "KEY:"
        assert schema_for(ArtifactKind.PUBLIC_KEY).prefix == "PUB:"
        assert schema_for(ArtifactKind.SIGNATURE).prefix == "SIG:"

    def test_unknown_version(self):
        assert schema_for(ArtifactKind.SIGNATURE, 2) is None

    def test_every_kind_has_a_schema(self):
        assert set(SCHEMAS) == set(ArtifactKind)

    def test_pack_unpack(self):
        schema = schema_for(ArtifactKind.SIGNATURE)
        key_id, payload = b"\x01" * 6, b"\x02" * 64
        record = schema.pack(key_id, payload)
        assert record[0] == 1
        assert record[1:7] == checksum(key_id + payload)
        assert schema.checksum_matches(record)
        assert schema.unpack(record) == (key_id, payload)

    def test_public_pack_has_no_checksum(self):
        schema = schema_for(ArtifactKind.PUBLIC_KEY)
        record = schema.pack(b"\x01" * 6, b"\x02" * 32)
        assert record == b"\x01" + b"\x01" * 6 + b"\x02" * 32
