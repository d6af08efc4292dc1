"""Machine-readable error categories for msign encoding and verification failures."""


class MsignError(Exception):
    """Base exception for all msign errors."""


class NilInputError(MsignError):
    """A required stream or sink argument was not supplied."""


class InvalidFormatError(MsignError):
    """An encoded record could not be parsed as the expected artifact kind.

    Covers prefix mismatch, malformed base64, unsupported version,
    undersized records and checksum mismatch.
    """

    def __init__(self, kind, detail: str = ""):
        self.kind = kind
        self.detail = detail
        message = f"invalid {kind} format"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class InvalidSignatureError(MsignError):
    """The supplied signature is missing or not a recognized signature."""


class KeyIdMismatchError(MsignError):
    """The signature was produced by a key other than the verifying one."""


class UnknownTypeError(MsignError):
    """Export was given a value that is not a key or signature."""

