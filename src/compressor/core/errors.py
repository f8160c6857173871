from __future__ import annotations

from compressor.core.models import ErrorKind


class TranscodeError(Exception):
    kind: ErrorKind = ErrorKind.DECODE_FAILED

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DecodeError(TranscodeError):
    kind = ErrorKind.DECODE_FAILED


class EncodeError(TranscodeError):
    kind = ErrorKind.ENCODE_FAILED
