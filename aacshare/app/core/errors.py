# aacshare/app/core/errors.py
"""
Domain errors raised by repositories and services.

Every error belongs to exactly one ErrorKind. The HTTP layer picks the
status code from the kind (see api/errors.py), so new errors only need a
kind and a message.
"""
from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    TOO_LARGE = "too_large"
    IO = "io"


class AACShareError(Exception):
    kind: ErrorKind = ErrorKind.IO
    message: str = "internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.message
        super().__init__(self.message)


# --- Credentials / tokens ---

class UserExists(AACShareError):
    kind = ErrorKind.CONFLICT
    message = "user exists"


class InvalidCredentials(AACShareError):
    kind = ErrorKind.UNAUTHORIZED
    message = "user or password is incorrect"


class InvalidToken(AACShareError):
    kind = ErrorKind.UNAUTHORIZED
    message = "invalid access token"


class InvalidRefreshToken(AACShareError):
    kind = ErrorKind.UNAUTHORIZED
    message = "invalid or expired refresh token"


# --- Audio catalog ---

class EmptyUpdate(AACShareError):
    kind = ErrorKind.VALIDATION
    message = "update structure has no values"


class UnknownOrderType(AACShareError):
    kind = ErrorKind.VALIDATION
    message = "unknown order type"


class NotOwnerOrNotFound(AACShareError):
    kind = ErrorKind.NOT_FOUND
    message = "you are not owner or audio not exists"


class AudioNotFound(AACShareError):
    kind = ErrorKind.NOT_FOUND
    message = "file not found or you haven't access"


# --- Share registry ---

class SelfShare(AACShareError):
    kind = ErrorKind.VALIDATION
    message = "you can't share audio with yourself"


class ShareExists(AACShareError):
    kind = ErrorKind.CONFLICT
    message = "share exists"


class ShareTargetNotFound(AACShareError):
    kind = ErrorKind.VALIDATION
    message = "user you share with not exists"


# --- Blob store ---

class NotSupportedFormat(AACShareError):
    kind = ErrorKind.VALIDATION
    message = "file is not aac"


class BlobNotFound(AACShareError):
    kind = ErrorKind.NOT_FOUND
    message = "audio file is missing from storage"


class StorageIOError(AACShareError):
    kind = ErrorKind.IO
    message = "storage read/write failed"


class UploadTooLarge(AACShareError):
    kind = ErrorKind.TOO_LARGE
    message = "uploaded file is too large"
