"""Error types raised by the video and asset services."""

from enum import Enum


class MediaError(Exception):
    """Base class for errors surfaced to HTTP clients."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(MediaError):
    """The video root is unset or missing at startup."""


class ScanError(MediaError):
    """Walking the video root failed."""


class PathErrorKind(str, Enum):
    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"


class PathError(MediaError):
    """A requested stream path was rejected or could not be resolved."""

    def __init__(self, kind: PathErrorKind, message: str):
        super().__init__(message)
        self.kind = kind

    @property
    def status_code(self) -> int:
        return 400 if self.kind is PathErrorKind.BAD_REQUEST else 404
