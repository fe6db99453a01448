"""Exception types raised by the SBOM uploader."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import UploadResult


class UploaderError(Exception):
    """Base class for uploader failures."""

    exit_code: int = 1


class ConfigurationError(UploaderError):
    """Required configuration is missing or still set to a placeholder."""

    exit_code = 2


class NotFoundError(UploaderError):
    """The BOM artifact does not exist or cannot be read."""

    exit_code = 3


class TransportError(UploaderError):
    """The request never produced an HTTP response."""

    exit_code = 4

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ResponseError(UploaderError):
    """The server answered with a non-2xx status."""

    exit_code = 1

    def __init__(self, result: UploadResult) -> None:
        super().__init__(f"Server responded with HTTP {result.status_code}")
        self.result = result
