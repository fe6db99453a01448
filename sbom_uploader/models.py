"""Data models for SBOM uploads and their outcomes."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .errors import NotFoundError

if TYPE_CHECKING:
    from .config import UploaderConfig


@dataclass(frozen=True)
class Artifact:
    """SBOM file produced by an external scanner, read fully into memory."""

    path: Path
    content: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def read(cls, path: str | Path) -> Artifact:
        """Read the artifact at `path`.

        Raises NotFoundError when the path is missing, is not a regular file,
        or cannot be read.
        """
        source = Path(path)
        if not source.is_file():
            raise NotFoundError(f"BOM file not found: {source}")
        try:
            with source.open("rb") as f:
                content = f.read()
        except OSError as err:
            raise NotFoundError(f"BOM file could not be read: {source} ({err})") from err
        return cls(path=source, content=content)


def encode_bom(content: bytes) -> str:
    """Base64-encode BOM bytes as ASCII text."""
    return base64.b64encode(content).decode("ascii")


@dataclass(frozen=True)
class UploadRequest:
    """Body of `POST /api/v1/bom`."""

    project_name: str
    project_version: str
    bom: str = field(repr=False)
    auto_create: bool = True

    @classmethod
    def from_artifact(cls, config: UploaderConfig, artifact: Artifact) -> UploadRequest:
        return cls(
            project_name=config.project_name,
            project_version=config.project_version,
            bom=encode_bom(artifact.content),
            auto_create=config.auto_create,
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "projectName": self.project_name,
            "projectVersion": self.project_version,
            "autoCreate": self.auto_create,
            "bom": self.bom,
        }


@dataclass
class UploadResult:
    """Outcome of a request that produced an HTTP response."""

    status_code: int
    body: Any = None  # Parsed JSON, None when the body was not JSON
    text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_json(self) -> bool:
        return self.body is not None

    @property
    def token(self) -> str | None:
        """Processing token handed out by the server, if any."""
        if isinstance(self.body, dict):
            token = self.body.get("token")
            if token:
                return str(token)
        return None

    @property
    def error(self) -> str | None:
        """Best-effort error message for non-2xx responses."""
        if self.ok:
            return None
        if isinstance(self.body, dict):
            for key in ("message", "detail", "error", "title"):
                value = self.body.get(key)
                if value:
                    return str(value)
        if self.text:
            return self.text.strip()
        return None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"status_code": self.status_code}
        if self.token is not None:
            data["token"] = self.token
        if self.error is not None:
            data["error"] = self.error
        if self.is_json:
            data["body"] = self.body
        else:
            data["text"] = self.text
        return data
