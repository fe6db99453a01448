"""SBOM uploader - push CycloneDX SBOMs to a Dependency-Track server."""

from __future__ import annotations

# Version info
__version__ = "0.1.0"

from sbom_uploader.client import DependencyTrackClient  # noqa: E402
from sbom_uploader.config import UploaderConfig, resolve_options, validate  # noqa: E402
from sbom_uploader.errors import (  # noqa: E402
    ConfigurationError,
    NotFoundError,
    ResponseError,
    TransportError,
    UploaderError,
)
from sbom_uploader.models import Artifact, UploadRequest, UploadResult  # noqa: E402
from sbom_uploader.uploader import raise_for_outcome, report, upload  # noqa: E402

# Public API
__all__ = [
    # Version
    "__version__",
    # Operation
    "upload",
    "report",
    "raise_for_outcome",
    # Configuration
    "UploaderConfig",
    "resolve_options",
    "validate",
    # Client and models
    "DependencyTrackClient",
    "Artifact",
    "UploadRequest",
    "UploadResult",
    # Errors
    "UploaderError",
    "ConfigurationError",
    "NotFoundError",
    "TransportError",
    "ResponseError",
]
