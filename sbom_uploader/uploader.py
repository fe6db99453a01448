"""Upload a local SBOM file to a Dependency-Track server.

The operation is one linear request: validate the configuration, read the
artifact, POST it once, and hand back whatever the server answered. Nothing
here retries; a failed upload is reported and left to the operator.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable

from .client import DependencyTrackClient
from .config import UploaderConfig, validate
from .errors import ResponseError
from .models import Artifact, UploadRequest, UploadResult

logger = logging.getLogger("SbomUploader")

Echo = Callable[[str], None]


def upload(
    config: UploaderConfig, client: DependencyTrackClient | None = None
) -> UploadResult:
    """Upload the BOM described by `config` and return the server's answer.

    Raises:
        ConfigurationError: API key missing/placeholder or invalid settings.
        NotFoundError: the BOM file is missing or unreadable.
        TransportError: no HTTP response was received.
    """
    validate(config)
    artifact = Artifact.read(config.bom_path)
    logger.info(
        "Read BOM %s (%d bytes) for project %s %s",
        artifact.path,
        artifact.size,
        config.project_name,
        config.project_version,
    )

    request = UploadRequest.from_artifact(config, artifact)
    if client is None:
        client = DependencyTrackClient(
            config.base_url, api_key=config.api_key, timeout_s=config.timeout_s
        )

    result = client.upload_bom(request)
    if result.ok:
        logger.info("BOM accepted with HTTP %d", result.status_code)
    else:
        logger.warning("BOM upload returned HTTP %d", result.status_code)
    return result


def report(result: UploadResult, echo: Echo = print) -> None:
    """Write the outcome of a request for the operator."""
    echo(f"Status: {result.status_code}")
    if result.token:
        echo(f"Token: {result.token}")
    if result.is_json:
        echo(json.dumps(result.body, indent=2, sort_keys=True))
    elif result.text:
        echo(result.text)


def raise_for_outcome(result: UploadResult) -> None:
    """Raise ResponseError for a non-2xx result."""
    if not result.ok:
        raise ResponseError(result)
