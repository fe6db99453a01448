"""Dependency-Track API client"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Literal
from urllib.parse import quote

import requests

from . import __version__
from .errors import ConfigurationError, TransportError
from .models import UploadRequest, UploadResult

logger = logging.getLogger("SbomUploader")


class DependencyTrackClient:
    """Thin client for the handful of Dependency-Track endpoints the uploader needs."""

    DEFAULT_HEADERS: Mapping[str, str] = {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "User-Agent": f"sbom-uploader/{__version__}",
    }

    def __init__(
        self, base_url: str, api_key: str | None = None, timeout_s: float = 30.0
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self.session = requests.Session()
        self.session.headers.update(dict(self.DEFAULT_HEADERS))
        if api_key:
            self.session.headers["X-Api-Key"] = api_key

    # ============================== Helpers ===============================
    def _url(self, path: str) -> str:
        return (
            f"{self.base_url}{path}"
            if path.startswith("/")
            else f"{self.base_url}/{path}"
        )

    @staticmethod
    def _to_result(response: requests.Response) -> UploadResult:
        text = response.text or ""
        try:
            body = response.json()
        except ValueError:
            # .json() raises ValueError on invalid JSON across requests versions
            body = None
        return UploadResult(status_code=response.status_code, body=body, text=text)

    def _request(
        self,
        method: Literal["GET", "POST", "PUT"],
        path: str,
        *,
        json_body: dict[str, Any] | None = None,
    ) -> UploadResult:
        """Send one request; HTTP errors are returned, transport errors raised."""
        url = self._url(path)
        try:
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=dict(self.session.headers),
                timeout=self.timeout_s,
            )
        except requests.Timeout as err:
            logger.error("%s %s timed out after %.1fs", method, url, self.timeout_s)
            raise TransportError(
                f"Request to {url} timed out after {self.timeout_s}s", cause=err
            ) from err
        except requests.ConnectionError as err:
            logger.error("Cannot connect to %s: %s", self.base_url, err)
            raise TransportError(f"Cannot connect to {self.base_url}: {err}", cause=err) from err
        except requests.exceptions.InvalidHeader:
            # The message quotes the offending header value, i.e. the API key
            logger.error("%s %s rejected: invalid request header", method, url)
            raise ConfigurationError(
                "A request header, most likely the API key, contains invalid characters"
            ) from None
        except requests.RequestException as err:
            logger.error("%s %s failed: %s", method, url, err)
            raise TransportError(f"Request to {url} failed: {err}", cause=err) from err

        logger.info("%s %s -> HTTP %d", method, url, response.status_code)
        return self._to_result(response)

    # ============================== Endpoints =============================
    def version(self) -> UploadResult:
        """Query the server version (GET /api/version)."""
        return self._request("GET", "/api/version")

    def upload_bom(self, request: UploadRequest) -> UploadResult:
        """Submit a BOM (POST /api/v1/bom).

        Non-2xx responses are returned as-is; callers decide how to report them.
        """
        logger.debug(
            "Uploading BOM for %s %s (%d base64 chars)",
            request.project_name,
            request.project_version,
            len(request.bom),
        )
        return self._request("POST", "/api/v1/bom", json_body=request.to_payload())

    def bom_processing(self, token: str) -> UploadResult:
        """Ask whether a BOM upload is still being processed (GET /api/v1/bom/token/{token})."""
        if not token:
            raise ValueError("'token' must not be empty.")
        return self._request("GET", f"/api/v1/bom/token/{quote(token, safe='')}")
