"""Real artifact fetcher using httpx."""

import logging
from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname

import httpx

from formula_kit.integrations.fetcher.abc import ArtifactFetcher, FetchFailure

logger = logging.getLogger(__name__)


class HttpxArtifactFetcher(ArtifactFetcher):
    """Production fetcher backed by a synchronous httpx client.

    Follows redirects (GitHub release downloads redirect to a CDN) and reads
    file:// URLs straight from disk.
    """

    def __init__(
        self,
        timeout_seconds: float,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Create fetcher.

        Args:
            timeout_seconds: Timeout applied to connect, read and write
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    def fetch(self, url: str) -> bytes | FetchFailure:
        parsed = urlparse(url)

        if parsed.scheme == "file":
            return self._read_local(Path(url2pathname(parsed.path)))

        if parsed.scheme not in ("http", "https"):
            return FetchFailure(
                failure_type="network",
                message=f"Unsupported URL scheme {parsed.scheme!r} in {url}",
            )

        logger.debug("GET %s (timeout=%ss)", url, self._timeout_seconds)
        try:
            with httpx.Client(
                timeout=self._timeout_seconds,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = client.get(url)
        except httpx.InvalidURL as e:
            return FetchFailure(
                failure_type="network",
                message=f"Invalid URL {url}: {e}",
            )
        except httpx.RequestError as e:
            return FetchFailure(
                failure_type="network",
                message=f"Request to {url} failed: {e}",
            )

        logger.debug(
            "GET %s -> HTTP %d (%d bytes)", url, response.status_code, len(response.content)
        )

        if response.status_code == 404:
            return FetchFailure(
                failure_type="not_found",
                message=f"Archive not found: {url} (HTTP 404)",
                status_code=404,
            )

        if not response.is_success:
            return FetchFailure(
                failure_type="network",
                message=f"Unexpected HTTP {response.status_code} from {url}",
                status_code=response.status_code,
            )

        return response.content

    def _read_local(self, path: Path) -> bytes | FetchFailure:
        if not path.is_file():
            return FetchFailure(
                failure_type="not_found",
                message=f"Archive not found: {path}",
            )
        return path.read_bytes()
