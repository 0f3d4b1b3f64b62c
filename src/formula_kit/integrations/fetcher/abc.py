"""Artifact fetching abstraction.

This module defines the interface for downloading release archives, enabling
dependency injection so install operations can be tested without network access.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal

FetchFailureType = Literal["network", "not_found"]


@dataclass(frozen=True)
class FetchFailure:
    """A fetch that did not produce archive bytes.

    Attributes:
        failure_type: "not_found" for a missing resource, "network" for anything else
        message: Human-readable cause
        status_code: HTTP status when the server answered, None otherwise
    """

    failure_type: FetchFailureType
    message: str
    status_code: int | None = None


class ArtifactFetcher(ABC):
    """Abstract interface for fetching artifact bytes by URL."""

    @abstractmethod
    def fetch(self, url: str) -> bytes | FetchFailure:
        """Fetch the full content at url.

        Args:
            url: http(s):// or file:// URL of the archive

        Returns:
            The response body, or FetchFailure describing why it is unavailable

        Note:
            Transport failures are returned, not raised. No retries are attempted;
            the caller decides whether to try again.
        """
        ...
