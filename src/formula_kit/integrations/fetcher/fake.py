"""Fake artifact fetcher for testing.

FakeArtifactFetcher serves pre-configured bytes by URL without any network
access and records every requested URL.
"""

from formula_kit.integrations.fetcher.abc import ArtifactFetcher, FetchFailure


class FakeArtifactFetcher(ArtifactFetcher):
    """In-memory fetcher with constructor-provided responses.

    URLs not present in either mapping produce a "not_found" failure, like a
    404 from a real release host.
    """

    def __init__(
        self,
        *,
        artifacts: dict[str, bytes] | None = None,
        failures: dict[str, FetchFailure] | None = None,
    ) -> None:
        """Create FakeArtifactFetcher with pre-configured state.

        Args:
            artifacts: Mapping of URL -> content returned by fetch()
            failures: Mapping of URL -> FetchFailure returned by fetch()
        """
        self._artifacts = artifacts or {}
        self._failures = failures or {}
        self._fetched_urls: list[str] = []

    @property
    def fetched_urls(self) -> list[str]:
        """URLs passed to fetch(), in call order.

        This property is for test assertions only.
        """
        return self._fetched_urls.copy()

    def fetch(self, url: str) -> bytes | FetchFailure:
        self._fetched_urls.append(url)
        if url in self._failures:
            return self._failures[url]
        if url in self._artifacts:
            return self._artifacts[url]
        return FetchFailure(
            failure_type="not_found",
            message=f"Archive not found: {url} (HTTP 404)",
            status_code=404,
        )
