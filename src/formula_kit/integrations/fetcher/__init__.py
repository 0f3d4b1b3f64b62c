from formula_kit.integrations.fetcher.abc import ArtifactFetcher, FetchFailure
from formula_kit.integrations.fetcher.real import HttpxArtifactFetcher

__all__ = [
    "ArtifactFetcher",
    "FetchFailure",
    "HttpxArtifactFetcher",
]
