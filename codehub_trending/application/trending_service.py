"""Application service for GitHub trending and showcase data."""

import logging
from typing import Iterable, List, Optional

from codehub_trending.application.pagination import PaginationWalker
from codehub_trending.domain.repository import OwnerNamePair, Repository
from codehub_trending.domain.showcase import Language, Showcase
from codehub_trending.infrastructure.errors import FetchFailure
from codehub_trending.infrastructure.extractors import (
    extract_languages,
    extract_showcase_repositories,
    extract_showcases,
    extract_trending_owners,
)
from codehub_trending.infrastructure.github_client import GitHubRestClient
from codehub_trending.infrastructure.page_client import GitHubPageClient

logger = logging.getLogger(__name__)


class TrendingService:
    """Service combining GitHub's HTML pages with the repository API."""

    def __init__(
        self,
        github_client: GitHubRestClient,
        page_client: GitHubPageClient,
        skip_failed: bool = False,
        max_showcase_pages: Optional[int] = None,
        logger: logging.Logger = logger,
    ):
        """
        Initialize trending service.

        Args:
            github_client: GitHub REST API client
            page_client: GitHub HTML page client
            skip_failed: Log and skip repositories that fail to resolve
                instead of aborting the whole listing
            max_showcase_pages: Upper bound on collections pages to walk
            logger: Sink for progress and failure messages
        """
        self.github_client = github_client
        self.page_client = page_client
        self.skip_failed = skip_failed
        self.max_showcase_pages = max_showcase_pages
        self.logger = logger

    @classmethod
    def from_token(cls, token: Optional[str], **kwargs) -> "TrendingService":
        """Build a service with default clients."""
        return cls(GitHubRestClient(token=token), GitHubPageClient(), **kwargs)

    def get_repository(self, owner: str, name: str) -> Repository:
        return self.github_client.get_repository(owner, name)

    def get_trending_repositories(self, period: str, language: Optional[str] = None) -> List[Repository]:
        """
        Fetch the repositories currently trending.

        Args:
            period: Trending period (daily, weekly, monthly)
            language: Optional language slug to filter by

        Returns:
            Repositories in the order the trending page lists them
        """
        document = self.page_client.fetch_trending(since=period, language=language)
        pairs = extract_trending_owners(document)
        self.logger.info(
            f"Found {len(pairs)} trending repositories (since={period}, language={language})"
        )
        return self._resolve(pairs)

    def get_languages(self) -> List[Language]:
        document = self.page_client.fetch_trending()
        languages = extract_languages(document)
        self.logger.info(f"Found {len(languages)} trending languages")
        return languages

    def get_showcases(self) -> List[Showcase]:
        """Fetch every showcase, following the collections index cursor."""
        walker = PaginationWalker(
            fetch_page=self.page_client.fetch_collections,
            extract_page=extract_showcases,
            max_pages=self.max_showcase_pages,
            logger=self.logger,
        )
        return walker.walk()

    def get_showcase_repositories(self, slug: str) -> List[Repository]:
        """
        Fetch the repositories of one showcase.

        Args:
            slug: Showcase slug, as returned in Showcase.slug

        Returns:
            Repositories in the order the showcase page lists them
        """
        document = self.page_client.fetch_collection(slug)
        pairs = extract_showcase_repositories(document)
        self.logger.info(f"Found {len(pairs)} repositories in showcase {slug}")
        return self._resolve(pairs)

    def _resolve(self, pairs: Iterable[OwnerNamePair]) -> List[Repository]:
        # One request at a time: each rate-limit pause must see the latest quota.
        repositories: List[Repository] = []
        for pair in pairs:
            try:
                repositories.append(self.get_repository(pair.owner, pair.name))
            except FetchFailure as e:
                if not self.skip_failed:
                    raise
                self.logger.error(f"Skipping {pair.full_name}: {e}")
        return repositories
