"""Fetches GitHub's HTML pages for trending and collections."""

import logging
from typing import Dict, Optional

import requests

from codehub_trending.infrastructure.http import USER_AGENT, get_or_fail

logger = logging.getLogger(__name__)


class GitHubPageClient:
    """Client for GitHub pages that have no API equivalent."""

    SITE_BASE_URL = "https://github.com"
    TRENDING_PATH = "/trending"
    COLLECTIONS_PATH = "/collections"

    # Asks for the page fragment instead of the full layout.
    PJAX_HEADERS = {"X-PJAX": "true"}

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})

    def fetch_trending(self, since: Optional[str] = None, language: Optional[str] = None) -> str:
        """
        Fetch the trending page.

        Args:
            since: Trending period (daily, weekly, monthly)
            language: Language slug to filter by

        Returns:
            Raw HTML document
        """
        params: Dict[str, str] = {}
        if since:
            params["since"] = since
        if language:
            params["l"] = language

        response = get_or_fail(
            self.session,
            f"{self.SITE_BASE_URL}{self.TRENDING_PATH}",
            params=params or None,
            headers=self.PJAX_HEADERS,
        )
        return response.text

    def fetch_collections(self, after: Optional[str] = None) -> str:
        """Fetch one page of the collections index, starting after a cursor."""
        params = {"after": after} if after else None
        response = get_or_fail(
            self.session,
            f"{self.SITE_BASE_URL}{self.COLLECTIONS_PATH}",
            params=params,
        )
        return response.text

    def fetch_collection(self, slug: str) -> str:
        """Fetch the detail page of a single collection."""
        response = get_or_fail(
            self.session,
            f"{self.SITE_BASE_URL}{self.COLLECTIONS_PATH}/{slug}",
        )
        return response.text
