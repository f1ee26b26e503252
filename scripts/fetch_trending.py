#!/usr/bin/env python3
"""Script to fetch trending GitHub repositories and print them as JSON."""

import json
import logging
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from codehub_trending.application.trending_service import TrendingService

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def main():
    """Fetch trending repositories for one period and language."""
    try:
        since = os.getenv("TRENDING_SINCE", "daily")
        language = os.getenv("TRENDING_LANGUAGE") or None

        service = TrendingService.from_token(os.getenv("GITHUB_TOKEN"))
        repositories = service.get_trending_repositories(since, language)

        json.dump([repo.to_dict() for repo in repositories], sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")

        rate_limit = service.github_client.last_rate_limit
        if rate_limit is not None:
            logger.info(f"Fetched {len(repositories)} repositories. API calls remaining: {rate_limit.remaining}")
        return 0

    except Exception as e:
        logger.error(f"Fetching trending repositories failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
