#!/usr/bin/env python3
"""
Script to fetch GitHub showcases.

Prints every showcase, or the repositories of one showcase when
SHOWCASE_SLUG is set.
"""

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
    try:
        service = TrendingService.from_token(
            os.getenv("GITHUB_TOKEN"),
            skip_failed=os.getenv("SKIP_FAILED", "").lower() in ("1", "true", "yes"),
        )

        slug = os.getenv("SHOWCASE_SLUG")
        if slug:
            records = [repo.to_dict() for repo in service.get_showcase_repositories(slug)]
        else:
            records = [showcase.to_dict() for showcase in service.get_showcases()]

        json.dump(records, sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")
        logger.info(f"Fetched {len(records)} records")
        return 0

    except Exception as e:
        logger.error(f"Fetching showcases failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
