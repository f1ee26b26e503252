#!/usr/bin/env python3
"""Script to list the languages GitHub trending can be filtered by."""

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
        service = TrendingService.from_token(os.getenv("GITHUB_TOKEN"))
        languages = service.get_languages()

        json.dump([language.to_dict() for language in languages], sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")
        return 0

    except Exception as e:
        logger.error(f"Fetching languages failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
