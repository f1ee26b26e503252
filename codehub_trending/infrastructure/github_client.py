"""GitHub REST API client with rate-limit cool-down."""

import time
import logging
from dataclasses import dataclass
from typing import Callable, Optional

import requests

from codehub_trending.domain.repository import Repository
from codehub_trending.infrastructure.errors import FetchFailure, InvalidCredential
from codehub_trending.infrastructure.http import USER_AGENT, get_or_fail

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitStatus:
    """Rate limit reading taken from response headers."""

    remaining: Optional[int]
    reset_at: Optional[int]  # Unix timestamp


class GitHubRestClient:
    """Client for the repository endpoint of the GitHub REST API."""

    # Authenticated requests get 5,000 calls per hour. Below the threshold
    # every call pauses until the window resets, plus a safety margin.

    API_BASE_URL = "https://api.github.com"
    AUTH_USERNAME = "token"
    RATE_LIMIT_THRESHOLD = 400
    RESET_MARGIN_SECONDS = 60

    def __init__(
        self,
        token: Optional[str],
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
        logger: logging.Logger = logger,
    ):
        """
        Initialize GitHub REST client.

        Args:
            token: GitHub personal access token
            session: requests session to reuse
            clock: Returns the current epoch time in seconds
            sleep: Blocks for the given number of seconds
            logger: Sink for rate-limit warnings

        Raises:
            InvalidCredential: If no token is available
        """
        if not token:
            raise InvalidCredential("Invalid GitHub token!")

        self.token = token
        self.session = session or requests.Session()
        self.headers = {
            "User-Agent": USER_AGENT,
            "Accept": "application/vnd.github.v3+json",
        }
        self.clock = clock
        self.sleep = sleep
        self.logger = logger
        self.last_rate_limit: Optional[RateLimitStatus] = None

    def get_repository(self, owner: str, name: str) -> Repository:
        """
        Fetch a single repository.

        Pauses before returning when the remaining quota drops below
        RATE_LIMIT_THRESHOLD, so the caller's next request starts after the
        rate limit window has reset.

        Args:
            owner: Repository owner login
            name: Repository name

        Returns:
            Repository without the per-viewer permissions object

        Raises:
            FetchFailure: If the request fails or the body is not a JSON object
        """
        url = f"{self.API_BASE_URL}/repos/{owner}/{name}"
        response = get_or_fail(
            self.session,
            url,
            headers=self.headers,
            auth=(self.AUTH_USERNAME, self.token),
        )

        try:
            payload = response.json()
        except ValueError as e:
            raise FetchFailure(url, status=response.status_code, message="unparsable body") from e

        if not isinstance(payload, dict):
            raise FetchFailure(url, status=response.status_code, message="unexpected body")

        repository = Repository.from_api(payload, owner=owner, name=name)

        status = self.check_rate_limit(response)
        if status.remaining is not None and status.remaining < self.RATE_LIMIT_THRESHOLD:
            wait_time = self.wait_seconds(status)
            self.logger.warning(
                f"Rate limit low ({status.remaining} remaining). "
                f"Pausing for {wait_time} seconds to allow it to reset..."
            )
            self.sleep(wait_time)

        return repository

    def check_rate_limit(self, response: requests.Response) -> RateLimitStatus:
        """
        Extract rate limit info from response headers.

        Missing or non-numeric headers are recorded as None.
        """
        status = RateLimitStatus(
            remaining=_int_header(response, "X-RateLimit-Remaining"),
            reset_at=_int_header(response, "X-RateLimit-Reset"),
        )
        self.last_rate_limit = status
        return status

    def wait_seconds(self, status: RateLimitStatus) -> int:
        """
        Seconds until the rate limit window resets, plus the safety margin.

        Without a reset timestamp only the margin is waited.
        """
        if status.reset_at is None:
            return self.RESET_MARGIN_SECONDS
        now = int(round(self.clock()))
        return max(status.reset_at - now + self.RESET_MARGIN_SECONDS, 0)


def _int_header(response: requests.Response, name: str) -> Optional[int]:
    value = response.headers.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None
