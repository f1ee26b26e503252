"""Shared GET helper for the GitHub clients."""

import logging
from typing import Dict, Optional

import requests

from codehub_trending.infrastructure.errors import FetchFailure

logger = logging.getLogger(__name__)

USER_AGENT = "CodeHub-Trending"
REQUEST_TIMEOUT_SECONDS = 30


def get_or_fail(
    session: requests.Session,
    url: str,
    params: Optional[Dict[str, str]] = None,
    headers: Optional[Dict[str, str]] = None,
    auth: Optional[tuple] = None,
) -> requests.Response:
    """
    Issue a single GET request.

    Args:
        session: Session to send the request with
        url: Absolute URL
        params: Query string parameters
        headers: Extra request headers
        auth: Basic auth (user, password) tuple

    Returns:
        The successful response

    Raises:
        FetchFailure: On transport errors or a non-success status
    """
    logger.debug(f"GET {url} params={params}")
    try:
        response = session.get(
            url,
            params=params,
            headers=headers,
            auth=auth,
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
    except requests.exceptions.RequestException as e:
        raise FetchFailure(url, message=str(e)) from e

    if not 200 <= response.status_code < 300:
        raise FetchFailure(url, status=response.status_code)

    return response
