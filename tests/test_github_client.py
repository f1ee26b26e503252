import os
import unittest
from unittest.mock import MagicMock, patch

import requests

from codehub_trending.infrastructure.errors import FetchFailure, InvalidCredential
from codehub_trending.infrastructure.github_client import GitHubRestClient, RateLimitStatus

from fakes import make_response

NOW = 990.4
RESET = 1000


class TestGitHubRestClient(unittest.TestCase):

    def setUp(self):
        self.session = MagicMock()
        self.sleep = MagicMock()
        self.logger = MagicMock()
        self.client = GitHubRestClient(
            token="secret",
            session=self.session,
            clock=lambda: NOW,
            sleep=self.sleep,
            logger=self.logger,
        )

    def _respond(self, remaining="4999", reset=str(RESET), body=None, status_code=200):
        headers = {}
        if remaining is not None:
            headers["X-RateLimit-Remaining"] = remaining
        if reset is not None:
            headers["X-RateLimit-Reset"] = reset
        if body is None:
            body = {
                "name": "widget",
                "owner": {"login": "acme"},
                "permissions": {"admin": True},
            }
        self.session.get.return_value = make_response(status_code, body, headers)

    def test_missing_token_is_rejected(self):
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(InvalidCredential):
                GitHubRestClient(token=None, session=self.session)

        with self.assertRaises(InvalidCredential):
            GitHubRestClient(token="", session=self.session)

    def test_environment_token_is_not_used(self):
        with patch.dict(os.environ, {"GITHUB_TOKEN": "ambient"}):
            with self.assertRaises(InvalidCredential):
                GitHubRestClient(token=None, session=self.session)

    def test_request_uses_token_basic_auth(self):
        self._respond()

        self.client.get_repository("acme", "widget")

        args, kwargs = self.session.get.call_args
        self.assertEqual(args[0], "https://api.github.com/repos/acme/widget")
        self.assertEqual(kwargs["auth"], ("token", "secret"))
        self.assertEqual(kwargs["headers"]["User-Agent"], "CodeHub-Trending")
        self.assertEqual(kwargs["timeout"], 30)

    def test_permissions_are_never_returned(self):
        self._respond()

        repo = self.client.get_repository("acme", "widget")

        self.assertEqual(repo.full_name, "acme/widget")
        self.assertNotIn("permissions", repo.attributes)

    def test_no_pause_at_threshold(self):
        self._respond(remaining="400")

        self.client.get_repository("acme", "widget")

        self.sleep.assert_not_called()
        self.logger.warning.assert_not_called()
        self.assertEqual(self.client.last_rate_limit, RateLimitStatus(remaining=400, reset_at=RESET))

    def test_pause_below_threshold(self):
        self._respond(remaining="399")
        fetched_before_sleep = []
        self.sleep.side_effect = lambda seconds: fetched_before_sleep.append(self.session.get.called)

        repo = self.client.get_repository("acme", "widget")

        # reset - round(now) + 60
        self.sleep.assert_called_once_with(70)
        self.assertEqual(fetched_before_sleep, [True])
        self.assertEqual(repo.name, "widget")
        self.logger.warning.assert_called_once()

    def test_pause_is_clamped_to_zero(self):
        self._respond(remaining="0", reset="100")

        self.client.get_repository("acme", "widget")

        self.sleep.assert_called_once_with(0)

    def test_missing_rate_limit_headers_do_not_pause(self):
        self._respond(remaining=None, reset=None)

        self.client.get_repository("acme", "widget")

        self.sleep.assert_not_called()
        self.assertEqual(self.client.last_rate_limit, RateLimitStatus(remaining=None, reset_at=None))

    def test_non_numeric_rate_limit_headers_do_not_pause(self):
        self._respond(remaining="lots", reset="soon")

        self.client.get_repository("acme", "widget")

        self.sleep.assert_not_called()

    def test_error_status_raises_fetch_failure(self):
        self._respond(status_code=404, body={"message": "Not Found"})

        with self.assertRaises(FetchFailure) as ctx:
            self.client.get_repository("acme", "missing")

        self.assertEqual(ctx.exception.status, 404)
        self.assertEqual(ctx.exception.endpoint, "https://api.github.com/repos/acme/missing")
        self.sleep.assert_not_called()

    def test_unparsable_body_raises_fetch_failure(self):
        self._respond(body="<html>not json</html>")

        with self.assertRaises(FetchFailure) as ctx:
            self.client.get_repository("acme", "widget")

        self.assertEqual(ctx.exception.status, 200)

    def test_non_object_body_raises_fetch_failure(self):
        self._respond(body=[1, 2, 3])

        with self.assertRaises(FetchFailure):
            self.client.get_repository("acme", "widget")

    def test_transport_error_raises_fetch_failure(self):
        self.session.get.side_effect = requests.exceptions.ConnectionError("boom")

        with self.assertRaises(FetchFailure) as ctx:
            self.client.get_repository("acme", "widget")

        self.assertIsNone(ctx.exception.status)
        self.assertEqual(self.session.get.call_count, 1)
