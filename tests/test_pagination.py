import unittest
from unittest.mock import MagicMock

from codehub_trending.application.pagination import PaginationWalker


def _pages(pages):
    """Fetcher over a cursor -> (records, next_cursor) table."""
    fetch = MagicMock(side_effect=lambda cursor: cursor)
    extract = lambda cursor: pages[cursor]
    return fetch, extract


class TestPaginationWalker(unittest.TestCase):

    def test_single_page(self):
        fetch, extract = _pages({None: (["a", "b"], None)})
        walker = PaginationWalker(fetch, extract, logger=MagicMock())

        self.assertEqual(walker.walk(), ["a", "b"])
        self.assertEqual(walker.pages_fetched, 1)

    def test_follows_cursor_until_absent(self):
        fetch, extract = _pages({
            None: (["a", "b"], "abc"),
            "abc": (["c"], "def"),
            "def": (["d"], None),
        })
        walker = PaginationWalker(fetch, extract, logger=MagicMock())

        self.assertEqual(walker.walk(), ["a", "b", "c", "d"])
        self.assertEqual([c.args[0] for c in fetch.call_args_list], [None, "abc", "def"])

    def test_repeated_cursor_terminates(self):
        logger = MagicMock()
        fetch, extract = _pages({
            None: (["a"], "abc"),
            "abc": (["b"], "abc"),
        })
        walker = PaginationWalker(fetch, extract, logger=logger)

        self.assertEqual(walker.walk(), ["a", "b"])
        self.assertEqual(walker.pages_fetched, 2)
        logger.warning.assert_called_once()

    def test_cursor_cycle_terminates(self):
        fetch, extract = _pages({
            None: (["a"], "x"),
            "x": (["b"], "y"),
            "y": (["c"], "x"),
        })
        walker = PaginationWalker(fetch, extract, logger=MagicMock())

        self.assertEqual(walker.walk(), ["a", "b", "c"])
        self.assertEqual(fetch.call_count, 3)

    def test_max_pages(self):
        fetch, extract = _pages({
            None: (["a"], "x"),
            "x": (["b"], "y"),
            "y": (["c"], None),
        })
        walker = PaginationWalker(fetch, extract, max_pages=2, logger=MagicMock())

        self.assertEqual(walker.walk(), ["a", "b"])
        self.assertEqual(fetch.call_count, 2)
