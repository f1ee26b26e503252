"""
Record extraction from GitHub's HTML pages.

Each page is described by an ExtractionSchema: a CSS selector for the
repeated elements that make up one record, and a FieldRule per field. When
the page layout changes, only the schema table for that page needs updating.
"""

import re
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Optional, Tuple, TypeVar
from urllib.parse import unquote

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from codehub_trending.domain.repository import OwnerNamePair
from codehub_trending.domain.showcase import Language, PaginationCursor, Showcase
from codehub_trending.infrastructure.errors import MalformedRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")

HTML_PARSER = "html.parser"

_WHITESPACE = re.compile(r"\s+")

TEXT = "text"
OWN_TEXT = "own_text"


@dataclass(frozen=True)
class FieldRule:
    """
    How to read one field out of a record element.

    selector: CSS selector relative to the record element; None reads the
        record element itself.
    attr: Attribute name to read, or TEXT for the full text, or OWN_TEXT for
        the element's text with every child element removed.
    """

    selector: Optional[str]
    attr: str = TEXT
    required: bool = True
    transform: Optional[Callable[[str], Any]] = None

    def read(self, element: Tag) -> Any:
        target = element if self.selector is None else element.select_one(self.selector)
        if target is None:
            return None

        if self.attr == TEXT:
            value = target.get_text()
        elif self.attr == OWN_TEXT:
            value = "".join(
                str(child)
                for child in target.children
                if isinstance(child, NavigableString) and not isinstance(child, Comment)
            )
        else:
            value = target.get(self.attr)

        if value is None:
            return None
        if self.transform is not None:
            value = self.transform(value)
        return value


@dataclass(frozen=True)
class ExtractionSchema(Generic[T]):
    """Root selector, field rules and a record factory for one page type."""

    name: str
    root: str
    fields: Dict[str, FieldRule]
    build: Callable[..., T]


def parse_document(document: str) -> BeautifulSoup:
    return BeautifulSoup(document, HTML_PARSER)


def extract(document, schema: ExtractionSchema[T]) -> List[T]:
    """
    Apply a schema to a document.

    Elements missing a required field are skipped; the rest are returned in
    document order.

    Args:
        document: Raw HTML, or an already parsed BeautifulSoup tree
        schema: Extraction schema for the page

    Returns:
        Records built by the schema
    """
    soup = document if isinstance(document, BeautifulSoup) else parse_document(document)

    records: List[T] = []
    for index, element in enumerate(soup.select(schema.root)):
        try:
            records.append(_extract_record(element, schema))
        except MalformedRecord as e:
            logger.debug(f"Skipping malformed {schema.name} record #{index}: {e}")
    return records


def _extract_record(element: Tag, schema: ExtractionSchema[T]) -> T:
    values: Dict[str, Any] = {}
    for field_name, rule in schema.fields.items():
        value = rule.read(element)
        if value is None and rule.required:
            raise MalformedRecord(f"missing {field_name}")
        values[field_name] = value
    return schema.build(**values)


def non_empty(text: str) -> Optional[str]:
    return text.strip() or None


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def last_path_segment(href: str) -> Optional[str]:
    path = href.strip().split("?", 1)[0].split("#", 1)[0]
    segment = path.rsplit("/", 1)[-1]
    return segment or None


def language_slug(href: str) -> Optional[str]:
    segment = last_path_segment(href)
    return unquote(segment) if segment else None


TRENDING_OWNERS = ExtractionSchema(
    name="trending repository",
    root="div.explore-content > ol > li, article.Box-row",
    fields={
        "pair": FieldRule("h3 > a, h2 > a", attr="href", transform=OwnerNamePair.from_href),
    },
    build=lambda pair: pair,
)

LANGUAGES = ExtractionSchema(
    name="language",
    root=".col-md-3 .select-menu .select-menu-list a.select-menu-item",
    fields={
        "name": FieldRule(None, transform=non_empty),
        "slug": FieldRule(None, attr="href", transform=language_slug),
    },
    build=Language,
)

SHOWCASES = ExtractionSchema(
    name="showcase",
    root="article",
    fields={
        "slug": FieldRule("a", attr="href", transform=last_path_segment),
        "name": FieldRule("a", transform=collapse_whitespace),
        "image": FieldRule("img", attr="src", required=False),
        "description": FieldRule(
            "div.col-10.col-md-11", attr=OWN_TEXT, required=False, transform=collapse_whitespace
        ),
    },
    build=lambda slug, name, image, description: Showcase(
        slug=slug, name=name, description=description or "", image=image
    ),
)

SHOWCASE_REPOSITORIES = ExtractionSchema(
    name="showcase repository",
    root="article",
    fields={
        "pair": FieldRule("h1 > a, h2 > a", attr="href", transform=OwnerNamePair.from_href),
    },
    build=lambda pair: pair,
)

# The collections form carries the next-page token in its second hidden input.
CURSOR_SELECTOR = (
    'body > div.application-main > div.container-md.p-responsive.py-6 > form > '
    'input[type="hidden"]:nth-child(2), '
    'form input[type="hidden"][name="after"]'
)


def extract_trending_owners(document: str) -> List[OwnerNamePair]:
    return extract(document, TRENDING_OWNERS)


def extract_languages(document: str) -> List[Language]:
    return extract(document, LANGUAGES)


def extract_showcase_repositories(document: str) -> List[OwnerNamePair]:
    return extract(document, SHOWCASE_REPOSITORIES)


def extract_cursor(document) -> PaginationCursor:
    """Read the next-page cursor of the collections index, if any."""
    soup = document if isinstance(document, BeautifulSoup) else parse_document(document)
    field = soup.select_one(CURSOR_SELECTOR)
    if field is None:
        return None
    value = (field.get("value") or "").strip()
    return value or None


def extract_showcases(document: str) -> Tuple[List[Showcase], PaginationCursor]:
    """
    Extract showcases and the next-page cursor in a single pass.

    Returns:
        Tuple of (showcases in document order, cursor or None)
    """
    soup = parse_document(document)
    return extract(soup, SHOWCASES), extract_cursor(soup)
