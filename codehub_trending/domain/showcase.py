"""Domain entities scraped from GitHub's HTML pages."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

# Opaque token read from the collections page form; None ends pagination.
PaginationCursor = Optional[str]


@dataclass(frozen=True)
class Language:
    """Language selectable on the trending page."""

    name: str
    slug: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Showcase:
    """Curated collection of repositories."""

    slug: str
    name: str
    description: str
    image: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
