"""Domain entities for GitHub repositories."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class OwnerNamePair:
    """Owner/name reference scraped from an anchor path."""

    owner: str
    name: str

    @classmethod
    def from_href(cls, href: Optional[str]) -> Optional["OwnerNamePair"]:
        """
        Parse an anchor path of the form ``/owner/name[/...]``.

        Args:
            href: Anchor href, e.g. ``/acme/widget/tree/main``

        Returns:
            OwnerNamePair, or None when either segment is missing
        """
        if not href:
            return None

        segments = href.strip().split("/")
        if len(segments) < 3:
            return None

        owner, name = segments[1].strip(), segments[2].strip()
        if not owner or not name:
            return None

        return cls(owner=owner, name=name)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class Repository:
    """Immutable repository entity backed by the REST API payload."""

    owner: str
    name: str
    attributes: Dict[str, Any] = field(default_factory=dict)

    # Per-viewer state; describes the authenticated caller, not the repository.
    EXCLUDED_ATTRIBUTES = ("permissions",)

    @classmethod
    def from_api(cls, payload: Dict[str, Any], owner: str, name: str) -> "Repository":
        """
        Build a repository from a ``/repos/{owner}/{name}`` response body.

        Args:
            payload: Decoded JSON object
            owner: Requested owner, used when the payload has no owner login
            name: Requested name, used when the payload has no name

        Returns:
            Repository without per-viewer attributes
        """
        attributes = {
            key: value
            for key, value in payload.items()
            if key not in cls.EXCLUDED_ATTRIBUTES
        }

        payload_owner = attributes.get("owner")
        if isinstance(payload_owner, dict) and payload_owner.get("login"):
            owner = payload_owner["login"]

        return cls(
            owner=owner,
            name=attributes.get("name") or name,
            attributes=attributes,
        )

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        """API attributes with owner and name as plain strings."""
        data = dict(self.attributes)
        data["owner"] = self.owner
        data["name"] = self.name
        data.setdefault("full_name", self.full_name)
        return data
