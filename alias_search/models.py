"""Data model for aliases and search results."""
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional


class MatchedField(str, Enum):
    """Which part of an alias produced its best match."""
    NAME = "name"
    PATH = "path"
    TAG = "tag"
    HIERARCHICAL = "hierarchical"


def _parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp, assuming UTC for naive values."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError as e:
            raise ValueError(f"Invalid timestamp: {value!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class AliasRecord:
    """A user-named shortcut to a filesystem path.

    Records are read-only snapshots; the engine never mutates them.
    """
    id: str
    name: str
    path: str
    tags: FrozenSet[str] = field(default_factory=frozenset)
    is_favorite: bool = False
    last_accessed: Optional[datetime] = None
    color: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        # Accept any iterable of tags, store as a frozenset
        if not isinstance(self.tags, frozenset):
            object.__setattr__(self, "tags", frozenset(self.tags))
        object.__setattr__(self, "last_accessed", _parse_timestamp(self.last_accessed))
        object.__setattr__(self, "created_at", _parse_timestamp(self.created_at))

    def touch(self, now: Optional[datetime] = None) -> "AliasRecord":
        """Return a copy with last_accessed set to now."""
        return replace(self, last_accessed=now or datetime.now(timezone.utc))

    def with_favorite(self, is_favorite: bool) -> "AliasRecord":
        """Return a copy with the favorite flag set."""
        return replace(self, is_favorite=is_favorite)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AliasRecord":
        """Build a record from a plain dictionary.

        Args:
            data: Dict with 'id', 'name', 'path' and optional 'tags',
                'is_favorite', 'last_accessed', 'color', 'created_at'

        Returns:
            AliasRecord

        Raises:
            ValueError: If a required key is missing, a field has the wrong
                type, or a timestamp is malformed
        """
        missing = [key for key in ("id", "name", "path") if not data.get(key)]
        if missing:
            raise ValueError(f"Alias record missing required fields: {', '.join(missing)}")

        tags = data.get("tags") or []
        if not isinstance(tags, (list, tuple)):
            raise ValueError(f"Alias tags must be a list, got {type(tags).__name__}")

        is_favorite = data.get("is_favorite")
        if is_favorite is None:
            is_favorite = False
        if not isinstance(is_favorite, bool):
            raise ValueError(f"Alias is_favorite must be a boolean, got {is_favorite!r}")

        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            path=str(data["path"]),
            tags=frozenset(str(tag) for tag in tags),
            is_favorite=is_favorite,
            last_accessed=data.get("last_accessed"),
            color=data.get("color"),
            created_at=data.get("created_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "tags": sorted(self.tags),
            "is_favorite": self.is_favorite,
            "last_accessed": self.last_accessed.isoformat() if self.last_accessed else None,
            "color": self.color,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class SearchResult:
    """One ranked outcome of a search."""
    alias: AliasRecord
    score: float
    matched_field: MatchedField

    def to_dict(self) -> Dict[str, Any]:
        return {
            "alias": self.alias.to_dict(),
            "score": round(self.score, 4),
            "matched_field": self.matched_field.value,
        }


def records_from_dicts(items: Iterable[Dict[str, Any]]) -> list:
    """Convert a sequence of dictionaries into AliasRecords."""
    return [AliasRecord.from_dict(item) for item in items]
