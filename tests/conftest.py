"""Shared fixtures for tests."""
from datetime import datetime, timedelta, timezone

import pytest

from alias_search.engine import AliasSearchEngine
from alias_search.models import AliasRecord


NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def build_alias(name, path=None, tags=(), is_favorite=False, days_ago=None, alias_id=None):
    """Build an alias; last_accessed is left unset unless days_ago is given."""
    return AliasRecord(
        id=alias_id or f"id-{name}",
        name=name,
        path=path if path is not None else f"/path/to/{name}",
        tags=frozenset(tags),
        is_favorite=is_favorite,
        last_accessed=NOW - timedelta(days=days_ago) if days_ago is not None else None,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_alias():
    """Return the alias factory."""
    return build_alias


@pytest.fixture
def engine():
    """Empty engine with a frozen clock."""
    return AliasSearchEngine(clock=lambda: NOW)


@pytest.fixture
def sample_aliases():
    """A small alias set covering names, paths, tags and metadata."""
    return [
        build_alias("config", "/etc/app/config"),
        build_alias("configure", "/usr/local/bin/configure"),
        build_alias("configuration", "/home/user/docs/configuration"),
        build_alias("document", "/path/to/doc", tags=["important", "work"]),
        build_alias("balance", "C:\\2025\\Finance\\Trial"),
        build_alias("reports", "/srv/share/reports", is_favorite=True, days_ago=3),
    ]


@pytest.fixture
def sample_alias_dicts():
    """Aliases as the persistence collaborator hands them over."""
    return [
        {"id": "1", "name": "projects", "path": "/home/user/projects", "tags": ["code"], "is_favorite": True},
        {"id": "2", "name": "taxes", "path": "D:\\2025\\Finance\\Taxes", "last_accessed": "2026-01-10T09:00:00+00:00"},
        {"id": "3", "name": "photos", "path": "/home/user/Pictures", "color": "blue"},
    ]
