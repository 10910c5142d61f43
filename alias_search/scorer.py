"""Composite scoring and ordering of alias matches."""
from datetime import datetime, timedelta
from typing import List, Optional

from alias_search.hierarchy import match_hierarchical
from alias_search.matcher import FieldMatch, MatchKind, best_of, match_text
from alias_search.models import AliasRecord, MatchedField, SearchResult


FAVORITE_BOOST = 0.2
RECENT_BOOST = 0.1
STALE_BOOST = 0.05

DEFAULT_RECENT_DAYS = 7
DEFAULT_STALE_DAYS = 30


def favorite_boost(alias: AliasRecord) -> float:
    return FAVORITE_BOOST if alias.is_favorite else 0.0


def recency_boost(
    alias: AliasRecord,
    now: datetime,
    recent_days: int = DEFAULT_RECENT_DAYS,
    stale_days: int = DEFAULT_STALE_DAYS,
) -> float:
    """Boost for recently accessed aliases.

    Args:
        alias: Alias to score
        now: Current time (timezone-aware)
        recent_days: Accesses strictly within this many days get RECENT_BOOST
        stale_days: Accesses strictly within this many days get STALE_BOOST

    Returns:
        Boost value, 0.0 for aliases never accessed
    """
    if alias.last_accessed is None:
        return 0.0

    age = now - alias.last_accessed
    if age < timedelta(days=recent_days):
        return RECENT_BOOST
    if age < timedelta(days=stale_days):
        return STALE_BOOST
    return 0.0


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def metadata_boost(alias: AliasRecord, now: datetime, **recency) -> float:
    """Sum of favorite and recency boosts."""
    return favorite_boost(alias) + recency_boost(alias, now, **recency)


def final_score(base_score: float, alias: AliasRecord, now: datetime, **recency) -> float:
    """Combine a base match score with metadata boosts, clamped to [0, 1]."""
    return clamp(base_score + metadata_boost(alias, now, **recency))


def best_match(alias: AliasRecord, query: str, keywords: List[str]) -> Optional[FieldMatch]:
    """Find the single best match of a query against one alias.

    Name, path and every tag are tried with the plain matcher. When the
    query holds two or more keywords the path is also scored hierarchically.

    Args:
        alias: Alias to match
        query: Whitespace-trimmed query
        keywords: Query split into keywords

    Returns:
        Best FieldMatch, or None if no field matched
    """
    candidates = [
        match_text(query, alias.name, MatchedField.NAME),
        match_text(query, alias.path, MatchedField.PATH),
    ]
    candidates.extend(match_text(query, tag, MatchedField.TAG) for tag in alias.tags)

    hierarchical = match_hierarchical(keywords, alias.path)
    if hierarchical is not None:
        candidates.append(FieldMatch(MatchKind.HIERARCHICAL, hierarchical, MatchedField.HIERARCHICAL))

    return best_of(candidates)


def result_sort_key(result: SearchResult) -> tuple:
    """Descending score, then case-insensitive name, then id."""
    return (-result.score, result.alias.name.lower(), result.alias.id)


def rank(results: List[SearchResult]) -> List[SearchResult]:
    return sorted(results, key=result_sort_key)
