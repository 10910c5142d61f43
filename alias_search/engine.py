"""Alias search engine: matching, scoring and result caching."""
import threading
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional, Tuple

from alias_search.cache import DEFAULT_CACHE_CAPACITY, ResultCache
from alias_search.config import EngineConfig
from alias_search.hierarchy import parse_keywords
from alias_search.models import AliasRecord, MatchedField, SearchResult
from alias_search.scorer import (
    DEFAULT_RECENT_DAYS,
    DEFAULT_STALE_DAYS,
    best_match,
    clamp,
    final_score,
    metadata_boost,
    rank,
)


DEFAULT_MAX_RESULTS = 100


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AliasSearchEngine:
    """Ranks a snapshot of aliases against free-text queries.

    One instance is meant to live for the whole application session and be
    shared by reference. All public methods hold an internal lock, so
    searches never observe a half-replaced snapshot or configuration.
    """

    def __init__(
        self,
        aliases: Optional[Iterable[AliasRecord]] = None,
        max_results: int = DEFAULT_MAX_RESULTS,
        cache_capacity: int = DEFAULT_CACHE_CAPACITY,
        recent_days: int = DEFAULT_RECENT_DAYS,
        stale_days: int = DEFAULT_STALE_DAYS,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """Initialize the engine.

        Args:
            aliases: Initial alias snapshot
            max_results: Maximum results returned per query
            cache_capacity: Maximum distinct queries held in the cache
            recent_days: Window for the strongest recency boost
            stale_days: Window for the weaker recency boost
            clock: Callable returning the current aware datetime
        """
        self._lock = threading.RLock()
        self._aliases: Tuple[AliasRecord, ...] = tuple(aliases or ())
        self._max_results = max(0, max_results)
        self._cache = ResultCache(cache_capacity)
        self._recency = {"recent_days": recent_days, "stale_days": stale_days}
        self._clock = clock
        self._last_query: Optional[str] = None

    @classmethod
    def with_aliases(cls, aliases: Iterable[AliasRecord], **kwargs) -> "AliasSearchEngine":
        return cls(aliases=aliases, **kwargs)

    @classmethod
    def from_config(cls, config: EngineConfig, **kwargs) -> "AliasSearchEngine":
        """Create an engine from an EngineConfig."""
        return cls(
            max_results=config.max_results,
            cache_capacity=config.cache_capacity,
            recent_days=config.recent_days,
            stale_days=config.stale_days,
            **kwargs,
        )

    def set_aliases(self, aliases: Iterable[AliasRecord]) -> None:
        """Replace the alias snapshot and invalidate the cache."""
        snapshot = tuple(aliases)
        with self._lock:
            self._aliases = snapshot
            self._clear_cache_locked()

    def aliases(self) -> Tuple[AliasRecord, ...]:
        with self._lock:
            return self._aliases

    def set_max_results(self, max_results: int) -> None:
        with self._lock:
            self._max_results = max(0, max_results)
            self._clear_cache_locked()

    def max_results(self) -> int:
        with self._lock:
            return self._max_results

    def set_cache_capacity(self, capacity: int) -> None:
        with self._lock:
            self._cache.capacity = capacity
            self._last_query = None

    def cache_capacity(self) -> int:
        with self._lock:
            return self._cache.capacity

    def clear_cache(self) -> None:
        """Drop all cached results.

        Call this after changing an alias's favorite flag or access time
        without replacing the whole snapshot.
        """
        with self._lock:
            self._clear_cache_locked()

    def last_query(self) -> Optional[str]:
        """Most recent non-empty query served since the last invalidation."""
        with self._lock:
            return self._last_query

    def cached_query_count(self) -> int:
        with self._lock:
            return len(self._cache)

    def search(self, query: str) -> List[SearchResult]:
        """Search aliases for a query.

        An empty query returns every alias ordered by favorite and recency
        boosts; it is neither cached nor truncated. Those results carry
        MatchedField.NAME as a placeholder since no field was matched, so
        callers should not emphasise anything for them. Other queries are served
        from the cache when possible, otherwise matched, scored, sorted,
        truncated to max_results and cached under the verbatim query.

        Args:
            query: Raw query string

        Returns:
            Results sorted by descending score, then name, then id
        """
        with self._lock:
            if query == "":
                return self._browse_all()

            cached = self._cache.get(query)
            if cached is not None:
                self._last_query = query
                return cached

            results = self._match_all(query)[:self._max_results]
            self._cache.put(query, results)
            self._last_query = query
            return list(results)

    def _browse_all(self) -> List[SearchResult]:
        now = self._clock()
        return rank([
            SearchResult(
                alias=alias,
                score=clamp(metadata_boost(alias, now, **self._recency)),
                # Placeholder label; nothing was matched
                matched_field=MatchedField.NAME,
            )
            for alias in self._aliases
        ])

    def _match_all(self, query: str) -> List[SearchResult]:
        now = self._clock()
        trimmed = query.strip()
        keywords = parse_keywords(query)

        results = []
        for alias in self._aliases:
            match = best_match(alias, trimmed, keywords)
            if match is None:
                continue
            results.append(SearchResult(
                alias=alias,
                score=final_score(match.score, alias, now, **self._recency),
                matched_field=match.field,
            ))

        return rank(results)

    def _clear_cache_locked(self) -> None:
        self._cache.clear()
        self._last_query = None
