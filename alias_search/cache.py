"""Result cache keyed by raw query string."""
from typing import Dict, List, Optional

from alias_search.models import SearchResult


DEFAULT_CACHE_CAPACITY = 100


class ResultCache:
    """Memoizes ranked results per verbatim query.

    When inserting a new query would exceed capacity the whole cache is
    dropped first.
    """

    def __init__(self, capacity: int = DEFAULT_CACHE_CAPACITY):
        self._capacity = max(0, capacity)
        self._entries: Dict[str, List[SearchResult]] = {}

    @property
    def capacity(self) -> int:
        return self._capacity

    @capacity.setter
    def capacity(self, value: int) -> None:
        self._capacity = max(0, value)
        self.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, query: str) -> bool:
        return query in self._entries

    def get(self, query: str) -> Optional[List[SearchResult]]:
        """Return a copy of the cached results for query, if any."""
        results = self._entries.get(query)
        return list(results) if results is not None else None

    def put(self, query: str, results: List[SearchResult]) -> None:
        """Store results for query, clearing everything on overflow."""
        if self._capacity == 0:
            return
        if query not in self._entries and len(self._entries) >= self._capacity:
            self._entries.clear()
        self._entries[query] = list(results)

    def clear(self) -> None:
        self._entries.clear()
