"""Hierarchical matching of multi-keyword queries against path segments."""
import re
from typing import List, Optional

from alias_search.matcher import matches_keyword


FULL_HIERARCHICAL_SCORE = 0.75

_SEPARATORS = re.compile(r"[\\/]+")


def parse_keywords(query: str) -> List[str]:
    """Split a query into whitespace-separated keywords.

    Args:
        query: Raw query string

    Returns:
        Non-empty keywords in query order
    """
    return query.split()


def split_path(path: str) -> List[str]:
    """Split a path into segments on '/' and '\\'.

    Args:
        path: Filesystem path in either separator style

    Returns:
        Non-empty segments in path order
    """
    return [segment for segment in _SEPARATORS.split(path) if segment]


def count_ordered_matches(keywords: List[str], segments: List[str]) -> Optional[int]:
    """Count keywords found in the path, requiring them to appear in query order.

    Each keyword must land on the segment matched by the previous keyword or
    a later one. Keywords absent from the path are skipped.

    Returns:
        Number of keywords matched, or None if a keyword present in the path
        only appears before the previous keyword's segment
    """
    position = 0
    matched = 0

    for keyword in keywords:
        hits = [index for index, segment in enumerate(segments) if matches_keyword(keyword, segment)]
        if not hits:
            continue

        following = [index for index in hits if index >= position]
        if not following:
            return None

        # Earliest placement leaves the most room for later keywords
        position = following[0]
        matched += 1

    return matched


def match_hierarchical(keywords: List[str], path: str) -> Optional[float]:
    """Score how well ordered keywords align with a path's segments.

    Args:
        keywords: Query keywords (at least two for hierarchical scoring)
        path: Candidate alias path

    Returns:
        FULL_HIERARCHICAL_SCORE scaled by the fraction of keywords matched,
        or None when fewer than two keywords are given, none match, or the
        matching keywords are out of order
    """
    if len(keywords) < 2:
        return None

    matched = count_ordered_matches(keywords, split_path(path))
    if not matched:
        return None

    return FULL_HIERARCHICAL_SCORE * matched / len(keywords)
