"""String matching strategies for alias search.

Every candidate is compared case-insensitively against the query and
classified as exact, prefix, fuzzy (in-order subsequence) or no match.
"""
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional

from alias_search.models import MatchedField


EXACT_SCORE = 1.0
PREFIX_SCORE = 0.8
# Fuzzy scores stay strictly below this ceiling
FUZZY_CEILING = 0.7


class MatchKind(IntEnum):
    """Match strategies; STRATEGY_TIER decides how they rank against each other."""
    NO_MATCH = 0
    FUZZY = 1
    HIERARCHICAL = 2
    PREFIX = 3
    EXACT = 4


# Fuzzy and hierarchical scores vary, so they share a tier and compete on score
STRATEGY_TIER = {
    MatchKind.NO_MATCH: 0,
    MatchKind.FUZZY: 1,
    MatchKind.HIERARCHICAL: 1,
    MatchKind.PREFIX: 2,
    MatchKind.EXACT: 3,
}


# Name beats path beats tag when tier and score are equal
FIELD_PRIORITY = {
    MatchedField.NAME: 3,
    MatchedField.PATH: 2,
    MatchedField.TAG: 1,
    MatchedField.HIERARCHICAL: 0,
}


@dataclass(frozen=True)
class FieldMatch:
    """Outcome of matching one query against one alias field."""
    kind: MatchKind
    score: float
    field: MatchedField

    @property
    def rank(self) -> tuple:
        """Total order used to pick the best match of an alias."""
        return (STRATEGY_TIER[self.kind], self.score, FIELD_PRIORITY[self.field])


def _tightest_span(needle: str, haystack: str) -> Optional[int]:
    """Length of the shortest window of haystack containing needle as a subsequence.

    Returns:
        Window length, or None if needle is not a subsequence of haystack
    """
    best = None
    size = len(needle)

    for start, char in enumerate(haystack):
        if char != needle[0]:
            continue

        # Forward scan to the first window end reachable from this start
        matched = 0
        pos = start
        while pos < len(haystack) and matched < size:
            if haystack[pos] == needle[matched]:
                matched += 1
            pos += 1
        if matched < size:
            break  # later starts cannot succeed either
        end = pos

        # Backward scan from the end shrinks the window to its tightest start
        remaining = size - 1
        back = end - 1
        while remaining >= 0:
            if haystack[back] == needle[remaining]:
                remaining -= 1
            back -= 1
        span = end - (back + 1)

        if best is None or span < best:
            best = span
            if best == size:
                break

    return best


def fuzzy_score(needle: str, haystack: str) -> Optional[float]:
    """Score an in-order subsequence match of needle inside haystack.

    The score multiplies compactness (needle length over the tightest
    matching window) by a coverage term (needle length over haystack
    length), scaled below FUZZY_CEILING.

    Args:
        needle: Lowercased query
        haystack: Lowercased candidate

    Returns:
        Score in (0.0, FUZZY_CEILING), or None when needle is not a subsequence
    """
    if not needle or not haystack or len(needle) > len(haystack):
        return None

    span = _tightest_span(needle, haystack)
    if span is None:
        return None

    compactness = len(needle) / span
    coverage = len(needle) / len(haystack)
    return FUZZY_CEILING * compactness * (0.5 + 0.5 * coverage)


def match_text(query: str, candidate: str, field: MatchedField) -> FieldMatch:
    """Match a query against a single candidate string.

    Args:
        query: Query text (any case)
        candidate: Candidate text (any case)
        field: Which alias field the candidate came from

    Returns:
        FieldMatch describing the strongest applicable strategy
    """
    needle = query.lower()
    haystack = candidate.lower()

    if not needle or not haystack:
        return FieldMatch(MatchKind.NO_MATCH, 0.0, field)
    if haystack == needle:
        return FieldMatch(MatchKind.EXACT, EXACT_SCORE, field)
    if haystack.startswith(needle):
        return FieldMatch(MatchKind.PREFIX, PREFIX_SCORE, field)

    score = fuzzy_score(needle, haystack)
    if score is None:
        return FieldMatch(MatchKind.NO_MATCH, 0.0, field)
    return FieldMatch(MatchKind.FUZZY, score, field)


def best_of(matches: Iterable[FieldMatch]) -> Optional[FieldMatch]:
    """Pick the highest-ranked real match, or None if nothing matched."""
    best = None
    for match in matches:
        if match.kind == MatchKind.NO_MATCH:
            continue
        if best is None or match.rank > best.rank:
            best = match
    return best


def matches_keyword(keyword: str, candidate: str) -> bool:
    """Whether a single keyword matches a candidate by any strategy."""
    return match_text(keyword, candidate, MatchedField.PATH).kind != MatchKind.NO_MATCH
