# kerbside/utils/street_matcher.py
"""
Case-insensitive street-name matching against configurable token lists.
Used for flagship-street confidence, street-name nudges and street search.
"""

from typing import Iterable, Mapping, Optional


def contains_ignore_case(haystack, needle: str) -> bool:
    """Plain substring test; non-string cells never match."""
    if not isinstance(haystack, str) or not needle:
        return False
    return needle.casefold() in haystack.casefold()


class StreetMatcher:
    """Matches a street name if it contains any of the configured tokens."""

    def __init__(self, tokens: Iterable[str]):
        self.tokens = tuple(t for t in tokens if t)

    def match(self, street: str) -> Optional[str]:
        """Return the first token found in the street name, or None."""
        for token in self.tokens:
            if contains_ignore_case(street, token):
                return token
        return None

    def matches(self, street: str) -> bool:
        return self.match(street) is not None


class NudgeTable:
    """
    Ordered token → multiplier table. The first token contained in the street
    name decides the multiplier; no match means 1.0.
    """

    def __init__(self, nudges: Mapping[str, float]):
        self._nudges = dict(nudges)
        self._matcher = StreetMatcher(self._nudges.keys())

    def factor_for(self, street: str) -> float:
        token = self._matcher.match(street)
        return self._nudges[token] if token is not None else 1.0
