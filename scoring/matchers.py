"""
Term and tag matchers shared by the pillar calculators and the insight generator.
"""

import re
from functools import lru_cache
from typing import Iterable, Pattern, Sequence


@lru_cache(maxsize=256)
def _word_pattern(term: str) -> Pattern:
    return re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE)


def has_term(text: str, term: str) -> bool:
    """Whole-word, case-insensitive match ('peg' matches 'PEG-40', not 'pegboard')."""
    if not text:
        return False
    return _word_pattern(term).search(text) is not None


def has_any_term(text: str, terms: Iterable[str]) -> bool:
    return any(has_term(text, t) for t in terms)


def count_terms(text: str, terms: Iterable[str]) -> int:
    """Number of distinct terms present, not number of occurrences."""
    return sum(1 for t in terms if has_term(text, t))


def tag_contains(tag: str, keywords: Iterable[str]) -> bool:
    tag_lower = tag.lower()
    return any(kw in tag_lower for kw in keywords)


def count_matching_tags(tags: Sequence[str], keywords: Iterable[str]) -> int:
    """One count per tag, however many keywords it contains."""
    keywords = [kw.lower() for kw in keywords]
    return sum(1 for tag in tags if tag_contains(tag, keywords))


def any_tag_contains(tags: Iterable[str], keyword: str) -> bool:
    keyword = keyword.lower()
    return any(keyword in tag.lower() for tag in tags)


def starts_with_any(text: str, prefixes: Iterable[str]) -> bool:
    stripped = text.strip().lower()
    return any(stripped.startswith(p.lower()) for p in prefixes)


def strip_pattern(text: str, pattern: str) -> str:
    return re.sub(pattern, " ", text, flags=re.IGNORECASE)
