"""
Entity Matcher
Joins records across DefiLlama feeds by name - the feeds share no identifier.

Rule: lowercase both sides, then exact equality. No trimming, no fuzzy match.
A chain labelled differently in another feed simply doesn't join.
"""

from typing import Iterable, Optional, Sequence, TypeVar

T = TypeVar("T")


def normalize_name(name: str) -> str:
    return name.lower()


def names_match(a: str, b: str) -> bool:
    return normalize_name(a) == normalize_name(b)


def find(collection: Iterable[T], query_name: str) -> Optional[T]:
    """
    Return the first record whose .name matches query_name, or None.

    First match in collection order wins if the feed has duplicate names.
    """
    target = normalize_name(query_name)
    for record in collection:
        if normalize_name(record.name) == target:
            return record
    return None


def sample_names(collection: Sequence[T], limit: int = 20) -> list:
    """First `limit` names in feed order, handed back on a failed lookup"""
    return [record.name for record in collection[:limit]]
