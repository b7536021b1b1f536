"""Label set helpers."""

from __future__ import annotations

from typing import Any
from typing import Iterable
from typing import Optional

ADMIN_LABEL = "admin"


def normalize_labels(labels: Optional[Iterable[Any]]) -> list[str]:
    """Return labels as a list of unique strings.

    Absent labels are treated as an empty collection. Order of first
    occurrence is kept.
    """
    if labels is None:
        return []
    normalized: list[str] = []
    seen: set[str] = set()
    for label in labels:
        value = str(label)
        if value not in seen:
            seen.add(value)
            normalized.append(value)
    return normalized


def has_label(labels: Optional[Iterable[Any]], label: str) -> bool:
    return label in normalize_labels(labels)


def merge_label(labels: Optional[Iterable[Any]], label: str = ADMIN_LABEL) -> list[str]:
    """Return the full label set with ``label`` present exactly once.

    The result is the complete replacement set to send to the identity
    service, not a delta.
    """
    merged = normalize_labels(labels)
    if label not in merged:
        merged.append(label)
    return merged
