"""State – explicit encode/decode pairs for persisted collections.

Tag sets are stored in canonical form: sorted, de-duplicated and joined
with :data:`DELIMITER`.  The acknowledgement log keeps insertion order.
Empty entries are dropped on decode, so ``""`` decodes to an empty
collection.
"""
from __future__ import annotations

from typing import Iterable, Sequence

DELIMITER = ","


def canonical_tags(tags: Iterable[str] | None) -> tuple[str, ...]:
    """Return *tags* sorted and de-duplicated; ``None`` is the empty tuple.

    Raises ``ValueError`` for tags that could not survive a round trip
    (empty strings or strings containing the delimiter).
    """
    if tags is None:
        return ()
    if isinstance(tags, str):
        raise ValueError("tags must be a collection of strings, not a single string")
    unique = set(tags)
    for tag in unique:
        if not tag:
            raise ValueError("tags must not be empty")
        if DELIMITER in tag:
            raise ValueError(f"tag {tag!r} must not contain {DELIMITER!r}")
    return tuple(sorted(unique))


def encode_tags(tags: Iterable[str] | None) -> str:
    return DELIMITER.join(canonical_tags(tags))


def decode_tags(raw: str | None) -> frozenset[str]:
    if not raw:
        return frozenset()
    return frozenset(tag for tag in raw.split(DELIMITER) if tag)


def encode_id_log(ids: Sequence[str]) -> str:
    return DELIMITER.join(ids)


def decode_id_log(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [entry for entry in raw.split(DELIMITER) if entry]


__all__ = [
    "DELIMITER",
    "canonical_tags",
    "decode_id_log",
    "decode_tags",
    "encode_id_log",
    "encode_tags",
]
