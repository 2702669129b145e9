"""Offset/limit windowing over ordered sequences."""

from __future__ import annotations

from itertools import islice
from typing import Iterable, List, Optional, Tuple, TypeVar

T = TypeVar("T")


def window(items: Iterable[T], offset: int, limit: Optional[int]) -> List[Tuple[int, T]]:
    """Skip ``offset`` items, then take at most ``limit``.

    Each element is paired with its zero-based index in the input. A ``limit``
    of None takes everything after the offset.
    """
    if offset < 0:
        raise ValueError(f"offset must be non-negative, got {offset}")
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")

    stop = None if limit is None else offset + limit
    return list(islice(enumerate(items), offset, stop))
