from __future__ import annotations

import secrets
from typing import Iterable

from .shop import Shop

MAX_RANDOM_ID = (1 << 63) - 1


def random_id() -> int:
    """
    Return a random positive integer that fits in a signed 64-bit int.

    Never returns 0, which is reserved for "unassigned".
    """
    return secrets.randbelow(MAX_RANDOM_ID) + 1


def sort_by_title(shops: Iterable[Shop]) -> list[Shop]:
    # sorted() is stable: equal titles keep their incoming order.
    return sorted(shops, key=lambda s: s.title)
