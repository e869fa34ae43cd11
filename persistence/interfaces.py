from __future__ import annotations

from typing import Protocol, runtime_checkable

from .shop import Shop


@runtime_checkable
class ShopDatabase(Protocol):
    """
    Thread-safe access to a database of shops.

    All list methods return shops ordered by title. Every method either returns
    normally or raises a `persistence.errors.ShopDatabaseError`.
    """

    def list_shops(self) -> list[Shop]:
        ...

    def list_shops_created_by(self, user_id: str) -> list[Shop]:
        """Shops whose creator ID equals `user_id`; an empty `user_id` lists everything."""
        ...

    def list_shops_by_category(self, category: str) -> list[Shop]:
        """Shops in `category`; an empty `category` lists everything."""
        ...

    def get_shop(self, shop_id: int) -> Shop:
        """Raise NotFoundError when there is no such shop."""
        ...

    def add_shop(self, shop: Shop) -> int:
        """Save a copy of `shop` under a newly assigned ID and return that ID."""
        ...

    def delete_shop(self, shop_id: int) -> None:
        ...

    def update_shop(self, shop: Shop) -> None:
        """Replace the stored shop with `shop` (its ID must be assigned)."""
        ...

    def close(self) -> None:
        ...
