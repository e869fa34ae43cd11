from __future__ import annotations


class ShopDatabaseError(Exception):
    """Base class for everything a ShopDatabase raises."""


class NotFoundError(ShopDatabaseError, LookupError):
    def __init__(self, backend: str, shop_id: int):
        super().__init__(f"{backend}: shop not found with ID {shop_id}")
        self.shop_id = shop_id


class InvalidArgumentError(ShopDatabaseError, ValueError):
    pass


class DatabaseConnectionError(ShopDatabaseError, ConnectionError):
    """The backend could not be reached (or rejected our credentials) at construction time."""


class BackendError(ShopDatabaseError):
    """
    Wraps a failure raised by the underlying store.

    The original exception is kept as __cause__.
    """

    def __init__(self, backend: str, op: str, shop_id: int | None = None, reason: object = None):
        target = f" (ID {shop_id})" if shop_id is not None else ""
        msg = f"{backend}: could not {op}{target}"
        if reason is not None:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.op = op
        self.shop_id = shop_id


def unassigned_id(backend: str, op: str) -> InvalidArgumentError:
    return InvalidArgumentError(f"{backend}: shop with unassigned ID passed into {op}")
