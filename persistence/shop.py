from __future__ import annotations

from typing import Any

from pydantic import BaseModel

ANONYMOUS_CREATOR_ID = "anonymous"


class Shop(BaseModel):
    """
    Metadata about a single shop listing.

    `id` is assigned by the backend on insert; 0 means "not assigned yet".
    """

    id: int = 0
    title: str = ""
    author: str = ""
    published_date: str = ""
    image_url: str = ""
    description: str = ""
    created_by: str = ""
    created_by_id: str = ""
    category: str = ""
    address: str = ""
    email_address: str = ""
    phone: str = ""

    def created_by_display_name(self) -> str:
        """Name suitable for showing who created this shop."""
        if self.created_by_id == ANONYMOUS_CREATOR_ID:
            return "Anonymous"
        return self.created_by

    def set_creator_anonymous(self) -> None:
        self.created_by = ""
        self.created_by_id = ANONYMOUS_CREATOR_ID

    def properties(self) -> dict[str, Any]:
        """Stored fields without the identifier (for stores that key records externally)."""
        return self.model_dump(exclude={"id"})
