from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from persistence import AsyncShopRepository, Shop

router = APIRouter(tags=["shops"])
logger = logging.getLogger(__name__)


class ShopForm(BaseModel):
    """
    Request body for create/update. There is no `id`: it comes from the backend
    (create) or from the URL (update).
    """

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

    def to_shop(self, shop_id: int = 0) -> Shop:
        shop = Shop(id=shop_id, **self.model_dump())
        if not shop.created_by_id:
            shop.set_creator_anonymous()
        return shop


def get_repo(request: Request) -> AsyncShopRepository:
    return request.app.state.shops


def _shop_payload(shop: Shop) -> dict[str, Any]:
    payload = shop.model_dump(mode="json")
    payload["created_by_display_name"] = shop.created_by_display_name()
    return payload


@router.get("/shops")
async def list_shops(repo: AsyncShopRepository = Depends(get_repo)) -> list[dict[str, Any]]:
    return [_shop_payload(s) for s in await repo.list_shops()]


@router.get("/shops/mine")
async def list_mine(user_id: str = "", repo: AsyncShopRepository = Depends(get_repo)) -> list[dict[str, Any]]:
    # No sign-in here: the caller names the creator ID explicitly.
    return [_shop_payload(s) for s in await repo.list_shops_created_by(user_id.strip())]


@router.get("/shops/category/{name}")
async def list_category(name: str, repo: AsyncShopRepository = Depends(get_repo)) -> list[dict[str, Any]]:
    return [_shop_payload(s) for s in await repo.list_shops_by_category(name)]


@router.get("/shops/{shop_id}")
async def get_shop(shop_id: int, repo: AsyncShopRepository = Depends(get_repo)) -> dict[str, Any]:
    return _shop_payload(await repo.get_shop(shop_id))


@router.post("/shops", status_code=201)
async def create_shop(form: ShopForm, repo: AsyncShopRepository = Depends(get_repo)) -> dict[str, Any]:
    shop = form.to_shop()
    shop.id = await repo.add_shop(shop)
    logger.info("SHOPS: created shop %d (%r)", shop.id, shop.title)
    return _shop_payload(shop)


@router.put("/shops/{shop_id}")
async def update_shop(
    shop_id: int, form: ShopForm, repo: AsyncShopRepository = Depends(get_repo)
) -> dict[str, Any]:
    shop = form.to_shop(shop_id)
    await repo.update_shop(shop)
    return _shop_payload(shop)


@router.delete("/shops/{shop_id}", status_code=204)
async def delete_shop(shop_id: int, repo: AsyncShopRepository = Depends(get_repo)) -> Response:
    await repo.delete_shop(shop_id)
    return Response(status_code=204)


@router.get("/_ah/health")
async def health() -> PlainTextResponse:
    return PlainTextResponse("ok")
