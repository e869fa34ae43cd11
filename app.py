from __future__ import annotations

import contextlib
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dotenv import load_dotenv

from endpoints.shop_endpoints import router as shop_router
from persistence import AsyncShopRepository, BackendError, InvalidArgumentError, NotFoundError
from persistence.config import configure_db
from settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    if settings is None:
        load_dotenv("local.env")
        settings = get_settings()

    logging.basicConfig(level=settings.log_level)

    # Fail at startup, not on the first request, if the backend is unreachable.
    db = configure_db(settings)

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            yield
        finally:
            await app.state.shops.close()

    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings
    app.state.shops = AsyncShopRepository(db, debug_log_requests=settings.debug_log_requests)

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError):
        return JSONResponse({"detail": str(exc)}, status_code=404)

    @app.exception_handler(InvalidArgumentError)
    async def invalid_argument(request: Request, exc: InvalidArgumentError):
        return JSONResponse({"detail": str(exc)}, status_code=400)

    @app.exception_handler(BackendError)
    async def backend_error(request: Request, exc: BackendError):
        logger.warning("SHOP DB: %s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse({"detail": "storage backend failure"}, status_code=500)

    app.include_router(shop_router)

    return app


app = create_app()
