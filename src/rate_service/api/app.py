# 🌐 rate_service/api/app.py
"""
🌐 HTTP-шар сервісу конвертації (FastAPI).

🔹 `POST /convert` - конвертація суми між двома валютами.
🔹 `GET /currencies` - перелік підтримуваних символів.
🔹 `DELETE /cache` - інвалідація кешу курсів і результатів.
🔹 Доменні помилки (`UserVisibleError`) перетворюються на JSON `{"detail": ...}` зі статусом класу помилки.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from fastapi import Depends, FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

# 🔠 Системні імпорти
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

# 🧩 Внутрішні модулі проєкту
from rate_service.config.setup.container import Container, bootstrap_logging
from rate_service.errors.custom_errors import UserVisibleError
from rate_service.services.conversion_service import ConversionService

from .schemas import ConvertRequest, ConvertResponse, CurrenciesResponse, ErrorResponse

logger = logging.getLogger("rate_service.api")


def get_conversion_service(request: Request) -> ConversionService:
    """🔗 Дістає сервіс із контейнера, збереженого в `app.state`."""
    container: Container = request.app.state.container
    return container.conversion_service


async def _user_visible_error_handler(request: Request, exc: UserVisibleError) -> JSONResponse:
    logger.warning(
        "🚨 %s %s → %s: %s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.message,
        extra=exc.to_log_extra(),
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Створює FastAPI-застосунок.

    Args:
        container: Готовий контейнер (тести). Якщо не передано - збирається з конфігів під час старту.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owns_container = container is None
        if owns_container:
            bootstrap_logging()
            app.state.container = Container.from_config()
        else:
            app.state.container = container
        try:
            yield
        finally:
            if owns_container:
                await app.state.container.aclose()

    app = FastAPI(title="Currency conversion service", version="1.0.0", lifespan=lifespan)
    app.add_exception_handler(UserVisibleError, _user_visible_error_handler)  # type: ignore[arg-type]

    @app.post(
        "/convert",
        response_model=ConvertResponse,
        response_model_by_alias=True,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
    )
    async def convert(
        body: ConvertRequest,
        service: ConversionService = Depends(get_conversion_service),
    ) -> ConvertResponse:
        logger.info("💱 Converting %s %s to %s", body.amount, body.source, body.target)
        result = await service.convert(body.source, body.target, body.amount)
        return ConvertResponse.from_result(result)

    @app.get("/currencies", response_model=CurrenciesResponse)
    async def currencies(service: ConversionService = Depends(get_conversion_service)) -> CurrenciesResponse:
        return CurrenciesResponse(currencies=service.list_supported_symbols())

    @app.delete("/cache", status_code=status.HTTP_204_NO_CONTENT)
    async def invalidate_cache(service: ConversionService = Depends(get_conversion_service)) -> Response:
        await service.invalidate_rate_cache()
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


__all__ = ["create_app", "get_conversion_service"]
