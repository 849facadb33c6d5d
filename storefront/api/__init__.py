# storefront/api/__init__.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.api.routers import cart, checkout, health, orders, quotes, wishlist
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def first_validation_message(exc: RequestValidationError) -> str:
    """Pierwszy blad walidacji, w formie czytelnej dla klienta."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    err = errors[0]
    msg = err.get("msg", "Invalid request")
    if err.get("type") == "value_error":
        #pydantic dokleja prefiks do ValueError z walidatorow
        return msg.removeprefix("Value error, ")

    field = next((str(p) for p in reversed(err.get("loc", ())) if not isinstance(p, int)), None)
    if field and field != "body":
        return f"{field}: {msg}"
    return msg


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": first_validation_message(exc)})


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Spice Storefront",
        version="1.0.0",
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(cart.router)
    app.include_router(checkout.router)
    app.include_router(orders.router)
    app.include_router(wishlist.router)
    app.include_router(quotes.router)

    return app
