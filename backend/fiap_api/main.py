"""
FIAP Tech Challenge - Backend API
Clientes, produtos, pedidos e pagamentos (Mercado Pago)
"""
import sys
import time
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.httpsredirect import HTTPSRedirectMiddleware

from fiap_api.api import customers, products, orders, payments
from fiap_api.core.config import settings
from fiap_api.core.database import check_database, init_schema
from fiap_api.core.errors import CustomExceptionMiddleware, register_exception_handlers
from fiap_api.core.localization import LocalizationMiddleware
from fiap_api.core.logging_config import configure_logging

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def validate_environment_variables() -> bool:
    """
    Check the variables the API cannot start without

    Returns:
        True when every required variable is set
    """
    result = True

    logger.info("*********** Validate Environment Variables ***********")
    logger.info(f"Running in {settings.APP_ENVIRONMENT.upper()}")

    for variable in settings.missing_variables():
        logger.critical(f"Variable {variable} Not Found")
        result = False

    if not settings.MERCADOPAGO_ACCESS_TOKEN:
        logger.warning("MERCADOPAGO_ACCESS_TOKEN not set - payment creation will fail")

    return result


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown."""
    if settings.AUTO_CREATE_SCHEMA:
        init_schema()
    logger.info(f"{settings.API_TITLE} started (prefix '{settings.prefix_path}')")

    yield

    logger.info("Application shutdown complete")


def health():
    """Health check - tests database connectivity (200 healthy / 503 unhealthy)"""
    start_time = time.time()

    try:
        db_latency_ms = check_database()
        database = {"status": "connected", "latency_ms": db_latency_ms}
        healthy = True
    except Exception as e:
        logger.warning(f"Health check failed: {e}")
        database = {"status": "disconnected", "error": str(e)}
        healthy = False

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "service": "fiap-api",
            "version": settings.API_VERSION,
            "environment": settings.APP_ENVIRONMENT,
            "database": database,
            "total_latency_ms": round((time.time() - start_time) * 1000, 2)
        }
    )


async def root():
    """Endpoint raiz - verificação de estado da API"""
    return {
        "message": settings.API_TITLE,
        "status": "online",
        "version": settings.API_VERSION,
        "environment": settings.APP_ENVIRONMENT,
        "docs": f"{settings.prefix_path}/swagger"
    }


def create_app() -> FastAPI:
    """Build the FastAPI application from the current settings"""
    prefix = settings.prefix_path

    app = FastAPI(
        title=settings.API_TITLE,
        version=settings.API_VERSION,
        description=settings.API_DESCRIPTION,
        docs_url=f"{prefix}/swagger",
        redoc_url=None,
        openapi_url=f"{prefix}/swagger/v1/swagger.json",
        swagger_ui_parameters={"persistAuthorization": True},
        lifespan=lifespan
    )

    register_exception_handlers(app)

    # Middleware: the last one added is the outermost
    if settings.ENABLE_EXCEPTION_MIDDLEWARE:
        app.add_middleware(CustomExceptionMiddleware)
    app.add_middleware(LocalizationMiddleware)
    if settings.HTTPS_REDIRECT:
        app.add_middleware(HTTPSRedirectMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=settings.GZIP_MINIMUM_SIZE, compresslevel=9)

    # Include API routers
    app.include_router(customers.router, prefix=f"{prefix}/api/v1/customers", tags=["Customers"])
    app.include_router(products.router, prefix=f"{prefix}/api/v1/products", tags=["Products"])
    app.include_router(orders.router, prefix=f"{prefix}/api/v1/orders", tags=["Orders"])
    app.include_router(payments.router, prefix=f"{prefix}/api/v1/payments", tags=["Payments"])

    # Health answers with and without the prefix
    health_paths = {"/health", f"{prefix}/health"}
    for path in sorted(health_paths):
        app.add_api_route(path, health, methods=["GET"], tags=["Health"], include_in_schema=(path == "/health"))

    app.add_api_route(prefix or "/", root, methods=["GET"], include_in_schema=False)

    return app


app = create_app()


def main():
    """Console entrypoint: validate the environment, then serve with uvicorn"""
    import uvicorn

    if not validate_environment_variables():
        logger.critical("Application failed to start due to missing environment variables.")
        sys.exit(-1)

    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
