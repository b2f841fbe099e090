from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from menu_service.core.config import get_settings
from menu_service.core.errors import (
    DeadlineExceededError,
    InvalidInputError,
    MenuServiceError,
    PersistenceError,
    UpstreamUnavailableError,
)
from menu_service.routers.health import router as health_router
from menu_service.routers.menus import router as menus_router
from menu_service.routers.products import router as products_router

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Personalized menu API - segment menus with promotions, geo targeting, and elasticity-driven pricing.",
    version="0.1.0",
    debug=settings.DEBUG,
)

ERROR_STATUS = {
    InvalidInputError: 422,
    PersistenceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    UpstreamUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
    DeadlineExceededError: status.HTTP_504_GATEWAY_TIMEOUT,
}


def _error_body(request: Request, error: str, message: str) -> dict:
    return {
        "error": error,
        "message": message,
        "request_id": request.headers.get("X-Request-ID"),
    }


@app.exception_handler(MenuServiceError)
async def menu_service_exception_handler(request: Request, exc: MenuServiceError):
    """Map service errors to structured responses."""
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc}")
    else:
        logger.info(f"{exc.error_code} on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content=_error_body(request, exc.error_code, str(exc)),
    )


# Global exception handler for unhandled errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected server errors with structured response."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=_error_body(
            request,
            "internal_server_error",
            "An unexpected error occurred. Please try again later.",
        ),
    )

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(menus_router, prefix="/api")
app.include_router(products_router, prefix="/api")


@app.get("/")
def read_root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "docs": "/docs",
        "health": "/health"
    }
