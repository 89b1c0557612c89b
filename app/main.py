import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.core.config import ConfigurationError, Settings, load_settings
from app.api.api import api_router
from app.services.gateways.base import PaymentGateway
from app.services.gateways.razorpay_gateway import RazorpayGateway
from app.services.payment_service import PaymentService

# Logging Configuration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info(
        f"{settings.PROJECT_NAME} ready with {type(app.state.gateway).__name__} "
        f"(UPI strategy: {settings.UPI_VERIFICATION_STRATEGY})"
    )
    yield


def create_app(settings: Settings, gateway: Optional[PaymentGateway] = None) -> FastAPI:
    settings.require_credentials()
    if gateway is None:
        gateway = RazorpayGateway(settings.RAZORPAY_KEY_ID, settings.RAZORPAY_KEY_SECRET)

    app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)
    app.state.settings = settings
    app.state.gateway = gateway
    app.state.payment_service = PaymentService(settings, gateway)

    # CORS Middleware
    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials="*" not in settings.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request body.") if errors else "Invalid request body."
        logger.info(f"Rejected request to {request.url.path}: {message}")
        return JSONResponse(status_code=400, content={"error": message})

    # Global Exception Handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Global exception: {exc}", exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})

    app.include_router(api_router)

    @app.get("/")
    async def root():
        return {"message": f"Welcome to {settings.PROJECT_NAME}"}

    return app


def run():
    import uvicorn

    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.critical(str(e))
        sys.exit(1)

    app = create_app(settings)
    logger.info(f"Razorpay server listening on port {settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
