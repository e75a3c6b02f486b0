import logging
from contextlib import asynccontextmanager
from datetime import datetime, timedelta
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings, settings
from database import build_engine, build_session_factory, init_db, ping_db
from api.auth import router as auth_router
from api.financing import router as financing_router
from api.user import router as user_router
from services.errors import ServiceError
from services.financing import FinancingService
from services.otp import OtpService
from services.registration import RegistrationService
from services.storage import SupabaseStorage
from services.tokens import TokenIssuer
from utils.response import error_response, success_response
from utils.timeutil import utc_now

logger = logging.getLogger(__name__)


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        return error_response(exc.message, exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return error_response(str(exc.detail), exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return error_response(message, 400)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response("Internal server error", 500)


def create_app(
    app_settings: Optional[Settings] = None,
    storage: Optional[SupabaseStorage] = None,
    clock: Callable[[], datetime] = utc_now,
) -> FastAPI:
    """Build the app and its services; nothing is shared between apps."""
    app_settings = app_settings or settings
    logging.basicConfig(
        level=app_settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    engine = build_engine(app_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await init_db(engine)
        yield
        await engine.dispose()

    app = FastAPI(
        title=app_settings.app_name,
        description="SME onboarding and financing request API",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_issuer = TokenIssuer(
        app_settings.jwt_secret,
        expiry_hours=app_settings.jwt_expiry_hours,
        issuer=app_settings.jwt_issuer,
        clock=clock,
    )
    app.state.otp_service = OtpService(
        default_code=app_settings.default_otp,
        ttl=timedelta(minutes=app_settings.otp_ttl_minutes),
        clock=clock,
    )
    app.state.registration_service = RegistrationService(
        storage or SupabaseStorage.from_settings(app_settings),
        max_upload_mb=app_settings.max_upload_mb,
        clock=clock,
    )
    app.state.financing_service = FinancingService(clock=clock)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins.split(","),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    _register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(user_router)
    app.include_router(financing_router)

    @app.get("/health")
    async def health(request: Request):
        connected = await ping_db(request.app.state.engine)
        return success_response(
            "Server is running",
            {"status": "ok", "database": "connected" if connected else "disconnected"},
        )

    return app


app = create_app()
