import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.smtp_notification_sender import SmtpNotificationSender
from src.app.services.background_tasks import BackgroundTaskRunner
from src.app.services.credential_hasher import CredentialHasher
from src.app.services.session_issuer import SessionIssuer
from src.app.services.token_generator import TokenGenerator
from .error import ClientError, ServerError

logger = logging.getLogger(__name__)

# Seconds to let welcome e-mails finish on shutdown
SHUTDOWN_DRAIN_TIMEOUT = 10


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict['code']}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    logger.warning(f"Validation error: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": {"code": "VALIDATION_ERROR", "message": message}},
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": {"code": "INTERNAL_ERROR", "message": "Internal server error"}},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with app.state.engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database schema ready")

    yield

    await app.state.background.drain(timeout=SHUTDOWN_DRAIN_TIMEOUT)
    await app.state.engine.dispose()
    logger.info("Shutdown complete")


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title="CodeReview Auth API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Collaborators are built once from the config and shared by all requests
    engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)
    app.state.config = ApplicationConfig
    app.state.engine = engine
    app.state.session_factory = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    app.state.hasher = CredentialHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)
    app.state.session_issuer = SessionIssuer(
        ApplicationConfig.JWT_SECRET,
        expires_in=timedelta(days=ApplicationConfig.SESSION_EXPIRY_DAYS),
    )
    app.state.token_generator = TokenGenerator()
    app.state.notification_sender = SmtpNotificationSender.from_config(ApplicationConfig)
    app.state.background = BackgroundTaskRunner()

    from src.api.routes import auth, health_check, user

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(user.router, tags=["User"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
