from typing import Optional
from uuid import UUID

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.background_tasks import BackgroundTaskRunner
from src.app.services.credential_hasher import CredentialHasher
from src.app.services.notification_sender import INotificationSender
from src.app.services.session_issuer import SessionIssuer
from src.app.services.token_generator import TokenGenerator
from src.libs.result import Error

security = HTTPBearer(auto_error=False)

INVALID_SESSION = Error("INVALID_TOKEN", "Invalid or expired session token")


async def get_unit_of_work(request: Request):
    async with request.app.state.session_factory() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_config(request: Request):
    return request.app.state.config


def get_hasher(request: Request) -> CredentialHasher:
    return request.app.state.hasher


def get_session_issuer(request: Request) -> SessionIssuer:
    return request.app.state.session_issuer


def get_token_generator(request: Request) -> TokenGenerator:
    return request.app.state.token_generator


def get_notification_sender(request: Request) -> INotificationSender:
    return request.app.state.notification_sender


def get_background_runner(request: Request) -> BackgroundTaskRunner:
    return request.app.state.background


async def get_current_account_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    session_issuer: SessionIssuer = Depends(get_session_issuer),
) -> UUID:
    """
    Dependency to extract and verify the session credential from the Authorization header.

    Args:
        credentials: Bearer token from Authorization header (None if absent)

    Returns:
        Account UUID carried by the credential

    Raises:
        ClientError: 401 if the header is missing or the credential is invalid or expired
    """
    if credentials is None:
        raise ClientError(INVALID_SESSION, status_code=status.HTTP_401_UNAUTHORIZED)

    account_id = session_issuer.verify(credentials.credentials)
    if account_id is None:
        raise ClientError(INVALID_SESSION, status_code=status.HTTP_401_UNAUTHORIZED)

    return UUID(account_id)
