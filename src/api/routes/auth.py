from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import ClientError, ServerError
from src.app.services.background_tasks import BackgroundTaskRunner
from src.app.services.credential_hasher import CredentialHasher
from src.app.services.notification_sender import INotificationSender
from src.app.services.session_issuer import SessionIssuer
from src.app.services.token_generator import TokenGenerator
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    RegisterCommand,
    RegisterUseCase,
    LoginUseCase,
    ForgotPasswordUseCase,
    VerifyResetTokenUseCase,
    ResetPasswordUseCase,
    AuthResponse,
    ForgotPasswordResponse,
    VerifyResetTokenResponse,
    ResetPasswordResponse,
)
from src.depends import (
    get_background_runner,
    get_config,
    get_hasher,
    get_notification_sender,
    get_session_issuer,
    get_token_generator,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])

# Error codes that are the caller's fault; everything else is a server error
CLIENT_ERROR_CODES = {
    "EMAIL_ALREADY_EXISTS",
    "INVALID_CREDENTIALS",
    "INVALID_TOKEN",
    "INVALID_PASSWORD",
}


def raise_for_error(error) -> None:
    if error.code in CLIENT_ERROR_CODES:
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    raise ServerError(error)


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(..., min_length=1, description="Account password (min 6 chars)")
    name: Optional[str] = Field(default=None, max_length=255, description="Display name")


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponse
)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: CredentialHasher = Depends(get_hasher),
    session_issuer: SessionIssuer = Depends(get_session_issuer),
    notifier: INotificationSender = Depends(get_notification_sender),
    background: BackgroundTaskRunner = Depends(get_background_runner),
):
    """
    Register

    Creates an account and returns a session credential. The welcome
    e-mail is sent in the background and never delays the response.

    Raises:
        - 400 Bad Request: Missing/invalid fields, weak password, or email already registered
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        email=request.email, password=request.password, name=request.name
    )

    use_case = RegisterUseCase(uow, hasher, session_issuer, notifier, background)
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class LoginRequest(BaseModel):
    """
    Login HTTP request payload
    """

    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(..., min_length=1, description="Account password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: CredentialHasher = Depends(get_hasher),
    session_issuer: SessionIssuer = Depends(get_session_issuer),
):
    """
    Login

    Unknown email and wrong password produce the same 400 response.

    Raises:
        - 400 Bad Request: Invalid credentials or missing fields
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, hasher, session_issuer)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ForgotPasswordRequest(BaseModel):
    """
    Forgot password HTTP request payload
    """

    email: EmailStr = Field(..., description="Account email address")


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=ForgotPasswordResponse,
    response_model_exclude_none=True,
)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotificationSender = Depends(get_notification_sender),
    token_generator: TokenGenerator = Depends(get_token_generator),
    config=Depends(get_config),
):
    """
    Forgot Password

    Issues a one-hour reset token and e-mails the link.

    Security:
        - No email enumeration (same response for known and unknown emails)
        - reset_link appears only in development mode with no mail channel

    Returns:
        - 200 OK: Always, once the email field is valid
        - 500 Internal Server Error: Server error
    """
    use_case = ForgotPasswordUseCase(
        uow,
        notifier,
        token_generator,
        frontend_url=config.FRONTEND_URL,
        dev_mode=config.DEV_MODE,
        notification_timeout=config.NOTIFICATION_TIMEOUT_SECONDS,
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get(
    "/verify-reset-token/{token}",
    status_code=status.HTTP_200_OK,
    response_model=VerifyResetTokenResponse,
)
async def verify_reset_token(
    token: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_generator: TokenGenerator = Depends(get_token_generator),
):
    """
    Verify Reset Token

    Checks a reset token before the reset form is shown.

    Raises:
        - 400 Bad Request: Token unknown, expired or already used
    """
    use_case = VerifyResetTokenUseCase(uow, token_generator)
    result = await use_case.execute(token)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """
    Reset password HTTP request payload

    Password strength is checked by the use case so a weak password is
    reported as INVALID_PASSWORD.
    """

    token: str = Field(..., min_length=1, description="Password reset token from email")
    password: str = Field(..., description="New password (min 6 chars)")


@router.post(
    "/reset-password", status_code=status.HTTP_200_OK, response_model=ResetPasswordResponse
)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: CredentialHasher = Depends(get_hasher),
    token_generator: TokenGenerator = Depends(get_token_generator),
):
    """
    Reset Password

    Consumes the reset token and sets the new password.

    Security:
        - Token is single-use and expires after 1 hour
        - Unknown, expired and used tokens share one error

    Raises:
        - 400 Bad Request: Invalid/expired token or weak password
        - 500 Internal Server Error: Server error
    """
    use_case = ResetPasswordUseCase(uow, hasher, token_generator)
    result = await use_case.execute(request.token, request.password)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
