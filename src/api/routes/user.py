from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users import LoadProfileUseCase, ProfileResponse
from src.depends import get_current_account_id, get_unit_of_work

router = APIRouter(tags=["User"])


@router.get("/me", status_code=status.HTTP_200_OK, response_model=ProfileResponse)
async def get_me(
    account_id: UUID = Depends(get_current_account_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Load Current Account

    Returns the public profile of the account named by the session credential.

    Raises:
        - 401 Unauthorized: Missing, invalid or expired session credential
        - 404 Not Found: Account no longer exists
        - 500 Internal Server Error: Server error
    """
    use_case = LoadProfileUseCase(uow)
    result = await use_case.execute(account_id)

    # Handle errors
    if result.is_err():
        error = result.error
        if error.code == "ACCOUNT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
