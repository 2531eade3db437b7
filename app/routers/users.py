from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies import get_account_repository, get_current_account_id
from app.repositories.accounts import AccountRepository
from app.schemas.accounts import AccountResponse, ProfileUpdate

router = APIRouter(prefix="/user", tags=["user"])


@router.get("/profile", response_model=AccountResponse)
def get_profile(
    account_id: int = Depends(get_current_account_id),
    accounts: AccountRepository = Depends(get_account_repository),
) -> AccountResponse:
    account = accounts.get(account_id)
    if account is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return AccountResponse.model_validate(account)


@router.put("/profile", response_model=AccountResponse)
def update_profile(
    payload: ProfileUpdate,
    account_id: int = Depends(get_current_account_id),
    accounts: AccountRepository = Depends(get_account_repository),
) -> AccountResponse:
    account = accounts.update_profile(
        account_id,
        name=payload.name,
        unit_system=payload.unit_system,
        timezone=payload.timezone or "UTC",
        birth_date=payload.birth_date,
        gender=payload.gender,
    )
    if account is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return AccountResponse.model_validate(account)
