"""Routes describing the authenticated account."""

from fastapi import APIRouter, Depends

from dypse_api.domain.entities import User
from dypse_api.interfaces.api.dependencies import get_current_active_user
from dypse_api.interfaces.api.schemas import UserRead

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_active_user)) -> UserRead:
    return UserRead.model_validate(current_user)


__all__ = ["router"]
