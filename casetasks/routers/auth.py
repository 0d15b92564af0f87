# casetasks/routers/auth.py
from fastapi import APIRouter, Depends, status

from casetasks.models.user import User
from casetasks.schemas.base import ApiResponse
from casetasks.schemas.tokens import AuthOut
from casetasks.schemas.user import UserCreate, UserLogin, UserOut, UserUpdate
from casetasks.services.users import UserService
from casetasks.utils.auth import get_current_user
from casetasks.utils.dependencies import get_user_service
from casetasks.utils.responses import envelope

router = APIRouter()


def _auth_out(result) -> AuthOut:
    return AuthOut(user=UserOut.model_validate(result.user), token=result.token)


@router.post("/register", response_model=ApiResponse[AuthOut], status_code=status.HTTP_201_CREATED)
def register(user: UserCreate, service: UserService = Depends(get_user_service)):
    """Register a new user and log them in"""
    return envelope(_auth_out(service.register(user)))


@router.post("/login", response_model=ApiResponse[AuthOut])
def login(credentials: UserLogin, service: UserService = Depends(get_user_service)):
    return envelope(_auth_out(service.login(credentials)))


@router.get("/profile", response_model=ApiResponse[UserOut])
def get_profile(
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return envelope(UserOut.model_validate(service.get_profile(current_user.id)))


@router.put("/profile", response_model=ApiResponse[UserOut])
def update_profile(
    user_update: UserUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Update name and/or email of the current user"""
    return envelope(UserOut.model_validate(service.update_profile(current_user.id, user_update)))
