# casetasks/utils/auth.py
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from casetasks.database import get_db
from casetasks.errors import AuthError
from casetasks.models.user import User
from casetasks.services.credentials import CredentialService

# auto_error is off so a missing header goes through our own 401 envelope
bearer_scheme = HTTPBearer(auto_error=False)


def get_credential_service(request: Request) -> CredentialService:
    return request.app.state.credentials


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    credential_service: CredentialService = Depends(get_credential_service),
) -> User:
    """Resolve the bearer token to a user or fail with 401"""
    if credentials is None:
        raise AuthError("Access token required")

    user_id = credential_service.validate_token(credentials.credentials)

    user = db.get(User, user_id)
    if user is None:
        # token outlived its account
        raise AuthError("Invalid or expired token")
    return user
