# casetasks/services/users.py
import logging
from typing import NamedTuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from casetasks.errors import AuthError, ConflictError, InternalError, NotFoundError
from casetasks.models.user import User
from casetasks.schemas.user import UserCreate, UserLogin, UserUpdate
from casetasks.services.credentials import CredentialService

logger = logging.getLogger(__name__)

# Same message for unknown email and wrong password so login does not
# reveal which accounts exist.
INVALID_CREDENTIALS = "Invalid email or password"


class AuthResult(NamedTuple):
    user: User
    token: str


class UserService:
    def __init__(self, db: Session, credentials: CredentialService):
        self.db = db
        self.credentials = credentials

    def _find_by_email(self, email: str):
        return self.db.query(User).filter(User.email == email).first()

    def _email_taken(self, email: str, user_id: int) -> bool:
        return self.db.query(User).filter(User.email == email, User.id != user_id).first() is not None

    def register(self, data: UserCreate) -> AuthResult:
        """Create an account and return it together with a fresh token"""
        if self._find_by_email(data.email):
            raise ConflictError("User with this email already exists")

        user = User(
            name=data.name,
            email=data.email,
            hashed_password=self.credentials.hash_password(data.password),
            role=data.role.value,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # lost a race with a concurrent registration for the same email
            self.db.rollback()
            raise ConflictError("User with this email already exists")
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Error registering user")
            raise InternalError("Failed to register user")
        self.db.refresh(user)

        logger.info("Registered user %s with role %s", user.id, user.role)
        return AuthResult(user=user, token=self.credentials.issue_token(user.id))

    def login(self, data: UserLogin) -> AuthResult:
        user = self._find_by_email(data.email)
        if user is None or not self.credentials.verify_password(data.password, user.hashed_password):
            raise AuthError(INVALID_CREDENTIALS)

        logger.info("User %s logged in", user.id)
        return AuthResult(user=user, token=self.credentials.issue_token(user.id))

    def get_profile(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, user_id: int, data: UserUpdate) -> User:
        """Partial profile update; only name and email can change"""
        user = self.get_profile(user_id)
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)

        email = update_data.get("email")
        if email and email != user.email and self._email_taken(email, user_id):
            raise ConflictError("Email is already taken")

        for field, value in update_data.items():
            setattr(user, field, value)

        try:
            self.db.commit()
        except IntegrityError:
            # another account claimed the email between the check and the commit
            self.db.rollback()
            raise ConflictError("Email is already taken")
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Error updating profile of user %s", user_id)
            raise InternalError("Failed to update user profile")
        self.db.refresh(user)
        logger.info("Updated profile of user %s: %s", user.id, sorted(update_data))
        return user
