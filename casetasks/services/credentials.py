# casetasks/services/credentials.py
"""
Password hashing and bearer token issuance/validation.

Tokens are stateless: validity depends only on the signature and the expiry
claim, so there is no server-side revocation.
"""

from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

from casetasks.errors import AuthError

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class CredentialService:
    def __init__(self, secret: str, algorithm: str = "HS256", expire_days: int = 7, rounds: int = 12):
        self.secret = secret
        self.algorithm = algorithm
        self.expire_days = expire_days
        self.rounds = rounds

    @classmethod
    def from_settings(cls, settings) -> "CredentialService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expire_days=settings.token_expire_days,
            rounds=settings.bcrypt_rounds,
        )

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")

    def verify_password(self, password: str, hashed_password: str) -> bool:
        try:
            return bcrypt.checkpw(_password_bytes(password), hashed_password.encode("utf-8"))
        except ValueError:
            # not a bcrypt hash
            return False

    def issue_token(self, user_id: int) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "userId": user_id,
            "iat": now,
            "exp": now + timedelta(days=self.expire_days),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def validate_token(self, token: str) -> int:
        """Return the user id bound to ``token`` or raise AuthError."""
        if not token:
            raise AuthError("Access token required")

        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError:
            raise AuthError("Invalid or expired token")

        user_id = payload.get("userId")
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise AuthError("Invalid or expired token")
        return user_id
