# casetasks/client/auth.py
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from casetasks.client.api import ApiClient, ApiError

logger = logging.getLogger(__name__)


class MemoryTokenStore:
    def __init__(self, token: Optional[str] = None):
        self._token = token

    def load(self) -> Optional[str]:
        return self._token

    def save(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileTokenStore:
    """Keeps the bearer token in a file between runs."""

    def __init__(self, path):
        self.path = Path(path)

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        token = self.path.read_text(encoding="utf-8").strip()
        return token or None

    def save(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(token, encoding="utf-8")

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()


class AuthStore:
    """Signed-in user and token, mirrored into the API client."""

    def __init__(self, api: ApiClient, token_store=None):
        self.api = api
        self.token_store = token_store if token_store is not None else MemoryTokenStore()
        self.user: Optional[Dict[str, Any]] = None
        self.token: Optional[str] = None
        self.loading = True

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def _set_session(self, token: Optional[str]) -> None:
        self.token = token
        self.api.token = token
        if token:
            self.token_store.save(token)
        else:
            self.token_store.clear()

    def restore(self) -> Optional[Dict[str, Any]]:
        """Pick up a stored token and load its profile; drop the token if it no longer works"""
        stored = self.token_store.load()
        if not stored:
            self.loading = False
            return None

        self.token = stored
        self.api.token = stored
        try:
            self.user = self.api.get("/auth/profile")
        except ApiError as e:
            logger.info("Stored token rejected: %s", e.message)
            self.user = None
            self._set_session(None)
        finally:
            self.loading = False
        return self.user

    def _accept(self, data: Dict[str, Any]) -> Dict[str, Any]:
        self.user = data["user"]
        self._set_session(data["token"])
        return self.user

    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self._accept(self.api.post("/auth/login", {"email": email, "password": password}))

    def register(self, name: str, email: str, password: str, role: Optional[str] = None) -> Dict[str, Any]:
        payload = {"name": name, "email": email, "password": password}
        if role:
            payload["role"] = role
        return self._accept(self.api.post("/auth/register", payload))

    def update_profile(self, name: Optional[str] = None, email: Optional[str] = None) -> Dict[str, Any]:
        payload = {}
        if name is not None:
            payload["name"] = name
        if email is not None:
            payload["email"] = email
        self.user = self.api.put("/auth/profile", payload)
        return self.user

    def get_task_stats(self) -> Dict[str, int]:
        return self.api.get("/tasks/stats")

    def logout(self) -> None:
        self.user = None
        self._set_session(None)
