"""Client-side state for the task manager API."""

from .api import ApiClient, ApiError
from .auth import AuthStore, FileTokenStore, MemoryTokenStore
from .tasks import TaskBoard, page_numbers
