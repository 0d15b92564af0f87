from .base import ApiResponse, ErrorResponse, MessageOut
from .user import UserCreate, UserLogin, UserUpdate, UserOut
from .tokens import AuthOut
from .task import TaskCreate, TaskUpdate, TaskOut, TaskListOut, TaskStats, Pagination
