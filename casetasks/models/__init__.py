from .user import User, UserRole
from .task import Task, TaskStatus, NEXT_STATUS
