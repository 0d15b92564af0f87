# casetasks/services/tasks.py
import logging
import math
from typing import List, NamedTuple, Optional

from sqlalchemy.orm import Session

from casetasks.database import commit, utcnow
from casetasks.errors import NotFoundError
from casetasks.models.task import Task, TaskStatus
from casetasks.schemas.task import TaskCreate, TaskStats, TaskUpdate

logger = logging.getLogger(__name__)

# Largest value a 64-bit INTEGER column can hold
MAX_ROW_ID = 2**63 - 1


class TaskPage(NamedTuple):
    tasks: List[Task]
    total: int
    pages: int


class TaskService:
    """Task CRUD scoped to a single owner.

    Every lookup filters on both the task id and the owner's id, so a task
    belonging to someone else is indistinguishable from a missing one.
    """

    def __init__(self, db: Session):
        self.db = db

    def _owned(self, user_id: int):
        return self.db.query(Task).filter(Task.user_id == user_id)

    def create_task(self, data: TaskCreate, user_id: int) -> Task:
        task = Task(
            title=data.title,
            description=data.description,
            status=data.status,
            due_date=data.due_date,
            user_id=user_id,
        )
        self.db.add(task)
        commit(self.db, "Failed to create task")
        self.db.refresh(task)

        logger.info("Task %s created by user %s", task.id, user_id)
        return task

    def get_all_tasks(
        self,
        user_id: int,
        page: int = 1,
        limit: int = 10,
        status: Optional[TaskStatus] = None,
    ) -> TaskPage:
        """One page of the owner's tasks, newest first.

        The count and the page are two separate reads, not one snapshot.
        """
        query = self._owned(user_id)
        if status is not None:
            query = query.filter(Task.status == status)

        total = query.count()
        pages = math.ceil(total / limit)
        offset = (page - 1) * limit
        if offset >= total:
            # past the last page; also keeps huge offsets away from the driver
            return TaskPage(tasks=[], total=total, pages=pages)

        tasks = (
            query.order_by(Task.created_at.desc(), Task.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return TaskPage(tasks=tasks, total=total, pages=pages)

    def get_task_by_id(self, task_id: int, user_id: int) -> Task:
        if not 1 <= task_id <= MAX_ROW_ID:
            raise NotFoundError("Task not found")

        task = self._owned(user_id).filter(Task.id == task_id).first()
        if task is None:
            raise NotFoundError("Task not found")
        return task

    def update_task(self, task_id: int, data: TaskUpdate, user_id: int) -> Task:
        task = self.get_task_by_id(task_id, user_id)

        # Apply updates (only fields provided in request)
        update_data = data.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            setattr(task, key, value)
        task.updated_at = utcnow()

        commit(self.db, "Failed to update task")
        self.db.refresh(task)

        logger.info("Task %s updated by user %s: %s", task.id, user_id, sorted(update_data))
        return task

    def delete_task(self, task_id: int, user_id: int) -> None:
        task = self.get_task_by_id(task_id, user_id)
        self.db.delete(task)
        commit(self.db, "Failed to delete task")
        logger.info("Task %s deleted by user %s", task_id, user_id)

    def get_task_stats(self, user_id: int) -> TaskStats:
        query = self._owned(user_id)
        counts = {status: query.filter(Task.status == status).count() for status in TaskStatus}
        return TaskStats(
            total=query.count(),
            pending=counts[TaskStatus.PENDING],
            in_progress=counts[TaskStatus.IN_PROGRESS],
            completed=counts[TaskStatus.COMPLETED],
            cancelled=counts[TaskStatus.CANCELLED],
        )
