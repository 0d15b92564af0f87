# casetasks/client/tasks.py
from typing import Any, Dict, List, Optional

from casetasks.client.api import ApiClient, ApiError
from casetasks.models.task import NEXT_STATUS, TaskStatus

DEFAULT_PAGE_SIZE = 10


def page_numbers(current_page: int, total_pages: int) -> List[int]:
    """Page buttons to show; no pagination control for a single page"""
    if total_pages <= 1:
        return []
    return list(range(1, total_pages + 1))


class TaskBoard:
    """Paged, filterable view of the signed-in user's tasks.

    Mutations record failures in ``error`` instead of raising, the way the
    list view shows them inline.
    """

    def __init__(self, api: ApiClient, page_size: int = DEFAULT_PAGE_SIZE):
        self.api = api
        self.tasks: List[Dict[str, Any]] = []
        self.loading = False
        self.error: Optional[str] = None
        self.current_page = 1
        self.total_pages = 1
        self.total_tasks = 0
        self.page_size = page_size
        self.status_filter = ""

    def refresh(self) -> None:
        self.loading = True
        params = {"page": self.current_page, "limit": self.page_size}
        if self.status_filter:
            params["status"] = self.status_filter
        try:
            data = self.api.get("/tasks", params=params)
            self.tasks = data["tasks"]
            self.total_pages = data["pagination"]["pages"]
            self.total_tasks = data["pagination"]["total"]
            self.error = None
        except ApiError as e:
            self.error = e.message or "Failed to fetch tasks"
        finally:
            self.loading = False

    def _replace(self, task: Dict[str, Any]) -> None:
        self.tasks = [task if t["id"] == task["id"] else t for t in self.tasks]

    def _find(self, task_id: int) -> Optional[Dict[str, Any]]:
        return next((t for t in self.tasks if t["id"] == task_id), None)

    def create_task(self, title: str, description: str = "", due_date: Optional[str] = None) -> Optional[Dict[str, Any]]:
        payload: Dict[str, Any] = {"title": title, "status": TaskStatus.PENDING.value}
        if description:
            payload["description"] = description
        if due_date:
            payload["dueDate"] = due_date
        try:
            task = self.api.post("/tasks", payload)
        except ApiError as e:
            self.error = e.display_message() or "Failed to create task"
            return None

        self.tasks = [task] + self.tasks
        self.error = None
        self.set_current_page(1)
        return task

    def update_task_status(self, task_id: int, status: str) -> Optional[Dict[str, Any]]:
        try:
            task = self.api.put(f"/tasks/{task_id}", {"status": status})
        except ApiError as e:
            self.error = e.display_message() or "Failed to update task status"
            return None
        self._replace(task)
        self.error = None
        return task

    def advance_task(self, task_id: int) -> Optional[Dict[str, Any]]:
        """Move a task one step along the usual progression (or reopen it)"""
        task = self._find(task_id)
        if task is None:
            self.error = "Task not found"
            return None
        next_status = NEXT_STATUS.get(TaskStatus(task["status"]))
        if next_status is None:
            # completed tasks have nowhere further to go
            return task
        return self.update_task_status(task_id, next_status.value)

    def update_task_content(self, task_id: int, title: str, description: str = "") -> Optional[Dict[str, Any]]:
        payload: Dict[str, Any] = {"title": title.strip()}
        if description.strip():
            payload["description"] = description.strip()
        try:
            task = self.api.put(f"/tasks/{task_id}", payload)
        except ApiError as e:
            self.error = e.display_message() or "Failed to update task"
            return None
        self._replace(task)
        self.error = None
        return task

    def delete_task(self, task_id: int) -> bool:
        try:
            self.api.delete(f"/tasks/{task_id}")
        except ApiError as e:
            self.error = e.message or "Failed to delete task"
            return False
        self.tasks = [t for t in self.tasks if t["id"] != task_id]
        self.error = None
        self.set_current_page(1)
        return True

    def set_current_page(self, page: int) -> None:
        self.current_page = page
        self.refresh()

    def set_page_size(self, size: int) -> None:
        self.page_size = size
        self.set_current_page(1)

    def set_status_filter(self, status: str) -> None:
        self.status_filter = status
        self.set_current_page(1)
