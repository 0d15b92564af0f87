"""
Demo data for the Caseworker Task Manager
Creates a demo caseworker and a spread of tasks in every status
"""

import logging
from datetime import datetime, timedelta, timezone

from casetasks.config import Settings
from casetasks.database import Database
from casetasks.errors import ConflictError
from casetasks.logging_setup import setup_logging
from casetasks.models.task import TaskStatus
from casetasks.models.user import User
from casetasks.schemas.task import TaskCreate
from casetasks.schemas.user import UserCreate
from casetasks.services.credentials import CredentialService
from casetasks.services.tasks import TaskService
from casetasks.services.users import UserService

logger = logging.getLogger("seed_demo")

DEMO_USER = {
    "name": "Demo Caseworker",
    "email": "demo@example.com",
    "password": "Demo1234",
    "role": "caseworker",
}

# Structure: title, description, status, days until due (None = no due date)
DEMO_TASKS = [
    ("Initial intake interview", "Meet the family and complete the intake questionnaire", TaskStatus.COMPLETED, None),
    ("Home visit", "Scheduled home visit to assess living conditions", TaskStatus.IN_PROGRESS, 3),
    ("Request school records", "Email the school office for attendance records", TaskStatus.PENDING, 7),
    ("Benefits eligibility review", "Check eligibility for housing assistance", TaskStatus.PENDING, 14),
    ("Court report draft", "Prepare the quarterly court report", TaskStatus.IN_PROGRESS, 10),
    ("Transfer case file", "Case moved to another district before transfer was needed", TaskStatus.CANCELLED, None),
    ("Follow-up phone call", "Check in after the home visit", TaskStatus.PENDING, 5),
]


def seed_demo(database: Database, credentials: CredentialService) -> User:
    """Create the demo user (if missing) and its tasks"""
    db = database.SessionLocal()
    try:
        users = UserService(db, credentials)
        try:
            user = users.register(UserCreate(**DEMO_USER)).user
        except ConflictError:
            logger.info("Demo user already exists, skipping")
            return db.query(User).filter(User.email == DEMO_USER["email"]).first()

        tasks = TaskService(db)
        now = datetime.now(timezone.utc)
        for title, description, status, due_in_days in DEMO_TASKS:
            due_date = now + timedelta(days=due_in_days) if due_in_days is not None else None
            tasks.create_task(
                TaskCreate(title=title, description=description, status=status, due_date=due_date),
                user.id,
            )

        db.refresh(user)
        logger.info("Seeded %d tasks for %s (password: %s)", len(DEMO_TASKS), user.email, DEMO_USER["password"])
        return user
    finally:
        db.close()


def main():
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    database = Database.from_settings(settings)
    database.create_all()
    try:
        seed_demo(database, CredentialService.from_settings(settings))
    finally:
        database.dispose()


if __name__ == "__main__":
    main()
