# casetasks/utils/dependencies.py
from fastapi import Depends
from sqlalchemy.orm import Session

from casetasks.database import get_db
from casetasks.services.credentials import CredentialService
from casetasks.services.tasks import TaskService
from casetasks.services.users import UserService
from casetasks.utils.auth import get_credential_service


def get_user_service(
    db: Session = Depends(get_db),
    credentials: CredentialService = Depends(get_credential_service),
) -> UserService:
    return UserService(db, credentials)


def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    return TaskService(db)
