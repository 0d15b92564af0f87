# casetasks/models/user.py
import enum

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from casetasks.database import Base, utcnow


class UserRole(str, enum.Enum):
    CASEWORKER = "caseworker"
    SUPERVISOR = "supervisor"
    ADMIN = "admin"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(String(20), default=UserRole.CASEWORKER.value, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    tasks = relationship("Task", back_populates="owner", cascade="all, delete-orphan")
