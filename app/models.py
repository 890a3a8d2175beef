import uuid

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.orm import relationship, validates
from sqlalchemy.sql import func

from .database import Base
from .roles import is_valid_role

JOB_STATUSES = ["completed", "in_progress", "upcoming", "cancelled"]
JOB_STATUS_LABELS = {
    "completed": "Completed",
    "in_progress": "In Progress",
    "upcoming": "Upcoming",
    "cancelled": "Cancelled",
}
USER_STATUSES = ["active", "invited", "suspended", "terminated"]


def generate_public_id():
    """Generate a unique public ID for secure public access"""
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_public_id)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    role = Column(String(50), nullable=False, default="staff")  # see roles.ROLE_DEFINITIONS
    status = Column(String(20), nullable=False, default="active")  # active, invited, suspended, terminated
    avatar_url = Column(String(500), nullable=True)
    color = Column(String(20), nullable=True)  # dispatch board accent, e.g. "cyan"
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    jobs = relationship("Job", back_populates="staff")

    @validates("role")
    def validate_role(self, _key, role):
        if not is_valid_role(role):
            raise ValueError(f"Unknown role: {role}")
        return role

    @validates("status")
    def validate_status(self, _key, status):
        if status not in USER_STATUSES:
            raise ValueError(f"Status must be one of: {', '.join(USER_STATUSES)}")
        return status

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def initials(self) -> str:
        return f"{self.first_name[:1]}{self.last_name[:1]}".upper()


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    contact_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    address = Column(String(500), nullable=True)
    notes = Column(String(1000), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    jobs = relationship("Job", back_populates="customer")


class Job(Base):
    __tablename__ = "jobs"

    id = Column(String(36), primary_key=True, default=generate_public_id)
    title = Column(String(255), nullable=False)  # "Deep Clean – Dr. Okonkwo"
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True)
    staff_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)
    status = Column(String(20), nullable=False, default="upcoming")  # see JOB_STATUSES
    location = Column(String(500), nullable=False, default="")
    notes = Column(String(1000), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    staff = relationship("User", back_populates="jobs")
    customer = relationship("Customer", back_populates="jobs")
