# todoapp/models/user.py
import enum

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.types import TypeDecorator

from todoapp.database import Base
from todoapp.utils.clock import utc_now


class RoleType(str, enum.Enum):
    USER = "User"
    ADMIN = "Admin"


ROLE_CODES = {RoleType.USER: 0, RoleType.ADMIN: 1}
ROLES_BY_CODE = {code: role for role, code in ROLE_CODES.items()}


class RoleColumn(TypeDecorator):
    """Stores RoleType as its integer code (User=0, Admin=1)"""

    impl = Integer
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return ROLE_CODES[RoleType(value)]

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return ROLES_BY_CODE[value]


class User(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, index=True)
    role = Column(RoleColumn(), default=RoleType.USER, nullable=False)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    username = Column(String(100), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)

    # Audit fields (0 = created by the system)
    created_by = Column(Integer, default=0, nullable=False)
    created_date = Column(DateTime, default=utc_now, nullable=False)

    # Deleting a user with tasks is blocked by the RESTRICT rule on tasks.user_id
    tasks = relationship("Task", back_populates="user", passive_deletes="all")
