# todoapp/models/task.py
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from todoapp.database import Base
from todoapp.utils.clock import utc_now


class Task(Base):
    __tablename__ = "tasks"

    task_id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="RESTRICT"), nullable=False, index=True)
    task_name = Column(String(255), nullable=False)
    description = Column(Text, default="", nullable=False)

    # NULL means incomplete
    completed_date = Column(DateTime, nullable=True)

    created_by = Column(Integer, default=0, nullable=False)
    created_date = Column(DateTime, default=utc_now, nullable=False)

    # Relationships
    user = relationship("User", back_populates="tasks")
    subtasks = relationship(
        "Subtask",
        back_populates="task",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Subtask(Base):
    __tablename__ = "subtasks"

    subtask_id = Column(Integer, primary_key=True, index=True)
    task_id = Column(Integer, ForeignKey("tasks.task_id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    completed_date = Column(DateTime, nullable=True)

    created_by = Column(Integer, default=0, nullable=False)
    created_date = Column(DateTime, default=utc_now, nullable=False)

    task = relationship("Task", back_populates="subtasks")
