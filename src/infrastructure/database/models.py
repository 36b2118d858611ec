"""SQLAlchemy ORM models."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    LargeBinary,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class TaskListModel(Base):
    """User-defined task list."""

    __tablename__ = "task_lists"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # No cascade: list deletion removes member tasks explicitly first
    tasks: Mapped[list["TaskModel"]] = relationship(
        "TaskModel",
        back_populates="task_list",
        passive_deletes=True,
    )


class TaskModel(Base):
    """Task model. The tree is stored as ``parent_id`` only."""

    __tablename__ = "tasks"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    # Insertion counter; gives children a stable store order
    seq: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    parent_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("tasks.id", ondelete="CASCADE"),
        index=True,
    )
    list_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("task_lists.id", ondelete="SET NULL"),
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    details: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False)
    is_not_done: Mapped[bool] = mapped_column(Boolean, default=False)
    priority: Mapped[str] = mapped_column(
        String(10),
        CheckConstraint("priority IN ('high', 'medium', 'low', 'none')"),
        nullable=False,
        default="none",
    )
    is_pinned: Mapped[bool] = mapped_column(Boolean, default=False)
    image_data: Mapped[bytes | None] = mapped_column(LargeBinary)
    due_date: Mapped[date | None] = mapped_column(Date, index=True)
    is_matrix_task: Mapped[bool] = mapped_column(Boolean, default=False)
    refresh_id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    # Relationships
    task_list: Mapped[Optional["TaskListModel"]] = relationship(
        "TaskListModel",
        back_populates="tasks",
    )
    parent: Mapped[Optional["TaskModel"]] = relationship(
        "TaskModel",
        remote_side=[id],
        back_populates="children",
    )
    children: Mapped[list["TaskModel"]] = relationship(
        "TaskModel",
        back_populates="parent",
        cascade="all, delete-orphan",
    )
