"""SQLAlchemy table models for users and their tasks."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, CheckConstraint, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# 64-bit keys; SQLite only autoincrements a column declared INTEGER.
Id = BigInteger().with_variant(Integer, "sqlite")


class Base(DeclarativeBase):
    pass


class UserRow(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("max_tasks_per_day >= 0", name="ck_users_max_tasks_per_day"),
    )

    # Supplied by the caller on creation, never generated.
    id: Mapped[int] = mapped_column(Id, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    max_tasks_per_day: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    def __repr__(self) -> str:
        return f"<UserRow(id={self.id}, max_tasks_per_day={self.max_tasks_per_day})>"


class TaskRow(Base):
    __tablename__ = "todo_tasks"
    __table_args__ = (
        Index("ix_todo_tasks_user_id_created_at", "user_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Id, primary_key=True, autoincrement=True)
    # Plain column, no foreign key: tasks stay queryable by key on their own.
    user_id: Mapped[int] = mapped_column(Id, nullable=False, index=True)
    task: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    def __repr__(self) -> str:
        return f"<TaskRow(id={self.id}, user_id={self.user_id})>"
