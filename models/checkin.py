from sqlmodel import SQLModel, Field
from typing import Optional


class Checkin(SQLModel, table=True):
    """One day's check-in for a task, keyed by (task_id, date).

    task_id carries no foreign key; deleting a task removes its check-ins
    in the same transaction instead.
    """
    __tablename__ = "checkins"
    __table_args__ = {"extend_existing": True}

    task_id: int = Field(primary_key=True)
    date: int = Field(primary_key=True)
    completed: int = Field(default=0)  # 0 | 1
    notes: Optional[str] = None
