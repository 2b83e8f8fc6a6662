from sqlmodel import SQLModel, Field
from typing import Optional


class Task(SQLModel, table=True):
    __tablename__ = "tasks"
    __table_args__ = {"extend_existing": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=255)
    description: Optional[str] = None
    # epoch seconds, local midnight of the chosen day
    start_date: int
    end_date: int
    created: int
