# app/models/project.py
"""
Portfolio project shown on the landing page.

`order` drives display sequencing; it is neither unique nor contiguous.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, Column, Integer
from sqlmodel import Field, SQLModel

from .common import utcnow


class Project(SQLModel, table=True):
    __tablename__ = "projects"
    __table_args__ = (CheckConstraint('"order" >= 0', name="ck_projects_order"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(nullable=False)
    description: str = Field(nullable=False)
    image: str = Field(nullable=False)
    link: Optional[str] = Field(default=None)
    order: int = Field(default=0, sa_column=Column("order", Integer, nullable=False, default=0))
    created_at: Optional[datetime] = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = Field(default_factory=utcnow)
