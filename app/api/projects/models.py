# app/api/projects/models.py
from datetime import datetime
from typing import ClassVar, List, Optional

from pydantic import Field, field_validator

from ...schemas.validation import ApiModel, PartialModel, normalize_url


class ProjectCreate(ApiModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    image: str = Field(min_length=1)
    link: Optional[str] = None
    order: int = Field(default=0, ge=0)

    check_link = field_validator("link", mode="before")(normalize_url)


class ProjectUpdate(PartialModel):
    non_nullable: ClassVar[tuple[str, ...]] = ("title", "description", "image", "order")

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1)
    image: Optional[str] = Field(default=None, min_length=1)
    link: Optional[str] = None
    order: Optional[int] = Field(default=None, ge=0)

    check_link = field_validator("link", mode="before")(normalize_url)


class ProjectOrderItem(ApiModel):
    id: int = Field(gt=0)
    order: int = Field(ge=0)


class ProjectReorder(ApiModel):
    projects: List[ProjectOrderItem] = Field(min_length=1)


class Project(ApiModel):
    id: int
    title: str
    description: str
    image: str
    link: Optional[str] = None
    order: int
    created_at: Optional[datetime] = Field(default=None, alias="created_at")
    updated_at: Optional[datetime] = Field(default=None, alias="updated_at")
