# app/models/user.py
"""
User model for FastAPI Users with SQLModel.
The admin panel has a single role in practice, but the role column is kept so
the RoleChecker dependency can tell 401 (no/invalid token) from 403 (valid
token, wrong role).
"""

import uuid as uuid_pkg

from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    """
    FastAPI Users required fields:
    - id: UUID (primary key)
    - email: str (unique, indexed)
    - hashed_password: str
    - is_active / is_superuser / is_verified: bool

    Custom fields:
    - name: display name returned by the login endpoint
    - role: admin | viewer
    """

    __tablename__ = "users"

    id: uuid_pkg.UUID = Field(default_factory=uuid_pkg.uuid4, primary_key=True, nullable=False)
    email: str = Field(unique=True, index=True, nullable=False, max_length=320)
    hashed_password: str = Field(nullable=False, max_length=1024)
    is_active: bool = Field(default=True, nullable=False)
    is_superuser: bool = Field(default=False, nullable=False)
    is_verified: bool = Field(default=False, nullable=False)

    name: str = Field(default="", max_length=255)
    role: str = Field(default="admin", max_length=50)
