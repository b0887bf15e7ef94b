"""
Pydantic schemas for authentication.
"""
import uuid
from typing import Optional

from fastapi_users import schemas
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class UserRead(schemas.BaseUser[uuid.UUID]):
    """Safe-to-expose user fields (GET /auth/me)."""

    name: str
    role: str


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)


class LoginUser(BaseModel):
    id: uuid.UUID
    email: str
    name: Optional[str] = None
    role: str


class TokenPair(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    access_token: str
    token_type: str = "bearer"
    expires_in: int


class LoginResponse(BaseModel):
    user: LoginUser
    tokens: TokenPair
