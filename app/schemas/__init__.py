"""Pydantic schemas package"""
from .user import LoginRequest, LoginResponse, UserRead
from .validation import ApiModel, PartialModel, ValidationResult, validate_payload

__all__ = [
    "ApiModel",
    "LoginRequest",
    "LoginResponse",
    "PartialModel",
    "UserRead",
    "ValidationResult",
    "validate_payload",
]
