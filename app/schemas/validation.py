# app/schemas/validation.py
"""
Shared pieces of the validation layer.

Every resource schema derives from ApiModel: camelCase on the wire, snake_case
attributes, whitespace stripped, enum values stored as plain strings.
`validate_payload` runs a schema against a raw dict without touching the
store and reports field-level errors in the same shape the API returns.
"""
from typing import Any, ClassVar, NamedTuple, Optional

from pydantic import AnyUrl, BaseModel, ConfigDict, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

_url_adapter = TypeAdapter(AnyUrl)


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        use_enum_values=True,
    )

    def to_record(self, partial: bool = False) -> dict[str, Any]:
        """External (camelCase) record, ready for a repository call."""
        return self.model_dump(by_alias=True, exclude_unset=partial)


class PartialModel(ApiModel):
    """
    Base for update payloads: every field optional, but columns that are NOT
    NULL in storage may not be explicitly nulled.
    """

    non_nullable: ClassVar[tuple[str, ...]] = ()

    @field_validator("*", mode="after")
    @classmethod
    def _reject_explicit_null(cls, value, info):
        if value is None and info.field_name in cls.non_nullable:
            raise ValueError("não pode ser nulo")
        return value


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def normalize_url(value: Any) -> Optional[str]:
    """Blank -> None; otherwise the value must parse as an absolute URL."""
    value = blank_to_none(value)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError("deve ser uma URL válida")
    value = value.strip()
    try:
        _url_adapter.validate_python(value)
    except PydanticValidationError:
        raise ValueError("deve ser uma URL válida")
    return value


class ValidationResult(NamedTuple):
    value: Optional[dict[str, Any]]
    errors: list[dict[str, str]]

    @property
    def ok(self) -> bool:
        return not self.errors


def _message(error: dict[str, Any]) -> str:
    msg = error.get("msg", "valor inválido")
    if error.get("type") == "value_error" and msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return msg


def field_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Flatten pydantic / FastAPI error dicts into [{field, message}]."""
    result = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        result.append({"field": ".".join(loc) or "body", "message": _message(error)})
    return result


def validate_payload(model: type[ApiModel], raw: Any, partial: bool = False) -> ValidationResult:
    """
    Validate `raw` against `model`. Pure: no store access, no exceptions for
    bad input.
    """
    try:
        obj = model.model_validate(raw)
    except PydanticValidationError as e:
        return ValidationResult(None, field_errors(e.errors()))
    return ValidationResult(obj.to_record(partial=partial), [])
