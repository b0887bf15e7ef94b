# app/db/field_map.py
"""
Bidirectional field-name tables between the external (camelCase, API) and
storage (snake_case, database) conventions.

One FieldMap per resource, applied by the repositories on every read and every
write, so the two directions cannot drift apart.
"""
import logging
from collections.abc import Callable, Mapping
from typing import Any

logger = logging.getLogger(__name__)


def coerce_number(value: Any, cast: Callable[[Any], Any]) -> Any:
    """
    Coerce a stored numeric value. Some drivers hand DECIMAL columns back as
    strings, and legacy rows may hold garbage: anything that does not parse
    degrades to 0 instead of failing the whole listing.
    """
    if value is None:
        return None
    try:
        if cast is int:
            return int(float(value))
        return cast(value)
    except (TypeError, ValueError):
        logger.warning(f"Valor numérico inválido no banco: {value!r}; usando 0")
        return cast(0)


class FieldMap:
    def __init__(self, fields: Mapping[str, str], numeric: Mapping[str, Callable[[Any], Any]] | None = None):
        self.external_to_storage = dict(fields)
        self.storage_to_external = {v: k for k, v in fields.items()}
        if len(self.storage_to_external) != len(self.external_to_storage):
            raise ValueError("FieldMap must be one-to-one")
        # keyed by external name
        self.numeric = dict(numeric or {})

    def to_storage(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """External record -> column values. Unknown keys are rejected."""
        unknown = set(data) - set(self.external_to_storage)
        if unknown:
            raise KeyError(f"Unknown fields: {', '.join(sorted(unknown))}")
        return {self.external_to_storage[k]: v for k, v in data.items()}

    def to_external(self, row: Mapping[str, Any]) -> dict[str, Any]:
        """Column values -> external record, coercing numeric fields."""
        record = {}
        for column, value in row.items():
            name = self.storage_to_external.get(column)
            if name is None:
                continue
            if name in self.numeric:
                value = coerce_number(value, self.numeric[name])
            record[name] = value
        return record

    def storage_name(self, external_name: str) -> str:
        return self.external_to_storage[external_name]


CLIENT_FIELDS = FieldMap(
    {
        "id": "id",
        "companyName": "company_name",
        "monthlyValue": "monthly_value",
        "dueDay": "due_day",
        "websiteLink": "website_link",
        "paymentStatus": "payment_status",
        "created_at": "created_at",
        "updated_at": "updated_at",
    },
    numeric={"monthlyValue": float, "dueDay": int},
)

EXPENSE_FIELDS = FieldMap(
    {
        "id": "id",
        "description": "description",
        "amount": "amount",
        "category": "category",
        "date": "date",
        "frequency": "frequency",
        "dueDate": "due_date",
        "status": "status",
        "created_at": "created_at",
        "updated_at": "updated_at",
    },
    numeric={"amount": float},
)

PROJECT_FIELDS = FieldMap(
    {
        "id": "id",
        "title": "title",
        "description": "description",
        "image": "image",
        "link": "link",
        "order": "order",
        "created_at": "created_at",
        "updated_at": "updated_at",
    },
    numeric={"order": int},
)

PAYMENT_HISTORY_FIELDS = FieldMap(
    {
        "id": "id",
        "clientId": "client_id",
        "amountReceived": "amount_received",
        "paymentDate": "payment_date",
        "observations": "observations",
        "status": "status",
        "created_at": "created_at",
    },
    numeric={"amountReceived": float},
)
