"""
Enumerations and helpers shared by the table models and the API schemas.
"""
from datetime import datetime, timezone
from enum import Enum


class PaymentStatus(str, Enum):
    PENDENTE = "Pendente"
    PAGO = "Pago"
    ATRASADO = "Atrasado"


class ExpenseFrequency(str, Enum):
    UNICA = "Única"
    MENSAL = "Mensal"
    ANUAL = "Anual"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def enum_check(column: str, enum_cls: type[Enum]) -> str:
    """SQL CHECK expression restricting `column` to the values of `enum_cls`."""
    values = ", ".join(f"'{member.value}'" for member in enum_cls)
    return f"{column} IN ({values})"
