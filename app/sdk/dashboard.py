# app/sdk/dashboard.py
"""
Aggregates and list filters for the admin dashboard, computed from the
records held by a DataCache (camelCase dicts as returned by the API).
"""
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..models.common import ExpenseFrequency, PaymentStatus

UPCOMING_WINDOW_DAYS = 7
ALL = "all"


def to_number(value: Any) -> float:
    """Numeric value of a record field; missing or unparsable values count as 0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def to_date(value: Any) -> Optional[date]:
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def format_brl(value: float) -> str:
    """Format as Brazilian currency: 1234.5 -> 'R$ 1.234,50'."""
    sign = "-" if value < 0 else ""
    text = f"{abs(value):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {text}"


@dataclass
class DashboardSummary:
    total_revenue: float
    total_expenses: float
    balance: float
    pending_clients: int
    overdue_clients: int
    upcoming_expenses: int
    monthly_recurring_expenses: float

    @classmethod
    def from_records(
        cls,
        clients: Iterable[Dict[str, Any]],
        expenses: Iterable[Dict[str, Any]],
        today: Optional[date] = None,
    ) -> "DashboardSummary":
        today = today or date.today()
        clients = list(clients or [])
        expenses = list(expenses or [])

        total_revenue = sum(to_number(c.get("monthlyValue")) for c in clients)
        total_expenses = sum(to_number(e.get("amount")) for e in expenses)

        upcoming = 0
        for expense in expenses:
            due = to_date(expense.get("date"))
            if due is not None and 0 <= (due - today).days <= UPCOMING_WINDOW_DAYS:
                upcoming += 1

        return cls(
            total_revenue=total_revenue,
            total_expenses=total_expenses,
            balance=total_revenue - total_expenses,
            pending_clients=sum(1 for c in clients if c.get("paymentStatus") == PaymentStatus.PENDENTE.value),
            overdue_clients=sum(1 for c in clients if c.get("paymentStatus") == PaymentStatus.ATRASADO.value),
            upcoming_expenses=upcoming,
            monthly_recurring_expenses=sum(
                to_number(e.get("amount"))
                for e in expenses
                if e.get("frequency") == ExpenseFrequency.MENSAL.value
            ),
        )

    @classmethod
    def from_cache(cls, cache, today: Optional[date] = None) -> "DashboardSummary":
        return cls.from_records(cache.clients, cache.expenses, today=today)


# --- List filters ---


def _matches(text: Any, term: str) -> bool:
    return term.strip().lower() in str(text or "").lower()


def filter_clients(clients: Iterable[Dict[str, Any]], search: str = "", status: str = ALL) -> List[Dict[str, Any]]:
    return [
        c
        for c in clients
        if _matches(c.get("companyName"), search) and (status == ALL or c.get("paymentStatus") == status)
    ]


def filter_expenses(
    expenses: Iterable[Dict[str, Any]],
    search: str = "",
    status: str = ALL,
    frequency: str = ALL,
) -> List[Dict[str, Any]]:
    return [
        e
        for e in expenses
        if _matches(e.get("description"), search)
        and (status == ALL or e.get("status") == status)
        and (frequency == ALL or e.get("frequency") == frequency)
    ]


def filter_projects(projects: Iterable[Dict[str, Any]], search: str = "") -> List[Dict[str, Any]]:
    """Projects whose title matches, in display order."""
    matching = [p for p in projects if _matches(p.get("title"), search)]
    return sorted(matching, key=lambda p: to_number(p.get("order")))


def payment_status_counts(history: Iterable[Dict[str, Any]]) -> Dict[str, int]:
    counts = {status.value: 0 for status in PaymentStatus}
    for record in history:
        if record.get("status") in counts:
            counts[record["status"]] += 1
    return counts


# --- Rendering ---


def render_dashboard(summary: DashboardSummary, console: Optional[Console] = None) -> Table:
    """Print the summary as a table and return it."""
    console = console or Console()

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(justify="left")
    table.add_column(justify="right")
    table.add_row("💰 Receita mensal:", f"[bold green]{format_brl(summary.total_revenue)}[/]")
    table.add_row("💸 Despesas:", f"[bold red]{format_brl(summary.total_expenses)}[/]")
    balance_style = "green" if summary.balance >= 0 else "red"
    table.add_row("📊 Saldo:", f"[bold {balance_style}]{format_brl(summary.balance)}[/]")
    table.add_row("⏳ Clientes pendentes:", f"[yellow]{summary.pending_clients}[/]")
    table.add_row("⚠️ Clientes atrasados:", f"[red]{summary.overdue_clients}[/]")
    table.add_row("📅 Despesas próximas (7 dias):", str(summary.upcoming_expenses))
    table.add_row("🔁 Despesas mensais:", format_brl(summary.monthly_recurring_expenses))

    console.print(Panel(table, title="Dashboard", border_style="blue", box=box.ROUNDED))
    return table
