# app/sdk/data_cache.py
"""
In-memory cache of the admin collections for one session.

Lifecycle:
    cache = DataCache(ApiClient(base_url))
    await cache.on_session_start(token)   # fan-out fetch of all collections
    await cache.update_client(3, {"dueDay": 10})
    await cache.on_session_end()          # back to uninitialized

Each collection moves uninitialized -> loading -> loaded | failed on its own;
a failure in one never blocks the others. Mutations apply the server's
canonical record locally. When a mutation fails the cache awaits a full
refetch from the API before re-raising, so by the time the caller sees the
error the collections match the store again.
"""
import asyncio
import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from .api_client import ApiClient, ApiError

logger = logging.getLogger(__name__)

COLLECTIONS = ("clients", "expenses", "projects")

TOTAL_FAILURE_MESSAGE = "Falha ao carregar todos os dados. Verifique sua conexão e tente novamente."
PARTIAL_FAILURE_PREFIX = "Alguns dados não puderam ser carregados: "


class CollectionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class LoadState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    LOADED = "loaded"
    PARTIALLY_LOADED = "partially_loaded"
    FAILED = "failed"


class DataCache:
    def __init__(self, api: ApiClient):
        self.api = api
        self.authenticated = False
        self._reset()

    # --- State ---

    def _reset(self) -> None:
        self._collections: Dict[str, List[Dict[str, Any]]] = {name: [] for name in COLLECTIONS}
        self.collection_states: Dict[str, CollectionState] = {
            name: CollectionState.UNINITIALIZED for name in COLLECTIONS
        }
        self.detailed_errors: Dict[str, str] = {}
        self.error: Optional[str] = None

    @property
    def clients(self) -> List[Dict[str, Any]]:
        return self._collections["clients"]

    @property
    def expenses(self) -> List[Dict[str, Any]]:
        return self._collections["expenses"]

    @property
    def projects(self) -> List[Dict[str, Any]]:
        return self._collections["projects"]

    @property
    def loading(self) -> bool:
        return any(s is CollectionState.LOADING for s in self.collection_states.values())

    @property
    def load_state(self) -> LoadState:
        states = set(self.collection_states.values())
        if CollectionState.LOADING in states:
            return LoadState.LOADING
        if states == {CollectionState.UNINITIALIZED}:
            return LoadState.UNINITIALIZED
        if states == {CollectionState.LOADED}:
            return LoadState.LOADED
        if states == {CollectionState.FAILED}:
            return LoadState.FAILED
        return LoadState.PARTIALLY_LOADED

    # --- Session lifecycle ---

    async def on_session_start(self, token: Optional[str] = None) -> None:
        if token is not None:
            self.api.set_token(token)
        self.authenticated = True
        await self.refetch()

    async def on_session_end(self) -> None:
        self.authenticated = False
        self.api.clear_token()
        self._reset()
        logger.info("Sessão encerrada, cache limpo")

    async def refetch(self) -> None:
        """
        Fetch every collection concurrently and record each outcome under its
        own name, whatever order the responses arrive in.
        """
        if not self.authenticated:
            self._reset()
            return

        self.error = None
        self.detailed_errors = {}
        for name in COLLECTIONS:
            self.collection_states[name] = CollectionState.LOADING

        results = await asyncio.gather(
            *(self.api.get(f"/{name}") for name in COLLECTIONS),
            return_exceptions=True,
        )

        errors: Dict[str, str] = {}
        for name, result in zip(COLLECTIONS, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.error(f"Erro ao carregar {name}: {result}")
                errors[name] = str(result) or f"Erro ao carregar {name}"
                self._collections[name] = []
                self.collection_states[name] = CollectionState.FAILED
            else:
                self._collections[name] = list(result) if isinstance(result, list) else []
                self.collection_states[name] = CollectionState.LOADED
                logger.info(f"{name} carregados: {len(self._collections[name])}")

        self.detailed_errors = errors
        if len(errors) == len(COLLECTIONS):
            self.error = TOTAL_FAILURE_MESSAGE
        elif errors:
            self.error = PARTIAL_FAILURE_PREFIX + ", ".join(errors)

    # --- Generic mutation helpers ---

    async def _resync(self, error: ApiError, action: str) -> None:
        logger.error(f"Erro ao {action}: {error}; ressincronizando")
        await self.refetch()

    async def _add(self, name: str, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            record = await self.api.post(f"/{name}", data)
        except ApiError as e:
            await self._resync(e, f"adicionar em {name}")
            raise
        self._collections[name] = [*self._collections[name], record]
        return record

    async def _update(self, name: str, record_id: int, changes: Dict[str, Any]) -> Dict[str, Any]:
        try:
            record = await self.api.put(f"/{name}/{record_id}", changes)
        except ApiError as e:
            await self._resync(e, f"atualizar {name}/{record_id}")
            raise
        self._replace(name, record)
        return record

    async def _delete(self, name: str, record_id: int) -> None:
        try:
            await self.api.delete(f"/{name}/{record_id}")
        except ApiError as e:
            await self._resync(e, f"deletar {name}/{record_id}")
            raise
        self._collections[name] = [r for r in self._collections[name] if r.get("id") != record_id]

    def _replace(self, name: str, record: Dict[str, Any]) -> None:
        self._collections[name] = [
            record if r.get("id") == record.get("id") else r for r in self._collections[name]
        ]

    # --- Clients ---

    async def add_client(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._add("clients", data)

    async def update_client(self, client_id: int, changes: Dict[str, Any]) -> Dict[str, Any]:
        return await self._update("clients", client_id, changes)

    async def delete_client(self, client_id: int) -> None:
        await self._delete("clients", client_id)

    # --- Expenses ---

    async def add_expense(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._add("expenses", data)

    async def update_expense(self, expense_id: int, changes: Dict[str, Any]) -> Dict[str, Any]:
        return await self._update("expenses", expense_id, changes)

    async def delete_expense(self, expense_id: int) -> None:
        await self._delete("expenses", expense_id)

    # --- Projects ---

    async def add_project(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._add("projects", data)

    async def update_project(self, project_id: int, changes: Dict[str, Any]) -> Dict[str, Any]:
        return await self._update("projects", project_id, changes)

    async def delete_project(self, project_id: int) -> None:
        await self._delete("projects", project_id)

    async def reorder_projects(self, projects: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Persist the given sequence as the display order (order = position).
        The new order is shown immediately; the server's listing replaces it
        once the bulk update succeeds.
        """
        reordered = [{**project, "order": index} for index, project in enumerate(projects)]
        self._collections["projects"] = reordered
        payload = {"projects": [{"id": p["id"], "order": p["order"]} for p in reordered]}
        try:
            records = await self.api.put("/projects/order", payload)
        except ApiError as e:
            await self._resync(e, "reordenar projetos")
            raise
        self._collections["projects"] = list(records)
        return self.projects

    # --- Payment history ---

    async def add_payment_history(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.api.post("/payment-history", data)

    async def get_payment_history(self, client_id: int) -> List[Dict[str, Any]]:
        return await self.api.get(f"/payment-history/{client_id}")

    async def confirm_payment(
        self,
        client_id: int,
        amount_received: float,
        payment_date: Any,
        observations: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Mark the client as paid and record the payment. Returns the history row."""
        payload = {"amountReceived": amount_received, "paymentDate": payment_date}
        if observations and observations.strip():
            payload["observations"] = observations.strip()
        try:
            result = await self.api.post(f"/clients/{client_id}/payments/confirm", payload)
        except ApiError as e:
            await self._resync(e, f"confirmar pagamento do cliente {client_id}")
            raise
        self._replace("clients", result["client"])
        return result["payment"]
