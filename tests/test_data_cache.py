"""DataCache behaviour against a scripted API (httpx.MockTransport)."""
import asyncio
import json

import httpx
import pytest

from app.sdk import ApiClient, ApiError, DataCache, LoadState
from app.sdk.data_cache import PARTIAL_FAILURE_PREFIX, TOTAL_FAILURE_MESSAGE


class FakeApi:
    """Minimal in-memory server: three collections plus failure switches."""

    def __init__(self):
        self.data = {
            "clients": [{"id": 1, "companyName": "ACME", "paymentStatus": "Pendente", "monthlyValue": 100.0}],
            "expenses": [{"id": 1, "description": "Aluguel", "amount": 50.0}],
            "projects": [{"id": 1, "title": "A", "order": 0}, {"id": 2, "title": "B", "order": 1}],
        }
        self.failing = set()
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.method, request.url.path, request.headers.get("Authorization")))
        parts = request.url.path.strip("/").split("/")[1:]
        name = parts[0]

        if name in self.failing or (request.method, name) in self.failing:
            return httpx.Response(503, json={"error": f"{name} indisponível", "category": "store_unavailable"})

        body = json.loads(request.content) if request.content else None

        if request.method == "GET" and len(parts) == 1:
            return httpx.Response(200, json=self.data[name])
        if request.method == "POST" and name == "clients" and len(parts) == 4:
            client_id = int(parts[1])
            client = next(c for c in self.data["clients"] if c["id"] == client_id)
            client["paymentStatus"] = "Pago"
            payment = {"id": 10, "clientId": client_id, **body, "status": "Pago"}
            return httpx.Response(201, json={"client": client, "payment": payment})
        if request.method == "POST":
            record = {"id": 100 + len(self.data[name]), **body}
            self.data[name].append(record)
            return httpx.Response(201, json=record)
        if request.method == "PUT" and parts[1] == "order":
            order = {item["id"]: item["order"] for item in body["projects"]}
            for project in self.data["projects"]:
                project["order"] = order.get(project["id"], project["order"])
            self.data["projects"].sort(key=lambda p: p["order"])
            return httpx.Response(200, json=self.data["projects"])
        if request.method == "PUT":
            record = next((r for r in self.data[name] if r["id"] == int(parts[1])), None)
            if record is None:
                return httpx.Response(404, json={"error": "não encontrado", "category": "not_found"})
            record.update(body)
            return httpx.Response(200, json=record)
        if request.method == "DELETE":
            record_id = int(parts[1])
            self.data[name] = [r for r in self.data[name] if r["id"] != record_id]
            return httpx.Response(200, json={"message": "ok", "id": record_id})
        return httpx.Response(404, json={"error": "Rota não encontrada", "category": "not_found"})


@pytest.fixture()
def fake_api():
    return FakeApi()


def _cache(fake_api: FakeApi) -> DataCache:
    api = ApiClient(base_url="http://testserver/api", transport=httpx.MockTransport(fake_api.handler))
    return DataCache(api)


def test_initial_state_is_uninitialized(fake_api) -> None:
    cache = _cache(fake_api)

    assert cache.load_state is LoadState.UNINITIALIZED
    assert cache.clients == [] and cache.error is None


def test_session_start_loads_all_collections(fake_api) -> None:
    cache = _cache(fake_api)

    asyncio.run(cache.on_session_start("token-123"))

    assert cache.load_state is LoadState.LOADED
    assert len(cache.clients) == 1 and len(cache.expenses) == 1 and len(cache.projects) == 2
    assert cache.error is None
    assert all(auth == "Bearer token-123" for _, _, auth in fake_api.requests)


def test_partial_failure_is_isolated(fake_api) -> None:
    fake_api.failing.add("expenses")
    cache = _cache(fake_api)

    asyncio.run(cache.on_session_start("t"))

    assert cache.load_state is LoadState.PARTIALLY_LOADED
    assert cache.expenses == []
    assert len(cache.clients) == 1 and len(cache.projects) == 2
    assert set(cache.detailed_errors) == {"expenses"}
    assert cache.error == PARTIAL_FAILURE_PREFIX + "expenses"


def test_total_failure(fake_api) -> None:
    fake_api.failing.update({"clients", "expenses", "projects"})
    cache = _cache(fake_api)

    asyncio.run(cache.on_session_start("t"))

    assert cache.load_state is LoadState.FAILED
    assert cache.error == TOTAL_FAILURE_MESSAGE
    assert set(cache.detailed_errors) == {"clients", "expenses", "projects"}


def test_results_attributed_regardless_of_completion_order(fake_api) -> None:
    delays = {"clients": 0.03, "expenses": 0.0, "projects": 0.01}

    async def slow_handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(delays[request.url.path.rsplit("/", 1)[-1]])
        return fake_api.handler(request)

    cache = DataCache(ApiClient(base_url="http://testserver/api", transport=httpx.MockTransport(slow_handler)))

    asyncio.run(cache.on_session_start("t"))

    assert cache.clients[0]["companyName"] == "ACME"
    assert cache.expenses[0]["description"] == "Aluguel"
    assert cache.projects[0]["title"] == "A"


def test_refetch_without_session_clears(fake_api) -> None:
    cache = _cache(fake_api)

    asyncio.run(cache.refetch())

    assert fake_api.requests == []
    assert cache.load_state is LoadState.UNINITIALIZED


def test_session_end_clears_everything(fake_api) -> None:
    cache = _cache(fake_api)

    async def scenario():
        await cache.on_session_start("t")
        await cache.on_session_end()

    asyncio.run(scenario())

    assert cache.clients == [] and cache.projects == []
    assert cache.load_state is LoadState.UNINITIALIZED
    assert cache.api.token is None


def test_add_update_delete_apply_server_records(fake_api) -> None:
    cache = _cache(fake_api)

    async def scenario():
        await cache.on_session_start("t")
        added = await cache.add_client({"companyName": "Nova", "paymentStatus": "Pendente"})
        await cache.update_client(1, {"paymentStatus": "Atrasado"})
        await cache.delete_expense(1)
        return added

    added = asyncio.run(scenario())

    assert added["id"] in [c["id"] for c in cache.clients]
    assert next(c for c in cache.clients if c["id"] == 1)["paymentStatus"] == "Atrasado"
    assert cache.expenses == []


def test_failed_mutation_refetches_then_raises(fake_api) -> None:
    cache = _cache(fake_api)

    async def scenario():
        await cache.on_session_start("t")
        cache.clients[0]["companyName"] = "local edit"
        fake_api.requests.clear()
        await cache.update_client(404, {"dueDay": 3})

    with pytest.raises(ApiError) as excinfo:
        asyncio.run(scenario())

    assert excinfo.value.status == 404
    assert excinfo.value.category == "not_found"
    refetched = {path for method, path, _ in fake_api.requests if method == "GET"}
    assert refetched == {"/api/clients", "/api/expenses", "/api/projects"}
    assert cache.clients[0]["companyName"] == "ACME"


def test_failed_add_refetches_too(fake_api) -> None:
    cache = _cache(fake_api)
    fake_api.failing.add(("POST", "projects"))

    async def scenario():
        await cache.on_session_start("t")
        fake_api.requests.clear()
        await cache.add_project({"title": "C"})

    with pytest.raises(ApiError):
        asyncio.run(scenario())

    assert ("GET", "/api/projects", "Bearer t") in fake_api.requests
    assert len(cache.projects) == 2


def test_reorder_projects(fake_api) -> None:
    cache = _cache(fake_api)

    async def scenario():
        await cache.on_session_start("t")
        return await cache.reorder_projects(list(reversed(cache.projects)))

    projects = asyncio.run(scenario())

    assert [p["title"] for p in projects] == ["B", "A"]
    assert [p["order"] for p in projects] == [0, 1]


def test_confirm_payment_updates_client(fake_api) -> None:
    cache = _cache(fake_api)

    async def scenario():
        await cache.on_session_start("t")
        return await cache.confirm_payment(1, 100.0, "2026-03-10", observations="  PIX  ")

    payment = asyncio.run(scenario())

    assert payment["status"] == "Pago"
    assert payment["observations"] == "PIX"
    assert cache.clients[0]["paymentStatus"] == "Pago"


def test_connection_failure_becomes_api_error() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    api = ApiClient(base_url="http://testserver/api", transport=httpx.MockTransport(refuse))

    with pytest.raises(ApiError) as excinfo:
        asyncio.run(api.get("/clients"))

    assert excinfo.value.status is None
    assert excinfo.value.category == "connection"


def test_non_json_success_body_refetches_then_raises(fake_api) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "PUT":
            fake_api.requests.append((request.method, request.url.path, request.headers.get("Authorization")))
            return httpx.Response(200, content=b"oops")
        return fake_api.handler(request)

    cache = DataCache(ApiClient(base_url="http://testserver/api", transport=httpx.MockTransport(handler)))

    async def scenario():
        await cache.on_session_start("t")
        fake_api.requests.clear()
        await cache.update_client(1, {"dueDay": 3})

    with pytest.raises(ApiError) as excinfo:
        asyncio.run(scenario())

    assert excinfo.value.status == 200
    assert excinfo.value.category == "malformed_response"
    refetched = {path for method, path, _ in fake_api.requests if method == "GET"}
    assert refetched == {"/api/clients", "/api/expenses", "/api/projects"}
