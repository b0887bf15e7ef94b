# app/sdk/api_client.py
"""
Thin async HTTP client for the admin API.

Every non-2xx answer becomes an ApiError carrying the status code and the
error category sent by the server. A 2xx answer whose body is not JSON is
an ApiError too (category "malformed_response"). Transport failures (server
down, DNS, refused connection) become an ApiError without status.
"""
import logging
from typing import Any, Optional

import httpx
from pydantic_core import to_jsonable_python

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3001/api"


class ApiError(Exception):
    def __init__(self, message: str, status: Optional[int] = None, category: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.category = category

    def __repr__(self) -> str:
        return f"ApiError(status={self.status}, category={self.category!r}, message={self.message!r})"


class ApiClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(base_url=base_url, transport=transport)
        self.token = token

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def set_token(self, token: Optional[str]) -> None:
        self.token = token

    def clear_token(self) -> None:
        self.token = None

    async def request(self, method: str, endpoint: str, json: Any = None) -> Any:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        payload = to_jsonable_python(json) if json is not None else None
        logger.debug(f"API Request: {method} {endpoint}")
        try:
            response = await self._client.request(method, endpoint, json=payload, headers=headers)
        except httpx.TransportError as e:
            logger.error(f"API Error for {endpoint}: {e}")
            raise ApiError("Erro de conexão: Servidor não está respondendo", category="connection") from e

        if response.is_error:
            message = f"HTTP error! status: {response.status_code}"
            category = None
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                message = body.get("error") or message
                category = body.get("category")
            logger.error(f"API Error for {endpoint}: {response.status_code} {message}")
            raise ApiError(message, status=response.status_code, category=category)

        try:
            return response.json()
        except ValueError:
            logger.error(f"API Error for {endpoint}: {response.status_code} with non-JSON body")
            raise ApiError(
                "Resposta inválida do servidor", status=response.status_code, category="malformed_response"
            ) from None

    async def get(self, endpoint: str) -> Any:
        return await self.request("GET", endpoint)

    async def post(self, endpoint: str, data: Any) -> Any:
        return await self.request("POST", endpoint, json=data)

    async def put(self, endpoint: str, data: Any) -> Any:
        return await self.request("PUT", endpoint, json=data)

    async def delete(self, endpoint: str) -> Any:
        return await self.request("DELETE", endpoint)

    async def login(self, email: str, password: str) -> dict:
        """Authenticate and keep the access token for later calls."""
        result = await self.post("/auth/login", {"email": email, "password": password})
        self.set_token(result["tokens"]["accessToken"])
        return result
