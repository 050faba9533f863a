import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """
    Ошибка обращения к API. status_code == 0 означает сетевую ошибку.
    """

    def __init__(self, status_code: int, payload: Any = None):
        self.status_code = status_code
        self.payload = payload
        super().__init__(self.message)

    @property
    def message(self) -> str:
        if isinstance(self.payload, dict) and self.payload.get("error"):
            return str(self.payload["error"])
        if self.status_code == 0:
            return f"Network error: {self.payload}"
        return f"HTTP {self.status_code}"

    @property
    def details(self) -> List[Dict[str, str]]:
        if isinstance(self.payload, dict):
            return self.payload.get("details") or []
        return []


class Resource:
    """CRUD-обёртка над одной коллекцией API (/tasks, /task-types, /users)."""

    def __init__(self, client: "TaskboardClient", path: str):
        self._client = client
        self._path = path

    def list(self, **params) -> List[Dict[str, Any]]:
        query = {key: value for key, value in params.items() if value}
        return self._client.request("GET", self._path, params=query or None)

    def get(self, item_id: int) -> Dict[str, Any]:
        return self._client.request("GET", f"{self._path}/{item_id}")

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._client.request("POST", self._path, json=data)

    def update(self, item_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._client.request("PUT", f"{self._path}/{item_id}", json=data)

    def delete(self, item_id: int) -> Dict[str, Any]:
        return self._client.request("DELETE", f"{self._path}/{item_id}")


class TaskboardClient:
    """
    Синхронный клиент REST API. Принимает готовый httpx.Client
    (в тестах это fastapi.testclient.TestClient) или создаёт свой по base_url.
    """

    def __init__(self, base_url: str = "http://localhost:3001", http: Optional[httpx.Client] = None,
                 prefix: str = "/api", timeout: float = 10.0):
        self._owns_http = http is None
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self.prefix = prefix.rstrip("/")
        self.tasks = Resource(self, "/tasks")
        self.task_types = Resource(self, "/task-types")
        self.users = Resource(self, "/users")

    def request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.prefix}{path}"
        try:
            response = self.http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {url}: сетевая ошибка {e}")
            raise ApiError(0, str(e)) from e
        if response.is_error:
            try:
                payload = response.json()
            except ValueError:
                payload = response.text
            logger.warning(f"{method} {url}: HTTP {response.status_code} {payload}")
            raise ApiError(response.status_code, payload)
        return response.json()

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "TaskboardClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
