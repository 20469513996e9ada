# tests/conftest.py
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx
import pytest

# Додаємо src в sys.path, щоб працював імпорт "lessoncart.…" без встановлення пакета
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from lessoncart.domain.cart.reservation import CartReservationManager  # noqa: E402
from lessoncart.infrastructure.api.lessons_api_client import LessonsApiClient  # noqa: E402
from lessoncart.infrastructure.catalog.catalog_store import CatalogStore  # noqa: E402

BASE_URL = "http://lessons.test"


class FakeLessonsBackend:
    """Мінімальний бекенд уроків поверх httpx.MockTransport (записує всі запити)."""

    def __init__(self, lessons: List[Dict[str, Any]]) -> None:
        self.lessons: Dict[str, Dict[str, Any]] = {str(item["_id"]): dict(item) for item in lessons}
        self.requests: List[httpx.Request] = []
        self.orders: List[Dict[str, Any]] = []
        self.search_results: Optional[List[Dict[str, Any]]] = None
        self.get_status = 200
        self.order_status = 201
        self.put_status: Dict[str, int] = {}
        self.put_failures_left: Dict[str, int] = {}
        self.raise_on: Dict[str, Exception] = {}

    # --- helpers for assertions ---
    def calls(self, method: str, prefix: str = "") -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path.startswith(prefix)]

    def put_bodies(self) -> Dict[str, Any]:
        return {r.url.path.rsplit("/", 1)[-1]: json.loads(r.content) for r in self.calls("PUT")}

    # --- transport ---
    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = f"{request.method} {request.url.path}"
        if key in self.raise_on:
            raise self.raise_on[key]

        path = request.url.path
        if request.method == "GET" and path == "/lessons":
            if self.get_status >= 400:
                return httpx.Response(self.get_status, json={"error": "boom"})
            return httpx.Response(200, json=list(self.lessons.values()))
        if request.method == "GET" and path == "/search":
            if self.get_status >= 400:
                return httpx.Response(self.get_status, json={"error": "boom"})
            if self.search_results is not None:
                return httpx.Response(200, json=self.search_results)
            q = request.url.params.get("q", "").lower()
            found = [item for item in self.lessons.values() if q in item.get("topic", "").lower()]
            return httpx.Response(200, json=found)
        if request.method == "POST" and path == "/orders":
            if self.order_status >= 400:
                return httpx.Response(self.order_status, json={"error": "rejected"})
            body = json.loads(request.content)
            self.orders.append(body)
            return httpx.Response(self.order_status, json={"ok": True, "orderId": len(self.orders)})
        if request.method == "PUT" and path.startswith("/lessons/"):
            lesson_id = path.rsplit("/", 1)[-1]
            if self.put_failures_left.get(lesson_id, 0) > 0:
                self.put_failures_left[lesson_id] -= 1
                return httpx.Response(503, json={"error": "busy"})
            status = self.put_status.get(lesson_id, 200)
            if status >= 400:
                return httpx.Response(status, json={"error": "rejected"})
            body = json.loads(request.content)
            if lesson_id in self.lessons:
                self.lessons[lesson_id]["space"] = body["space"]
            return httpx.Response(200, json={"ok": True})
        return httpx.Response(404, json={"error": "not found"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def make_lessons() -> List[Dict[str, Any]]:
    return [
        {"_id": 1, "topic": "Math", "subject": "Algebra", "location": "London", "price": 100, "space": 5, "image": "math.png"},
        {"_id": 2, "topic": "english", "subject": "Grammar", "location": "Oxford", "price": 80, "space": 3, "image": "english.png"},
        {"_id": 3, "topic": "Art", "subject": "Painting", "location": "Bristol", "price": 90, "space": 0, "image": "art.png"},
    ]


@pytest.fixture
def backend() -> FakeLessonsBackend:
    return FakeLessonsBackend(make_lessons())


@pytest.fixture
def api(backend: FakeLessonsBackend) -> LessonsApiClient:
    return LessonsApiClient(BASE_URL, timeout=2.0, transport=backend.transport())


@pytest.fixture
def catalog(api: LessonsApiClient) -> CatalogStore:
    return CatalogStore(api)


@pytest.fixture
def cart(catalog: CatalogStore) -> CartReservationManager:
    return CartReservationManager(catalog)
