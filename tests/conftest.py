"""
Pytest fixtures and configuration for PetStoreApp tests

Downstream services are replaced by an httpx.MockTransport backed by
FakeDownstream, so no network is needed.
"""
import asyncio
import json
import time
from typing import Any, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient
from jose import jwt

from petstoreapp.connectors.petstore_connector import PetStoreConnector
from petstoreapp.core.config import Settings
from petstoreapp.domain.environment import ContainerEnvironment
from petstoreapp.domain.user import SessionUser
from petstoreapp.main import create_app
from petstoreapp.services.petstore_service import PetStoreService

PET_URL = "http://pets.test"
PRODUCT_URL = "http://products.test"
ORDER_URL = "http://orders.test"
FUNCTION_URL = "http://function.test"
SEARCH_URL = "http://search.test/v7.0/search"
AUTH_SECRET = "test-secret"


def pet(pet_id: int, name: str, category: str, tags: Optional[List[str]] = None) -> Dict[str, Any]:
    return {
        "id": pet_id,
        "name": name,
        "category": {"id": 1, "name": category},
        "photoURL": f"https://img.test/{name.lower()}.jpg",
        "tags": [{"id": i, "name": t} for i, t in enumerate(tags or [])],
        "status": "available",
    }


def product(product_id: int, name: str, category: str, tags: List[str]) -> Dict[str, Any]:
    return {
        "id": product_id,
        "name": name,
        "category": {"id": 1, "name": category},
        "photoURL": f"https://img.test/p{product_id}.jpg",
        "tags": [{"id": i, "name": t} for i, t in enumerate(tags)],
        "status": "available",
    }


class FakeDownstream:
    """
    In-memory stand-in for the pet, product and order services, the order
    relay function and web search. Records every request it sees.
    """

    def __init__(self):
        self.pets = [
            pet(1, "Rex", "Dog", ["large"]),
            pet(2, "Felix", "Cat", ["small"]),
            pet(3, "Nemo", "Fish", ["small"]),
            pet(4, "Pug", "Dog", ["small"]),
        ]
        self.products = [
            product(10, "Big Ball", "Dog Toy", ["large"]),
            product(11, "Tiny Ball", "Dog Toy", ["small"]),
            product(12, "Kibble", "Dog Food", ["small"]),
            product(13, "Large-ish Rope", "Dog Toy", ["largeish"]),
            product(14, "Mouse", "Cat Toy", ["small"]),
        ]
        self.orders: Dict[str, Dict[str, Any]] = {}
        self.requests: List[httpx.Request] = []
        self.fail_with: Optional[str] = None
        self.fail_function = False
        self.search_results: Dict[str, Any] = {
            "webPages": {
                "webSearchUrl": "https://www.bing.test/search?q=x",
                "totalEstimatedMatches": 1,
                "value": [{"name": "A store", "url": "https://store.test", "snippet": "Pets"}],
            }
        }

    def requests_to(self, host: str, method: Optional[str] = None) -> List[httpx.Request]:
        return [r for r in self.requests
                if r.url.host == host and (method is None or r.method == method)]

    def order_bodies(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests_to("orders.test", "POST")]

    def _update_order(self, body: Dict[str, Any]) -> Dict[str, Any]:
        order = self.orders.setdefault(body["id"], {"id": body["id"], "products": [], "complete": False})
        if body.get("email"):
            order["email"] = body["email"]
        if body.get("complete"):
            order["complete"] = True
        for item in body.get("products") or []:
            existing = next((p for p in order["products"] if p["id"] == item["id"]), None)
            if existing is None:
                order["products"].append({"id": item["id"], "quantity": item["quantity"]})
            else:
                existing["quantity"] += item["quantity"]
        order["products"] = [p for p in order["products"] if p["quantity"] > 0]
        return order

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with:
            raise httpx.ConnectError(self.fail_with, request=request)

        host, path = request.url.host, request.url.path
        if host == "pets.test" and path == "/petstorepetservice/v2/pet/findByStatus":
            return httpx.Response(200, content=json.dumps(self.pets))
        if host == "products.test" and path == "/petstoreproductservice/v2/product/findByStatus":
            return httpx.Response(200, content=json.dumps(self.products))
        if host == "orders.test" and path == "/petstoreorderservice/v2/store/order":
            return httpx.Response(200, json=self._update_order(json.loads(request.content)))
        if host == "orders.test" and path.startswith("/petstoreorderservice/v2/store/order/"):
            order = self.orders.get(path.rsplit("/", 1)[-1])
            if order is None:
                return httpx.Response(404, json={"message": "order not found"})
            return httpx.Response(200, json=order)
        if host == "function.test" and path == "/api/HttpExample":
            if self.fail_function:
                return httpx.Response(500, text="function failed")
            return httpx.Response(200, json={})
        if host == "search.test":
            return httpx.Response(200, json=self.search_results)
        return httpx.Response(404)


@pytest.fixture
def downstream():
    return FakeDownstream()


@pytest.fixture
def settings():
    """Settings pointing at the fake downstream hosts, no .env"""
    return Settings(
        _env_file=None,
        PETSTOREPETSERVICE_URL=PET_URL,
        PETSTOREPRODUCTSERVICE_URL=PRODUCT_URL,
        PETSTOREORDERSERVICE_URL=ORDER_URL,
        PETSTORE_FUNCTION_URL=FUNCTION_URL,
        PETSTORE_APIM_SUBSCRIPTION_KEY="apim-key",
        BING_SEARCH_URL=SEARCH_URL,
        BING_SEARCH_SUBSCRIPTION_KEY="bing-key",
        AUTH_SECRET=AUTH_SECRET,
        SLOWNESS_DELAY_SECONDS=0,
        CONTAINER_HOST_NAME="test-host",
    )


@pytest.fixture
def environment(settings):
    return ContainerEnvironment.from_settings(settings)


@pytest.fixture
def session_user():
    user = SessionUser()
    user.assign_session_id("session-abc")
    return user


@pytest.fixture
def make_service(downstream, environment, session_user):
    """
    Factory for a PetStoreService wired to the fake downstream.

    Usage:
        service = make_service()
        service = make_service(environment=other_env)
    """
    clients: List[httpx.AsyncClient] = []

    def _make(environment: ContainerEnvironment = environment, user: SessionUser = session_user,
              headers: Optional[Dict[str, str]] = None) -> PetStoreService:
        client = httpx.AsyncClient(transport=httpx.MockTransport(downstream))
        clients.append(client)
        connector = PetStoreConnector(client, environment, headers or {"session-id": user.session_id})
        return PetStoreService(user, environment, connector)

    yield _make

    for client in clients:
        asyncio.run(client.aclose())


@pytest.fixture
def app(settings, downstream):
    return create_app(settings, transport=httpx.MockTransport(downstream))


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def id_token():
    """Signed ID token for a signed-in customer"""
    def _token(name: str = "Jane Doe", emails: Any = None, **extra) -> str:
        payload = {
            "sub": "user-1",
            "name": name,
            "emails": emails if emails is not None else ["jane@example.com"],
            "roles": ["customer"],
            "exp": int(time.time()) + 3600,
        }
        payload.update(extra)
        return jwt.encode(payload, AUTH_SECRET, algorithm="HS256")

    return _token
