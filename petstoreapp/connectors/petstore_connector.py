"""
Pet Store downstream services connector
Raw HTTP access to the pet, product and order services and the order relay function

ENDPOINTS:
- GET  {pet service}/petstorepetservice/v2/pet/findByStatus?status=available
- GET  {product service}/petstoreproductservice/v2/product/findByStatus?status=available
- POST {order service}/petstoreorderservice/v2/store/order
- GET  {order service}/petstoreorderservice/v2/store/order/{orderId}
- POST {function}/api/HttpExample

Every request carries the forwarded header set it was built with, unchanged.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter

from petstoreapp.domain.environment import ContainerEnvironment
from petstoreapp.domain.order import Order
from petstoreapp.domain.pet import Pet
from petstoreapp.domain.product import Product

logger = logging.getLogger(__name__)

_PETS = TypeAdapter(List[Pet])
_PRODUCTS = TypeAdapter(List[Product])


class ServiceConfigurationError(ValueError):
    """A downstream base URL is missing or unusable"""


class PetStoreConnector:
    """
    Connector for the Pet Store downstream services

    Handles:
    - URL building from the container environment
    - Forwarded and JSON headers
    - Decoding into domain models
    """

    PET_SERVICE_PATH = "petstorepetservice/v2/pet/findByStatus?status=available"
    PRODUCT_SERVICE_PATH = "petstoreproductservice/v2/product/findByStatus?status=available"
    ORDER_SERVICE_PATH = "petstoreorderservice/v2/store/order"
    FUNCTION_PATH = "api/HttpExample"

    def __init__(self, client: httpx.AsyncClient, environment: ContainerEnvironment,
                 forwarded_headers: Optional[Mapping[str, str]] = None):
        """
        Initialize connector

        Args:
            client: Shared async HTTP client (opened in the app lifespan)
            environment: Base URLs of the downstream services
            forwarded_headers: Headers to pass through on every call
        """
        self.client = client
        self.environment = environment
        self.headers: Dict[str, str] = dict(forwarded_headers or {})
        self.headers.update({
            'Accept': 'application/json',
            'Content-Type': 'application/json',
            'Cache-Control': 'no-cache',
        })

    @staticmethod
    def build_url(base_url: str, path: str, setting_name: str) -> str:
        """
        Join a service base URL and a relative path

        Raises:
            ServiceConfigurationError if the base URL is empty or has no http(s) scheme
        """
        if not base_url:
            raise ServiceConfigurationError(f"{setting_name} is not set")
        if not base_url.startswith(("http://", "https://")):
            raise ServiceConfigurationError(f"{setting_name}='{base_url}' is not an http(s) URL")
        return f"{base_url.rstrip('/')}/{path}"

    async def _get_json(self, url: str) -> Any:
        response = await self.client.get(url, headers=self.headers)
        response.raise_for_status()
        return response.json()

    async def _post_json(self, url: str, body: str) -> Any:
        response = await self.client.post(url, content=body, headers=self.headers)
        response.raise_for_status()
        if not response.content:
            return None
        return response.json()

    async def get_available_pets(self) -> List[Pet]:
        url = self.build_url(self.environment.pet_service_url, self.PET_SERVICE_PATH,
                             "PETSTOREPETSERVICE_URL")
        return _PETS.validate_python(await self._get_json(url) or [])

    async def get_available_products(self) -> List[Product]:
        url = self.build_url(self.environment.product_service_url, self.PRODUCT_SERVICE_PATH,
                             "PETSTOREPRODUCTSERVICE_URL")
        return _PRODUCTS.validate_python(await self._get_json(url) or [])

    async def post_order(self, order_json: str) -> Optional[Order]:
        """Submit an order update; returns the order as reconciled by the service"""
        url = self.build_url(self.environment.order_service_url, self.ORDER_SERVICE_PATH,
                             "PETSTOREORDERSERVICE_URL")
        data = await self._post_json(url, order_json)
        return Order.model_validate(data) if data else None

    async def relay_order(self, order_json: str) -> None:
        """Forward the order body to the serverless function, response discarded"""
        url = self.build_url(self.environment.function_url, self.FUNCTION_PATH,
                             "PETSTORE_FUNCTION_URL")
        response = await self.client.post(url, content=order_json, headers=self.headers)
        response.raise_for_status()

    async def get_order(self, order_id: str) -> Optional[Order]:
        url = self.build_url(self.environment.order_service_url,
                             f"{self.ORDER_SERVICE_PATH}/{quote(order_id, safe='')}",
                             "PETSTOREORDERSERVICE_URL")
        data = await self._get_json(url)
        return Order.model_validate(data) if data else None
