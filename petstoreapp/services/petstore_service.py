"""
Pet Store Service
Session-aware access to the pet, product and order services

fetch_* methods return a ServiceResult; get_* methods turn a Failure into a
single placeholder entity whose name carries the error text, so the page can
show what went wrong.
"""
import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from petstoreapp.connectors.petstore_connector import PetStoreConnector, ServiceConfigurationError
from petstoreapp.domain.environment import ContainerEnvironment
from petstoreapp.domain.order import Order
from petstoreapp.domain.pet import Category, Pet, Tag
from petstoreapp.domain.product import Product
from petstoreapp.domain.result import CONFIGURATION, TRANSPORT, Failure, ServiceResult, Success
from petstoreapp.domain.user import SessionUser

logger = logging.getLogger(__name__)

PET_SERVICE_DISABLED = (
    "petstore.service.url:${PETSTOREPETSERVICE_URL} needs to be enabled for this service to work"
)
PRODUCT_SERVICE_DISABLED = (
    "petstore.service.url:${PETSTOREPRODUCTSERVICE_URL} needs to be enabled for this service to work"
)

LARGE = "large"
SMALL = "small"

# ValueError also covers ServiceConfigurationError
DOWNSTREAM_ERRORS = (httpx.HTTPError, httpx.InvalidURL, ValidationError, ValueError)


def placeholder_pet(failure: Failure) -> Pet:
    """Pet that only exists to carry an error message into the page"""
    name = failure.message
    if failure.kind == CONFIGURATION:
        name = f"{PET_SERVICE_DISABLED}: {failure.message}"
    return Pet(id=0, name=name, photo_url="", category=Category())


def placeholder_product(failure: Failure) -> Product:
    """Product that only exists to carry an error message into the page"""
    name = failure.message
    if failure.kind == CONFIGURATION:
        name = f"{PRODUCT_SERVICE_DISABLED}: {failure.message}"
    return Product(id=0, name=name, photo_url="", category=Category())


class PetStoreService:
    """
    Service for the Pet Store pages

    Handles:
    - Pet and product retrieval with per-session caching of the full lists
    - Category / size filtering
    - Order updates (plus relay to the serverless function) and retrieval
    - Telemetry for each downstream call
    """

    def __init__(self, session_user: SessionUser, environment: ContainerEnvironment,
                 connector: PetStoreConnector):
        self.session_user = session_user
        self.environment = environment
        self.connector = connector

    @property
    def telemetry(self):
        return self.session_user.telemetry_client

    def _track_failure(self, exc: Exception) -> None:
        self.telemetry.track_exception(exc)
        self.telemetry.track_event(
            f"PetStoreApp {self.session_user.name} received {exc}, "
            f"container host: {self.environment.container_host_name}"
        )

    async def fetch_pets(self, category: str) -> ServiceResult[List[Pet]]:
        """
        Get available pets of one category

        Side effect: the full, unfiltered list is cached on the session user
        for the breed details page.

        Args:
            category: Exact category name (Dog, Cat, Fish)
        """
        self.telemetry.track_event(
            f"PetStoreApp user {self.session_user.name} is requesting to retrieve pets from the PetStorePetService",
            self.session_user.get_custom_event_properties(),
        )
        try:
            pets = await self.connector.get_available_pets()
        except ServiceConfigurationError as e:
            logger.warning(f"Pet service not configured: {e}")
            return Failure(str(e), CONFIGURATION)
        except DOWNSTREAM_ERRORS as e:
            logger.warning(f"Pet service call failed: {e}")
            self._track_failure(e)
            return Failure(str(e), TRANSPORT)

        self.session_user.pets = pets
        return Success([pet for pet in pets if pet.category_name == category])

    async def get_pets(self, category: str) -> List[Pet]:
        """Pets of one category, or a single placeholder pet on failure"""
        result = await self.fetch_pets(category)
        if isinstance(result, Failure):
            return [placeholder_pet(result)]
        return result.value

    async def fetch_products(self, category: str, tags: Optional[List[Tag]]) -> ServiceResult[List[Product]]:
        """
        Get available products for a pet category and size

        Args:
            category: Product category name, e.g. "Dog Toy"
            tags: Tags of the selected pet; a tag named "large" selects large
                  products, anything else selects small ones
        """
        self.telemetry.track_event(
            f"PetStoreApp user {self.session_user.name} is making request with session id "
            f"{self.session_user.session_id}"
        )
        logger.info(
            f"PetStoreApp user {self.session_user.name} is making request with session id "
            f"{self.session_user.session_id}"
        )
        try:
            products = await self.connector.get_available_products()
        except ServiceConfigurationError as e:
            logger.warning(f"Product service not configured: {e}")
            return Failure(str(e), CONFIGURATION)
        except DOWNSTREAM_ERRORS as e:
            logger.warning(f"Product service call failed: {e}")
            self._track_failure(e)
            return Failure(str(e), TRANSPORT)

        self.session_user.products = products

        size = LARGE if any(tag.name == LARGE for tag in tags or []) else SMALL
        matching = [
            product for product in products
            if product.category_name == category and product.has_tag(size)
        ]
        self.telemetry.track_metric("Product count", len(matching))
        return Success(matching)

    async def get_products(self, category: str, tags: Optional[List[Tag]]) -> List[Product]:
        """Matching products, or a single placeholder product on failure"""
        result = await self.fetch_products(category, tags)
        if isinstance(result, Failure):
            return [placeholder_product(result)]
        return result.value

    def build_order(self, product_id: int, quantity: int, complete: bool) -> Order:
        """Order update for this session: either one line item or the completion flag"""
        order = Order(id=self.session_user.session_id, email=self.session_user.email)
        if complete:
            order.complete = True
        else:
            order.products = [Product(id=product_id, quantity=quantity)]
        return order

    async def update_order(self, product_id: int, quantity: int, complete: bool) -> None:
        """
        Send an order update to the order service, then relay it to the
        serverless function. Failures are logged, never raised.
        """
        self.telemetry.track_event(
            f"PetStoreApp user {self.session_user.name} is requesting to update an order with the "
            f"PetStoreOrderService",
            self.session_user.get_custom_event_properties(),
        )

        order_json = self.build_order(product_id, quantity, complete).to_json()

        try:
            await self.connector.post_order(order_json)
        except DOWNSTREAM_ERRORS as e:
            logger.warning(f"Order update failed: {e}")
            return

        if not self.environment.function_url:
            logger.debug("PETSTORE_FUNCTION_URL not set, skipping order relay")
            return

        try:
            await self.connector.relay_order(order_json)
        except DOWNSTREAM_ERRORS as e:
            logger.warning(f"Order relay failed: {e}")

    async def retrieve_order(self, order_id: str) -> Optional[Order]:
        """Order by id, or None when it can't be retrieved"""
        self.telemetry.track_event(
            f"PetStoreApp user {self.session_user.name} is requesting to retrieve an order from the "
            f"PetStoreOrderService",
            self.session_user.get_custom_event_properties(),
        )
        try:
            return await self.connector.get_order(order_id)
        except DOWNSTREAM_ERRORS as e:
            logger.warning(f"Order retrieval failed: {e}")
            return None
