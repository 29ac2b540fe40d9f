"""
Order Domain Model

One order per browser session: the order id is the session id.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from petstoreapp.domain.product import Product


class Order(BaseModel):
    """
    Order domain model

    Fields:
        id: Order id (the session id)
        email: Customer email, when signed in
        products: Line items (product id + quantity)
        ship_date: Shipping date (JSON "shipDate")
        status: Order status from the order service
        complete: Whether the order has been placed
    """
    id: Optional[str] = None
    email: Optional[str] = None
    products: Optional[List[Product]] = None
    ship_date: Optional[str] = Field(None, alias="shipDate")
    status: Optional[str] = None
    complete: bool = False

    model_config = ConfigDict(populate_by_name=True)

    def to_json(self) -> str:
        """Wire format for the order service: camelCase, nulls omitted"""
        return self.model_dump_json(by_alias=True, exclude_none=True)

    @property
    def open_item_count(self) -> int:
        """Number of products in the cart, 0 once the order is complete"""
        if self.complete or not self.products:
            return 0
        return len(self.products)
