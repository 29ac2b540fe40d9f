"""
Product Domain Model

Toys and food as served by the product service. Also used as the
line item of an Order, where only id and quantity are set.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from petstoreapp.domain.pet import Category, Tag


class Product(BaseModel):
    """
    Product domain model

    Fields:
        id: Product id in the product service
        category: Category, named "<pet category> <product category>" (e.g. "Dog Toy")
        name: Product name
        photo_url: Picture URL (JSON "photoURL")
        tags: Size tags ("small", "large")
        status: Availability status
        quantity: Quantity, only meaningful inside an order
    """
    id: Optional[int] = None
    category: Optional[Category] = None
    name: Optional[str] = None
    photo_url: Optional[str] = Field(None, alias="photoURL")
    tags: Optional[List[Tag]] = None
    status: Optional[str] = None
    quantity: Optional[int] = None

    model_config = ConfigDict(populate_by_name=True)

    @property
    def category_name(self) -> Optional[str]:
        return self.category.name if self.category else None

    def has_tag(self, name: str) -> bool:
        return any(tag.name == name for tag in self.tags or [])
