"""
Pet Domain Model

Pets as served by the pet service, plus the Category and Tag records
shared with products.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Category(BaseModel):
    id: Optional[int] = None
    name: Optional[str] = None


class Tag(BaseModel):
    id: Optional[int] = None
    name: Optional[str] = None


class Pet(BaseModel):
    """
    Pet domain model

    Fields:
        id: Pet id in the pet service
        category: Breed category (Dog, Cat, Fish)
        name: Breed name
        photo_url: Picture URL (JSON "photoURL")
        tags: Size tags ("small", "large")
        status: Availability status
    """
    id: Optional[int] = None
    category: Optional[Category] = None
    name: Optional[str] = None
    photo_url: Optional[str] = Field(None, alias="photoURL")
    tags: Optional[List[Tag]] = None
    status: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    @property
    def category_name(self) -> Optional[str]:
        return self.category.name if self.category else None

    def has_tag(self, name: str) -> bool:
        return any(tag.name == name for tag in self.tags or [])
