"""
Domain Layer - Business Entities

Pydantic models for the records exchanged with the downstream services,
plus the per-session user state.
"""
from petstoreapp.domain.pet import Pet, Category, Tag
from petstoreapp.domain.product import Product
from petstoreapp.domain.order import Order
from petstoreapp.domain.user import SessionUser
from petstoreapp.domain.environment import ContainerEnvironment
from petstoreapp.domain.search import WebPage, WebPages
from petstoreapp.domain.result import Success, Failure, ServiceResult

__all__ = [
    'Pet', 'Category', 'Tag', 'Product', 'Order', 'SessionUser',
    'ContainerEnvironment', 'WebPage', 'WebPages',
    'Success', 'Failure', 'ServiceResult',
]
