"""
Service Layer - session-aware business operations on top of the connectors
"""
from petstoreapp.services.petstore_service import PetStoreService
from petstoreapp.services.search_service import SearchService

__all__ = ['PetStoreService', 'SearchService']
