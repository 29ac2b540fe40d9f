"""
Connectors - raw HTTP access to external services
"""
from petstoreapp.connectors.petstore_connector import PetStoreConnector, ServiceConfigurationError
from petstoreapp.connectors.bing_connector import BingConnector

__all__ = ['PetStoreConnector', 'ServiceConfigurationError', 'BingConnector']
