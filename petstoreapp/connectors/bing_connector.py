"""
Bing Web Search connector

API CONFIGURATION:
- Endpoint: BING_SEARCH_URL (default https://api.bing.microsoft.com/v7.0/search)
- Auth: Ocp-Apim-Subscription-Key header
- Query: ?q=<term>&count=<n>
"""
from typing import Any, Dict

import httpx

from petstoreapp.connectors.petstore_connector import ServiceConfigurationError


class BingConnector:
    """Connector for the Bing Web Search v7 API"""

    def __init__(self, client: httpx.AsyncClient, search_url: str, subscription_key: str):
        """
        Args:
            client: Shared async HTTP client
            search_url: Search endpoint
            subscription_key: Bing subscription key
        """
        self.client = client
        self.search_url = search_url
        self.subscription_key = subscription_key

    async def search(self, query: str, count: int = 5) -> Dict[str, Any]:
        """
        Run a web search

        Returns:
            The raw search response (webPages, queryContext, ...)

        Raises:
            ServiceConfigurationError when no subscription key is configured
            httpx.HTTPError on transport or HTTP status errors
        """
        if not self.subscription_key:
            raise ServiceConfigurationError("BING_SEARCH_SUBSCRIPTION_KEY is not set")

        response = await self.client.get(
            self.search_url,
            params={'q': query, 'count': count},
            headers={'Ocp-Apim-Subscription-Key': self.subscription_key},
        )
        response.raise_for_status()
        return response.json()
