"""
Search Service
Looks up competitor web pages for the /bingSearch page
"""
import logging

import httpx
from pydantic import ValidationError

from petstoreapp.connectors.bing_connector import BingConnector
from petstoreapp.connectors.petstore_connector import ServiceConfigurationError
from petstoreapp.domain.search import WebPages

logger = logging.getLogger(__name__)


class SearchService:
    """Wraps BingConnector; a failed search yields an empty WebPages"""

    def __init__(self, connector: BingConnector):
        self.connector = connector

    async def bing_search(self, company: str) -> WebPages:
        try:
            data = await self.connector.search(company)
            return WebPages.model_validate(data.get("webPages") or {})
        except ServiceConfigurationError as e:
            logger.warning(f"Search for {company} skipped: {e}")
        except (httpx.HTTPError, ValidationError, ValueError) as e:
            logger.warning(f"Search for {company} failed: {e}")
        return WebPages()
