"""
Web search results shown on the /bingSearch page
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class WebPage(BaseModel):
    name: Optional[str] = None
    url: Optional[str] = None
    snippet: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class WebPages(BaseModel):
    """Results for one query (the "webPages" block of a search response)"""
    web_search_url: Optional[str] = Field(None, alias="webSearchUrl")
    total_estimated_matches: int = Field(0, alias="totalEstimatedMatches")
    value: List[WebPage] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")
