"""
Pydantic schemas for the web search proxy.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

SearchType = Literal["general", "destinations", "guides", "latest"]


class SearchResult(BaseModel):
    title: str
    url: str
    description: Optional[str] = None
    age: Optional[str] = None
    thumbnail: Optional[str] = None


class SearchResponse(BaseModel):
    query: str = Field(description="Query as sent to the search provider")
    type: SearchType
    results: List[SearchResult]
    count: int
