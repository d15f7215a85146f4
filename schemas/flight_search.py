from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Union


class SearchOffer(BaseModel):
    """
    Flat offer returned by the single-date search.
    Keys stay snake_case, the frontend already consumes them this way.
    """
    price: Optional[Union[int, float]] = None
    airline: Optional[str] = None
    stops: int = Field(..., description="0 when the first segment is 'Nonstop', otherwise 1")
    duration: Optional[int] = Field(None, description="Total travel time in minutes")
    departure_time: Optional[str] = None
    arrival_time: Optional[str] = None
    booking_link: Optional[str] = Field(None, description="SerpApi booking token")


class SearchResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    offers: List[SearchOffer]
    last_updated: str = Field(..., alias="lastUpdated")
