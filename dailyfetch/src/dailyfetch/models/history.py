from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field

class HistoryEvent(BaseModel):
    """
    A single "on this day" event.
    Year/month/day are passed through as the upstream sends them.
    """
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[Any] = None
    year: Optional[Any] = None
    month: Optional[Any] = None
    day: Optional[Any] = None
    url: Optional[Any] = None
    keywords: Optional[Any] = None
    full_date: str = Field(..., alias="fullDate")
