from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class PoetryData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: str
    request_id: Optional[str] = Field(None, alias="requestId")
