from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

class FetchResult(BaseModel):
    """
    Envelope returned by the history and poetry providers.

    `success` implies `data` is set; a failure carries no data and a
    non-empty message.
    """
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    data: Optional[Any] = None
    message: str = ""
    request_id: Optional[str] = Field(None, alias="requestId")

    @model_validator(mode="after")
    def _check_envelope(self):
        if self.success and self.data is None:
            raise ValueError("successful result must carry data")
        if not self.success:
            if self.data is not None:
                raise ValueError("failed result must not carry data")
            if not self.message:
                raise ValueError("failed result must carry a message")
        return self

    @classmethod
    def failure(cls, message: str, request_id: Optional[str] = None) -> "FetchResult":
        return cls(success=False, data=None, message=message, request_id=request_id)
