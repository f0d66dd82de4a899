from typing import Any, Optional
from pydantic import BaseModel, ConfigDict

class _StoryBase(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[Any] = None
    title: Optional[Any] = None
    image: Optional[Any] = None
    hint: Optional[Any] = None
    url: Optional[Any] = None
    share_url: Optional[Any] = None
    image_hue: Optional[Any] = None
    ga_prefix: Optional[Any] = None

class FeedItem(_StoryBase):
    """
    Entry of the daily `news` list.
    """
    thumbnail: Optional[Any] = None

class TopStory(_StoryBase):
    """
    Entry of `top_stories`; carries `image_source` instead of a thumbnail.
    """
    image_source: Optional[Any] = None
