"""Video search and favorites schemas."""

from typing import Optional

from pydantic import BaseModel, Field


class VideoItem(BaseModel):
    id: Optional[str] = None
    title: str = ""
    thumbnail: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None


class FavoriteVideoItem(VideoItem):
    isFavorite: bool = True


class FavoriteParams(BaseModel):
    video: VideoItem


class FavoriteVideoRequest(BaseModel):
    """Body shape is {"params": {"video": {...}}}."""

    params: FavoriteParams = Field(...)
