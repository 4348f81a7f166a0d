"""Video search pass-through."""

from typing import Optional

from fastapi import APIRouter, Query

from app.schemas.video import VideoItem
from app.services.search_service import search_videos

router = APIRouter(tags=["search"])


@router.get("/search", response_model=list[VideoItem])
def search(q: Optional[str] = Query(None)):
    return search_videos(q)
