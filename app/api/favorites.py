"""Favorite videos for the authenticated user."""

from fastapi import APIRouter

from app.dependencies import CurrentIdentity, DbSession
from app.schemas.auth import MessageResponse
from app.schemas.video import FavoriteVideoItem, FavoriteVideoRequest
from app.services.favorites_service import list_favorites, mark_favorite, unmark_favorite

router = APIRouter(tags=["favorites"])


@router.post("/mark-favorite", response_model=MessageResponse)
def mark(body: FavoriteVideoRequest, identity: CurrentIdentity, db: DbSession):
    mark_favorite(db, identity.user_id, body.params.video)
    return MessageResponse(message="Video marked as favorite")


@router.post("/unmark-favorite", response_model=MessageResponse)
def unmark(body: FavoriteVideoRequest, identity: CurrentIdentity, db: DbSession):
    unmark_favorite(db, identity.user_id, body.params.video)
    return MessageResponse(message="Video removed from favorites")


@router.get("/favorite-videos", response_model=list[FavoriteVideoItem])
def favorite_videos(identity: CurrentIdentity, db: DbSession):
    return list_favorites(db, identity.user_id)
