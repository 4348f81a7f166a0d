"""Per-user favorite videos, keyed by video url."""

import logging
from typing import Optional
from uuid import UUID

from fastapi import status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, ValidationError
from app.db.models.user import User
from app.db.models.video import Video
from app.schemas.video import FavoriteVideoItem, VideoItem

logger = logging.getLogger(__name__)


def _get_user(db: Session, user_id: UUID) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found", status_code=status.HTTP_404_NOT_FOUND)
    return user


def _video_url(video: VideoItem) -> str:
    url = (video.link or "").strip()
    if not url:
        raise ValidationError("Video link is required")
    return url


def _find_video(db: Session, url: str) -> Optional[Video]:
    return db.query(Video).filter(Video.url == url).first()


def _attach(db: Session, user: User, video: VideoItem, url: str) -> Video:
    record = _find_video(db, url)
    if record is None:
        record = Video(url=url, external_id=video.id)
        db.add(record)
    record.title = video.title or record.title or ""
    if video.description is not None:
        record.description = video.description
    if video.thumbnail is not None:
        record.thumbnail = video.thumbnail
    if record not in user.favorite_videos:
        user.favorite_videos.append(record)
        logger.info("User %s marked %s as favorite", user.id, url)
    db.commit()
    return record


def mark_favorite(db: Session, user_id: UUID, video: VideoItem) -> Video:
    """Upsert the video by url and attach it to the user once."""
    url = _video_url(video)
    user = _get_user(db, user_id)
    try:
        record = _attach(db, user, video, url)
    except IntegrityError:
        # a concurrent request inserted the same video or favorite first
        db.rollback()
        record = _attach(db, user, video, url)
    db.refresh(record)
    return record


def unmark_favorite(db: Session, user_id: UUID, video: VideoItem) -> None:
    """Detach the video from the user; a video that was never a favorite is a no-op."""
    url = _video_url(video)
    user = _get_user(db, user_id)
    for record in list(user.favorite_videos):
        if record.url == url:
            user.favorite_videos.remove(record)
            logger.info("User %s removed favorite %s", user.id, url)
    db.commit()


def list_favorites(db: Session, user_id: UUID) -> list[FavoriteVideoItem]:
    user = _get_user(db, user_id)
    return [
        FavoriteVideoItem(
            id=v.external_id or str(v.id),
            title=v.title,
            thumbnail=v.thumbnail,
            description=v.description,
            link=v.url,
            isFavorite=True,
        )
        for v in user.favorite_videos
    ]
