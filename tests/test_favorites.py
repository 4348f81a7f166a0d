"""Tests for favorite video management."""

import uuid
from unittest.mock import patch

import pytest
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, ValidationError
from app.db.models.user import User
from app.db.models.video import Video, user_favorite_videos
from app.schemas.video import VideoItem
from app.services import auth_service, favorites_service


def _video(**overrides) -> VideoItem:
    values = {
        "id": "dQw4w9WgXcQ",
        "title": "Never Gonna Give You Up",
        "thumbnail": "https://i.ytimg.com/vi/dQw4w9WgXcQ/hqdefault.jpg",
        "description": "Official video",
        "link": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
    }
    values.update(overrides)
    return VideoItem(**values)


def _association_count(db_session: Session) -> int:
    return db_session.query(user_favorite_videos).count()


class TestMarkFavorite:
    def test_mark_creates_video_and_association(self, db_session: Session, test_user: User):
        favorites_service.mark_favorite(db_session, test_user.id, _video())
        video = db_session.query(Video).one()
        assert video.url == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
        assert video.external_id == "dQw4w9WgXcQ"
        assert _association_count(db_session) == 1

    def test_mark_twice_is_idempotent(self, db_session: Session, test_user: User):
        favorites_service.mark_favorite(db_session, test_user.id, _video())
        favorites_service.mark_favorite(db_session, test_user.id, _video())
        assert db_session.query(Video).count() == 1
        assert _association_count(db_session) == 1

    def test_video_shared_between_users(self, db_session: Session, test_user: User):
        bob = auth_service.register(
            db_session, name="Bob", email="bob@example.com", username="bob", password="pw"
        )
        favorites_service.mark_favorite(db_session, test_user.id, _video())
        favorites_service.mark_favorite(db_session, bob.id, _video(title="Renamed"))
        assert db_session.query(Video).count() == 1
        assert db_session.query(Video).one().title == "Renamed"
        assert _association_count(db_session) == 2

    def test_video_without_link_rejected(self, db_session: Session, test_user: User):
        with pytest.raises(ValidationError):
            favorites_service.mark_favorite(db_session, test_user.id, _video(link=""))

    def test_unknown_user_not_found(self, db_session: Session):
        with pytest.raises(NotFoundError) as exc:
            favorites_service.mark_favorite(db_session, uuid.uuid4(), _video())
        assert exc.value.status_code == 404


class TestUnmarkFavorite:
    def test_unmark_removes_association_but_keeps_video(self, db_session: Session, test_user: User):
        favorites_service.mark_favorite(db_session, test_user.id, _video())
        favorites_service.unmark_favorite(db_session, test_user.id, _video())
        assert _association_count(db_session) == 0
        assert db_session.query(Video).count() == 1

    def test_unmark_absent_is_noop(self, db_session: Session, test_user: User):
        favorites_service.unmark_favorite(db_session, test_user.id, _video())
        assert _association_count(db_session) == 0


class TestListFavorites:
    def test_lists_only_own_favorites_flagged(self, db_session: Session, test_user: User):
        bob = auth_service.register(
            db_session, name="Bob", email="bob@example.com", username="bob", password="pw"
        )
        favorites_service.mark_favorite(db_session, test_user.id, _video())
        favorites_service.mark_favorite(
            db_session, bob.id, _video(id="other", link="https://www.youtube.com/watch?v=other")
        )

        items = favorites_service.list_favorites(db_session, test_user.id)
        assert len(items) == 1
        assert items[0].id == "dQw4w9WgXcQ"
        assert items[0].link == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
        assert items[0].isFavorite is True

    def test_empty_list(self, db_session: Session, test_user: User):
        assert favorites_service.list_favorites(db_session, test_user.id) == []


class TestConcurrentMarkFavorite:
    @pytest.mark.parametrize("same_user", [True, False])
    def test_lost_insert_race_still_succeeds(self, session_factory, same_user: bool):
        """Another request inserts the same video between our lookup and our commit."""
        first, second = session_factory(), session_factory()
        try:
            alice = auth_service.register(
                first, name="Alice", email="alice@example.com", username="alice", password="pw"
            )
            bob = auth_service.register(
                first, name="Bob", email="bob@example.com", username="bob", password="pw"
            )
            other_id = alice.id if same_user else bob.id
            real_find = favorites_service._find_video
            calls = []

            def find_after_other_commit(db, url):
                calls.append(url)
                if len(calls) == 1:
                    favorites_service.mark_favorite(first, other_id, _video())
                    return None
                return real_find(db, url)

            with patch.object(favorites_service, "_find_video", side_effect=find_after_other_commit):
                favorites_service.mark_favorite(second, alice.id, _video())

            check = session_factory()
            try:
                assert check.query(Video).count() == 1
                assert check.query(user_favorite_videos).count() == (1 if same_user else 2)
                assert len(favorites_service.list_favorites(check, alice.id)) == 1
            finally:
                check.close()
        finally:
            first.close()
            second.close()
