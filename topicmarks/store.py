"""Query layer used by the request handlers.

Every method works on the request's session and commits its own writes. No
input validation happens here; a failing statement rolls the session back and
the ``SQLAlchemyError`` is left for the caller to report.
"""

from contextlib import contextmanager
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from .models import Topic, Bookmark, utc_now


TopicWithCount = Tuple[Topic, int]


class BookmarkStore:
    def __init__(self, session: Session):
        self.session = session

    @contextmanager
    def _writing(self):
        try:
            yield
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def _topics_with_count(self):
        return (
            select(Topic, func.count(Bookmark.id))
            .outerjoin(Bookmark, Bookmark.topic_id == Topic.id)
            .group_by(Topic.id)
        )

    # Topics

    def list_topics(self) -> List[TopicWithCount]:
        stmt = self._topics_with_count().order_by(Topic.updated_at.desc())
        return [(t, count) for t, count in self.session.execute(stmt).all()]

    def get_topic(self, topic_id: str) -> Optional[TopicWithCount]:
        stmt = self._topics_with_count().where(Topic.id == topic_id)
        row = self.session.execute(stmt).first()
        if row is None:
            return None
        return row[0], row[1]

    def insert_topic(self, title: str, description: Optional[str], emoji: str) -> Topic:
        now = utc_now()
        topic = Topic(title=title, description=description, emoji=emoji, created_at=now, updated_at=now)
        with self._writing():
            self.session.add(topic)
        self.session.refresh(topic)
        return topic

    def update_topic(
        self, topic_id: str, title: str, description: Optional[str], emoji: str
    ) -> Optional[Topic]:
        topic = self.session.get(Topic, topic_id)
        if topic is None:
            return None
        with self._writing():
            topic.title = title
            topic.description = description
            topic.emoji = emoji
            # set explicitly so an unchanged row still gets a new timestamp
            topic.updated_at = utc_now()
        self.session.refresh(topic)
        return topic

    def count_bookmarks(self, topic_id: str) -> int:
        stmt = select(func.count()).select_from(Bookmark).where(Bookmark.topic_id == topic_id)
        return int(self.session.execute(stmt).scalar() or 0)

    def delete_topic(self, topic_id: str) -> bool:
        topic = self.session.get(Topic, topic_id)
        if topic is None:
            return False
        with self._writing():
            self.session.delete(topic)
        return True

    # Bookmarks

    def list_bookmarks(self, topic_id: str) -> List[Bookmark]:
        stmt = (
            select(Bookmark)
            .where(Bookmark.topic_id == topic_id)
            .order_by(Bookmark.created_at.desc())
        )
        return list(self.session.execute(stmt).scalars().all())

    def get_bookmark(self, bookmark_id: str) -> Optional[Bookmark]:
        return self.session.get(Bookmark, bookmark_id)

    def insert_bookmark(self, url: str, description: Optional[str], topic_id: str) -> Bookmark:
        now = utc_now()
        bookmark = Bookmark(
            url=url, description=description, topic_id=topic_id, created_at=now, updated_at=now
        )
        with self._writing():
            self.session.add(bookmark)
        self.session.refresh(bookmark)
        return bookmark

    def insert_bookmarks(
        self, urls: Sequence[str], description: Optional[str], topic_id: str
    ) -> List[Bookmark]:
        """Insert one bookmark per url in a single commit; nothing is kept on failure."""
        now = utc_now()
        rows = [
            Bookmark(url=u, description=description, topic_id=topic_id, created_at=now, updated_at=now)
            for u in urls
        ]
        with self._writing():
            self.session.add_all(rows)
        return rows

    def update_bookmark(
        self, bookmark_id: str, url: str, description: Optional[str], topic_id: str
    ) -> Optional[Bookmark]:
        bookmark = self.session.get(Bookmark, bookmark_id)
        if bookmark is None:
            return None
        with self._writing():
            bookmark.url = url
            bookmark.description = description
            bookmark.topic_id = topic_id
            bookmark.updated_at = utc_now()
        self.session.refresh(bookmark)
        return bookmark

    def delete_bookmark(self, bookmark_id: str) -> bool:
        bookmark = self.session.get(Bookmark, bookmark_id)
        if bookmark is None:
            return False
        with self._writing():
            self.session.delete(bookmark)
        return True
