"""Request and response bodies.

Request fields are all optional at the schema level so that the handlers can
answer a missing field with their own 400 message instead of FastAPI's 422.
JSON keys are camelCase on the wire.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def _as_utc(value: datetime) -> datetime:
    # timestamps are stored as UTC; SQLite hands them back without tzinfo
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class TopicIn(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    emoji: Optional[str] = None


class TopicOut(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    emoji: Optional[str] = None
    created_at: UtcDatetime
    updated_at: UtcDatetime
    bookmark_count: int = 0


class BookmarkIn(CamelModel):
    url: Optional[str] = None
    description: Optional[str] = None
    topic_id: Optional[str] = None


class BookmarkOut(CamelModel):
    id: str
    url: str
    description: Optional[str] = None
    topic_id: str
    created_at: UtcDatetime
    updated_at: UtcDatetime


class BulkBookmarksIn(CamelModel):
    # entries are filtered one by one, so non-string items must not fail parsing
    urls: Optional[Any] = None
    topic_id: Optional[str] = None


class BulkResult(BaseModel):
    message: str
    count: int


class Message(BaseModel):
    message: str


class LinkStatus(BaseModel):
    ok: bool
    status: Optional[int] = None


def topic_out(topic, bookmark_count: int) -> TopicOut:
    out = TopicOut.model_validate(topic)
    out.bookmark_count = bookmark_count
    return out


def topics_out(rows) -> List[TopicOut]:
    return [topic_out(t, count) for t, count in rows]
