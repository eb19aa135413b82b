"""Topic endpoints.

Every response carries ``bookmarkCount``, recomputed from the bookmarks table
on each request.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from ..models import DEFAULT_EMOJI
from ..schemas import TopicIn, TopicOut, Message, topic_out, topics_out
from ..store import BookmarkStore
from .deps import get_store


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/topics", tags=["topics"])


def _topic_fields(body: TopicIn):
    if not body.title:
        raise HTTPException(status_code=400, detail="Title is required")
    # empty strings count as absent
    return body.title, body.description or None, body.emoji or DEFAULT_EMOJI


@router.get("", response_model=List[TopicOut])
def list_topics(store: BookmarkStore = Depends(get_store)):
    try:
        rows = store.list_topics()
    except SQLAlchemyError:
        logger.exception("Error fetching topics")
        raise HTTPException(status_code=500, detail="Failed to fetch topics")
    return topics_out(rows)


@router.post("", response_model=TopicOut, status_code=201)
def create_topic(body: TopicIn, store: BookmarkStore = Depends(get_store)):
    title, description, emoji = _topic_fields(body)
    try:
        topic = store.insert_topic(title, description, emoji)
    except SQLAlchemyError:
        logger.exception("Error creating topic")
        raise HTTPException(status_code=500, detail="Failed to create topic")
    logger.info("Created topic %s", topic.id)
    # a new topic cannot have bookmarks yet
    return topic_out(topic, 0)


@router.get("/{topic_id}", response_model=TopicOut)
def get_topic(topic_id: str, store: BookmarkStore = Depends(get_store)):
    try:
        row = store.get_topic(topic_id)
    except SQLAlchemyError:
        logger.exception("Error fetching topic %s", topic_id)
        raise HTTPException(status_code=500, detail="Failed to fetch topic")
    if row is None:
        raise HTTPException(status_code=404, detail="Topic not found")
    return topic_out(*row)


@router.put("/{topic_id}", response_model=TopicOut)
def update_topic(topic_id: str, body: TopicIn, store: BookmarkStore = Depends(get_store)):
    title, description, emoji = _topic_fields(body)
    try:
        topic = store.update_topic(topic_id, title, description, emoji)
        if topic is None:
            raise HTTPException(status_code=404, detail="Topic not found")
        count = store.count_bookmarks(topic_id)
    except SQLAlchemyError:
        logger.exception("Error updating topic %s", topic_id)
        raise HTTPException(status_code=500, detail="Failed to update topic")
    logger.info("Updated topic %s", topic_id)
    return topic_out(topic, count)


@router.delete("/{topic_id}", response_model=Message)
def delete_topic(topic_id: str, store: BookmarkStore = Depends(get_store)):
    try:
        deleted = store.delete_topic(topic_id)
    except SQLAlchemyError:
        logger.exception("Error deleting topic %s", topic_id)
        raise HTTPException(status_code=500, detail="Failed to delete topic")
    if not deleted:
        raise HTTPException(status_code=404, detail="Topic not found")
    logger.info("Deleted topic %s", topic_id)
    return {"message": "Topic deleted successfully"}
