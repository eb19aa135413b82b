import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from sqlalchemy.exc import SQLAlchemyError

from ..link_check import LinkChecker
from ..parse_bookmarks import extract_urls
from ..schemas import BookmarkIn, BookmarkOut, BulkBookmarksIn, BulkResult, LinkStatus, Message
from ..store import BookmarkStore
from ..urls import is_valid_url, filter_valid_urls
from .deps import get_store, get_link_checker


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])

BULK_DESCRIPTION = "Added via bulk import"


def _bookmark_fields(body: BookmarkIn):
    if not body.url or not body.topic_id:
        raise HTTPException(status_code=400, detail="URL and topicId are required")
    if not is_valid_url(body.url):
        raise HTTPException(status_code=400, detail="Invalid URL format")
    return body.url, body.description or None, body.topic_id


def _bulk_create(store: BookmarkStore, urls: list, topic_id: str) -> dict:
    valid = filter_valid_urls(urls)
    if not valid:
        raise HTTPException(status_code=400, detail="No valid URLs provided")
    logger.debug("Bulk import for topic %s dropped %d invalid URLs", topic_id, len(urls) - len(valid))
    try:
        created = store.insert_bookmarks(valid, BULK_DESCRIPTION, topic_id)
    except SQLAlchemyError:
        logger.exception("Error creating bulk bookmarks for topic %s", topic_id)
        raise HTTPException(status_code=500, detail="Failed to create bulk bookmarks")
    count = len(created)
    logger.info("Bulk created %d bookmarks in topic %s", count, topic_id)
    return {"message": f"{count} bookmarks created successfully", "count": count}


@router.get("", response_model=List[BookmarkOut])
def list_bookmarks(
    topic_id: Optional[str] = Query(None, alias="topicId"),
    store: BookmarkStore = Depends(get_store),
):
    if not topic_id:
        raise HTTPException(status_code=400, detail="topicId is required")
    try:
        return store.list_bookmarks(topic_id)
    except SQLAlchemyError:
        logger.exception("Error fetching bookmarks for topic %s", topic_id)
        raise HTTPException(status_code=500, detail="Failed to fetch bookmarks")


@router.post("", response_model=BookmarkOut, status_code=201)
def create_bookmark(body: BookmarkIn, store: BookmarkStore = Depends(get_store)):
    url, description, topic_id = _bookmark_fields(body)
    try:
        bookmark = store.insert_bookmark(url, description, topic_id)
    except SQLAlchemyError:
        logger.exception("Error creating bookmark in topic %s", topic_id)
        raise HTTPException(status_code=500, detail="Failed to create bookmark")
    logger.info("Created bookmark %s in topic %s", bookmark.id, topic_id)
    return bookmark


@router.post("/bulk", response_model=BulkResult, status_code=201)
def bulk_create_bookmarks(body: BulkBookmarksIn, store: BookmarkStore = Depends(get_store)):
    if not isinstance(body.urls, list) or not body.topic_id:
        raise HTTPException(status_code=400, detail="URLs array and topicId are required")
    return _bulk_create(store, body.urls, body.topic_id)


@router.post("/bulk/html", response_model=BulkResult, status_code=201)
def import_bookmarks_file(
    file: UploadFile = File(...),
    topic_id: str = Form("", alias="topicId"),
    store: BookmarkStore = Depends(get_store),
):
    """Import every link of an exported bookmarks HTML file into one topic."""
    if not topic_id:
        raise HTTPException(status_code=400, detail="URLs array and topicId are required")
    html = file.file.read().decode("utf-8", errors="ignore")
    return _bulk_create(store, extract_urls(html), topic_id)


@router.get("/{bookmark_id}", response_model=BookmarkOut)
def get_bookmark(bookmark_id: str, store: BookmarkStore = Depends(get_store)):
    try:
        bookmark = store.get_bookmark(bookmark_id)
    except SQLAlchemyError:
        logger.exception("Error fetching bookmark %s", bookmark_id)
        raise HTTPException(status_code=500, detail="Failed to fetch bookmark")
    if bookmark is None:
        raise HTTPException(status_code=404, detail="Bookmark not found")
    return bookmark


@router.put("/{bookmark_id}", response_model=BookmarkOut)
def update_bookmark(bookmark_id: str, body: BookmarkIn, store: BookmarkStore = Depends(get_store)):
    url, description, topic_id = _bookmark_fields(body)
    try:
        bookmark = store.update_bookmark(bookmark_id, url, description, topic_id)
    except SQLAlchemyError:
        logger.exception("Error updating bookmark %s", bookmark_id)
        raise HTTPException(status_code=500, detail="Failed to update bookmark")
    if bookmark is None:
        raise HTTPException(status_code=404, detail="Bookmark not found")
    logger.info("Updated bookmark %s", bookmark_id)
    return bookmark


@router.delete("/{bookmark_id}", response_model=Message)
def delete_bookmark(bookmark_id: str, store: BookmarkStore = Depends(get_store)):
    try:
        deleted = store.delete_bookmark(bookmark_id)
    except SQLAlchemyError:
        logger.exception("Error deleting bookmark %s", bookmark_id)
        raise HTTPException(status_code=500, detail="Failed to delete bookmark")
    if not deleted:
        raise HTTPException(status_code=404, detail="Bookmark not found")
    logger.info("Deleted bookmark %s", bookmark_id)
    return {"message": "Bookmark deleted successfully"}


@router.get("/{bookmark_id}/check", response_model=LinkStatus)
def check_bookmark(
    bookmark_id: str,
    store: BookmarkStore = Depends(get_store),
    checker: LinkChecker = Depends(get_link_checker),
):
    try:
        bookmark = store.get_bookmark(bookmark_id)
    except SQLAlchemyError:
        logger.exception("Error fetching bookmark %s", bookmark_id)
        raise HTTPException(status_code=500, detail="Failed to fetch bookmark")
    if bookmark is None:
        raise HTTPException(status_code=404, detail="Bookmark not found")
    return checker.check(bookmark.url)
