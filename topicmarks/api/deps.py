from fastapi import Depends, Request

from ..db import get_session
from ..link_check import LinkChecker
from ..store import BookmarkStore


def get_store(session=Depends(get_session)) -> BookmarkStore:
    return BookmarkStore(session)


def get_link_checker(request: Request) -> LinkChecker:
    return request.app.state.link_checker
