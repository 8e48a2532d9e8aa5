"""
Remote operations available once a session is established.

Every function returns the raw response body; nothing is decoded or validated.
None of them log in: call `login_or_raise` first.

Example:
-------
>>> login_or_raise(client)
>>> events_for_parent(client, user_id="123")
b'{"d":{"data":[...]}}'

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .session import json_body

if TYPE_CHECKING:  # pragma: no cover
    from .session import Compass

__all__ = [
    "news_feed",
    "messages",
    "personal_details",
    "events_for_parent",
    "pst_cycles",
    "check_parent_details",
]

PATH_NEWSFEED = "/services/mobile.svc/GetNewsFeed?sessionstate=readonly"
PATH_GET_MESSAGES = "/services/mobile.svc/GetMessages?sessionstate=readonly"
PATH_GET_PERSONAL_DETAILS = "/services/mobile.svc/GetPersonalDetails?sessionstate=readonly"
PATH_PST_CYCLES = "/services/mobile.svc/GetPstCycles?sessionstate=readonly"
PATH_CHECK_PARENT_DETAILS = "/services/mobile.svc/CheckParentDetails?sessionstate=readonly"
PATH_GET_EVENTS_FOR_PARENT = "/Services/Events.svc/GetForParent"

EVENTS_LIMIT = 20
EVENTS_PAGE = 1


def news_feed(client: Compass) -> bytes:
    return client.post(PATH_NEWSFEED)


def messages(client: Compass) -> bytes:
    return client.post(PATH_GET_MESSAGES)


def personal_details(client: Compass) -> bytes:
    """Details of the logged-in user."""
    return client.post(PATH_GET_PERSONAL_DETAILS)


def pst_cycles(client: Compass) -> bytes:
    """Parent-teacher interview cycles."""
    return client.post(PATH_PST_CYCLES)


def check_parent_details(client: Compass) -> bytes:
    return client.post(PATH_CHECK_PARENT_DETAILS)


def events_for_parent(client: Compass, user_id: str, limit: int = EVENTS_LIMIT, page: int = EVENTS_PAGE) -> bytes:
    """
    Events visible to a parent for the given user.

    Args:
        client: A logged-in session client.
        user_id: Compass id of the user (usually the child).
        limit: Number of events per page.
        page: 1-based page number.
    """
    body = json_body({"userId": user_id, "limit": limit, "page": page})
    return client.post(PATH_GET_EVENTS_FOR_PARENT, headers={"Content-Type": "application/json"}, body=body)
