"""Query kinds supported by the read operations.

Each kind carries its endpoint, the request field holding the lookup value
and the root element the service answers with. The client selects the
variant through QUERY_SPECS instead of comparing field names.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from slideshare_client.shared.constants import RequestParams, SlideShareEndpoints, XMLTags


class QueryKind(str, Enum):
    """Read operations offered by the service."""

    BY_ID = "by_id"
    BY_URL = "by_url"
    BY_USER = "by_user"
    BY_TAG = "by_tag"
    BY_GROUP = "by_group"
    SEARCH = "search"


@dataclass(frozen=True)
class QuerySpec:
    """Static description of one query kind.

    Attributes:
        endpoint: Service URI the request is posted to
        param: Request field carrying the lookup value
        response_tag: Root element expected in a successful answer
        single: True when the answer holds exactly one slideshow
    """

    endpoint: str
    param: str
    response_tag: str
    single: bool = False


QUERY_SPECS: dict[QueryKind, QuerySpec] = {
    QueryKind.BY_ID: QuerySpec(
        endpoint=SlideShareEndpoints.GET_SLIDESHOW,
        param=RequestParams.SLIDESHOW_ID,
        response_tag=XMLTags.SLIDESHOW,
        single=True,
    ),
    QueryKind.BY_URL: QuerySpec(
        endpoint=SlideShareEndpoints.GET_SLIDESHOW,
        param=RequestParams.SLIDESHOW_URL,
        response_tag=XMLTags.SLIDESHOW,
        single=True,
    ),
    QueryKind.BY_USER: QuerySpec(
        endpoint=SlideShareEndpoints.GET_BY_USER,
        param=RequestParams.USERNAME_FOR,
        response_tag=XMLTags.USER,
    ),
    QueryKind.BY_TAG: QuerySpec(
        endpoint=SlideShareEndpoints.GET_BY_TAG,
        param=RequestParams.TAG,
        response_tag=XMLTags.TAG,
    ),
    QueryKind.BY_GROUP: QuerySpec(
        endpoint=SlideShareEndpoints.GET_BY_GROUP,
        param=RequestParams.GROUP_NAME,
        response_tag=XMLTags.GROUP,
    ),
    QueryKind.SEARCH: QuerySpec(
        endpoint=SlideShareEndpoints.SEARCH,
        param=RequestParams.QUERY,
        response_tag=XMLTags.SLIDESHOWS,
    ),
}


def get_query_spec(kind: QueryKind) -> QuerySpec:
    return QUERY_SPECS[kind]


__all__ = ["QUERY_SPECS", "QueryKind", "QuerySpec", "get_query_spec"]
