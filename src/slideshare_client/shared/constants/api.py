"""
API Configuration Constants

This module contains all constants related to the remote slide-hosting
service: endpoint URIs, request field names and XML element names.
"""


class SlideShareEndpoints:
    """Service endpoint URIs (API v2)."""

    BASE_URL = "https://www.slideshare.net/api/2"
    UPLOAD = f"{BASE_URL}/upload_slideshow"
    GET_SLIDESHOW = f"{BASE_URL}/get_slideshow"
    GET_BY_USER = f"{BASE_URL}/get_slideshows_by_user"
    GET_BY_TAG = f"{BASE_URL}/get_slideshows_by_tag"
    GET_BY_GROUP = f"{BASE_URL}/get_slideshows_by_group"
    SEARCH = f"{BASE_URL}/search_slideshows"


class RequestParams:
    """Request field names sent to the service."""

    # Signature
    API_KEY = "api_key"
    TIMESTAMP = "ts"
    HASH = "hash"

    # Credentials
    USERNAME = "username"
    PASSWORD = "password"

    # Lookups
    SLIDESHOW_ID = "slideshow_id"
    SLIDESHOW_URL = "slideshow_url"
    USERNAME_FOR = "username_for"
    TAG = "tag"
    GROUP_NAME = "group_name"
    QUERY = "q"
    DETAILED = "detailed"
    OFFSET = "offset"
    LIMIT = "limit"

    # Upload
    TITLE = "slideshow_title"
    DESCRIPTION = "slideshow_description"
    TAGS = "slideshow_tags"
    MAKE_SOURCE_PUBLIC = "make_src_public"
    SOURCE_FILE = "slideshow_srcfile"


class XMLTags:
    """Element names found in service responses."""

    SERVICE_ERROR = "SlideShareServiceError"
    MESSAGE = "Message"
    UPLOADED = "SlideShowUploaded"
    UPLOADED_ID = "SlideShowID"

    SLIDESHOW = "Slideshow"
    SLIDESHOWS = "Slideshows"
    USER = "User"
    TAG = "Tag"
    GROUP = "Group"

    TAGS = "Tags"
    RELATED_SLIDESHOWS = "RelatedSlideshows"
    RELATED_SLIDESHOW_ID = "RelatedSlideshowID"


class UploadConfig:
    """Upload-specific constants."""

    SOURCE_MIME_TYPE = "application/vnd.ms-powerpoint"
    PUBLIC_FLAG = "Y"
    PRIVATE_FLAG = "N"


__all__ = [
    "RequestParams",
    "SlideShareEndpoints",
    "UploadConfig",
    "XMLTags",
]
