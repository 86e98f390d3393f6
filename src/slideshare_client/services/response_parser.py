"""Mapping of service XML responses to SlideShow records.

Every response is parsed with defusedxml, so entity expansion and external
entity tricks are rejected before any mapping happens. Shapes are asserted
up front: an unexpected root or node tag raises ProtocolError instead of
producing a half-filled record.
"""

from __future__ import annotations

import logging
from xml.etree.ElementTree import Element

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import ParseError, fromstring

from slideshare_client.models import SlideShow
from slideshare_client.shared.constants import XMLTags
from slideshare_client.shared.errors import (
    ErrorContext,
    ServiceError,
    create_protocol_error,
)

logger = logging.getLogger(__name__)

# XML element -> SlideShow attribute, for plain text fields
_TEXT_FIELDS: dict[str, str] = {
    "Title": "title",
    "Description": "description",
    "Embed": "embed_code",
    "URL": "permalink",
    "StatusDescription": "status_description",
    "PPTLocation": "location",
    "ThumbnailURL": "thumbnail_url",
    "ThumbnailSmallURL": "thumbnail_small_url",
    "Username": "username",
    "Created": "created",
    "Updated": "updated",
    "Language": "language",
    "Format": "format",
    "DownloadUrl": "download_url",
    "SlideshowEmbedUrl": "slideshow_embed_url",
}

# XML element -> SlideShow attribute, for integer fields
_INT_FIELDS: dict[str, str] = {
    "ID": "id",
    "Status": "status",
    "NumViews": "num_views",
    "NumDownloads": "num_downloads",
    "NumComments": "num_comments",
    "NumFavorites": "num_favorites",
    "NumSlides": "num_slides",
}

# Counters must not be negative
_COUNTER_TAGS = frozenset(
    {"NumViews", "NumDownloads", "NumComments", "NumFavorites", "NumSlides"},
)

_TRUE_VALUES = frozenset({"1", "true", "yes"})


def parse_document(body: bytes | str, operation: str | None = None) -> Element:
    """Parse a response body into its root element.

    Raises:
        ProtocolError: If the body is not well-formed XML or uses forbidden
            constructs (entity declarations, external references)
    """
    try:
        return fromstring(body)
    except (ParseError, DefusedXmlException) as e:
        raise create_protocol_error(
            f"Invalid XML response received: {e}",
            operation=operation,
            original_error=e,
        ) from e


def parse_service_error_message(message: str) -> tuple[int | None, str]:
    """Split a service error message of the form "<code>: <text>".

    The message is split on the first colon. When the part before it is an
    integer it becomes the code; otherwise there is no code and the whole
    message is the text.

    Example:
        >>> parse_service_error_message("6: Not a valid file")
        (6, 'Not a valid file')
        >>> parse_service_error_message("Failed API validation")
        (None, 'Failed API validation')
    """
    head, sep, tail = message.partition(":")
    if sep:
        try:
            return int(head.strip()), tail.strip()
        except ValueError:
            pass
    return None, message.strip()


def raise_for_service_error(root: Element, operation: str | None = None) -> None:
    """Raise ServiceError if root is the service's error document."""
    if root.tag != XMLTags.SERVICE_ERROR:
        return

    code, text = parse_service_error_message(root.findtext(XMLTags.MESSAGE, default=""))
    raise ServiceError(
        code,
        text,
        ErrorContext(operation=operation),
    )


def _expect_tag(node: Element, expected: str, operation: str | None) -> None:
    if node.tag != expected:
        raise create_protocol_error(
            f"Unknown or invalid XML response received: expected <{expected}>, "
            f"got <{node.tag}>",
            operation=operation,
            tag=node.tag,
        )


def _to_int(node: Element, tag: str) -> int:
    text = (node.findtext(tag, default="") or "").strip()
    if not text:
        return 0
    try:
        value = int(text)
    except ValueError as e:
        raise create_protocol_error(
            f"Expected an integer in <{tag}>, got {text!r}",
            operation="map_slideshow",
            tag=tag,
            original_error=e,
        ) from e

    if value < 0 and tag in _COUNTER_TAGS:
        raise create_protocol_error(
            f"Expected a non-negative count in <{tag}>, got {value}",
            operation="map_slideshow",
            tag=tag,
        )
    return value


def slideshow_node_to_record(node: Element) -> SlideShow:
    """Map one <Slideshow> element to a SlideShow record.

    Raises:
        ProtocolError: If node is not a <Slideshow> or an integer field
            holds something else
    """
    _expect_tag(node, XMLTags.SLIDESHOW, "map_slideshow")

    values: dict[str, object] = {
        attr: node.findtext(tag, default="") or "" for tag, attr in _TEXT_FIELDS.items()
    }
    values.update({attr: _to_int(node, tag) for tag, attr in _INT_FIELDS.items()})
    download = (node.findtext("Download", default="") or "").strip().lower()
    values["download"] = download in _TRUE_VALUES

    slideshow = SlideShow(**values)  # type: ignore[arg-type]

    for tag in node.iterfind(f"{XMLTags.TAGS}/{XMLTags.TAG}"):
        if tag.text:
            slideshow.add_tag(tag.text.strip())

    related_path = f"{XMLTags.RELATED_SLIDESHOWS}/{XMLTags.RELATED_SLIDESHOW_ID}"
    for related in node.iterfind(related_path):
        if related.text:
            slideshow.add_related_slideshow_id(related.text.strip())

    return slideshow


def parse_single(root: Element, operation: str | None = None) -> SlideShow:
    """Map a single-slideshow document.

    The service answers with <Slideshow> as root; a <Slideshows> wrapper
    holding exactly one <Slideshow> is accepted as well.
    """
    raise_for_service_error(root, operation)

    if root.tag == XMLTags.SLIDESHOWS:
        children = root.findall(XMLTags.SLIDESHOW)
        if len(children) != 1:
            raise create_protocol_error(
                f"Expected exactly one <{XMLTags.SLIDESHOW}>, got {len(children)}",
                operation=operation,
                tag=root.tag,
            )
        root = children[0]

    _expect_tag(root, XMLTags.SLIDESHOW, operation)
    return slideshow_node_to_record(root)


def parse_many(
    root: Element,
    wrapper_tag: str,
    operation: str | None = None,
) -> list[SlideShow]:
    """Map a multi-slideshow document in document order.

    Children other than <Slideshow> (counts, query metadata) are skipped.
    """
    raise_for_service_error(root, operation)
    _expect_tag(root, wrapper_tag, operation)

    slideshows = [
        slideshow_node_to_record(child) for child in root.findall(XMLTags.SLIDESHOW)
    ]
    logger.debug("Mapped %d slideshow(s) from <%s>", len(slideshows), wrapper_tag)
    return slideshows


def parse_upload(root: Element) -> int:
    """Return the id assigned by an upload response."""
    raise_for_service_error(root, "upload_slideshow")
    _expect_tag(root, XMLTags.UPLOADED, "upload_slideshow")

    text = (root.findtext(XMLTags.UPLOADED_ID, default="") or "").strip()
    try:
        return int(text)
    except ValueError as e:
        raise create_protocol_error(
            f"Upload response carried no valid <{XMLTags.UPLOADED_ID}>: {text!r}",
            operation="upload_slideshow",
            tag=XMLTags.UPLOADED_ID,
            original_error=e,
        ) from e


__all__ = [
    "parse_document",
    "parse_many",
    "parse_service_error_message",
    "parse_single",
    "parse_upload",
    "raise_for_service_error",
    "slideshow_node_to_record",
]
