"""Slideshow record.

One presentation's metadata, either prepared by calling code for upload
(filename, title, description, tags) or filled in by the client from a
service response.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass, field, fields
from typing import Any

_COUNTER_FIELDS = (
    "num_views",
    "num_downloads",
    "num_comments",
    "num_favorites",
    "num_slides",
)


@dataclass
class SlideShow:
    """Metadata of a single hosted presentation.

    Attributes:
        id: Service-assigned id, 0 until an upload succeeds
        filename: Local source file, only meaningful before upload
        tags: Tags in insertion order, without duplicates
        created: Creation timestamp in the service's own format
        updated: Last update timestamp in the service's own format
        related_slideshow_ids: Related show ids in insertion order, without duplicates
    """

    id: int = 0
    title: str = ""
    description: str = ""
    embed_code: str = ""
    permalink: str = ""
    status: int = 0
    status_description: str = ""
    filename: str | None = None
    location: str = ""
    tags: list[str] = field(default_factory=list)
    thumbnail_url: str = ""
    thumbnail_small_url: str = ""
    num_views: int = 0
    num_downloads: int = 0
    num_comments: int = 0
    num_favorites: int = 0
    num_slides: int = 0
    username: str = ""
    created: str = ""
    updated: str = ""
    language: str = ""
    format: str = ""
    download: bool = False
    download_url: str = ""
    slideshow_embed_url: str = ""
    related_slideshow_ids: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        for name in _COUNTER_FIELDS:
            if getattr(self, name) < 0:
                msg = f"{name} must be non-negative, got {getattr(self, name)}"
                raise ValueError(msg)

        # Route initial values through the de-duplicating inserts
        tags, self.tags = self.tags, []
        self.set_tags(tags)
        related, self.related_slideshow_ids = self.related_slideshow_ids, []
        for slideshow_id in related:
            self.add_related_slideshow_id(slideshow_id)

    def add_tag(self, tag: str) -> None:
        """Append a tag unless it is already present."""
        tag = str(tag)
        if tag not in self.tags:
            self.tags.append(tag)

    def set_tags(self, tags: Iterable[str]) -> None:
        """Replace all tags, dropping duplicates."""
        self.tags = []
        for tag in tags:
            self.add_tag(tag)

    def add_related_slideshow_id(self, slideshow_id: str | int) -> None:
        """Append a related slideshow id unless it is already present."""
        slideshow_id = str(slideshow_id)
        if slideshow_id not in self.related_slideshow_ids:
            self.related_slideshow_ids.append(slideshow_id)

    @property
    def is_uploaded(self) -> bool:
        return self.id > 0

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-safe dict of all fields."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SlideShow:
        """Build a record from a dict produced by to_dict().

        Unknown keys are ignored so cache files written by older versions
        still load.
        """
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})
