"""Domain models."""

from .slideshow import SlideShow

__all__ = ["SlideShow"]
