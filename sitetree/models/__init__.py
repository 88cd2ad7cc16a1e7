"""
Models for the sitetree app.

- base: TimeStampedModel and the URL segment mixin
- fields: HTMLTextField
- files: File and its Image proxy
- tracking: LinkTrackingMixin and the SiteTreeLink / SiteTreeFileLink edges
- page: SiteTree
"""

from .base import TimeStampedModel, UniqueSlugMixin
from .fields import HTMLTextField
from .files import File, Image, ImageManager
from .tracking import LinkTrackingMixin, SiteTreeFileLink, SiteTreeLink
from .page import SiteTree

__all__ = [
    "TimeStampedModel",
    "UniqueSlugMixin",
    "HTMLTextField",
    "File",
    "Image",
    "ImageManager",
    "LinkTrackingMixin",
    "SiteTreeLink",
    "SiteTreeFileLink",
    "SiteTree",
]
