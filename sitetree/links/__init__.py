"""
Link extraction and tracking for HTML page content.
"""

from .html import HTMLValue
from .parser import LinkDescriptor, LinkKind, LinkParser
from .repository import ContentRepository, ModelContentRepository
from .tracker import LinkTracker
from .urls import make_relative

__all__ = [
    "HTMLValue",
    "LinkDescriptor",
    "LinkKind",
    "LinkParser",
    "ContentRepository",
    "ModelContentRepository",
    "LinkTracker",
    "make_relative",
]
