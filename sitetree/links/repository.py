"""
Lookups the link parser needs to resolve shortcode targets.

The parser only asks three questions: does a page exist (and what is its
content), does a file exist, does an image exist. ModelContentRepository
answers them from the database; tests can pass any object with the same
methods.
"""

import logging
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class ContentRepository(Protocol):
    def get_page_content(self, page_id: int) -> Optional[str]:
        """Return the page's content, or None if the page does not exist."""

    def file_exists(self, file_id: int) -> bool:
        ...

    def image_exists(self, image_id: int) -> bool:
        ...


class ModelContentRepository:
    """ContentRepository backed by the SiteTree, File and Image models."""

    def get_page_content(self, page_id: int) -> Optional[str]:
        from sitetree.models import SiteTree

        content = (
            SiteTree.objects.filter(pk=page_id)
            .values_list("content", flat=True)
            .first()
        )
        if content is None:
            logger.debug(f"Page {page_id} not found")
            return None
        return content

    def file_exists(self, file_id: int) -> bool:
        from sitetree.models import File

        return File.objects.filter(pk=file_id).exists()

    def image_exists(self, image_id: int) -> bool:
        from sitetree.models import Image

        return Image.objects.filter(pk=image_id).exists()
