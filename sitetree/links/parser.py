"""
Link parser for HTML page content.

Finds the links that link tracking cares about:
- ``<a href="[sitetree_link id=N]">`` links to pages, optionally with ``#anchor``
- ``<a href="[file_link id=N]">`` links to files
- ``<a href="#anchor">`` links within the same document
- ``[image ... id="N"]`` shortcodes embedded anywhere in the text

and decides for each whether it is broken.
"""

import enum
import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from .html import HTMLValue
from .repository import ContentRepository, ModelContentRepository
from .urls import make_relative

logger = logging.getLogger(__name__)

SITETREE_LINK_PATTERN = re.compile(
    r"\[sitetree_link(?:\s*|%20|,)?id=(?P<id>[0-9]+)\](#(?P<anchor>.*))?",
    re.IGNORECASE,
)
FILE_LINK_PATTERN = re.compile(
    r"\[file_link(?:\s*|%20|,)?id=(?P<id>[0-9]+)",
    re.IGNORECASE,
)
LOCAL_ANCHOR_PATTERN = re.compile(r"^#(.*)")
# Inline shortcodes, never inside attributes
IMAGE_SHORTCODE_PATTERN = re.compile(
    r"\[image([^\]]+)\bid=(\")?(?P<id>\d+)\D",
    re.IGNORECASE,
)


class LinkKind(str, enum.Enum):
    SITETREE = "sitetree"
    FILE = "file"
    IMAGE = "image"
    LOCAL_ANCHOR = "localanchor"
    BROKEN = "broken"
    UNKNOWN = "unknown"


@dataclass
class LinkDescriptor:
    """
    One link found by the parser.

    ``element_index`` points into ``HTMLValue.anchors`` of the document that
    was parsed; it is None for image shortcodes, which have no element.
    """

    kind: LinkKind
    target: Optional[int] = None
    anchor: Optional[str] = None
    element_index: Optional[int] = None
    broken: bool = False


def has_anchor(content: str, anchor: str) -> bool:
    """Check whether ``content`` declares ``name="anchor"`` or ``id="anchor"``."""
    return re.search(rf'(name|id)="{re.escape(anchor)}"', content or "") is not None


class LinkParser:
    """
    Extract link descriptors from an HTMLValue.

    Args:
        repository: Resolves page, file and image ids (defaults to the database)
    """

    def __init__(self, repository: Optional[ContentRepository] = None):
        self.repository = repository or ModelContentRepository()

    def process(self, html_value: HTMLValue) -> List[LinkDescriptor]:
        """
        Find the tracked links in a document.

        Anchors are examined in document order; image shortcodes found in the
        serialized document follow them.

        Args:
            html_value: Parsed document to scan

        Returns:
            List of LinkDescriptor
        """
        results = []

        if html_value is None:
            return results

        for index, link in enumerate(html_value.anchors):
            descriptor = self._process_anchor(html_value, index, link)
            if descriptor is not None:
                results.append(descriptor)

        results.extend(self._process_image_shortcodes(html_value.get_content()))

        logger.debug(f"Found {len(results)} tracked links")
        return results

    def _process_anchor(self, html_value, index, link) -> Optional[LinkDescriptor]:
        if not link.has_attr("href"):
            return None

        href = make_relative(link["href"])

        # Definitely broken links
        if href == "" or href[0] == "/":
            return LinkDescriptor(
                kind=LinkKind.BROKEN,
                element_index=index,
                broken=True,
            )

        match = SITETREE_LINK_PATTERN.search(href)
        if match:
            page_id = int(match.group("id"))
            anchor = match.group("anchor") or None
            content = self.repository.get_page_content(page_id)

            if content is None:
                broken = True
            elif anchor:
                broken = not has_anchor(content, anchor)
            else:
                broken = False

            return LinkDescriptor(
                kind=LinkKind.SITETREE,
                target=page_id,
                anchor=anchor,
                element_index=index,
                broken=broken,
            )

        match = FILE_LINK_PATTERN.search(href)
        if match:
            file_id = int(match.group("id"))
            return LinkDescriptor(
                kind=LinkKind.FILE,
                target=file_id,
                element_index=index,
                broken=not self.repository.file_exists(file_id),
            )

        match = LOCAL_ANCHOR_PATTERN.match(href)
        if match:
            anchor = match.group(1)
            return LinkDescriptor(
                kind=LinkKind.LOCAL_ANCHOR,
                anchor=anchor,
                element_index=index,
                broken=not has_anchor(html_value.get_content(), anchor),
            )

        return None

    def _process_image_shortcodes(self, content: str) -> List[LinkDescriptor]:
        results = []
        for match in IMAGE_SHORTCODE_PATTERN.finditer(content):
            image_id = int(match.group("id"))
            results.append(
                LinkDescriptor(
                    kind=LinkKind.IMAGE,
                    target=image_id,
                    broken=not self.repository.image_exists(image_id),
                )
            )
        return results
