"""BeautifulSoup wrapper used by the link parser and tracker."""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag


class HTMLValue:
    """
    A parsed HTML fragment that owns its anchor elements.

    The ``<a>`` elements are collected once, in document order, so link
    descriptors can refer to them by index. The tree is mutated in place and
    serialized back with ``get_content()``.
    """

    def __init__(self, content: str | None):
        self.soup = BeautifulSoup(content or "", "html.parser")
        self._anchors: list[Tag] | None = None

    @property
    def anchors(self) -> list[Tag]:
        if self._anchors is None:
            self._anchors = self.soup.find_all("a")
        return self._anchors

    def element(self, index: int) -> Tag:
        return self.anchors[index]

    def get_content(self) -> str:
        # Named entities such as &nbsp; survive the round trip
        return self.soup.decode(formatter="html")

    def __str__(self) -> str:
        return self.get_content()
