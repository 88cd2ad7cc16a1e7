"""
Link tracking for records with HTML fields.

LinkTracker scans each HTML field of a record, marks broken links in the
markup with a CSS class, keeps the record's broken-link flags up to date and
replaces the record's tracking edges for that field:
- page links go to the ``outgoing_links`` relation (SiteTreeLink)
- file links and image shortcodes go to the ``file_links`` relation (SiteTreeFileLink)
"""

import logging
from typing import Iterable, List

from django.db import transaction

from sitetree.conf import link_tracking_setting
from sitetree.versioning import Stage

from .html import HTMLValue
from .parser import LinkDescriptor, LinkKind, LinkParser

logger = logging.getLogger(__name__)


def _unique(ids: Iterable[int]) -> List[int]:
    seen = set()
    result = []
    for item in ids:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


class LinkTracker:
    """
    Synchronize link tracking for a record.

    Args:
        parser: LinkParser used to find links (defaults to one backed by the database)
    """

    # (related manager name on the owner, foreign key name on the edge)
    page_relation = ("outgoing_links", "linked")
    file_relation = ("file_links", "file")

    def __init__(self, parser: LinkParser = None):
        self.parser = parser or LinkParser()

    @property
    def broken_class(self) -> str:
        return link_tracking_setting("BROKEN_LINK_CLASS")

    def synchronize(self, record, stage: Stage = Stage.STAGE) -> None:
        """
        Rescan every HTML field of ``record``.

        Only the draft stage is tracked; for ``Stage.LIVE`` nothing happens.
        The record is modified in memory but not saved.
        """
        if stage == Stage.LIVE:
            logger.debug(f"Skipping link tracking for live record {record!r}")
            return

        record.has_broken_link = False
        record.has_broken_file = False

        for field_name in record.get_html_fields():
            self.track_links_in_field(record, field_name)

    def track_links_in_field(self, record, field_name: str) -> List[LinkDescriptor]:
        """
        Scan one HTML field for links to pages and files.

        This method:
        1. Parses the field and finds its links
        2. Adds or removes the broken-link class on each link element
        3. Writes the re-serialized markup back to the field
        4. Sets has_broken_link / has_broken_file for broken links
        5. Replaces the record's tracking edges for this field (saved records only)

        Args:
            record: Record with LinkTrackingMixin
            field_name: Name of the HTML field to scan

        Returns:
            The descriptors found in the field
        """
        html_value = HTMLValue(getattr(record, field_name))
        links = self.parser.process(html_value)

        self._annotate(html_value, links)
        setattr(record, field_name, html_value.get_content())

        linked_pages = []
        linked_files = []

        for link in links:
            if link.kind == LinkKind.SITETREE:
                if link.broken:
                    record.has_broken_link = True
                else:
                    linked_pages.append(link.target)
            elif link.kind in (LinkKind.FILE, LinkKind.IMAGE):
                if link.broken:
                    record.has_broken_file = True
                else:
                    linked_files.append(link.target)
            elif link.broken:
                record.has_broken_link = True

        broken_count = sum(1 for link in links if link.broken)
        if broken_count:
            logger.warning(f"{broken_count} broken link(s) in {record!r}.{field_name}")

        if record.pk is not None and not record._state.adding:
            with transaction.atomic():
                self._replace_edges(record, field_name, self.page_relation, linked_pages)
                self._replace_edges(record, field_name, self.file_relation, linked_files)

        return links

    def _annotate(self, html_value: HTMLValue, links: List[LinkDescriptor]) -> None:
        broken_class = self.broken_class

        for link in links:
            # Skip links without elements
            if link.element_index is None:
                continue

            element = html_value.element(link.element_index)
            classes = element.get("class", [])
            if isinstance(classes, str):
                classes = classes.split()
            classes = [c for c in classes if c]

            if link.broken:
                if broken_class not in classes:
                    classes.append(broken_class)
            else:
                classes = [c for c in classes if c != broken_class]

            if classes:
                element["class"] = classes
            elif element.has_attr("class"):
                del element["class"]

    def _replace_edges(self, record, field_name, relation, target_ids) -> None:
        manager_name, target_field = relation
        edges = getattr(record, manager_name)

        deleted, _ = edges.filter(field_name=field_name).delete()

        targets = _unique(target_ids)
        edges.model.objects.bulk_create(
            [
                edges.model(
                    owner=record,
                    field_name=field_name,
                    **{f"{target_field}_id": target_id},
                )
                for target_id in targets
            ]
        )

        logger.info(
            f"Replaced {manager_name} for {record!r}.{field_name}: "
            f"{deleted} removed, {len(targets)} added"
        )
