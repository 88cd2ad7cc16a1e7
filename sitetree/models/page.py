"""
SiteTree page model.

Pages form a tree through ``parent`` and hold their body in HTML fields.
Links found in those fields are tracked on save.
"""

from django.db import models, transaction
from django.utils.text import slugify

from sitetree.links.tracker import LinkTracker
from sitetree.versioning import Stage

from .base import TimeStampedModel, UniqueSlugMixin
from .fields import HTMLTextField
from .tracking import LinkTrackingMixin


class SiteTree(TimeStampedModel, UniqueSlugMixin, LinkTrackingMixin):
    """
    A page in the site hierarchy.

    ``content`` and ``summary`` are scanned for links to other pages, files
    and images every time the page is saved in the draft stage.
    """

    html_fields = ("content", "summary")

    parent = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.CASCADE,
        related_name="children",
    )
    title = models.CharField(max_length=255)
    url_segment = models.SlugField(
        max_length=255,
        unique=True,
        blank=True,
        help_text="URL segment for this page. Leave blank to generate from the title.",
    )
    content = HTMLTextField(blank=True)
    summary = HTMLTextField(blank=True)
    sort = models.PositiveIntegerField(default=0)

    link_tracking = models.ManyToManyField(
        "self",
        through="SiteTreeLink",
        through_fields=("owner", "linked"),
        symmetrical=False,
        related_name="back_link_tracking",
        blank=True,
    )
    image_tracking = models.ManyToManyField(
        "File",
        through="SiteTreeFileLink",
        related_name="backlinked_pages",
        blank=True,
    )

    class Meta:
        ordering = ["sort", "title"]
        verbose_name = "Page"
        verbose_name_plural = "Pages"

    def __str__(self):
        return self.title or self.url_segment

    def save(self, *args, stage=Stage.STAGE, **kwargs):
        if not self.url_segment:
            self.url_segment = self._unique_url_segment(slugify(self.title) or "page")

        track_links = True
        update_fields = kwargs.get("update_fields")
        if update_fields is not None:
            update_fields = set(update_fields)
            if update_fields.isdisjoint(self.get_html_fields()):
                # Content is not written, so the stored edges still match it
                track_links = False
            else:
                update_fields.update(self.get_html_fields())
                update_fields.update(["has_broken_link", "has_broken_file"])
                kwargs["update_fields"] = update_fields

        tracker = LinkTracker()
        is_new = self._state.adding

        with transaction.atomic():
            if track_links:
                tracker.synchronize(self, stage=stage)
            super().save(*args, **kwargs)

            if is_new and track_links:
                # Tracking edges need the primary key assigned by the insert
                tracker.synchronize(self, stage=stage)
