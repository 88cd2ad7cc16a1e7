"""
Link tracking models.

LinkTrackingMixin carries the broken-link summary flags and the declaration of
which HTML fields are scanned. SiteTreeLink and SiteTreeFileLink are the
through tables behind a page's ``link_tracking`` and ``image_tracking``
relations; each edge is tagged with the name of the field the link was found in.
"""

from django.db import models

from .base import TimeStampedModel


class LinkTrackingMixin(models.Model):
    """
    Abstract model for records whose HTML fields are scanned for links.

    Subclasses list the scanned fields in ``html_fields``; every name must
    refer to an HTMLTextField (see sitetree.checks).
    """

    html_fields = ()

    has_broken_link = models.BooleanField(
        default=False,
        editable=False,
        db_index=True,
        help_text="Content contains a link to a missing page or anchor",
    )
    has_broken_file = models.BooleanField(
        default=False,
        editable=False,
        db_index=True,
        help_text="Content references a missing file or image",
    )

    class Meta:
        abstract = True

    @classmethod
    def get_html_fields(cls):
        return tuple(cls.html_fields)


class SiteTreeLink(TimeStampedModel):
    """A page linking to another page from one of its HTML fields."""

    owner = models.ForeignKey(
        "sitetree.SiteTree",
        on_delete=models.CASCADE,
        related_name="outgoing_links",
        help_text="The page that contains the link",
    )
    linked = models.ForeignKey(
        "sitetree.SiteTree",
        on_delete=models.CASCADE,
        related_name="incoming_links",
        help_text="The page being linked to",
    )
    field_name = models.CharField(max_length=100, db_index=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["owner", "linked", "field_name"],
                name="unique_sitetree_link_per_field",
            ),
        ]
        indexes = [
            models.Index(fields=["owner", "field_name"], name="sitetree_link_owner_field_idx"),
        ]
        verbose_name = "Page Link"
        verbose_name_plural = "Page Links"

    def __str__(self) -> str:
        return f"{self.owner} → {self.linked} ({self.field_name})"


class SiteTreeFileLink(TimeStampedModel):
    """A page referencing a file or image from one of its HTML fields."""

    owner = models.ForeignKey(
        "sitetree.SiteTree",
        on_delete=models.CASCADE,
        related_name="file_links",
    )
    file = models.ForeignKey(
        "sitetree.File",
        on_delete=models.CASCADE,
        related_name="page_links",
    )
    field_name = models.CharField(max_length=100, db_index=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["owner", "file", "field_name"],
                name="unique_sitetree_file_link_per_field",
            ),
        ]
        indexes = [
            models.Index(fields=["owner", "field_name"], name="sitetree_flink_owner_field_idx"),
        ]
        verbose_name = "File Link"
        verbose_name_plural = "File Links"

    def __str__(self) -> str:
        return f"{self.owner} → {self.file} ({self.field_name})"
