"""
Signal handlers for the sitetree app.

When a page or file is deleted, the pages that tracked it are re-synchronized
so their broken-link flags and markup reflect the missing target.
"""

import logging

from django.db import transaction
from django.db.models.signals import post_delete, pre_delete
from django.dispatch import receiver

from sitetree.models import File, Image, SiteTree
from sitetree.tasks import resync_link_tracking

logger = logging.getLogger(__name__)


def _schedule_resync(page_ids, label):
    if not page_ids:
        return

    logger.info(
        f"Deleted {label} was linked from {len(page_ids)} page(s); "
        f"scheduling link tracking resync"
    )
    transaction.on_commit(lambda: resync_link_tracking.delay(page_ids))


@receiver(pre_delete, sender=SiteTree)
def collect_page_backlinks(sender, instance, **kwargs):
    """
    Remember which pages link to a page before its edges are cascade-deleted.

    Args:
        sender: The SiteTree model class
        instance: The page being deleted
        **kwargs: Additional keyword arguments
    """
    instance._backlinked_page_ids = list(
        SiteTree.objects.filter(outgoing_links__linked=instance)
        .exclude(pk=instance.pk)
        .values_list("pk", flat=True)
        .distinct()
    )


@receiver(post_delete, sender=SiteTree)
def resync_page_backlinks(sender, instance, **kwargs):
    _schedule_resync(getattr(instance, "_backlinked_page_ids", []), f"page '{instance}'")


@receiver(pre_delete, sender=File)
@receiver(pre_delete, sender=Image)
def collect_file_backlinks(sender, instance, **kwargs):
    """Remember which pages reference a file before its edges are cascade-deleted."""
    instance._backlinked_page_ids = list(
        SiteTree.objects.filter(file_links__file_id=instance.pk)
        .values_list("pk", flat=True)
        .distinct()
    )


@receiver(post_delete, sender=File)
@receiver(post_delete, sender=Image)
def resync_file_backlinks(sender, instance, **kwargs):
    _schedule_resync(getattr(instance, "_backlinked_page_ids", []), f"file '{instance}'")
