"""
Celery tasks for link tracking maintenance.

To run them asynchronously, configure CELERY_BROKER_URL, set
CELERY_TASK_ALWAYS_EAGER=false and start a worker:
celery -A CMSProject worker -l info
"""

import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task
def resync_link_tracking(page_ids):
    """
    Re-run link tracking for the given pages and save them.

    Pages that no longer exist are skipped. A failure on one page is logged
    and does not stop the others.

    Args:
        page_ids: Primary keys of SiteTree pages

    Returns:
        Dict with counts: resynced, missing, failed
    """
    from .models import SiteTree

    stats = {"resynced": 0, "missing": 0, "failed": 0}
    requested = set(page_ids)

    for page in SiteTree.objects.filter(pk__in=requested):
        try:
            page.save()
            stats["resynced"] += 1
        except Exception as e:
            stats["failed"] += 1
            logger.error(
                f"Error resyncing link tracking for page {page.pk}: {str(e)}",
                exc_info=True,
            )

    stats["missing"] = len(requested) - stats["resynced"] - stats["failed"]
    logger.info(
        f"Link tracking resync: {stats['resynced']} resynced, "
        f"{stats['missing']} missing, {stats['failed']} failed"
    )
    return stats
