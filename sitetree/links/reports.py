"""
Queries over the link tracking tables for reporting.
"""

from django.db.models import Count, Q


def pages_with_broken_links():
    """Pages whose content links to a missing page or anchor."""
    from sitetree.models import SiteTree

    return SiteTree.objects.filter(has_broken_link=True).order_by("title")


def pages_with_broken_files():
    """Pages whose content references a missing file or image."""
    from sitetree.models import SiteTree

    return SiteTree.objects.filter(has_broken_file=True).order_by("title")


def get_backlinks_for_page(page, field_name=None):
    """
    Get the pages that link to ``page``.

    Args:
        page: SiteTree instance
        field_name: Only count links found in this field of the linking page

    Returns:
        QuerySet of SiteTree objects
    """
    from sitetree.models import SiteTree

    filters = {"outgoing_links__linked": page}
    if field_name:
        filters["outgoing_links__field_name"] = field_name
    return SiteTree.objects.filter(**filters).distinct().order_by("title")


def get_tracked_files_for_page(page):
    """Get the files and images referenced by ``page``."""
    return page.image_tracking.all().distinct().order_by("title")


def find_unused_files():
    """Files that no page references."""
    from sitetree.models import File

    return File.objects.annotate(usage_count=Count("page_links")).filter(usage_count=0)


def get_link_tracking_statistics():
    """
    Get overall link tracking statistics for the site.

    Returns:
        Dict with counts and the most linked-to pages
    """
    from sitetree.models import File, SiteTree, SiteTreeFileLink, SiteTreeLink

    most_linked = (
        SiteTree.objects.annotate(backlink_count=Count("incoming_links__owner", distinct=True))
        .filter(backlink_count__gt=0)
        .order_by("-backlink_count", "title")[:10]
    )

    broken = SiteTree.objects.aggregate(
        broken_links=Count("pk", filter=Q(has_broken_link=True)),
        broken_files=Count("pk", filter=Q(has_broken_file=True)),
    )

    return {
        "total_pages": SiteTree.objects.count(),
        "total_files": File.objects.count(),
        "page_links": SiteTreeLink.objects.count(),
        "file_links": SiteTreeFileLink.objects.count(),
        "pages_with_broken_links": broken["broken_links"],
        "pages_with_broken_files": broken["broken_files"],
        "unused_files": find_unused_files().count(),
        "most_linked_pages": list(
            most_linked.values("id", "title", "url_segment", "backlink_count")
        ),
    }
