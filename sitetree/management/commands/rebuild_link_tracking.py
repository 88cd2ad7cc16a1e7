"""
Management command to rebuild link tracking for pages.

Re-scans the HTML fields of each page, refreshes the broken link markers and
flags, and replaces the page's SiteTreeLink / SiteTreeFileLink records.
Useful after bulk imports or after changing the broken link class.
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from sitetree.links.reports import get_link_tracking_statistics
from sitetree.models import SiteTree, SiteTreeFileLink, SiteTreeLink


class Command(BaseCommand):
    help = "Rebuild link tracking records by parsing page content"

    def add_arguments(self, parser):
        parser.add_argument(
            "--page-id",
            type=int,
            help="Rebuild link tracking for a specific page by ID",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be updated without making changes",
        )
        parser.add_argument(
            "--clear",
            action="store_true",
            help="Delete all existing link tracking records before rebuilding",
        )
        parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show per-page results",
        )
        parser.add_argument(
            "--stats",
            action="store_true",
            help="Show link tracking statistics after rebuild",
        )

    def handle(self, *args, **options):
        page_id = options.get("page_id")
        dry_run = options.get("dry_run")
        clear = options.get("clear")
        verbose = options.get("verbose")
        show_stats = options.get("stats")

        if dry_run:
            self.stdout.write(self.style.WARNING("DRY RUN MODE: No changes will be saved\n"))

        if clear and not dry_run:
            self.stdout.write("Clearing all existing link tracking records...")
            with transaction.atomic():
                page_count = SiteTreeLink.objects.all().delete()[0]
                file_count = SiteTreeFileLink.objects.all().delete()[0]
            self.stdout.write(
                self.style.SUCCESS(
                    f"Cleared {page_count} page link and {file_count} file link records\n"
                )
            )

        if page_id:
            pages = SiteTree.objects.filter(pk=page_id)
            if not pages.exists():
                self.stdout.write(self.style.ERROR(f"No page found with ID: {page_id}"))
                return
        else:
            pages = SiteTree.objects.all()

        total = pages.count()
        self.stdout.write(f"Found {total} page(s) to process\n")

        totals = {
            "pages_processed": 0,
            "pages_failed": 0,
            "page_links": 0,
            "file_links": 0,
            "broken_links": [],
            "broken_files": [],
        }

        for i, page in enumerate(pages.order_by("pk"), 1):
            if not verbose and (i % 10 == 0 or i == total):
                self.stdout.write(f"Progress: {i}/{total} pages processed")

            try:
                with transaction.atomic():
                    page.save()
                    page_links = page.outgoing_links.count()
                    file_links = page.file_links.count()
                    if dry_run:
                        transaction.set_rollback(True)
            except Exception as e:
                totals["pages_failed"] += 1
                self.stdout.write(
                    self.style.ERROR(f"  Error processing page {page.pk}: {str(e)}")
                )
                continue

            totals["pages_processed"] += 1
            totals["page_links"] += page_links
            totals["file_links"] += file_links
            if page.has_broken_link:
                totals["broken_links"].append(page.title)
            if page.has_broken_file:
                totals["broken_files"].append(page.title)

            if verbose:
                line = (
                    f"[{i}/{total}] {page.title}: "
                    f"{page_links} page link(s), {file_links} file link(s)"
                )
                if page.has_broken_link or page.has_broken_file:
                    self.stdout.write(self.style.WARNING(f"{line} (broken)"))
                else:
                    self.stdout.write(line)

        self.stdout.write("\n" + "=" * 60)
        self.stdout.write("SUMMARY")
        self.stdout.write("=" * 60)
        self.stdout.write(f"Pages processed:        {totals['pages_processed']}")
        self.stdout.write(f"Page links tracked:     {totals['page_links']}")
        self.stdout.write(f"File links tracked:     {totals['file_links']}")

        if totals["broken_links"]:
            self.stdout.write(
                self.style.WARNING(f"Pages with broken links: {len(totals['broken_links'])}")
            )
            if verbose:
                for title in totals["broken_links"]:
                    self.stdout.write(f"  - {title}")
        if totals["broken_files"]:
            self.stdout.write(
                self.style.WARNING(f"Pages with broken files: {len(totals['broken_files'])}")
            )
            if verbose:
                for title in totals["broken_files"]:
                    self.stdout.write(f"  - {title}")
        if totals["pages_failed"]:
            self.stdout.write(self.style.ERROR(f"Pages failed:           {totals['pages_failed']}"))

        self.stdout.write("=" * 60)

        if show_stats and not dry_run:
            stats = get_link_tracking_statistics()
            self.stdout.write("\nLINK TRACKING STATISTICS")
            self.stdout.write("=" * 60)
            self.stdout.write(f"Total pages:              {stats['total_pages']}")
            self.stdout.write(f"Total files:              {stats['total_files']}")
            self.stdout.write(f"Unused files:             {stats['unused_files']}")
            if stats["most_linked_pages"]:
                self.stdout.write("\nMost linked-to pages:")
                for row in stats["most_linked_pages"][:5]:
                    self.stdout.write(
                        f"  - {row['title']} ({row['url_segment']}): "
                        f"{row['backlink_count']} backlinks"
                    )
            self.stdout.write("=" * 60)

        if dry_run:
            self.stdout.write(self.style.WARNING("\nDRY RUN COMPLETE: No changes were saved"))
        else:
            self.stdout.write(
                self.style.SUCCESS(
                    f"\nREBUILD COMPLETE: Processed {totals['pages_processed']} pages"
                )
            )
