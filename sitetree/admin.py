"""Admin configuration for pages, files and link tracking."""

from django.conf import settings
from django.contrib import admin
from django.db.models import Count

from sitetree.models import File, SiteTree, SiteTreeFileLink, SiteTreeLink

admin.site.site_header = getattr(settings, "ADMIN_SITE_HEADER", "Django Administration")
admin.site.site_title = getattr(settings, "ADMIN_SITE_TITLE", "Django site admin")


class SiteTreeLinkInline(admin.TabularInline):
    """Read-only list of pages this page links to."""

    model = SiteTreeLink
    fk_name = "owner"
    extra = 0
    can_delete = False
    fields = ["linked", "field_name"]
    readonly_fields = ["linked", "field_name"]
    verbose_name_plural = "Linked pages"

    def has_add_permission(self, request, obj=None):
        return False


class SiteTreeFileLinkInline(admin.TabularInline):
    """Read-only list of files this page references."""

    model = SiteTreeFileLink
    extra = 0
    can_delete = False
    fields = ["file", "field_name"]
    readonly_fields = ["file", "field_name"]
    verbose_name_plural = "Linked files"

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(SiteTree)
class SiteTreeAdmin(admin.ModelAdmin):
    """Admin for pages, with broken link filters."""

    list_display = [
        "title",
        "url_segment",
        "parent",
        "has_broken_link",
        "has_broken_file",
        "backlink_count",
        "updated_at",
    ]
    list_filter = ["has_broken_link", "has_broken_file"]
    search_fields = ["title", "url_segment", "content"]
    readonly_fields = ["has_broken_link", "has_broken_file", "created_at", "updated_at"]
    list_select_related = ["parent"]
    inlines = [SiteTreeLinkInline, SiteTreeFileLinkInline]

    fieldsets = [
        (None, {"fields": ["title", "url_segment", "parent", "sort"]}),
        (
            "Content",
            {
                "fields": ["content", "summary"],
                "description": "Links to missing pages, anchors or files are marked with the broken link class on save.",
            },
        ),
        (
            "Link tracking",
            {"fields": [("has_broken_link", "has_broken_file")]},
        ),
        (
            "Metadata",
            {
                "fields": ["created_at", "updated_at"],
                "classes": ["collapse"],
            },
        ),
    ]

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(
            _backlink_count=Count("incoming_links__owner", distinct=True)
        )

    @admin.display(description="Backlinks", ordering="_backlink_count")
    def backlink_count(self, obj):
        return obj._backlink_count


@admin.register(File)
class FileAdmin(admin.ModelAdmin):
    """Admin for files and images."""

    list_display = ["title", "filename", "file_type", "usage_count", "updated_at"]
    list_filter = ["file_type"]
    search_fields = ["title", "filename"]
    readonly_fields = ["created_at", "updated_at"]

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(
            _usage_count=Count("page_links__owner", distinct=True)
        )

    @admin.display(description="Used on pages", ordering="_usage_count")
    def usage_count(self, obj):
        return obj._usage_count
