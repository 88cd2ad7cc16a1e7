from django.apps import AppConfig


class SiteTreeConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "sitetree"
    verbose_name = "Site tree"

    def ready(self):
        """Import signal handlers and system checks when app is ready."""
        import sitetree.checks  # noqa: F401
        import sitetree.signals  # noqa: F401
