"""Link tracking settings with their defaults."""

from django.conf import settings

DEFAULTS = {
    "BROKEN_LINK_CLASS": "ss-broken",
    "BASE_URL": "http://localhost/",
}


def link_tracking_setting(name):
    """Return ``settings.LINK_TRACKING[name]``, falling back to the default."""
    configured = getattr(settings, "LINK_TRACKING", None) or {}
    return configured.get(name, DEFAULTS[name])
