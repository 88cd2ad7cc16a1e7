"""URL helpers for link classification."""

import re
from typing import Optional
from urllib.parse import urlparse

from sitetree.conf import link_tracking_setting

_DOUBLE_SLASH = re.compile(r"([^:])//")
_ABSOLUTE_URL = re.compile(r"^https?[^:]*://", re.IGNORECASE)


def make_relative(url: str, base_url: Optional[str] = None) -> str:
    """
    Turn an absolute URL on this site into one relative to the site root.

    URLs on other hosts, shortcodes and fragments are returned unchanged
    (apart from surrounding whitespace and accidental ``//`` in the path).

    Args:
        url: The href to normalize
        base_url: Absolute base URL of the site (defaults to LINK_TRACKING["BASE_URL"])

    Returns:
        The relative form of the URL

    Example:
        >>> make_relative("http://localhost/about-us/", "http://localhost/")
        'about-us/'
        >>> make_relative("http://localhost/", "http://localhost/")
        ''
        >>> make_relative("[sitetree_link id=5]", "http://localhost/")
        '[sitetree_link id=5]'
    """
    url = _DOUBLE_SLASH.sub(r"\1/", (url or "").strip())

    if base_url is None:
        base_url = link_tracking_setting("BASE_URL")
    if not base_url.endswith("/"):
        base_url += "/"

    match = _ABSOLUTE_URL.match(url)
    if match:
        if url == base_url or url == base_url[:-1]:
            return ""
        if url.startswith(base_url):
            return url[len(base_url):]

        # Same host reached over a different protocol
        base_domain = _ABSOLUTE_URL.sub("", base_url)
        url_without_protocol = url[match.end():]
        if url_without_protocol == base_domain[:-1]:
            return ""
        if url_without_protocol.startswith(base_domain):
            return url_without_protocol[len(base_domain):]
        return url

    # Site installed below a sub-directory, e.g. /cms/
    base_path = urlparse(base_url).path or "/"
    if base_path != "/" and url.startswith(base_path):
        return url[len(base_path):]

    return url
