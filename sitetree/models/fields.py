"""Semantic field types for page content."""

from django.db import models


class HTMLTextField(models.TextField):
    """
    Text field holding rich HTML content.

    Only fields of this type may be listed in a model's ``html_fields`` and
    so take part in link tracking.
    """

    description = "Rich HTML text"
