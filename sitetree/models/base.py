"""
Base models and mixins for the sitetree app.
"""

from django.db import models


class TimeStampedModel(models.Model):
    """Abstract base model that adds created_at and updated_at timestamps."""

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    class Meta:
        abstract = True


class UniqueSlugMixin:
    """
    Mixin that provides a method to generate a unique URL segment.

    Expects the model to have a 'url_segment' field.
    """

    def _unique_url_segment(self, base: str) -> str:
        """Generate a unique segment, appending a counter if needed."""
        segment = base
        counter = 2

        while self.__class__.objects.filter(url_segment=segment).exclude(pk=self.pk).exists():
            segment = f"{base}-{counter}"
            counter += 1

        return segment
