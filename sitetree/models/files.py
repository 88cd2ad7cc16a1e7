"""
File models.

Includes File and its Image proxy. Pages reference files through
``[file_link id=N]`` hrefs and embed images through ``[image id="N"]``
shortcodes.
"""

from django.db import models

from .base import TimeStampedModel


class File(TimeStampedModel):
    """An uploaded file that page content can link to."""

    class FileType(models.TextChoices):
        IMAGE = "image", "Image"
        DOCUMENT = "document", "Document"
        OTHER = "other", "Other"

    title = models.CharField(max_length=255, help_text="Human-readable title")
    filename = models.CharField(
        max_length=255,
        help_text="Path of the file relative to the assets root (e.g., 'docs/report.pdf')",
    )
    file_type = models.CharField(
        max_length=20,
        choices=FileType.choices,
        default=FileType.OTHER,
        db_index=True,
    )

    class Meta:
        ordering = ["title"]
        verbose_name = "File"
        verbose_name_plural = "Files"

    def __str__(self):
        return self.title or self.filename


class ImageManager(models.Manager):
    """Manager limited to image files."""

    def get_queryset(self):
        return super().get_queryset().filter(file_type=File.FileType.IMAGE)


class Image(File):
    """Proxy of File restricted to images, used to resolve [image] shortcodes."""

    objects = ImageManager()

    class Meta:
        proxy = True
        verbose_name = "Image"
        verbose_name_plural = "Images"

    def save(self, *args, **kwargs):
        self.file_type = File.FileType.IMAGE
        super().save(*args, **kwargs)
