"""Stages a page record can be read or written in."""

from django.db import models


class Stage(models.TextChoices):
    STAGE = "Stage", "Draft"
    LIVE = "Live", "Published"
