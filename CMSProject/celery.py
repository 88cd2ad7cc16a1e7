import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "CMSProject.settings")

app = Celery("CMSProject")

# CELERY_* values in settings.py, e.g. CELERY_TASK_ALWAYS_EAGER
app.config_from_object("django.conf:settings", namespace="CELERY")

# Picks up sitetree.tasks once the app registry is ready
from django.conf import settings
app.autodiscover_tasks(lambda: settings.INSTALLED_APPS)
