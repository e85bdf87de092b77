"""
Celery configuration for background tasks.

Used for scheduled publication and the periodic settings audit.
The beat schedule lives in settings as CELERY_BEAT_SCHEDULE.
"""
import os

from celery import Celery

# Set default Django settings module
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "DjangoBlueprint.settings.dev")

app = Celery("DjangoBlueprint")

# Load configuration from Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

# Auto-discover tasks from all installed apps
app.autodiscover_tasks()
