"""
Abstract base models shared by every app.
"""

import uuid

from django.db import models


class TimeStampedModel(models.Model):
    """Adds self-maintained ``created_at`` / ``updated_at`` columns."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class UUIDModel(models.Model):
    """UUID primary key, so ids can be generated outside the database."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Meta:
        abstract = True
