"""
ScheduleArticleCommand.

Command to schedule a draft for automatic publication.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime


@dataclass
class ScheduleArticleCommand:
    """Command to schedule an article."""

    article_id: uuid.UUID
    publish_at: datetime
