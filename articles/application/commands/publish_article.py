"""
PublishArticleCommand.

Command to publish an article immediately.
"""
import uuid
from dataclasses import dataclass


@dataclass
class PublishArticleCommand:
    """Command to publish an article."""

    article_id: uuid.UUID
