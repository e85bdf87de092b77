"""
ArchiveArticleCommand.

Command to archive a published article.
"""
import uuid
from dataclasses import dataclass


@dataclass
class ArchiveArticleCommand:
    """Command to archive an article."""

    article_id: uuid.UUID
