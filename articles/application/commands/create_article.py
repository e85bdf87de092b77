"""
CreateArticleCommand.

Command to create a draft article.
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class CreateArticleCommand:
    """Command to create a draft article."""

    title: str
    body: str = ""
    slug: Optional[str] = None
    author_id: Optional[int] = None
    tags: List[str] = field(default_factory=list)
