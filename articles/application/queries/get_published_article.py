"""
GetPublishedArticleQuery.

Query for the public representation of an article.
"""
from dataclasses import dataclass


@dataclass
class GetPublishedArticleQuery:
    """Query for a published article by slug."""

    slug: str
