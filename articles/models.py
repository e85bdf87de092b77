"""
Model registry for the articles app.

Models live in articles.infrastructure.models; importing them here
lets Django discover them.
"""

from articles.infrastructure.models import Article, ArticleQuerySet, Tag  # noqa: F401
