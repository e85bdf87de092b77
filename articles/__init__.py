"""
Articles module - sample domain app.

This module handles:
- Article entity and its publication workflow
- Article repository (port)
- Article infrastructure (Django ORM adapters)
- Application commands, queries and handlers
"""
