"""
PublishDueArticlesCommand.

Command to publish every scheduled article whose time has come.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class PublishDueArticlesCommand:
    """Command to publish due scheduled articles."""

    now: Optional[datetime] = None
    dry_run: bool = False
