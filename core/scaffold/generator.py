"""
Writes an AppBlueprint to disk.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

from core.domain.exceptions import ScaffoldConflictError
from core.scaffold.blueprint import AppBlueprint

logger = logging.getLogger(__name__)


@dataclass
class ScaffoldResult:
    """Relative paths grouped by what happened to them."""

    created: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    overwritten: List[str] = field(default_factory=list)
    dry_run: bool = False


class ScaffoldGenerator:
    """
    Materializes an app blueprint under ``base_dir``.

    Generation is all-or-nothing with respect to conflicts: if any file of
    the blueprint already exists and ``force`` is not set, nothing is written.
    """

    def __init__(self, base_dir: Union[str, Path]):
        self.base_dir = Path(base_dir)

    def generate(
        self, blueprint: AppBlueprint, dry_run: bool = False, force: bool = False
    ) -> ScaffoldResult:
        """
        Render and write the blueprint.

        Args:
            blueprint: App to generate
            dry_run: Report what would be written without touching the disk
            force: Overwrite files that already exist

        Returns:
            ScaffoldResult

        Raises:
            InvalidAppNameError: If the blueprint name is invalid
            ScaffoldConflictError: If files exist and force is False
        """
        files = blueprint.files(self.base_dir)
        result = ScaffoldResult(dry_run=dry_run)

        conflicts = [path for path in files if (self.base_dir / path).exists()]
        if conflicts and not force:
            raise ScaffoldConflictError(conflicts)

        for path in blueprint.shared_packages():
            if (self.base_dir / path).exists():
                result.skipped.append(path)
            else:
                files.setdefault(path, "")

        for path, content in files.items():
            if path in result.skipped:
                continue
            target = self.base_dir / path
            if target.exists():
                result.overwritten.append(path)
            else:
                result.created.append(path)
            if dry_run:
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")

        logger.info(
            "Scaffolded app %s",
            blueprint.name,
            extra={
                "app_name": blueprint.name,
                "created": len(result.created),
                "overwritten": len(result.overwritten),
                "dry_run": dry_run,
            },
        )
        return result
