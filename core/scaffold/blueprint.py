"""
App blueprint: the conventional layout of a Django app in this project.

A blueprint knows which files a new app consists of and renders their
contents from the templates in ``core/scaffold/templates`` using
Django's template engine, the same way ``startapp`` does.
"""

import keyword
import re
import sys
from dataclasses import dataclass
from importlib.util import find_spec
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from django.template import Context, Engine

from core.domain.exceptions import InvalidAppNameError

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

_APP_NAME_RE = re.compile(r"^[a-z][a-z0-9_]*$")
_RESERVED_NAMES = {"test", "tests", "api", "core", "django", "site", "settings"}

_engine = Engine(dirs=[str(TEMPLATE_DIR)], autoescape=False)


def singularize(word: str) -> str:
    if word.endswith("ies") and len(word) > 3:
        return word[:-3] + "y"
    if word.endswith("s") and not word.endswith("ss") and len(word) > 1:
        return word[:-1]
    return word


def to_model_name(app_name: str) -> str:
    """``blog_posts`` -> ``BlogPost``."""
    parts = [p for p in app_name.split("_") if p]
    parts[-1] = singularize(parts[-1])
    return "".join(p.capitalize() for p in parts)


def to_module_name(model_name: str) -> str:
    """``BlogPost`` -> ``blog_post``."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", model_name).lower()


@dataclass(frozen=True)
class AppBlueprint:
    """
    Description of an app to generate.

    Attributes:
        name: Python package name of the app
        layered: Add domain/ports/application/infrastructure packages
        with_api: Add an api/v1/<name> ModelViewSet with a router
        with_tasks: Add a tasks.py with a Celery shared_task
    """

    name: str
    layered: bool = True
    with_api: bool = True
    with_tasks: bool = False

    def validate(self, base_dir: Optional[Path] = None) -> None:
        """
        Args:
            base_dir: Directory the app is generated into. An app that
                already lives there may shadow its own installed module.

        Raises:
            InvalidAppNameError: If the name cannot be used as an app package
        """
        name = self.name
        if not name or not _APP_NAME_RE.match(name):
            raise InvalidAppNameError(
                f"'{name}' is not a valid app name; use lowercase letters, digits and underscores"
            )
        if keyword.iskeyword(name):
            raise InvalidAppNameError(f"'{name}' is a Python keyword")
        if name in _RESERVED_NAMES:
            raise InvalidAppNameError(f"'{name}' is reserved in this project")
        if name in sys.stdlib_module_names:
            raise InvalidAppNameError(f"'{name}' conflicts with a standard library module")
        existing_app = base_dir is not None and (Path(base_dir) / name).is_dir()
        if not existing_app and self.shadows_installed_module():
            raise InvalidAppNameError(f"'{name}' conflicts with an installed Python module")

    def shadows_installed_module(self) -> bool:
        """True if ``import <name>`` already resolves to something."""
        return find_spec(self.name) is not None

    @property
    def model_name(self) -> str:
        return to_model_name(self.name)

    @property
    def model_module(self) -> str:
        return to_module_name(self.model_name)

    def context(self) -> Dict[str, object]:
        return {
            "app_name": self.name,
            "app_label": self.name,
            "app_config_name": "".join(p.capitalize() for p in self.name.split("_")) + "Config",
            "model_name": self.model_name,
            "model_module": self.model_module,
            "verbose_name": self.name.replace("_", " ").title(),
            "table_name": self.name,
            "route_prefix": self.name.replace("_", "-"),
            "layered": self.layered,
            "with_api": self.with_api,
            "with_tasks": self.with_tasks,
        }

    def _manifest(self) -> List[Tuple[str, str]]:
        """(relative output path, template name or "" for an empty file)."""
        app = self.name
        module = self.model_module
        manifest = [
            (f"{app}/__init__.py", "app/__init__.py-tpl"),
            (f"{app}/apps.py", "app/apps.py-tpl"),
            (f"{app}/models.py", "app/models.py-tpl"),
            (f"{app}/admin.py", "app/admin.py-tpl"),
            (f"{app}/migrations/__init__.py", ""),
            (f"{app}/tests/__init__.py", ""),
            (f"{app}/tests/test_models.py", "app/tests/test_models.py-tpl"),
        ]
        if self.layered:
            manifest += [
                (f"{app}/domain/__init__.py", ""),
                (f"{app}/domain/{module}.py", "app/domain/entity.py-tpl"),
                (f"{app}/ports/__init__.py", ""),
                (f"{app}/ports/{module}_repository.py", "app/ports/repository.py-tpl"),
                (f"{app}/application/__init__.py", ""),
                (f"{app}/infrastructure/__init__.py", ""),
                (f"{app}/infrastructure/models.py", "app/infrastructure/models.py-tpl"),
                (f"{app}/infrastructure/repositories/__init__.py", ""),
                (
                    f"{app}/infrastructure/repositories/django_{module}_repository.py",
                    "app/infrastructure/repository.py-tpl",
                ),
            ]
        if self.with_tasks:
            manifest.append((f"{app}/tasks.py", "app/tasks.py-tpl"))
        if self.with_api:
            manifest += [
                (f"api/v1/{app}/__init__.py", ""),
                (f"api/v1/{app}/serializers.py", "api/serializers.py-tpl"),
                (f"api/v1/{app}/views.py", "api/views.py-tpl"),
                (f"api/v1/{app}/urls.py", "api/urls.py-tpl"),
            ]
        return manifest

    def shared_packages(self) -> List[str]:
        """Package markers the app relies on but does not own."""
        if self.with_api:
            return ["api/__init__.py", "api/v1/__init__.py"]
        return []

    def files(self, base_dir: Optional[Path] = None) -> Dict[str, str]:
        """Render every file of the blueprint, keyed by relative path."""
        self.validate(base_dir)
        context = self.context()
        rendered = {}
        for path, template_name in self._manifest():
            if not template_name:
                rendered[path] = ""
                continue
            content = _engine.get_template(template_name).render(Context(context, autoescape=False))
            rendered[path] = content.rstrip() + "\n"
        return rendered
