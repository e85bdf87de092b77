"""
Scaffolding for new apps laid out the way this project lays out its own.
"""

from core.scaffold.blueprint import AppBlueprint
from core.scaffold.generator import ScaffoldGenerator, ScaffoldResult

__all__ = ("AppBlueprint", "ScaffoldGenerator", "ScaffoldResult")
