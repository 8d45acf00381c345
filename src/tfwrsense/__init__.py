"""Code intelligence for the farm drone scripting language."""

from __future__ import annotations

from tfwrsense.engine import Engine, create_engine

__version__ = "0.1.0"

__all__ = ["Engine", "create_engine", "__version__"]
