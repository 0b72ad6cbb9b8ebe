"""Marquee catalog and recommendation FastAPI application package."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = ["app", "create_app", "register_routes"]


def __getattr__(name: str) -> Any:
    # Importing app.main builds the FastAPI app; keep that off the import path
    # of the domain modules.
    if name in __all__:
        return getattr(import_module("app.main"), name)
    raise AttributeError(f"module 'app' has no attribute {name}")
