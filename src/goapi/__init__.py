"""goapi: render the exported API of Go packages as sorted, diffable text."""

from __future__ import annotations

from . import errors, model
from .loader import load_packages
from .printer import format_api, package_path

__all__ = [
    "errors",
    "format_api",
    "load_packages",
    "model",
    "package_path",
]
