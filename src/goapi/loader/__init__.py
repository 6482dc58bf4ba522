"""Load and type-check Go packages into `goapi.model` via the Go toolchain."""

from __future__ import annotations

from .decode import decode_packages
from .load import load_packages

__all__ = ["decode_packages", "load_packages"]
