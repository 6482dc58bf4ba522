"""Domain-specific errors for goapi."""

from __future__ import annotations


class GoAPIError(Exception):
    """Base error for goapi."""


class LoadError(GoAPIError):
    """Raised when packages cannot be listed, parsed or type-checked."""


class UnsupportedTypeError(GoAPIError):
    """Raised when a resolved type has a shape the formatter cannot render."""


class UnsupportedDeclarationError(GoAPIError):
    """Raised when a package-scope declaration has an unknown kind."""
