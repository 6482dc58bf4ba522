"""Decide which declarations and members belong to a package's public API."""

from __future__ import annotations

from .model import (
    Declaration,
    FuncDecl,
    Interface,
    Named,
    Pointer,
    ResolvedType,
    VarDecl,
    is_exported,
)


def is_public_decl(decl: Declaration) -> bool:
    """Report whether a top-level declaration should be rendered at all.

    Only exported identifiers that are not enclosed by a function or block
    scope qualify. Struct fields are surfaced through their owning type and
    methods are subject to receiver rules, so both are filtered here too.
    """
    if not is_exported(decl.name) or decl.nested:
        return False
    if isinstance(decl, VarDecl) and decl.is_field:
        return False
    if isinstance(decl, FuncDecl) and decl.recv is not None:
        return not is_hidden_receiver(decl.recv)
    return True


def is_hidden_receiver(recv: ResolvedType) -> bool:
    """Report whether methods declared on `recv` must be left out.

    Methods on interfaces are printed when walking the interface type itself,
    and exported methods on unexported types are unreachable from outside the
    package.
    """
    if isinstance(recv, Pointer):
        return is_hidden_receiver(recv.elem)
    if isinstance(recv, Named):
        if isinstance(recv.underlying, Interface):
            return True
        return not recv.exported
    return isinstance(recv, Interface)
