"""Resolved package model handed to the formatter by the loader.

Types form a closed tagged union (`ResolvedType`); declarations form a second
one (`Declaration`). Everything here is read-only input for a single
`format_api` call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .errors import UnsupportedTypeError

# Channel directions.
SEND_RECV = "both"
SEND_ONLY = "send"
RECV_ONLY = "recv"

# Untyped constant kinds.
CONST_KINDS = ("bool", "string", "int", "float", "complex")


def is_exported(name: str) -> bool:
    """Report whether `name` is visible outside its package (starts upper-case)."""
    return name[:1].isupper()


@dataclass(frozen=True)
class Basic:
    name: str


@dataclass(frozen=True)
class Named:
    pkg: str | None  # defining package path; None for universe types like `error`
    name: str
    exported: bool = True
    # Only populated where the formatter needs it (receivers, variables).
    underlying: "ResolvedType | None" = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Pointer:
    elem: "ResolvedType"


@dataclass(frozen=True)
class Slice:
    elem: "ResolvedType"


@dataclass(frozen=True)
class Array:
    len: int
    elem: "ResolvedType"


@dataclass(frozen=True)
class Map:
    key: "ResolvedType"
    elem: "ResolvedType"


@dataclass(frozen=True)
class Chan:
    dir: str  # SEND_RECV, SEND_ONLY or RECV_ONLY
    elem: "ResolvedType"


@dataclass(frozen=True)
class Signature:
    params: tuple["ResolvedType", ...] = ()
    results: tuple["ResolvedType", ...] = ()
    variadic: bool = False


@dataclass(frozen=True)
class Method:
    name: str
    signature: Signature

    @property
    def exported(self) -> bool:
        return is_exported(self.name)


@dataclass(frozen=True)
class Interface:
    methods: tuple[Method, ...] = ()


@dataclass(frozen=True)
class Field:
    name: str
    type: "ResolvedType"
    embedded: bool = False
    tag: str = ""  # Go-quoted literal, empty when untagged

    @property
    def exported(self) -> bool:
        return is_exported(self.name)


@dataclass(frozen=True)
class Struct:
    fields: tuple[Field, ...] = ()


@dataclass(frozen=True)
class Unsupported:
    """A type the loader saw but the model has no shape for (type params, unions)."""

    kind: str
    repr: str = ""


ResolvedType = Union[
    Basic, Named, Pointer, Slice, Array, Map, Chan, Signature, Interface, Struct, Unsupported
]


def underlying(t: ResolvedType) -> ResolvedType:
    """Return the structural form of `t`, expanding one level of naming."""
    if isinstance(t, Named):
        if t.underlying is None:
            raise UnsupportedTypeError(f"underlying type of {t.pkg}.{t.name} was not resolved")
        return t.underlying
    return t


@dataclass(frozen=True)
class ConstDecl:
    name: str
    kind: str  # one of CONST_KINDS
    nested: bool = False


@dataclass(frozen=True)
class VarDecl:
    name: str
    type: ResolvedType
    is_field: bool = False
    nested: bool = False


@dataclass(frozen=True)
class TypeDecl:
    name: str
    underlying: ResolvedType
    nested: bool = False


@dataclass(frozen=True)
class FuncDecl:
    name: str
    signature: Signature
    recv: ResolvedType | None = None
    nested: bool = False


@dataclass(frozen=True)
class OtherDecl:
    """An object kind the loader reports but the formatter does not handle (labels, imports)."""

    kind: str
    name: str
    nested: bool = False


Declaration = Union[ConstDecl, VarDecl, TypeDecl, FuncDecl, OtherDecl]


@dataclass(frozen=True)
class Package:
    path: str
    name: str
    decls: tuple[Declaration, ...] = ()
