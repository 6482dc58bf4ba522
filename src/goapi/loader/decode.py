"""Decode the loader helper's JSON dump into `goapi.model` objects."""

from __future__ import annotations

from typing import Any

from ..errors import LoadError
from ..model import (
    SEND_RECV,
    Array,
    Basic,
    Chan,
    ConstDecl,
    Declaration,
    Field,
    FuncDecl,
    Interface,
    Map,
    Method,
    Named,
    OtherDecl,
    Package,
    Pointer,
    ResolvedType,
    Signature,
    Slice,
    Struct,
    TypeDecl,
    Unsupported,
    VarDecl,
)


def decode_packages(obj: Any) -> list[Package]:
    if not isinstance(obj, dict) or not isinstance(obj.get("packages"), list):
        raise LoadError("loader output: expected an object with a 'packages' list")
    return [decode_package(p) for p in obj["packages"]]


def decode_package(obj: Any) -> Package:
    if not isinstance(obj, dict):
        raise LoadError("loader output: package entry is not an object")
    path = _str(obj, "path")
    decls = obj.get("decls") or []
    if not isinstance(decls, list):
        raise LoadError(f"loader output: {path}: 'decls' is not a list")
    try:
        return Package(
            path=path,
            name=_str(obj, "name"),
            decls=tuple(decode_decl(d) for d in decls),
        )
    except LoadError as e:
        raise LoadError(f"loader output: {path}: {e}") from None


def decode_decl(obj: Any) -> Declaration:
    if not isinstance(obj, dict):
        raise LoadError("declaration is not an object")
    kind = _str(obj, "kind")
    name = _str(obj, "name")
    nested = bool(obj.get("nested", False))
    if nested:
        # Nested objects are never rendered; the loader sends no types for them.
        return OtherDecl(kind=kind, name=name, nested=True)

    if kind == "const":
        return ConstDecl(name=name, kind=_str(obj, "value_kind"))
    if kind == "var":
        return VarDecl(
            name=name,
            type=decode_type(obj.get("type")),
            is_field=bool(obj.get("is_field", False)),
        )
    if kind == "type":
        return TypeDecl(name=name, underlying=decode_type(obj.get("underlying")))
    if kind == "func":
        sig = decode_type(obj.get("signature"))
        if not isinstance(sig, Signature):
            raise LoadError(f"func {name}: signature has kind {type(sig).__name__}")
        recv = obj.get("recv")
        return FuncDecl(
            name=name,
            signature=sig,
            recv=decode_type(recv) if recv is not None else None,
        )
    return OtherDecl(kind=kind, name=name)


def decode_type(obj: Any) -> ResolvedType:
    if not isinstance(obj, dict):
        raise LoadError(f"expected a type object, got {type(obj).__name__}")
    kind = _str(obj, "kind")

    if kind == "basic":
        return Basic(name=_str(obj, "name"))
    if kind == "named":
        pkg = obj.get("pkg")
        if pkg is not None and not isinstance(pkg, str):
            raise LoadError("named type: 'pkg' must be a string or null")
        u = obj.get("underlying")
        return Named(
            pkg=pkg,
            name=_str(obj, "name"),
            exported=bool(obj.get("exported", False)),
            underlying=decode_type(u) if u is not None else None,
        )
    if kind == "pointer":
        return Pointer(elem=decode_type(obj.get("elem")))
    if kind == "slice":
        return Slice(elem=decode_type(obj.get("elem")))
    if kind == "array":
        n = obj.get("len", 0)
        if not isinstance(n, int) or isinstance(n, bool):
            raise LoadError("array type: 'len' must be an int")
        return Array(len=n, elem=decode_type(obj.get("elem")))
    if kind == "map":
        return Map(key=decode_type(obj.get("key")), elem=decode_type(obj.get("elem")))
    if kind == "chan":
        return Chan(dir=obj.get("dir") or SEND_RECV, elem=decode_type(obj.get("elem")))
    if kind == "signature":
        return Signature(
            params=tuple(decode_type(t) for t in _list(obj, "params")),
            results=tuple(decode_type(t) for t in _list(obj, "results")),
            variadic=bool(obj.get("variadic", False)),
        )
    if kind == "interface":
        methods = []
        for m in _list(obj, "methods"):
            sig = decode_type(m.get("signature") if isinstance(m, dict) else None)
            if not isinstance(sig, Signature):
                raise LoadError("interface method: signature expected")
            methods.append(Method(name=_str(m, "name"), signature=sig))
        return Interface(methods=tuple(methods))
    if kind == "struct":
        fields = []
        for f in _list(obj, "fields"):
            if not isinstance(f, dict):
                raise LoadError("struct field is not an object")
            tag = f.get("tag") or ""
            fields.append(
                Field(
                    name=_str(f, "name"),
                    type=decode_type(f.get("type")),
                    embedded=bool(f.get("embedded", False)),
                    tag=tag if isinstance(tag, str) else "",
                )
            )
        return Struct(fields=tuple(fields))

    # Type parameters, unions, generic instances: the formatter rejects these
    # if a public declaration actually reaches them.
    repr_ = obj.get("repr")
    return Unsupported(kind=kind, repr=repr_ if isinstance(repr_, str) else "")


def _str(obj: dict[str, Any], key: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str) or not v:
        raise LoadError(f"missing or invalid {key!r}")
    return v


def _list(obj: dict[str, Any], key: str) -> list[Any]:
    v = obj.get(key)
    if v is None:
        return []
    if not isinstance(v, list):
        raise LoadError(f"{key!r} must be a list")
    return v
