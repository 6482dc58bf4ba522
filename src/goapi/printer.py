"""Canonical, line-oriented rendering of a package's exported API.

Each exported declaration (and each exported member of an exported struct or
interface) becomes one line such as:

    pkg net/url, func Parse(string) (*URL, error)
    pkg net/url, method (*URL) String() string
    pkg net/url, type URL struct, Scheme string

Lines are sorted as a final step so the output is stable regardless of the
order in which declarations are supplied.
"""

from __future__ import annotations

from collections.abc import Iterable

from .errors import UnsupportedDeclarationError, UnsupportedTypeError
from .model import (
    CONST_KINDS,
    RECV_ONLY,
    SEND_ONLY,
    SEND_RECV,
    Array,
    Basic,
    Chan,
    ConstDecl,
    Declaration,
    FuncDecl,
    Interface,
    Map,
    Named,
    Package,
    Pointer,
    ResolvedType,
    Signature,
    Slice,
    Struct,
    TypeDecl,
    VarDecl,
    underlying,
)
from .visibility import is_public_decl

_VENDOR = "/vendor/"


def package_path(path: str) -> str:
    """Return the non-vendored form of a package path."""
    i = path.rfind(_VENDOR)
    if i < 0:
        return path
    return path[i + len(_VENDOR) :]


def format_api(pkg: Package) -> str:
    """Render the exported API of `pkg` as a sorted, newline-terminated document."""
    p = Printer(pkg_path=pkg.path)
    p.format_decls(pkg.decls)
    return p.render()


class Printer:
    """Collects the API lines of a single package.

    A printer is bound to one package path; types defined in that package are
    rendered by bare name (`T`) and everything else as `path.T`.
    """

    def __init__(self, *, pkg_path: str) -> None:
        self.pkg_path = package_path(pkg_path)
        self.lines: list[str] = []

    def format_decls(self, decls: Iterable[Declaration]) -> None:
        for decl in decls:
            if is_public_decl(decl):
                self.format_decl(decl)

    def format_decl(self, decl: Declaration) -> None:
        """Add the line(s) describing an already-filtered declaration."""
        if isinstance(decl, ConstDecl):
            if decl.kind not in CONST_KINDS:
                raise UnsupportedDeclarationError(
                    f"const {decl.name}: unexpected constant kind {decl.kind!r}"
                )
            self._add(f"const {decl.name} {decl.kind}")

        elif isinstance(decl, VarDecl):
            self._add(f"var {decl.name} {self.format_type(underlying(decl.type))}")

        elif isinstance(decl, TypeDecl):
            self._format_type_decl(decl)

        elif isinstance(decl, FuncDecl):
            sig = self.format_signature(decl.signature)
            if decl.recv is not None:
                self._add(f"method ({self.format_type(decl.recv)}) {decl.name}{sig}")
            else:
                self._add(f"func {decl.name}{sig}")

        else:
            raise UnsupportedDeclarationError(
                f"unexpected declaration {type(decl).__name__} {decl.name}"
            )

    def _format_type_decl(self, decl: TypeDecl) -> None:
        name = decl.name
        u = decl.underlying
        if isinstance(u, Struct):
            self._add(f"type {name} struct")
            for f in u.fields:
                if not f.exported:
                    continue
                self._add(f"type {name} struct, {f.name} {self.format_type(f.type)}")
        elif isinstance(u, Interface):
            method_names: list[str] = []
            for m in u.methods:
                if not m.exported:
                    continue
                self._add(f"type {name} interface, {m.name}{self.format_signature(m.signature)}")
                method_names.append(m.name)
            if not method_names:
                self._add(f"type {name} interface {{}}")
            else:
                self._add(f"type {name} interface {{ {', '.join(sorted(method_names))} }}")
        else:
            self._add(f"type {name} {self.format_type(u)}")

    def format_type(self, t: ResolvedType) -> str:
        """Compactly render a type as it appears inside a declaration."""
        if isinstance(t, Basic):
            return t.name
        if isinstance(t, Named):
            if t.pkg is None or package_path(t.pkg) == self.pkg_path:
                # Builtin like `error`, or a type of the package being printed.
                return t.name
            return f"{package_path(t.pkg)}.{t.name}"
        if isinstance(t, Pointer):
            return "*" + self.format_type(t.elem)
        if isinstance(t, Slice):
            return "[]" + self.format_type(t.elem)
        if isinstance(t, Array):
            return f"[{t.len}]{self.format_type(t.elem)}"
        if isinstance(t, Map):
            return f"map[{self.format_type(t.key)}]{self.format_type(t.elem)}"
        if isinstance(t, Chan):
            elem = self.format_type(t.elem)
            if t.dir == SEND_RECV:
                return "chan " + elem
            if t.dir == SEND_ONLY:
                return "chan <- " + elem
            if t.dir == RECV_ONLY:
                return "<- chan " + elem
            raise UnsupportedTypeError(f"unexpected channel direction {t.dir!r}")
        if isinstance(t, Signature):
            # Not a top-level declaration, so there is no receiver.
            return "func" + self.format_signature(t)
        if isinstance(t, Interface):
            if not t.methods:
                return "interface{}"
            methods = sorted(t.methods, key=lambda m: m.name)
            return (
                "interface{"
                + "; ".join(m.name + self.format_signature(m.signature) for m in methods)
                + "}"
            )
        if isinstance(t, Struct):
            if not t.fields:
                return "struct{}"
            parts = []
            for f in t.fields:
                s = self.format_type(f.type) if f.embedded else f"{f.name} {self.format_type(f.type)}"
                if f.tag:
                    s += " " + f.tag
                parts.append(s)
            return "struct{" + "; ".join(parts) + "}"
        raise UnsupportedTypeError(f"unexpected type {type(t).__name__} {t!r}")

    def format_signature(self, sig: Signature) -> str:
        """Format the parameters and results of a function, without name or receiver.

        Examples:

            (string, string) error
            (string) (bool, error)
            (...interface{})
        """
        params: list[str] = []
        last = len(sig.params) - 1
        for i, t in enumerate(sig.params):
            if sig.variadic and i == last:
                if not isinstance(t, Slice):
                    raise UnsupportedTypeError(f"variadic parameter is not a slice: {t!r}")
                params.append("..." + self.format_type(t.elem))
            else:
                params.append(self.format_type(t))
        out = "(" + ", ".join(params) + ")"

        results = [self.format_type(t) for t in sig.results]
        if len(results) == 1:
            out += " " + results[0]
        elif results:
            out += " (" + ", ".join(results) + ")"
        return out

    def render(self) -> str:
        prefix = f"pkg {self.pkg_path}, "
        return "".join(f"{prefix}{line}\n" for line in sorted(self.lines))

    def _add(self, line: str) -> None:
        self.lines.append(line)
