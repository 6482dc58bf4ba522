from __future__ import annotations

import pytest


def _fmt(*decls, path: str = "p") -> str:
    from goapi.model import Package
    from goapi.printer import format_api

    return format_api(Package(path=path, name=path.rsplit("/", 1)[-1], decls=tuple(decls)))


def _lines(text: str) -> list[str]:
    return text.splitlines()


def test_constant_uses_literal_kind():
    from goapi.model import ConstDecl

    assert _fmt(ConstDecl(name="C", kind="string")) == "pkg p, const C string\n"
    assert _fmt(ConstDecl(name="Max", kind="int")) == "pkg p, const Max int\n"


def test_constant_with_unknown_kind_is_fatal():
    from goapi.errors import UnsupportedDeclarationError
    from goapi.model import ConstDecl

    with pytest.raises(UnsupportedDeclarationError, match=r"constant kind"):
        _fmt(ConstDecl(name="C", kind="unknown"))


def test_variable_renders_underlying_type():
    from goapi.model import Basic, Field, Named, Struct, VarDecl

    assert _fmt(VarDecl(name="B", type=Basic(name="int"))) == "pkg p, var B int\n"

    t = Named(pkg="p", name="T", underlying=Struct(fields=(Field(name="A", type=Basic(name="int")),)))
    assert _fmt(VarDecl(name="D", type=t)) == "pkg p, var D struct{A int}\n"


def test_struct_fields_are_not_top_level():
    from goapi.model import Basic, VarDecl

    assert _fmt(VarDecl(name="Name", type=Basic(name="string"), is_field=True)) == ""


def test_type_over_basic():
    from goapi.model import Basic, TypeDecl

    assert _fmt(TypeDecl(name="A", underlying=Basic(name="string"))) == "pkg p, type A string\n"


def test_empty_struct():
    from goapi.model import Struct, TypeDecl

    assert _fmt(TypeDecl(name="ContextKey", underlying=Struct())) == "pkg p, type ContextKey struct\n"


def test_struct_with_imported_field_types():
    from goapi.model import Field, Named, Pointer, Signature, Slice, Struct, TypeDecl

    req = Pointer(elem=Named(pkg="net/http", name="Request"))
    client = Struct(
        fields=(
            Field(name="Transport", type=Named(pkg="net/http", name="RoundTripper")),
            Field(
                name="CheckRedirect",
                type=Signature(params=(req, Slice(elem=req)), results=(Named(pkg=None, name="error"),)),
            ),
            Field(name="Jar", type=Named(pkg="net/http", name="CookieJar")),
            Field(name="Timeout", type=Named(pkg="time", name="Duration")),
            Field(name="internal", type=Named(pkg="net/http", name="Header")),
        )
    )
    assert _lines(_fmt(TypeDecl(name="Client", underlying=client))) == [
        "pkg p, type Client struct",
        "pkg p, type Client struct, CheckRedirect func(*net/http.Request, []*net/http.Request) error",
        "pkg p, type Client struct, Jar net/http.CookieJar",
        "pkg p, type Client struct, Timeout time.Duration",
        "pkg p, type Client struct, Transport net/http.RoundTripper",
    ]


def test_struct_fields_referencing_local_interface():
    from goapi.model import Basic, Field, Interface, Map, Method, Named, Signature, Struct, TypeDecl

    i = Named(pkg="p", name="I")
    assert _lines(
        _fmt(
            TypeDecl(
                name="Foo",
                underlying=Struct(
                    fields=(
                        Field(name="A", type=i),
                        Field(name="B", type=Map(key=Basic(name="string"), elem=i)),
                    )
                ),
            ),
            TypeDecl(
                name="I",
                underlying=Interface(
                    methods=(Method(name="Bar", signature=Signature(results=(Basic(name="string"),))),)
                ),
            ),
        )
    ) == [
        "pkg p, type Foo struct",
        "pkg p, type Foo struct, A I",
        "pkg p, type Foo struct, B map[string]I",
        "pkg p, type I interface { Bar }",
        "pkg p, type I interface, Bar() string",
    ]


def test_interface_lists_exported_methods():
    from goapi.model import Basic, Interface, Method, Named, Signature, Slice, TypeDecl

    err = Named(pkg=None, name="error")
    foo = Interface(
        methods=(
            Method(name="Close", signature=Signature(results=(err,))),
            Method(
                name="Read",
                signature=Signature(
                    params=(Slice(elem=Basic(name="uint8")),),
                    results=(Basic(name="int"), err),
                ),
            ),
            Method(name="reset", signature=Signature()),
        )
    )
    assert _lines(_fmt(TypeDecl(name="Foo", underlying=foo))) == [
        "pkg p, type Foo interface { Close, Read }",
        "pkg p, type Foo interface, Close() error",
        "pkg p, type Foo interface, Read([]uint8) (int, error)",
    ]


def test_empty_interface():
    from goapi.model import Interface, TypeDecl

    assert _fmt(TypeDecl(name="Foo", underlying=Interface())) == "pkg p, type Foo interface {}\n"


def test_interface_with_only_unexported_methods_is_empty():
    from goapi.model import Interface, Method, Signature, TypeDecl

    iface = Interface(methods=(Method(name="private", signature=Signature()),))
    assert _fmt(TypeDecl(name="Sealed", underlying=iface)) == "pkg p, type Sealed interface {}\n"


def test_function():
    from goapi.model import Basic, FuncDecl, Named, Signature

    sig = Signature(
        params=(Basic(name="string"), Basic(name="int")),
        results=(Named(pkg=None, name="error"),),
    )
    assert _fmt(FuncDecl(name="Hello", signature=sig)) == "pkg p, func Hello(string, int) error\n"


def test_variadic_function():
    from goapi.model import Basic, FuncDecl, Interface, Signature, Slice

    sig = Signature(params=(Basic(name="int"), Slice(elem=Interface())), variadic=True)
    assert _fmt(FuncDecl(name="Foo", signature=sig)) == "pkg p, func Foo(int, ...interface{})\n"


def test_methods_on_exported_and_unexported_types():
    from goapi.model import Basic, FuncDecl, Named, Pointer, Signature, Struct, TypeDecl

    a = Named(pkg="p", name="A", exported=True, underlying=Struct())
    hidden = Named(pkg="p", name="a", exported=False, underlying=Struct())
    assert _lines(
        _fmt(
            TypeDecl(name="A", underlying=Struct()),
            FuncDecl(
                name="Hello",
                signature=Signature(results=(Basic(name="int"), Basic(name="int"))),
                recv=Pointer(elem=a),
            ),
            FuncDecl(name="Bye", signature=Signature(params=(Basic(name="string"),)), recv=a),
            FuncDecl(name="Hello", signature=Signature(), recv=Pointer(elem=hidden)),
        )
    ) == [
        "pkg p, method (*A) Hello() (int, int)",
        "pkg p, method (A) Bye(string)",
        "pkg p, type A struct",
    ]


def test_interface_methods_are_not_duplicated_as_methods():
    from goapi.model import FuncDecl, Interface, Method, Named, Signature, TypeDecl

    iface = Interface(methods=(Method(name="Run", signature=Signature()),))
    runner = Named(pkg="p", name="Runner", underlying=iface)
    assert _lines(
        _fmt(
            TypeDecl(name="Runner", underlying=iface),
            FuncDecl(name="Run", signature=Signature(), recv=runner),
        )
    ) == [
        "pkg p, type Runner interface { Run }",
        "pkg p, type Runner interface, Run()",
    ]


def test_nested_and_unexported_declarations_are_skipped():
    from goapi.model import Basic, ConstDecl, OtherDecl, VarDecl

    assert (
        _fmt(
            OtherDecl(kind="label", name="Error", nested=True),
            VarDecl(name="Local", type=Basic(name="int"), nested=True),
            ConstDecl(name="hidden", kind="int"),
        )
        == ""
    )


def test_unknown_package_scope_declaration_is_fatal():
    from goapi.errors import UnsupportedDeclarationError
    from goapi.model import ConstDecl, OtherDecl

    with pytest.raises(UnsupportedDeclarationError):
        _fmt(ConstDecl(name="C", kind="int"), OtherDecl(kind="builtin", name="Weird"))


def test_unsupported_type_aborts_extraction():
    from goapi.errors import UnsupportedTypeError
    from goapi.model import Field, Struct, TypeDecl, Unsupported

    box = Struct(fields=(Field(name="V", type=Unsupported(kind="typeparam", repr="T")),))
    with pytest.raises(UnsupportedTypeError, match=r"typeparam"):
        _fmt(TypeDecl(name="Box", underlying=box))


def test_vendored_package_path_is_stamped_without_vendor_prefix():
    from goapi.model import Basic, FuncDecl, Named, Pointer, Signature, VarDecl

    vendored = "example.com/app/vendor/golang.org/x/p"
    out = _fmt(
        VarDecl(name="X", type=Basic(name="int")),
        FuncDecl(name="New", signature=Signature(results=(Pointer(elem=Named(pkg=vendored, name="T")),))),
        path=vendored,
    )
    assert _lines(out) == [
        "pkg golang.org/x/p, func New() *T",
        "pkg golang.org/x/p, var X int",
    ]
