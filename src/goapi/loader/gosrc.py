from __future__ import annotations


def loader_go_source() -> str:
    """Return the Go program that type-checks packages and dumps their exported objects.

    Stdlib-only so `go run` works without network access. Output is a single
    JSON object on stdout; diagnostics go to stderr with a non-zero exit.
    """
    return r'''
package main

import (
	"bytes"
	"encoding/json"
	"errors"
	"flag"
	"fmt"
	"go/ast"
	"go/build"
	"go/constant"
	"go/importer"
	"go/parser"
	"go/token"
	"go/types"
	"io"
	"os"
	"os/exec"
	"path/filepath"
	"strconv"
	"strings"
)

type goListPkg struct {
	ImportPath string
	Name       string
	Dir        string
	GoFiles    []string
	CgoFiles   []string
	Error      *struct {
		Err string
	}
}

type outType struct {
	Kind       string      `json:"kind"`
	Name       string      `json:"name,omitempty"`
	Pkg        *string     `json:"pkg,omitempty"`
	Exported   bool        `json:"exported,omitempty"`
	Underlying *outType    `json:"underlying,omitempty"`
	Elem       *outType    `json:"elem,omitempty"`
	Key        *outType    `json:"key,omitempty"`
	Len        int64       `json:"len,omitempty"`
	Dir        string      `json:"dir,omitempty"`
	Params     []*outType  `json:"params,omitempty"`
	Results    []*outType  `json:"results,omitempty"`
	Variadic   bool        `json:"variadic,omitempty"`
	Methods    []outMethod `json:"methods,omitempty"`
	Fields     []outField  `json:"fields,omitempty"`
	Repr       string      `json:"repr,omitempty"`
}

type outMethod struct {
	Name      string   `json:"name"`
	Signature *outType `json:"signature"`
}

type outField struct {
	Name     string   `json:"name"`
	Type     *outType `json:"type"`
	Embedded bool     `json:"embedded,omitempty"`
	Tag      string   `json:"tag,omitempty"` // Go-quoted
}

type outDecl struct {
	Kind       string   `json:"kind"`
	Name       string   `json:"name"`
	Nested     bool     `json:"nested,omitempty"`
	ValueKind  string   `json:"value_kind,omitempty"`
	IsField    bool     `json:"is_field,omitempty"`
	Type       *outType `json:"type,omitempty"`
	Underlying *outType `json:"underlying,omitempty"`
	Signature  *outType `json:"signature,omitempty"`
	Recv       *outType `json:"recv,omitempty"`
}

type outPkg struct {
	Path  string    `json:"path"`
	Name  string    `json:"name"`
	Decls []outDecl `json:"decls"`
}

type outObj struct {
	Packages []outPkg `json:"packages"`
}

func fail(format string, v ...interface{}) {
	fmt.Fprintf(os.Stderr, format+"\n", v...)
	os.Exit(1)
}

func main() {
	var goBin, dir, tags string
	flag.StringVar(&goBin, "go", "go", "go command used for package listing")
	flag.StringVar(&dir, "dir", "", "directory to resolve package patterns from")
	flag.StringVar(&tags, "tags", "", "comma-separated build tags")
	flag.Parse()

	if dir != "" {
		if err := os.Chdir(dir); err != nil {
			fail("chdir: %v", err)
		}
	}
	if tags != "" {
		build.Default.BuildTags = strings.Split(tags, ",")
	}

	pkgs, err := listPkgs(goBin, tags, flag.Args())
	if err != nil {
		fail("%s", err.Error())
	}

	fset := token.NewFileSet()
	imp := importer.ForCompiler(fset, "source", nil)
	out := outObj{Packages: []outPkg{}}
	for _, p := range pkgs {
		if p.Error != nil {
			fail("%s: %s", p.ImportPath, p.Error.Err)
		}
		files := []*ast.File{}
		for _, fn := range append(append([]string{}, p.GoFiles...), p.CgoFiles...) {
			af, err := parser.ParseFile(fset, filepath.Join(p.Dir, fn), nil, 0)
			if err != nil {
				fail("%v", err)
			}
			files = append(files, af)
		}
		info := &types.Info{Defs: map[*ast.Ident]types.Object{}}
		conf := types.Config{Importer: imp, FakeImportC: len(p.CgoFiles) > 0}
		pkg, err := conf.Check(p.ImportPath, fset, files, info)
		if err != nil {
			fail("type-checking %s: %v", p.ImportPath, err)
		}

		op := outPkg{Path: pkg.Path(), Name: pkg.Name(), Decls: []outDecl{}}
		for _, obj := range info.Defs {
			if obj == nil || !obj.Exported() {
				continue
			}
			op.Decls = append(op.Decls, encodeObj(pkg, obj))
		}
		out.Packages = append(out.Packages, op)
	}

	enc := json.NewEncoder(os.Stdout)
	enc.SetEscapeHTML(false)
	if err := enc.Encode(out); err != nil {
		fail("encode: %v", err)
	}
}

func listPkgs(goBin, tags string, patterns []string) ([]goListPkg, error) {
	args := []string{"list", "-e", "-json"}
	if tags != "" {
		args = append(args, "-tags", tags)
	}
	args = append(args, patterns...)
	cmd := exec.Command(goBin, args...)
	var stdout, stderr bytes.Buffer
	cmd.Stdout = &stdout
	cmd.Stderr = &stderr
	if err := cmd.Run(); err != nil {
		return nil, fmt.Errorf("go list failed: %v\n%s", err, stderr.String())
	}

	dec := json.NewDecoder(&stdout)
	pkgs := []goListPkg{}
	for {
		var p goListPkg
		if err := dec.Decode(&p); err != nil {
			if errors.Is(err, io.EOF) {
				break
			}
			return nil, fmt.Errorf("failed to decode go list json: %v", err)
		}
		pkgs = append(pkgs, p)
	}
	return pkgs, nil
}

func objKind(obj types.Object) string {
	switch obj.(type) {
	case *types.Const:
		return "const"
	case *types.Var:
		return "var"
	case *types.TypeName:
		return "type"
	case *types.Func:
		return "func"
	case *types.Label:
		return "label"
	case *types.PkgName:
		return "pkgname"
	case *types.Builtin:
		return "builtin"
	case *types.Nil:
		return "nil"
	}
	return fmt.Sprintf("%T", obj)
}

func constKind(k constant.Kind) string {
	switch k {
	case constant.Bool:
		return "bool"
	case constant.String:
		return "string"
	case constant.Int:
		return "int"
	case constant.Float:
		return "float"
	case constant.Complex:
		return "complex"
	}
	return "unknown"
}

func encodeObj(pkg *types.Package, obj types.Object) outDecl {
	d := outDecl{Kind: objKind(obj), Name: obj.Name()}
	// Locals, labels and file-scoped imports carry no type information.
	if obj.Parent() != nil && obj.Parent() != pkg.Scope() {
		d.Nested = true
		return d
	}

	switch o := obj.(type) {
	case *types.Const:
		d.ValueKind = constKind(o.Val().Kind())
	case *types.Var:
		d.IsField = o.IsField()
		d.Type = encodeType(o.Type(), !o.IsField())
	case *types.TypeName:
		d.Underlying = encodeType(o.Type().Underlying(), false)
	case *types.Func:
		sig := o.Type().(*types.Signature)
		d.Signature = encodeType(sig, false)
		if recv := sig.Recv(); recv != nil {
			d.Recv = encodeType(recv.Type(), true)
		}
	}
	return d
}

func quoteTag(tag string) string {
	if tag == "" {
		return ""
	}
	return strconv.Quote(tag)
}

func encodeTuple(tup *types.Tuple) []*outType {
	out := []*outType{}
	for i := 0; i < tup.Len(); i++ {
		out = append(out, encodeType(tup.At(i).Type(), false))
	}
	return out
}

// encodeType serializes t. withUnderlying attaches the underlying type of a
// named type (through one pointer) for receivers and package variables.
func encodeType(t types.Type, withUnderlying bool) *outType {
	t = types.Unalias(t)
	switch t := t.(type) {
	case *types.Basic:
		if t.Kind() == types.UnsafePointer {
			return &outType{Kind: "basic", Name: "unsafe.Pointer"}
		}
		// Normalizes byte to uint8 and rune to int32.
		return &outType{Kind: "basic", Name: types.Typ[t.Kind()].Name()}
	case *types.Named:
		obj := t.Obj()
		if t.TypeArgs().Len() > 0 {
			return &outType{Kind: "instance", Repr: t.String()}
		}
		o := &outType{Kind: "named", Name: obj.Name(), Exported: obj.Exported()}
		if obj.Pkg() != nil {
			p := obj.Pkg().Path()
			o.Pkg = &p
		}
		if withUnderlying {
			o.Underlying = encodeType(t.Underlying(), false)
		}
		return o
	case *types.Pointer:
		return &outType{Kind: "pointer", Elem: encodeType(t.Elem(), withUnderlying)}
	case *types.Slice:
		return &outType{Kind: "slice", Elem: encodeType(t.Elem(), false)}
	case *types.Array:
		return &outType{Kind: "array", Len: t.Len(), Elem: encodeType(t.Elem(), false)}
	case *types.Map:
		return &outType{Kind: "map", Key: encodeType(t.Key(), false), Elem: encodeType(t.Elem(), false)}
	case *types.Chan:
		dir := "both"
		switch t.Dir() {
		case types.SendOnly:
			dir = "send"
		case types.RecvOnly:
			dir = "recv"
		}
		return &outType{Kind: "chan", Dir: dir, Elem: encodeType(t.Elem(), false)}
	case *types.Signature:
		if t.TypeParams().Len() > 0 {
			return &outType{Kind: "generic", Repr: t.String()}
		}
		return &outType{
			Kind:     "signature",
			Params:   encodeTuple(t.Params()),
			Results:  encodeTuple(t.Results()),
			Variadic: t.Variadic(),
		}
	case *types.Interface:
		if !t.IsMethodSet() {
			return &outType{Kind: "constraint", Repr: t.String()}
		}
		o := &outType{Kind: "interface", Methods: []outMethod{}}
		for i := 0; i < t.NumMethods(); i++ {
			m := t.Method(i)
			o.Methods = append(o.Methods, outMethod{Name: m.Name(), Signature: encodeType(m.Type(), false)})
		}
		return o
	case *types.Struct:
		o := &outType{Kind: "struct", Fields: []outField{}}
		for i := 0; i < t.NumFields(); i++ {
			f := t.Field(i)
			o.Fields = append(o.Fields, outField{
				Name:     f.Name(),
				Type:     encodeType(f.Type(), false),
				Embedded: f.Embedded(),
				Tag:      quoteTag(t.Tag(i)),
			})
		}
		return o
	}
	return &outType{Kind: strings.TrimPrefix(fmt.Sprintf("%T", t), "*types."), Repr: t.String()}
}
'''
