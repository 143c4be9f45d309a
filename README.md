# mew

A syntax tree for WGSL extended with modules, template parameters and
inline template arguments, together with code that renders the tree back
to text and two passes that rewrite it.

## Modules

- `mew.span`: `Span`, a half-open `start..end` range with `merge`, and
  `Spanned`, a value paired with its span. `Spanned` compares and hashes by
  value only, and `Spanned.map(func)` transforms the value while keeping the
  span.
- `mew.syntax`: the node classes. `TranslationUnit` holds global
  directives and declarations. Declarations include `Module`, `Function`,
  `Struct`, `Alias`, `Declaration`, `ConstAssert` and `VoidDeclaration`.
  Expressions include `LiteralExpression`, `IdentifierExpression`,
  `TypeExpression`, `FunctionCallExpression` and `BinaryExpression`.
  Statements include `IfStatement`, `ForStatement`, `LoopStatement` and
  `DeclarationStatement`. Directives are `Use`, `ExtendDirective`,
  `DiagnosticDirective`, `EnableDirective` and `RequiresDirective`.
  Paths are lists of `PathPart`, which may carry template arguments and
  `InlineTemplateArgs` (`with { ... }`).
- `mew.render_expr`: `render_expression`, `render_path`, `indent`,
  `format_attributes`, `format_template_args` and
  `format_template_params`.
- `mew.display`: `render(node)` turns any node, bare or spanned, into
  source text. This includes whole translation units.
- `mew.syntax_ops`: helpers for working with nodes.
  - `parse_diagnostic_severity` raises `ParseError` for unknown text.
  - `declaration_name` and `template_parameters` read those parts of a
    declaration.
  - `construct_scope_tree` nests every statement that follows a
    declaration inside that `DeclarationStatement`.
  - `expression_path` returns the path named by an identifier or type
    expression, looking through parentheses. It raises `ValueError`
    otherwise.
  - `as_module_directive` returns `Use` and `extend` directives, and `None`
    for others.
  - `apply_components` wraps an expression in `NamedComponent` and
    `IndexComponent` postfixes.
- `mew.inline`: `Inliner().apply(unit)` lifts the members carried by
  inline template arguments into the enclosing module or translation unit.
  It also removes every `use` and `extend` directive once that directive
  has been processed.
- `mew.flatten`: `Flattener().apply(unit)` moves every member of nested
  modules to the top level. Non-module declarations come first, in their
  order, followed by module members depth first. Module directives are
  dropped.

Both passes change the translation unit in place.

## Example

```python
from mew.display import render
from mew.flatten import Flattener
from mew.span import Spanned
from mew.syntax import (
    Declaration, DeclarationKind, LiteralExpression, LiteralKind,
    Module, TranslationUnit,
)

decl = Declaration(
    kind=Spanned(DeclarationKind.CONST),
    name=Spanned("x"),
    initializer=Spanned(LiteralExpression(LiteralKind.ABSTRACT_INT, "1")),
)
unit = TranslationUnit(
    global_declarations=[Spanned(Module(name=Spanned("m"), members=[Spanned(decl)]))]
)
Flattener().apply(unit)
print(render(unit))   # the module is gone; "const x = 1;" is now global
```

## What it does not do

- There is no parser. Trees are built from the classes in `mew.syntax`;
  text is only ever produced, never read.
- Beyond inlining and flattening, the package has no passes. It does not
  resolve names, remove aliases, specialize templates or mangle names.
- There is no command-line tool.

## Installing and testing

```
pip install .[test]
pytest
```