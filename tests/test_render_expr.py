import pytest

from mew.render_expr import (
    format_attributes,
    format_template_args,
    format_template_params,
    indent,
    render_expression,
    render_path,
)
from mew.span import Span, Spanned
from mew.syntax import (
    Attribute,
    BinaryExpression,
    BinaryOperator,
    FormalTemplateParameter,
    FunctionCallExpression,
    IdentifierExpression,
    IndexingExpression,
    LiteralExpression,
    LiteralKind,
    NamedComponentExpression,
    ParenthesizedExpression,
    PathPart,
    TemplateArg,
    TypeExpression,
    UnaryExpression,
    UnaryOperator,
)


def part(name, args=None):
    return PathPart(Spanned(name), template_args=args)


def ident(*names):
    return IdentifierExpression(Spanned([part(n) for n in names]))


def lit(kind, value=None):
    return LiteralExpression(kind, value)


def test_indent_prefixes_every_line():
    assert indent("a\nb") == "    a\n    b"


def test_indent_empty_text_stays_empty():
    assert indent("") == ""


def test_indent_drops_trailing_newline():
    assert indent("a\n") == "    a"


def test_indent_keeps_blank_inner_lines():
    assert indent("a\n\nb") == "    a\n    \n    b"


def test_format_attributes_empty_has_no_suffix():
    assert format_attributes([], True) == ""
    assert format_attributes([], False) == ""


def test_format_attributes_inline_and_block():
    attrs = [
        Spanned(Attribute(Spanned("compute"))),
        Spanned(Attribute(Spanned("workgroup_size"), [Spanned(ident("n"))])),
    ]
    assert format_attributes(attrs, True) == "@compute @workgroup_size(n) "
    assert format_attributes(attrs, False) == "@compute @workgroup_size(n)\n"


def test_attribute_with_empty_argument_list():
    attrs = [Attribute(Spanned("x"), [])]
    assert format_attributes(attrs, True) == "@x() "


def test_format_template_args_none_or_empty():
    assert format_template_args(None) == ""
    assert format_template_args([]) == ""


def test_format_template_args_named_and_positional():
    args = [
        Spanned(TemplateArg(Spanned(ident("f32")))),
        Spanned(TemplateArg(Spanned(ident("T")), arg_name=Spanned("U"))),
    ]
    assert format_template_args(args) == "<f32, U = T>"


def test_format_template_params():
    params = [
        Spanned(FormalTemplateParameter(Spanned("A"))),
        Spanned(FormalTemplateParameter(Spanned("B"), Spanned(ident("f32")))),
    ]
    assert format_template_params(params) == "<A, B = f32>"
    assert format_template_params([]) == ""


def test_render_path_joins_with_double_colon():
    path = Spanned([part("a"), part("b", [Spanned(TemplateArg(Spanned(ident("T"))))])])
    assert render_path(path) == "a::b<T>"


@pytest.mark.parametrize(
    "kind, value, expected",
    [
        (LiteralKind.TRUE, None, "true"),
        (LiteralKind.FALSE, None, "false"),
        (LiteralKind.I32, 7, "7i"),
        (LiteralKind.U32, 7, "7u"),
        (LiteralKind.ABSTRACT_INT, "42", "42"),
        (LiteralKind.ABSTRACT_FLOAT, "3", "3.0"),
        (LiteralKind.F32, "3.0", "3f"),
        (LiteralKind.F16, "2.5", "2.5h"),
    ],
)
def test_literals(kind, value, expected):
    assert render_expression(lit(kind, value)) == expected


def test_abstract_int_rejects_non_decimal_text():
    with pytest.raises(ValueError):
        render_expression(lit(LiteralKind.ABSTRACT_INT, "0x10"))


def test_abstract_int_rejects_out_of_range():
    with pytest.raises(ValueError):
        render_expression(lit(LiteralKind.ABSTRACT_INT, str(2**63)))


@pytest.mark.parametrize("text", ["0.1", "1.5", "123456.789", "1e20", "2.5e-7"])
def test_abstract_float_round_trips(text):
    rendered = render_expression(lit(LiteralKind.ABSTRACT_FLOAT, text))
    assert float(rendered) == float(text)
    assert "+" not in rendered


def test_abstract_float_uses_short_exponent():
    assert render_expression(lit(LiteralKind.ABSTRACT_FLOAT, "1e20")) == "1e20"


@pytest.mark.parametrize("text", ["0.1", "1.25", "1e20", "0.000001"])
def test_f32_has_no_exponent_and_round_trips(text):
    rendered = render_expression(lit(LiteralKind.F32, text))
    assert rendered.endswith("f")
    digits = rendered[:-1]
    assert "e" not in digits
    import struct

    def as_f32(x):
        return struct.unpack("<f", struct.pack("<f", x))[0]

    assert as_f32(float(digits)) == as_f32(float(text))


def test_composite_expressions():
    a = Spanned(ident("a"))
    b = Spanned(ident("b"))
    assert render_expression(ParenthesizedExpression(a)) == "(a)"
    assert render_expression(NamedComponentExpression(a, Spanned("x"))) == "a.x"
    assert render_expression(IndexingExpression(a, b)) == "a[b]"
    assert (
        render_expression(UnaryExpression(Spanned(UnaryOperator.NEGATION), a)) == "-a"
    )
    assert (
        render_expression(BinaryExpression(Spanned(BinaryOperator.SHIFT_LEFT), a, b))
        == "a << b"
    )


def test_function_call_and_type():
    call = FunctionCallExpression(
        Spanned([part("m"), part("f")]), [Spanned(ident("a")), Spanned(ident("b"))]
    )
    assert render_expression(call) == "m::f(a, b)"
    assert render_expression(TypeExpression(Spanned([part("vec3")]))) == "vec3"


def test_spanned_and_bare_render_alike():
    bare = ident("x", "y")
    assert render_expression(Spanned(bare, Span(3, 9))) == render_expression(bare)


def test_non_expression_is_rejected():
    with pytest.raises(TypeError):
        render_expression(42)