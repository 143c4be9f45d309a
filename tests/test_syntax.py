import pytest

from mew.span import Span, Spanned
from mew.syntax import (
    Alias,
    AssignmentOperator,
    BinaryOperator,
    CompoundStatement,
    Declaration,
    DeclarationKind,
    DeclarationStatement,
    DiagnosticSeverity,
    Function,
    IdentifierExpression,
    LiteralExpression,
    LiteralKind,
    Module,
    PathPart,
    TranslationUnit,
    TypeExpression,
    UnaryOperator,
)


def _path(*names):
    return Spanned([PathPart(Spanned(n)) for n in names])


def test_binary_operator_symbols():
    assert BinaryOperator("<<") is BinaryOperator.SHIFT_LEFT
    assert BinaryOperator.SHORT_CIRCUIT_AND.value == "&&"


def test_unary_operator_symbols():
    assert UnaryOperator("~") is UnaryOperator.BITWISE_COMPLEMENT


def test_assignment_operator_symbols():
    assert AssignmentOperator(">>=") is AssignmentOperator.SHIFT_RIGHT_ASSIGN


def test_keyword_enums_parse_from_text():
    assert DiagnosticSeverity("warning") is DiagnosticSeverity.WARNING
    assert DeclarationKind("override") is DeclarationKind.OVERRIDE


@pytest.mark.parametrize(
    "enum_type, count",
    [(BinaryOperator, 18), (UnaryOperator, 5), (AssignmentOperator, 11)],
)
def test_operator_symbols_round_trip(enum_type, count):
    symbols = ["||", "&&", "+", "-", "*", "/", "%", "==", "!=", "<", "<=", ">", ">=",
               "|", "&", "^", "<<", ">>", "!", "~", "=", "+=", "-=", "*=", "/=", "%=",
               "&=", "|=", "^=", ">>=", "<<="]
    found = set()
    for symbol in symbols:
        try:
            member = enum_type(symbol)
        except ValueError:
            continue
        assert member.value == symbol
        found.add(member)
    assert len(found) == count


def test_translation_unit_defaults_are_independent():
    first = TranslationUnit()
    second = TranslationUnit()
    first.global_declarations.append(Spanned(Module(name=Spanned("m"))))
    assert second.global_declarations == []


def test_path_equality_ignores_spans():
    a = PathPart(Spanned("foo", Span(0, 3)))
    b = PathPart(Spanned("foo", Span(20, 23)))
    assert a == b
    assert a.template_args is None


def test_alias_structural_equality():
    left = Alias(Spanned("A", Span(6, 7)), Spanned(TypeExpression(_path("m", "T"))))
    right = Alias(Spanned("A"), Spanned(TypeExpression(_path("m", "T"))))
    assert left == right
    assert left != Alias(Spanned("A"), Spanned(TypeExpression(_path("m", "U"))))


def test_i32_literal_bounds():
    assert LiteralExpression(LiteralKind.I32, -(2**31)).value == -(2**31)
    with pytest.raises(ValueError):
        LiteralExpression(LiteralKind.I32, 2**31)


def test_u32_literal_rejects_negative():
    assert LiteralExpression(LiteralKind.U32, 2**32 - 1).value == 2**32 - 1
    with pytest.raises(ValueError):
        LiteralExpression(LiteralKind.U32, -1)


def test_boolean_literal_takes_no_value():
    with pytest.raises(ValueError):
        LiteralExpression(LiteralKind.TRUE, "true")


def test_float_literal_needs_text():
    with pytest.raises(ValueError):
        LiteralExpression(LiteralKind.F32, 1)
    assert LiteralExpression(LiteralKind.F32, "1.5").value == "1.5"


def test_integer_literal_rejects_bool():
    with pytest.raises(ValueError):
        LiteralExpression(LiteralKind.I32, True)


def test_declaration_statement_holds_scope():
    decl = Declaration(Spanned(DeclarationKind.LET), Spanned("x"))
    stmt = DeclarationStatement(Spanned(decl))
    assert stmt.statements == []
    assert stmt.declaration.value.initializer is None
    assert stmt.declaration.value.kind.value is DeclarationKind.LET


def test_function_defaults():
    func = Function(Spanned("main"), Spanned(CompoundStatement()))
    assert func.parameters == []
    assert func.return_type is None
    assert func.body.value.statements == []


def test_identifier_expression_mutation():
    ident = IdentifierExpression(_path("a", "b"))
    ident.path.value[0].name.value = "z"
    assert [part.name.value for part in ident.path.value] == ["z", "b"]