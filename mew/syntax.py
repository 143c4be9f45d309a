"""Syntax tree for WGSL sources with module and template extensions.

The root of the tree is a :class:`TranslationUnit`. Fields that carry a
source location hold :class:`~mew.span.Spanned` values.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Union

from mew.span import Spanned

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_U32_MAX = 2**32 - 1


# ---------------------------------------------------------------------------
# Directives
# ---------------------------------------------------------------------------


class DiagnosticSeverity(enum.Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    OFF = "off"


@dataclass
class DiagnosticDirective:
    severity: Spanned[DiagnosticSeverity]
    rule_name: Spanned[str]


@dataclass
class EnableDirective:
    extensions: list[Spanned[str]] = field(default_factory=list)


@dataclass
class RequiresDirective:
    extensions: list[Spanned[str]] = field(default_factory=list)


@dataclass
class ExtendDirective:
    path: Spanned[list[PathPart]]
    attributes: list[Spanned[Attribute]] = field(default_factory=list)


@dataclass
class UseItem:
    name: Spanned[str]
    rename: Optional[Spanned[str]] = None
    template_args: Optional[list[Spanned[TemplateArg]]] = None
    inline_template_args: Optional[InlineTemplateArgs] = None


@dataclass
class Use:
    """A ``use`` directive; ``content`` holds a UseItem or a list of nested uses."""

    path: Spanned[list[PathPart]]
    content: Spanned[Union[UseItem, list[Spanned["Use"]]]]
    attributes: list[Spanned[Attribute]] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


@dataclass
class TranslationUnit:
    global_directives: list[Spanned[GlobalDirective]] = field(default_factory=list)
    global_declarations: list[Spanned[GlobalDeclaration]] = field(default_factory=list)


@dataclass
class Module:
    name: Spanned[str] = field(default_factory=lambda: Spanned(""))
    attributes: list[Spanned[Attribute]] = field(default_factory=list)
    directives: list[Spanned[ModuleDirective]] = field(default_factory=list)
    members: list[Spanned[ModuleMemberDeclaration]] = field(default_factory=list)
    template_parameters: list[Spanned[FormalTemplateParameter]] = field(
        default_factory=list
    )


@dataclass
class FormalTemplateParameter:
    name: Spanned[str] = field(default_factory=lambda: Spanned(""))
    default_value: Optional[Spanned[Expression]] = None


@dataclass
class VoidDeclaration:
    """An empty declaration (a lone ``;``)."""


class DeclarationKind(enum.Enum):
    CONST = "const"
    OVERRIDE = "override"
    LET = "let"
    VAR = "var"


@dataclass
class Declaration:
    kind: Spanned[DeclarationKind]
    name: Spanned[str]
    attributes: list[Spanned[Attribute]] = field(default_factory=list)
    template_args: Optional[list[Spanned[TemplateArg]]] = None
    typ: Optional[Spanned[TypeExpression]] = None
    initializer: Optional[Spanned[Expression]] = None
    template_parameters: list[Spanned[FormalTemplateParameter]] = field(
        default_factory=list
    )


@dataclass
class Alias:
    name: Spanned[str]
    typ: Spanned[TypeExpression]
    template_parameters: list[Spanned[FormalTemplateParameter]] = field(
        default_factory=list
    )


@dataclass
class StructMember:
    name: Spanned[str]
    typ: Spanned[TypeExpression]
    attributes: list[Spanned[Attribute]] = field(default_factory=list)


@dataclass
class Struct:
    name: Spanned[str]
    members: list[Spanned[StructMember]] = field(default_factory=list)
    template_parameters: list[Spanned[FormalTemplateParameter]] = field(
        default_factory=list
    )


@dataclass
class FormalParameter:
    name: Spanned[str]
    typ: Spanned[TypeExpression]
    attributes: list[Spanned[Attribute]] = field(default_factory=list)


@dataclass
class Function:
    name: Spanned[str]
    body: Spanned[CompoundStatement]
    attributes: list[Spanned[Attribute]] = field(default_factory=list)
    parameters: list[Spanned[FormalParameter]] = field(default_factory=list)
    return_attributes: list[Spanned[Attribute]] = field(default_factory=list)
    return_type: Optional[Spanned[TypeExpression]] = None
    template_parameters: list[Spanned[FormalTemplateParameter]] = field(
        default_factory=list
    )


@dataclass
class ConstAssert:
    expression: Spanned[Expression]
    template_parameters: list[Spanned[FormalTemplateParameter]] = field(
        default_factory=list
    )


@dataclass
class Attribute:
    name: Spanned[str]
    arguments: Optional[list[Spanned[Expression]]] = None


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


class LiteralKind(enum.Enum):
    TRUE = "true"
    FALSE = "false"
    ABSTRACT_INT = "abstract_int"
    ABSTRACT_FLOAT = "abstract_float"
    I32 = "i32"
    U32 = "u32"
    F32 = "f32"
    F16 = "f16"


@dataclass
class LiteralExpression:
    """A literal. Booleans carry no value, i32/u32 an int, the others their text."""

    kind: LiteralKind
    value: Union[str, int, None] = None

    def __post_init__(self) -> None:
        if self.kind in (LiteralKind.TRUE, LiteralKind.FALSE):
            if self.value is not None:
                raise ValueError(f"{self.kind.value} literal takes no value")
        elif self.kind in (LiteralKind.I32, LiteralKind.U32):
            if not isinstance(self.value, int) or isinstance(self.value, bool):
                raise ValueError(f"{self.kind.value} literal needs an integer value")
            low, high = (
                (_I32_MIN, _I32_MAX) if self.kind is LiteralKind.I32 else (0, _U32_MAX)
            )
            if not low <= self.value <= high:
                raise ValueError(
                    f"{self.value} is out of range for a {self.kind.value} literal"
                )
        elif not isinstance(self.value, str):
            raise ValueError(f"{self.kind.value} literal needs its source text")


@dataclass
class ParenthesizedExpression:
    expression: Spanned[Expression]


@dataclass
class NamedComponentExpression:
    base: Spanned[Expression]
    component: Spanned[str]


@dataclass
class IndexingExpression:
    base: Spanned[Expression]
    index: Spanned[Expression]


class UnaryOperator(enum.Enum):
    LOGICAL_NEGATION = "!"
    NEGATION = "-"
    BITWISE_COMPLEMENT = "~"
    ADDRESS_OF = "&"
    INDIRECTION = "*"


@dataclass
class UnaryExpression:
    operator: Spanned[UnaryOperator]
    operand: Spanned[Expression]


class BinaryOperator(enum.Enum):
    SHORT_CIRCUIT_OR = "||"
    SHORT_CIRCUIT_AND = "&&"
    ADDITION = "+"
    SUBTRACTION = "-"
    MULTIPLICATION = "*"
    DIVISION = "/"
    REMAINDER = "%"
    EQUALITY = "=="
    INEQUALITY = "!="
    LESS_THAN = "<"
    LESS_THAN_EQUAL = "<="
    GREATER_THAN = ">"
    GREATER_THAN_EQUAL = ">="
    BITWISE_OR = "|"
    BITWISE_AND = "&"
    BITWISE_XOR = "^"
    SHIFT_LEFT = "<<"
    SHIFT_RIGHT = ">>"


@dataclass
class BinaryExpression:
    operator: Spanned[BinaryOperator]
    left: Spanned[Expression]
    right: Spanned[Expression]


@dataclass
class FunctionCallExpression:
    path: Spanned[list[PathPart]]
    arguments: list[Spanned[Expression]] = field(default_factory=list)


@dataclass
class PathPart:
    name: Spanned[str]
    template_args: Optional[list[Spanned[TemplateArg]]] = None
    inline_template_args: Optional[InlineTemplateArgs] = None


@dataclass
class InlineTemplateArgs:
    directives: list[Spanned[ModuleDirective]] = field(default_factory=list)
    members: list[Spanned[ModuleMemberDeclaration]] = field(default_factory=list)


@dataclass
class IdentifierExpression:
    path: Spanned[list[PathPart]]


@dataclass
class TypeExpression:
    path: Spanned[list[PathPart]]


@dataclass
class TemplateArg:
    expression: Spanned[Expression]
    arg_name: Optional[Spanned[str]] = None


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


@dataclass
class VoidStatement:
    """An empty statement (a lone ``;``)."""


@dataclass
class CompoundStatement:
    attributes: list[Spanned[Attribute]] = field(default_factory=list)
    directives: list[Spanned[Use]] = field(default_factory=list)
    statements: list[Spanned[Statement]] = field(default_factory=list)


class AssignmentOperator(enum.Enum):
    EQUAL = "="
    PLUS_EQUAL = "+="
    MINUS_EQUAL = "-="
    TIMES_EQUAL = "*="
    DIVISION_EQUAL = "/="
    MODULO_EQUAL = "%="
    AND_EQUAL = "&="
    OR_EQUAL = "|="
    XOR_EQUAL = "^="
    SHIFT_RIGHT_ASSIGN = ">>="
    SHIFT_LEFT_ASSIGN = "<<="


@dataclass
class AssignmentStatement:
    operator: Spanned[AssignmentOperator]
    lhs: Spanned[Expression]
    rhs: Spanned[Expression]


@dataclass
class IncrementStatement:
    expression: Expression


@dataclass
class DecrementStatement:
    expression: Expression


@dataclass
class IfStatement:
    if_clause: tuple[Spanned[Expression], Spanned[CompoundStatement]]
    attributes: list[Spanned[Attribute]] = field(default_factory=list)
    else_if_clauses: list[tuple[Spanned[Expression], Spanned[CompoundStatement]]] = (
        field(default_factory=list)
    )
    else_clause: Optional[Spanned[CompoundStatement]] = None


@dataclass
class DefaultSelector:
    """The ``default`` case selector of a switch clause."""


@dataclass
class SwitchClause:
    case_selectors: list[Spanned[CaseSelector]]
    body: Spanned[CompoundStatement]


@dataclass
class SwitchStatement:
    expression: Spanned[Expression]
    attributes: list[Spanned[Attribute]] = field(default_factory=list)
    body_attributes: list[Spanned[Attribute]] = field(default_factory=list)
    clauses: list[Spanned[SwitchClause]] = field(default_factory=list)


@dataclass
class ContinuingStatement:
    """The ``continuing`` block of a loop; ``break_if`` ends it when present."""

    body: Spanned[CompoundStatement]
    break_if: Optional[Spanned[Expression]] = None


@dataclass
class LoopStatement:
    body: Spanned[CompoundStatement]
    attributes: list[Spanned[Attribute]] = field(default_factory=list)
    continuing: Optional[Spanned[ContinuingStatement]] = None


@dataclass
class ForStatement:
    body: Spanned[CompoundStatement]
    attributes: list[Spanned[Attribute]] = field(default_factory=list)
    initializer: Optional[Spanned[Statement]] = None
    condition: Optional[Spanned[Expression]] = None
    update: Optional[Spanned[Statement]] = None


@dataclass
class WhileStatement:
    condition: Spanned[Expression]
    body: Spanned[CompoundStatement]
    attributes: list[Spanned[Attribute]] = field(default_factory=list)


@dataclass
class BreakStatement:
    pass


@dataclass
class ContinueStatement:
    pass


@dataclass
class ReturnStatement:
    expression: Optional[Spanned[Expression]] = None


@dataclass
class DiscardStatement:
    pass


@dataclass
class FunctionCallStatement:
    path: Spanned[list[PathPart]]
    arguments: list[Spanned[Expression]] = field(default_factory=list)


@dataclass
class DeclarationStatement:
    """A declaration together with the statements in its scope."""

    declaration: Spanned[Declaration]
    statements: list[Spanned[Statement]] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Unions of node kinds
# ---------------------------------------------------------------------------

GlobalDirective = Union[
    DiagnosticDirective, EnableDirective, RequiresDirective, Use, ExtendDirective
]
ModuleDirective = Union[Use, ExtendDirective]
CompoundDirective = Use

GlobalDeclaration = Union[
    VoidDeclaration, Declaration, Alias, Struct, Function, ConstAssert, Module
]
ModuleMemberDeclaration = GlobalDeclaration

Expression = Union[
    LiteralExpression,
    ParenthesizedExpression,
    NamedComponentExpression,
    IndexingExpression,
    UnaryExpression,
    BinaryExpression,
    FunctionCallExpression,
    IdentifierExpression,
    TypeExpression,
]

CaseSelector = Union[DefaultSelector, Expression]

Statement = Union[
    VoidStatement,
    CompoundStatement,
    AssignmentStatement,
    IncrementStatement,
    DecrementStatement,
    IfStatement,
    SwitchStatement,
    LoopStatement,
    ForStatement,
    WhileStatement,
    BreakStatement,
    ContinueStatement,
    ReturnStatement,
    DiscardStatement,
    FunctionCallStatement,
    ConstAssert,
    DeclarationStatement,
]