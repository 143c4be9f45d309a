"""Expansion of inline template arguments and ``use``/``extend`` directives.

Inline template arguments (``path with { ... }``) carry declarations and
directives. The inliner lifts those declarations into the enclosing module
or translation unit. It also removes every ``use`` and ``extend`` directive
once that directive's own inline arguments have been lifted.
"""

from __future__ import annotations

from typing import Any, Iterable

from mew.span import Spanned
from mew.syntax import (
    Alias,
    AssignmentStatement,
    BinaryExpression,
    BreakStatement,
    CompoundStatement,
    ConstAssert,
    ContinueStatement,
    Declaration,
    DeclarationStatement,
    DecrementStatement,
    DefaultSelector,
    DiscardStatement,
    ExtendDirective,
    ForStatement,
    Function,
    FunctionCallExpression,
    FunctionCallStatement,
    IdentifierExpression,
    IfStatement,
    IncrementStatement,
    IndexingExpression,
    InlineTemplateArgs,
    LiteralExpression,
    LoopStatement,
    Module,
    NamedComponentExpression,
    ParenthesizedExpression,
    ReturnStatement,
    Struct,
    SwitchStatement,
    TranslationUnit,
    TypeExpression,
    UnaryExpression,
    Use,
    UseItem,
    VoidDeclaration,
    VoidStatement,
    WhileStatement,
)


def _unwrap(node: Any) -> Any:
    return node.value if isinstance(node, Spanned) else node


class _Scope:
    """Collects lifted declarations into the member list of one parent."""

    def __init__(self, members: list[Spanned[Any]]) -> None:
        self.members = members

    # -- lifting -----------------------------------------------------------

    def _inline_args(self, inline: InlineTemplateArgs) -> None:
        directives, inline.directives = inline.directives, []
        members, inline.members = inline.members, []
        for directive in directives:
            self.directive(_unwrap(directive))
        self.members.extend(members)

    def path(self, path: Any) -> None:
        for part in _unwrap(path):
            part = _unwrap(part)
            inline = part.inline_template_args
            if inline is None:
                continue
            part.inline_template_args = None
            self._inline_args(inline)

    def directive(self, directive: Any) -> None:
        if isinstance(directive, Use):
            self.use(directive)
        elif isinstance(directive, ExtendDirective):
            self.extend(directive)
        else:
            raise TypeError(f"not a module directive: {type(directive).__name__}")

    def use(self, use: Use) -> None:
        self.path(use.path)
        self._attribute_args(use.attributes)
        content = _unwrap(use.content)
        if isinstance(content, UseItem):
            inline = content.inline_template_args
            if inline is not None:
                content.inline_template_args = None
                self._inline_args(inline)
        else:
            for item in content:
                self.use(_unwrap(item))

    def extend(self, extend: ExtendDirective) -> None:
        self._attribute_args(extend.attributes)
        self.path(extend.path)

    # -- expressions and statements ----------------------------------------

    def _attribute_args(self, attributes: Iterable[Any]) -> None:
        for attribute in attributes:
            for argument in _unwrap(attribute).arguments or ():
                self.expression(argument)

    def expression(self, expression: Any) -> None:
        node = _unwrap(expression)
        match node:
            case LiteralExpression():
                pass
            case ParenthesizedExpression(expression=inner):
                self.expression(inner)
            case NamedComponentExpression(base=base):
                self.expression(base)
            case IndexingExpression(base=base):
                self.expression(base)
            case UnaryExpression(operand=operand):
                self.expression(operand)
            case BinaryExpression(left=left, right=right):
                self.expression(left)
                self.expression(right)
            case FunctionCallExpression(path=path, arguments=arguments):
                self.path(path)
                for argument in arguments:
                    self.expression(argument)
            case IdentifierExpression(path=path) | TypeExpression(path=path):
                self.path(path)
            case _:
                raise TypeError(f"not an expression: {type(node).__name__}")

    def compound(self, compound: Any) -> None:
        node: CompoundStatement = _unwrap(compound)
        self._attribute_args(node.attributes)
        for statement in node.statements:
            self.statement(statement)

    def statement(self, statement: Any) -> None:
        node = _unwrap(statement)
        match node:
            case VoidStatement() | BreakStatement() | ContinueStatement():
                pass
            case DiscardStatement():
                pass
            case CompoundStatement():
                self.compound(node)
            case AssignmentStatement(lhs=lhs, rhs=rhs):
                self.expression(lhs)
                self.expression(rhs)
            case IncrementStatement(expression=expr) | DecrementStatement(
                expression=expr
            ):
                self.expression(expr)
            case IfStatement():
                self._attribute_args(node.attributes)
                condition, body = node.if_clause
                self.compound(body)
                self.expression(condition)
                for elif_condition, elif_body in node.else_if_clauses:
                    self.compound(elif_body)
                    self.expression(elif_condition)
                if node.else_clause is not None:
                    self.compound(node.else_clause)
            case SwitchStatement():
                self._attribute_args([*node.attributes, *node.body_attributes])
                self.expression(node.expression)
                for clause in node.clauses:
                    clause = _unwrap(clause)
                    self.compound(clause.body)
                    for selector in clause.case_selectors:
                        selector = _unwrap(selector)
                        if not isinstance(selector, DefaultSelector):
                            self.expression(selector)
            case LoopStatement():
                self._attribute_args(node.attributes)
                self.compound(node.body)
                if node.continuing is not None:
                    continuing = _unwrap(node.continuing)
                    self.compound(continuing.body)
                    if continuing.break_if is not None:
                        self.expression(continuing.break_if)
            case ForStatement():
                self._attribute_args(node.attributes)
                self.compound(node.body)
                if node.condition is not None:
                    self.expression(node.condition)
                if node.initializer is not None:
                    self.statement(node.initializer)
                if node.update is not None:
                    self.statement(node.update)
            case WhileStatement():
                self._attribute_args(node.attributes)
                self.compound(node.body)
                self.expression(node.condition)
            case ReturnStatement(expression=expr):
                if expr is not None:
                    self.expression(expr)
            case FunctionCallStatement(path=path, arguments=arguments):
                self.path(path)
                for argument in arguments:
                    self.expression(argument)
            case ConstAssert(expression=expr):
                self.expression(expr)
            case DeclarationStatement():
                self.declaration(_unwrap(node.declaration))
                for inner in node.statements:
                    self.statement(inner)
            case _:
                raise TypeError(f"not a statement: {type(node).__name__}")

    # -- declarations ------------------------------------------------------

    def _template_params(self, params: Iterable[Any]) -> None:
        for param in params:
            default = _unwrap(param).default_value
            if default is not None:
                self.expression(default)

    def declaration(self, decl: Declaration) -> None:
        self._template_params(decl.template_parameters)
        if decl.typ is not None:
            self.path(_unwrap(decl.typ).path)
        if decl.initializer is not None:
            self.expression(decl.initializer)
        self._attribute_args(decl.attributes)

    def function(self, func: Function) -> None:
        self._template_params(func.template_parameters)
        self.compound(func.body)
        for param in func.parameters:
            self.path(_unwrap(_unwrap(param).typ).path)
        attributes = [*func.attributes, *func.return_attributes]
        for param in func.parameters:
            attributes.extend(_unwrap(param).attributes)
        self._attribute_args(attributes)
        if func.return_type is not None:
            self.path(_unwrap(func.return_type).path)

    def member(self, member: Any) -> None:
        node = _unwrap(member)
        match node:
            case VoidDeclaration():
                pass
            case Declaration():
                self.declaration(node)
            case Alias():
                self._template_params(node.template_parameters)
                self.path(_unwrap(node.typ).path)
            case Struct():
                self._template_params(node.template_parameters)
                for struct_member in node.members:
                    struct_member = _unwrap(struct_member)
                    self.path(_unwrap(struct_member.typ).path)
                    self._attribute_args(struct_member.attributes)
            case Function():
                self.function(node)
            case ConstAssert():
                self._template_params(node.template_parameters)
                self.expression(node.expression)
            case Module():
                _inline_module(node)
            case _:
                raise TypeError(f"not a declaration: {type(node).__name__}")

    def members_in_place(self) -> None:
        """Process every current member, re-adding each after what it lifted."""
        pending = list(self.members)
        self.members.clear()
        for member in pending:
            self.member(member)
            self.members.append(member)


def _inline_module(module: Module) -> None:
    scope = _Scope(module.members)
    directives, module.directives = module.directives, []
    for directive in directives:
        scope.directive(_unwrap(directive))
    scope.members_in_place()


class Inliner:
    """Lifts inline template arguments and consumes ``use``/``extend`` directives."""

    def apply(self, translation_unit: TranslationUnit) -> None:
        """Run the pass over ``translation_unit`` in place."""
        scope = _Scope(translation_unit.global_declarations)
        kept = []
        for directive in translation_unit.global_directives:
            node = _unwrap(directive)
            if isinstance(node, (Use, ExtendDirective)):
                scope.directive(node)
            else:
                kept.append(directive)
        translation_unit.global_directives = kept
        scope.members_in_place()