"""Helpers over syntax nodes: names, template parameters, scoping and conversions."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

from mew.span import Span, Spanned
from mew.syntax import (
    Alias,
    CompoundStatement,
    ConstAssert,
    Declaration,
    DeclarationStatement,
    DiagnosticSeverity,
    ExtendDirective,
    FormalTemplateParameter,
    Function,
    IdentifierExpression,
    IndexingExpression,
    Module,
    NamedComponentExpression,
    ParenthesizedExpression,
    PathPart,
    Struct,
    TypeExpression,
    Use,
)


class ParseError(ValueError):
    """Raised when source text cannot be turned into a syntax node."""

    def __init__(self, message: str = "syntax error") -> None:
        super().__init__(message)
        self.message = message


def _unwrap(node: Any) -> Any:
    return node.value if isinstance(node, Spanned) else node


def parse_diagnostic_severity(text: str) -> DiagnosticSeverity:
    """Parse ``error``, ``warning``, ``info`` or ``off``."""
    try:
        return DiagnosticSeverity(text)
    except ValueError:
        raise ParseError("invalid diagnostic severity") from None


_NAMED = (Declaration, Alias, Struct, Function, Module)
_TEMPLATED = (Declaration, Alias, Struct, Function, Module, ConstAssert)


def declaration_name(declaration: Any) -> Optional[Spanned[str]]:
    """Return the spanned name of a declaration, or None if it has none."""
    node = _unwrap(declaration)
    if isinstance(node, _NAMED):
        return Spanned(node.name.value, node.name.span)
    return None


def template_parameters(
    declaration: Any,
) -> Optional[list[Spanned[FormalTemplateParameter]]]:
    """Return the declaration's template parameters, or None when it has none."""
    node = _unwrap(declaration)
    if isinstance(node, _TEMPLATED) and node.template_parameters:
        return node.template_parameters
    return None


def _scope_declaration(
    declaration: DeclarationStatement, queue: deque[Spanned[Any]]
) -> None:
    while queue:
        statement = queue.popleft()
        if isinstance(statement.value, DeclarationStatement):
            _scope_declaration(statement.value, queue)
        declaration.statements.append(Spanned(statement.value, statement.span))


def construct_scope_tree(compound: Union[CompoundStatement, Spanned]) -> None:
    """Nest every statement after a declaration inside that declaration's scope.

    The compound statement is changed in place.
    """
    node: CompoundStatement = _unwrap(compound)
    queue: deque[Spanned[Any]] = deque(node.statements)
    node.statements = []
    while queue:
        statement = queue.popleft()
        if isinstance(statement.value, DeclarationStatement):
            _scope_declaration(statement.value, queue)
        node.statements.append(Spanned(statement.value, statement.span))


def expression_path(expression: Any) -> Spanned[list[PathPart]]:
    """Return the path an identifier or type expression names.

    Parentheses are looked through; any other expression raises ValueError.
    """
    node = _unwrap(expression)
    if isinstance(node, ParenthesizedExpression):
        return expression_path(node.expression)
    if isinstance(node, (IdentifierExpression, TypeExpression)):
        return node.path
    raise ValueError(f"{type(node).__name__} does not name a path")


def as_module_directive(directive: Spanned[Any]) -> Optional[Spanned[Any]]:
    """Return the directive as a module directive, or None if it must stay global."""
    if isinstance(directive.value, (Use, ExtendDirective)):
        return Spanned(directive.value, directive.span)
    return None


@dataclass
class NamedComponent:
    """A ``.name`` postfix component."""

    component: Spanned[str]


@dataclass
class IndexComponent:
    """A ``[index]`` postfix component."""

    index: Spanned[Any]


def apply_components(
    components: Iterable[Union[NamedComponent, IndexComponent]],
    expression: Spanned[Any],
) -> Spanned[Any]:
    """Wrap ``expression`` in each postfix component, left to right."""
    result = expression
    for component in components:
        if isinstance(component, NamedComponent):
            span = Span(result.span.start, component.component.span.end)
            result = Spanned(
                NamedComponentExpression(base=result, component=component.component),
                span,
            )
        elif isinstance(component, IndexComponent):
            span = Span(result.span.start, component.index.span.end)
            result = Spanned(
                IndexingExpression(base=result, index=component.index), span
            )
        else:
            raise TypeError(f"not a component: {type(component).__name__}")
    return result