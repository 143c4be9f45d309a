"""Text rendering of whole syntax trees: declarations, directives and statements."""

from __future__ import annotations

import enum
from typing import Any, Iterable

from mew.render_expr import (
    format_attributes,
    format_template_args,
    format_template_params,
    indent,
    render_expression,
    render_path,
)
from mew.span import Spanned
from mew.syntax import (
    Alias,
    AssignmentStatement,
    Attribute,
    BinaryExpression,
    BreakStatement,
    CompoundStatement,
    ConstAssert,
    ContinueStatement,
    ContinuingStatement,
    Declaration,
    DeclarationStatement,
    DecrementStatement,
    DefaultSelector,
    DiagnosticDirective,
    DiscardStatement,
    EnableDirective,
    ExtendDirective,
    FormalParameter,
    FormalTemplateParameter,
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
    PathPart,
    RequiresDirective,
    ReturnStatement,
    Struct,
    StructMember,
    SwitchClause,
    SwitchStatement,
    TemplateArg,
    TranslationUnit,
    TypeExpression,
    UnaryExpression,
    Use,
    UseItem,
    VoidDeclaration,
    VoidStatement,
    WhileStatement,
)

_EXPRESSION_TYPES = (
    LiteralExpression,
    ParenthesizedExpression,
    NamedComponentExpression,
    IndexingExpression,
    UnaryExpression,
    BinaryExpression,
    FunctionCallExpression,
    IdentifierExpression,
    TypeExpression,
)


def _unwrap(node: Any) -> Any:
    return node.value if isinstance(node, Spanned) else node


def _join(nodes: Iterable[Any], separator: str) -> str:
    return separator.join(render(n) for n in nodes)


# ---------------------------------------------------------------------------
# Directives
# ---------------------------------------------------------------------------


def _render_use(use: Use) -> str:
    attrs = format_attributes(use.attributes, False)
    path = render_path(use.path)
    content = _render_use_content(_unwrap(use.content))
    if path:
        return f"{attrs}{path}::{content}"
    return f"{attrs}{content}"


def _render_use_content(content: Any) -> str:
    if isinstance(content, UseItem):
        args = ""
        if content.template_args is not None:
            args = "<" + ", ".join(render(a) for a in content.template_args) + ">"
        if content.inline_template_args is not None:
            args += _render_inline_args(content.inline_template_args)
        name = _unwrap(content.name)
        if content.rename is not None:
            return f"{name}{args} as {_unwrap(content.rename)}"
        return f"{name}{args}"
    return "{ " + ", ".join(_render_use(_unwrap(u)) for u in content) + " }"


def _is_item(use: Use) -> bool:
    return isinstance(_unwrap(use.content), UseItem)


def _render_extend(extend: ExtendDirective) -> str:
    attrs = format_attributes(extend.attributes, True)
    return f"{attrs}extend {render_path(extend.path)};\n"


def _render_global_directive(directive: Any) -> str:
    node = _unwrap(directive)
    if isinstance(node, Use):
        suffix = ";" if _is_item(node) else ""
        return f"use {_render_use(node)}{suffix}"
    return render(node)


def _render_module_directive(directive: Any) -> str:
    node = _unwrap(directive)
    if isinstance(node, Use):
        suffix = ";" if _is_item(node) else ""
        return f"use {_render_use(node)}{suffix}\n\n"
    if isinstance(node, ExtendDirective):
        return _render_extend(node) + "\n"
    raise TypeError(f"not a module directive: {type(node).__name__}")


def _render_compound_directive(directive: Any) -> str:
    node = _unwrap(directive)
    suffix = ";" if _is_item(node) else ""
    return f"use {_render_use(node)}{suffix}\n"


def _render_inline_args(inline: InlineTemplateArgs) -> str:
    directives = "\n".join(_render_module_directive(d) for d in inline.directives)
    members = _join(inline.members, "\n")
    return " with {\n" + indent(f"{directives}\n{members}") + "\n}"


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


def _render_attribute(attribute: Attribute) -> str:
    args = ""
    if attribute.arguments is not None:
        args = "(" + ", ".join(render_expression(a) for a in attribute.arguments) + ")"
    return f"@{_unwrap(attribute.name)}{args}"


def _render_declaration(decl: Declaration) -> str:
    attrs = format_attributes(decl.attributes, False)
    kind = _unwrap(decl.kind).value
    targs = format_template_args(decl.template_args)
    tparams = format_template_params(decl.template_parameters)
    typ = f": {render_expression(decl.typ)}" if decl.typ is not None else ""
    init = (
        f" = {render_expression(decl.initializer)}"
        if decl.initializer is not None
        else ""
    )
    return f"{attrs}{kind}{targs} {_unwrap(decl.name)}{tparams}{typ}{init};"


def _render_function(func: Function) -> str:
    attrs = format_attributes(func.attributes, False)
    params = _join(func.parameters, ", ")
    ret = ""
    if func.return_type is not None:
        ret_attrs = format_attributes(func.return_attributes, True)
        ret = f"-> {ret_attrs}{render_expression(func.return_type)} "
    tparams = format_template_params(func.template_parameters)
    return (
        f"{attrs}fn {_unwrap(func.name)}{tparams}({params}) {ret}{render(func.body)}"
    )


def _render_module(module: Module) -> str:
    attrs = format_attributes(module.attributes, False)
    separator = " " if attrs else ""
    directives = "\n".join(_render_module_directive(d) for d in module.directives)
    members = _join(module.members, "\n\n")
    tparams = format_template_params(module.template_parameters)
    body = indent(f"{directives}{members}")
    return f"{attrs}{separator}mod {_unwrap(module.name)}{tparams} {{\n{body}\n}}"


def _render_translation_unit(unit: TranslationUnit) -> str:
    directives = "\n".join(_render_global_directive(d) for d in unit.global_directives)
    declarations = _join(unit.global_declarations, "\n\n")
    return f"{directives}\n\n{declarations}\n"


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


def _render_compound(compound: CompoundStatement) -> str:
    attrs = format_attributes(compound.attributes, True)
    directives = "\n".join(_render_compound_directive(d) for d in compound.directives)
    if directives:
        directives = indent(directives) + "\n"
    stmts = indent(_join(compound.statements, "\n"))
    return f"{attrs}{{\n{directives}{stmts}\n}}"


def _render_if(stmt: IfStatement) -> str:
    attrs = format_attributes(stmt.attributes, False)
    condition, body = stmt.if_clause
    text = f"{attrs}if {render_expression(condition)} {render(body)}"
    for elif_condition, elif_body in stmt.else_if_clauses:
        text += f"\nelse if {render_expression(elif_condition)} {render(elif_body)}"
    if stmt.else_clause is not None:
        text += f"\nelse {render(stmt.else_clause)}"
    return text


def _render_switch(stmt: SwitchStatement) -> str:
    attrs = format_attributes(stmt.attributes, False)
    body_attrs = format_attributes(stmt.body_attributes, False)
    clauses = indent(_join(stmt.clauses, "\n"))
    return (
        f"{attrs}switch {render_expression(stmt.expression)} "
        f"{body_attrs}{{\n{clauses}\n}}"
    )


def _render_case_selector(selector: Any) -> str:
    node = _unwrap(selector)
    if isinstance(node, DefaultSelector):
        return "default"
    return render_expression(node)


def _render_loop(stmt: LoopStatement) -> str:
    attrs = format_attributes(stmt.attributes, False)
    body = _unwrap(stmt.body)
    body_attrs = format_attributes(body.attributes, False)
    stmts = indent(_join(body.statements, "\n"))
    continuing = ""
    if stmt.continuing is not None:
        continuing = indent(render(stmt.continuing)) + "\n"
    return f"{attrs}loop {body_attrs}{{\n{stmts}\n{continuing}}}"


def _render_continuing(stmt: ContinuingStatement) -> str:
    body = _unwrap(stmt.body)
    body_attrs = format_attributes(body.attributes, False)
    stmts = indent(_join(body.statements, "\n"))
    break_if = ""
    if stmt.break_if is not None:
        break_if = indent(render_expression(stmt.break_if)) + ";\n"
    return f"continuing {body_attrs}{{\n{stmts}\n{break_if}}}"


def _without_semicolon(text: str) -> str:
    return text[:-1] if text.endswith(";") else text


def _render_for(stmt: ForStatement) -> str:
    attrs = format_attributes(stmt.attributes, False)
    init = _without_semicolon(render(stmt.initializer)) if stmt.initializer else ""
    cond = render_expression(stmt.condition) if stmt.condition is not None else ""
    update = _without_semicolon(render(stmt.update)) if stmt.update else ""
    return f"{attrs}for ({init}; {cond}; {update}) {render(stmt.body)}"


def _render_declaration_statement(stmt: DeclarationStatement) -> str:
    text = render(stmt.declaration)
    if stmt.statements:
        text += "\n" + _join(stmt.statements, "\n")
    return text


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def render(node: Any) -> str:
    """Render a syntax node (bare or spanned) as source text.

    ``Use`` and ``ExtendDirective`` nodes render in their module-directive form.
    """
    node = _unwrap(node)
    match node:
        case TranslationUnit():
            return _render_translation_unit(node)
        case DiagnosticDirective(severity=severity, rule_name=rule):
            return f"diagnostic ({_unwrap(severity).value}, {_unwrap(rule)});\n"
        case EnableDirective(extensions=extensions):
            return f"enable {', '.join(_unwrap(e) for e in extensions)};\n"
        case RequiresDirective(extensions=extensions):
            return f"requires {', '.join(_unwrap(e) for e in extensions)};\n"
        case Use() | ExtendDirective():
            return _render_module_directive(node)
        case InlineTemplateArgs():
            return _render_inline_args(node)
        case VoidDeclaration() | VoidStatement():
            return ";"
        case Declaration():
            return _render_declaration(node)
        case Alias(name=name, typ=typ, template_parameters=params):
            tparams = format_template_params(params)
            return f"alias {_unwrap(name)}{tparams} = {render_expression(typ)};"
        case Struct(name=name, members=members, template_parameters=params):
            body = indent(_join(members, ",\n"))
            tparams = format_template_params(params)
            return f"struct {_unwrap(name)}{tparams} {{\n{body}\n}}"
        case StructMember(name=name, typ=typ, attributes=attributes):
            attrs = format_attributes(attributes, False)
            return f"{attrs}{_unwrap(name)}: {render_expression(typ)}"
        case Function():
            return _render_function(node)
        case FormalParameter(name=name, typ=typ, attributes=attributes):
            attrs = format_attributes(attributes, True)
            return f"{attrs}{_unwrap(name)}: {render_expression(typ)}"
        case ConstAssert(expression=expression, template_parameters=params):
            tparams = format_template_params(params)
            return f"const_assert{tparams} {render_expression(expression)};"
        case Module():
            return _render_module(node)
        case Attribute():
            return _render_attribute(node)
        case FormalTemplateParameter():
            return format_template_params([node])[1:-1]
        case TemplateArg():
            return format_template_args([node])[1:-1]
        case PathPart():
            return render_path([node])
        case enum.Enum():
            return str(node.value)
        case CompoundStatement():
            return _render_compound(node)
        case AssignmentStatement(operator=operator, lhs=lhs, rhs=rhs):
            return (
                f"{render_expression(lhs)} {_unwrap(operator).value} "
                f"{render_expression(rhs)};"
            )
        case IncrementStatement(expression=expression):
            return f"{render_expression(expression)}++;"
        case DecrementStatement(expression=expression):
            return f"{render_expression(expression)}--;"
        case IfStatement():
            return _render_if(node)
        case SwitchStatement():
            return _render_switch(node)
        case SwitchClause(case_selectors=selectors, body=body):
            cases = ", ".join(_render_case_selector(s) for s in selectors)
            return f"case {cases} {render(body)}"
        case DefaultSelector():
            return "default"
        case LoopStatement():
            return _render_loop(node)
        case ContinuingStatement():
            return _render_continuing(node)
        case ForStatement():
            return _render_for(node)
        case WhileStatement(condition=condition, body=body, attributes=attributes):
            attrs = format_attributes(attributes, False)
            return f"{attrs}while ({render_expression(condition)}) {render(body)}"
        case BreakStatement():
            return "break;"
        case ContinueStatement():
            return "continue;"
        case ReturnStatement(expression=expression):
            value = f" {render_expression(expression)}" if expression is not None else ""
            return f"return{value};"
        case DiscardStatement():
            return "discard;"
        case FunctionCallStatement(path=path, arguments=arguments):
            args = ", ".join(render_expression(a) for a in arguments)
            return f"{render_path(path)}({args});"
        case DeclarationStatement():
            return _render_declaration_statement(node)
    if isinstance(node, _EXPRESSION_TYPES):
        return render_expression(node)
    raise TypeError(f"cannot render {type(node).__name__}")