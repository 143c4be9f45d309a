"""Text rendering of expressions, paths, attributes and template lists."""

from __future__ import annotations

import math
import re
import struct
from decimal import Decimal
from typing import Any, Iterable, Optional

from mew.span import Spanned
from mew.syntax import (
    Attribute,
    BinaryExpression,
    FormalTemplateParameter,
    FunctionCallExpression,
    IdentifierExpression,
    IndexingExpression,
    InlineTemplateArgs,
    LiteralExpression,
    LiteralKind,
    NamedComponentExpression,
    ParenthesizedExpression,
    PathPart,
    TemplateArg,
    TypeExpression,
    UnaryExpression,
)

_INDENT = "    "
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_INT_TEXT = re.compile(r"[+-]?[0-9]+")


def _unwrap(node: Any) -> Any:
    return node.value if isinstance(node, Spanned) else node


def indent(text: str) -> str:
    """Prefix every line of ``text`` with four spaces.

    A trailing newline does not start a new line, and an empty text stays empty.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return "\n".join(_INDENT + line.removesuffix("\r") for line in lines)


def _render_attribute(attribute: Attribute) -> str:
    args = ""
    if attribute.arguments is not None:
        args = "(" + ", ".join(render_expression(a) for a in attribute.arguments) + ")"
    return f"@{_unwrap(attribute.name)}{args}"


def format_attributes(attributes: Iterable[Any], inline: bool) -> str:
    """Render attributes separated by spaces, followed by a space or a newline."""
    rendered = [_render_attribute(_unwrap(a)) for a in attributes]
    if not rendered:
        return ""
    return " ".join(rendered) + (" " if inline else "\n")


def _render_template_arg(arg: TemplateArg) -> str:
    expression = render_expression(arg.expression)
    if arg.arg_name is not None:
        return f"{_unwrap(arg.arg_name)} = {expression}"
    return expression


def format_template_args(args: Optional[Iterable[Any]]) -> str:
    """Render ``<a, b>``, or nothing when there are no arguments."""
    if args is None:
        return ""
    rendered = [_render_template_arg(_unwrap(a)) for a in args]
    if not rendered:
        return ""
    return "<" + ", ".join(rendered) + ">"


def _render_template_param(param: FormalTemplateParameter) -> str:
    if param.default_value is not None:
        return f"{_unwrap(param.name)} = {render_expression(param.default_value)}"
    return str(_unwrap(param.name))


def format_template_params(params: Iterable[Any]) -> str:
    """Render formal template parameters as ``<A, B = x>``, or nothing if empty."""
    rendered = [_render_template_param(_unwrap(p)) for p in params]
    if not rendered:
        return ""
    return "<" + ", ".join(rendered) + ">"


def _render_inline_args(inline: InlineTemplateArgs) -> str:
    from mew.display import render

    directives = "\n".join(render(d) for d in inline.directives)
    members = "\n".join(render(m) for m in inline.members)
    return " with {\n" + indent(f"{directives}\n{members}") + "\n}"


def _render_path_part(part: PathPart) -> str:
    inline = ""
    if part.inline_template_args is not None:
        inline = _render_inline_args(part.inline_template_args)
    return f"{_unwrap(part.name)}{format_template_args(part.template_args)}{inline}"


def render_path(path: Any) -> str:
    """Render a list of path parts joined with ``::``."""
    return "::".join(_render_path_part(_unwrap(p)) for p in _unwrap(path))


def _to_f32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _special_float(value: float) -> Optional[str]:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return None


def _f32_text(text: str) -> str:
    value = _to_f32(float(text))
    special = _special_float(value)
    if special is not None:
        return special
    shortest = f"{value:.8e}"
    for digits in range(1, 10):
        candidate = f"{value:.{digits - 1}e}"
        if _to_f32(float(candidate)) == value:
            shortest = candidate
            break
    return format(Decimal(shortest), "f")


def _f64_text(text: str) -> str:
    value = float(text)
    special = _special_float(value)
    if special is not None:
        return special
    result = repr(value)
    if "e" in result:
        mantissa, exponent = result.split("e")
        result = f"{mantissa}e{int(exponent)}"
    return result


def _abstract_int_text(text: str) -> str:
    if not _INT_TEXT.fullmatch(text):
        raise ValueError(f"invalid abstract integer literal {text!r}")
    number = int(text)
    if not _I64_MIN <= number <= _I64_MAX:
        raise ValueError(f"abstract integer literal {text!r} is out of range")
    return str(number)


def _render_literal(literal: LiteralExpression) -> str:
    match literal.kind:
        case LiteralKind.TRUE:
            return "true"
        case LiteralKind.FALSE:
            return "false"
        case LiteralKind.ABSTRACT_INT:
            return _abstract_int_text(literal.value)
        case LiteralKind.ABSTRACT_FLOAT:
            return _f64_text(literal.value)
        case LiteralKind.I32:
            return f"{literal.value}i"
        case LiteralKind.U32:
            return f"{literal.value}u"
        case LiteralKind.F32:
            return f"{_f32_text(literal.value)}f"
        case LiteralKind.F16:
            return f"{_f32_text(literal.value)}h"
    raise ValueError(f"unknown literal kind {literal.kind!r}")


def render_expression(expression: Any) -> str:
    """Render an expression (bare or spanned) as source text."""
    node = _unwrap(expression)
    match node:
        case LiteralExpression():
            return _render_literal(node)
        case ParenthesizedExpression(expression=inner):
            return f"({render_expression(inner)})"
        case NamedComponentExpression(base=base, component=component):
            return f"{render_expression(base)}.{_unwrap(component)}"
        case IndexingExpression(base=base, index=index):
            return f"{render_expression(base)}[{render_expression(index)}]"
        case UnaryExpression(operator=operator, operand=operand):
            return f"{_unwrap(operator).value}{render_expression(operand)}"
        case BinaryExpression(operator=operator, left=left, right=right):
            return (
                f"{render_expression(left)} {_unwrap(operator).value} "
                f"{render_expression(right)}"
            )
        case FunctionCallExpression(path=path, arguments=arguments):
            args = ", ".join(render_expression(a) for a in arguments)
            return f"{render_path(path)}({args})"
        case IdentifierExpression(path=path) | TypeExpression(path=path):
            return render_path(path)
    raise TypeError(f"not an expression: {type(node).__name__}")