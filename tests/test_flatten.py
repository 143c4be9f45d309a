from mew.flatten import Flattener
from mew.span import Span, Spanned
from mew.syntax import (
    EnableDirective,
    ExtendDirective,
    Module,
    PathPart,
    Struct,
    TranslationUnit,
    VoidDeclaration,
)


def struct(name, start=0, end=0):
    return Spanned(Struct(Spanned(name)), Span(start, end))


def module(name, *members, directives=()):
    return Spanned(
        Module(name=Spanned(name), members=list(members), directives=list(directives))
    )


def names(tu):
    return [d.value.name.value for d in tu.global_declarations]


def test_modules_are_moved_after_other_declarations():
    tu = TranslationUnit(
        global_declarations=[struct("A"), module("m", struct("B")), struct("C")]
    )
    Flattener().flatten(tu)
    assert names(tu) == ["A", "C", "B"]


def test_nested_modules_flatten_depth_first():
    tu = TranslationUnit(
        global_declarations=[
            module("outer", struct("B"), module("inner", struct("C")), struct("D")),
            module("second", struct("E")),
        ]
    )
    Flattener().flatten(tu)
    assert names(tu) == ["B", "C", "D", "E"]
    assert not any(isinstance(d.value, Module) for d in tu.global_declarations)


def test_spans_are_kept():
    tu = TranslationUnit(global_declarations=[module("m", struct("B", 4, 11))])
    Flattener().flatten(tu)
    assert tu.global_declarations[0].span == Span(4, 11)


def test_unit_without_modules_is_unchanged():
    decls = [struct("A"), Spanned(VoidDeclaration()), struct("B")]
    tu = TranslationUnit(global_declarations=list(decls))
    Flattener().flatten(tu)
    assert tu.global_declarations == decls


def test_empty_module_disappears():
    tu = TranslationUnit(global_declarations=[module("m"), struct("A")])
    Flattener().flatten(tu)
    assert names(tu) == ["A"]


def test_global_directives_untouched_and_module_directives_dropped():
    enable = Spanned(EnableDirective([Spanned("f16")]))
    extend = Spanned(ExtendDirective(Spanned([PathPart(Spanned("x"))])))
    tu = TranslationUnit(
        global_directives=[enable],
        global_declarations=[module("m", struct("A"), directives=[extend])],
    )
    Flattener().flatten(tu)
    assert tu.global_directives == [enable]
    assert names(tu) == ["A"]


def test_apply_matches_flatten():
    def build():
        return TranslationUnit(
            global_declarations=[module("m", struct("X"), module("n", struct("Y")))]
        )

    first, second = build(), build()
    Flattener().flatten(first)
    Flattener().apply(second)
    assert first == second
    assert names(second) == ["X", "Y"]