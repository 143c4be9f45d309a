"""Hoisting of module members to the top level of a translation unit."""

from __future__ import annotations

from mew.span import Spanned
from mew.syntax import Module, TranslationUnit


class Flattener:
    """Moves every declaration out of (nested) modules to the global level.

    Non-module declarations stay first, in their order; module members follow,
    depth first. Module directives are dropped.
    """

    def _flatten_module(
        self, translation_unit: TranslationUnit, module: Module
    ) -> None:
        for member in module.members:
            if isinstance(member.value, Module):
                self._flatten_module(translation_unit, member.value)
            else:
                translation_unit.global_declarations.append(
                    Spanned(member.value, member.span)
                )
        module.members = []

    def flatten(self, translation_unit: TranslationUnit) -> None:
        """Flatten ``translation_unit`` in place."""
        modules = [
            d.value
            for d in translation_unit.global_declarations
            if isinstance(d.value, Module)
        ]
        translation_unit.global_declarations = [
            d
            for d in translation_unit.global_declarations
            if not isinstance(d.value, Module)
        ]
        for module in modules:
            self._flatten_module(translation_unit, module)

    def apply(self, translation_unit: TranslationUnit) -> None:
        """Run the pass over ``translation_unit``."""
        self.flatten(translation_unit)