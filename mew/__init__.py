"""Syntax tree, text rendering, inlining and flattening for a module-aware WGSL dialect."""

__version__ = "0.1.0"