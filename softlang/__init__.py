"""Syntax tree, bytecode model and multi-pass compiler for the Soft language."""

__version__ = "0.1.0"