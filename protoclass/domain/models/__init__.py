"""Syntax tree and inheritance evidence models."""
