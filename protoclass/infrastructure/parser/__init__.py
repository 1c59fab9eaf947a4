"""Lark-based JavaScript parser."""
