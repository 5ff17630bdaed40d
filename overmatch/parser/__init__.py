# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Signature declaration parser (lark grammar in grammar.lark)."""

from .parser import parse_declaration

__all__ = ["parse_declaration"]
