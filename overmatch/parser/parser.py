# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Parser for explicit signature declarations.

Declarations look like Python positional parameter lists:

	name: str, count: int = 1, *rest: Node

Primitive spellings (`int`, `str`, `array`, ...) become primitive
constraints, `any` or a missing annotation leaves a parameter unconstrained,
and any other name is resolved as a class: first through the caller's `types`
mapping, then as a builtin or dotted import path. Default values only mark a
parameter optional; their content is never evaluated.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Mapping, Optional

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from overmatch.core.classify import lookup_class
from overmatch.core.constraints import (
	PRIMITIVE_NAMES,
	PrimitiveConstraint,
	TypeConstraint,
	constraint_for_type,
)
from overmatch.errors import DeclarationError, InvalidSignature
from overmatch.signature import CandidateSignature, ParameterDescriptor

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="start",
	propagate_positions=True,
	maybe_placeholders=False,
)

UNCONSTRAINED_NAMES = {"any", "mixed"}


def _name(node: Tree) -> str:
	return str(node.data)


def _child(node: Tree, name: str) -> Optional[Tree]:
	return next((c for c in node.children if isinstance(c, Tree) and _name(c) == name), None)


def _resolve_type(
	type_ref: Tree, *, text: str, types: Optional[Mapping[str, type]]
) -> TypeConstraint:
	parts: List[Token] = [tok for tok in type_ref.children if isinstance(tok, Token)]
	dotted = ".".join(str(tok) for tok in parts)
	column = getattr(parts[0], "column", None)

	if len(parts) == 1:
		if dotted in UNCONSTRAINED_NAMES:
			return None
		kind = PRIMITIVE_NAMES.get(dotted)
		if kind is not None:
			return PrimitiveConstraint(kind)

	if types:
		found = types.get(dotted)
		if found is None and str(parts[0]) in types:
			# `Outer.Inner`: walk attributes from a mapped root.
			found = types[str(parts[0])]
			for tok in parts[1:]:
				found = getattr(found, str(tok), None)
		if found is not None:
			if not isinstance(found, type):
				raise DeclarationError(f"'{dotted}' does not name a class", text=text, column=column)
			return constraint_for_type(found)

	cls = lookup_class(dotted)
	if cls is None:
		raise DeclarationError(f"unknown type '{dotted}'", text=text, column=column)
	return constraint_for_type(cls)


def _build_param(
	node: Tree, position: int, *, text: str, types: Optional[Mapping[str, type]]
) -> ParameterDescriptor:
	name_tok = next(tok for tok in node.children if isinstance(tok, Token) and tok.type == "NAME")
	annotation = _child(node, "annotation")
	constraint: TypeConstraint = None
	if annotation is not None:
		# annotation: ":" type_ref
		constraint = _resolve_type(annotation.children[0], text=text, types=types)
	variadic = _child(node, "variadic_marker") is not None
	optional = _child(node, "default") is not None
	if variadic and optional:
		raise DeclarationError(
			f"variadic parameter '{name_tok}' cannot have a default",
			text=text,
			column=getattr(name_tok, "column", None),
		)
	return ParameterDescriptor(
		position=position,
		constraint=constraint,
		optional=optional,
		variadic=variadic,
		name=str(name_tok),
	)


def parse_declaration(text: str, *, types: Optional[Mapping[str, type]] = None) -> CandidateSignature:
	"""Parse a declaration into a validated CandidateSignature."""
	try:
		tree = _PARSER.parse(text)
	except UnexpectedInput as exc:
		raise DeclarationError(
			f"invalid declaration {text!r} at column {exc.column}", text=text, column=exc.column
		) from exc

	params = [
		_build_param(node, idx, text=text, types=types)
		for idx, node in enumerate(c for c in tree.children if isinstance(c, Tree) and _name(c) == "param")
	]
	seen = set()
	for param in params:
		if param.name in seen:
			raise DeclarationError(f"duplicate parameter '{param.name}'", text=text)
		seen.add(param.name)
	try:
		return CandidateSignature(tuple(params))
	except InvalidSignature as exc:
		raise DeclarationError(str(exc), text=text) from exc


__all__ = ["parse_declaration", "UNCONSTRAINED_NAMES"]
