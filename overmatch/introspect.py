# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Descriptor extraction for Python callables.

The resolution engine only consumes `CandidateSignature`s. This module derives
them from live callables with `inspect.signature`, or takes them from an
explicit declaration attached with `@declare(...)`.

Mapping rules:
- positional parameters become descriptors, optional when they have a default;
- `*args` becomes the trailing variadic descriptor;
- keyword-only parameters with defaults and `**kwargs` are not dispatched on;
  a required keyword-only parameter can never be satisfied and is rejected;
- a plain function whose first positional parameter is named `self` takes a
  context and that parameter is not part of its signature.
"""

from __future__ import annotations

import inspect
import types as pytypes
import typing
from typing import Any, Callable, Mapping, Optional

from overmatch.candidate import Candidate
from overmatch.core.constraints import (
	PrimitiveConstraint,
	PrimitiveKind,
	TypeConstraint,
	constraint_for_type,
)
from overmatch.errors import InvalidSignature
from overmatch.parser import parse_declaration
from overmatch.signature import CandidateSignature, ParameterDescriptor

DECLARATION_ATTR = "__overmatch_signature__"

_IO_ALIASES = (typing.IO, typing.TextIO, typing.BinaryIO)
_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def _is_union(annotation: Any) -> bool:
	origin = typing.get_origin(annotation)
	return origin is typing.Union or origin is pytypes.UnionType


def constraint_from_annotation(annotation: Any, *, where: str = "") -> TypeConstraint:
	"""Translate one parameter annotation into a constraint."""
	if annotation is inspect.Parameter.empty or annotation is typing.Any:
		return None
	if _is_union(annotation):
		members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
		if len(members) == 1:
			return constraint_from_annotation(members[0], where=where)
		raise InvalidSignature(f"union annotation {annotation!r} is not supported", candidate=where or None)
	if annotation in _IO_ALIASES or typing.get_origin(annotation) in _IO_ALIASES:
		return PrimitiveConstraint(PrimitiveKind.RESOURCE)
	origin = typing.get_origin(annotation)
	if origin is not None:
		# list[int], typing.Dict[str, int], collections.abc.Iterable[str], ...
		annotation = origin
	if not isinstance(annotation, type):
		raise InvalidSignature(f"annotation {annotation!r} is not a class", candidate=where or None)
	return constraint_for_type(annotation)


def _takes_context(fn: Any, params: list) -> bool:
	if not inspect.isfunction(fn):
		return False
	return bool(params) and params[0].kind in _POSITIONAL and params[0].name == "self"


def signature_of(fn: Callable[..., Any]) -> tuple[CandidateSignature, bool]:
	"""
	Derive `(signature, takes_context)` for a callable.

	Explicit declarations win over introspection.
	"""
	declared = getattr(fn, DECLARATION_ATTR, None)
	if declared is not None:
		return declared

	where = getattr(fn, "__qualname__", None) or repr(fn)
	try:
		sig = inspect.signature(fn, eval_str=True)
	except (TypeError, ValueError) as exc:
		raise InvalidSignature(f"cannot introspect callable ({exc}); supply a declaration", candidate=where) from exc
	except NameError as exc:
		raise InvalidSignature(f"unresolvable annotation ({exc})", candidate=where) from exc

	params = list(sig.parameters.values())
	takes_context = _takes_context(fn, params)
	if takes_context:
		params = params[1:]

	descriptors = []
	for param in params:
		if param.kind is inspect.Parameter.VAR_KEYWORD:
			continue
		if param.kind is inspect.Parameter.KEYWORD_ONLY:
			if param.default is inspect.Parameter.empty:
				raise InvalidSignature(f"required keyword-only parameter '{param.name}'", candidate=where)
			continue
		descriptors.append(
			ParameterDescriptor(
				position=len(descriptors),
				constraint=constraint_from_annotation(param.annotation, where=where),
				optional=param.default is not inspect.Parameter.empty,
				variadic=param.kind is inspect.Parameter.VAR_POSITIONAL,
				name=param.name,
			)
		)
	return CandidateSignature(tuple(descriptors)), takes_context


def declare(text: str, *, types: Optional[Mapping[str, type]] = None, takes_context: bool = False):
	"""
	Attach an explicit declaration to a callable.

		@declare("name: str, *rest: int")
		def handler(*args): ...
	"""
	signature = parse_declaration(text, types=types)

	def wrap(fn):
		setattr(fn, DECLARATION_ATTR, (signature, takes_context))
		return fn

	return wrap


def candidate_from(obj: Any, *, name: Optional[str] = None) -> Candidate:
	"""Turn a Candidate, a declared callable or any introspectable callable into a Candidate."""
	if isinstance(obj, Candidate):
		return obj
	if not callable(obj):
		raise InvalidSignature(f"{obj!r} is not callable")
	signature, takes_context = signature_of(obj)
	return Candidate(target=obj, signature=signature, name=name or "", takes_context=takes_context)


__all__ = [
	"DECLARATION_ATTR",
	"constraint_from_annotation",
	"signature_of",
	"declare",
	"candidate_from",
]
