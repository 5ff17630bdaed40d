# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Type constraints attached to parameters.

A constraint is either `None` (unconstrained), a `ClassConstraint` (object
category: matched by isinstance), or a `PrimitiveConstraint` naming one of the
fixed non-object value categories. Constraints are immutable.
"""

from __future__ import annotations

import io
import mmap
import socket
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class PrimitiveKind(Enum):
	"""Kinds of non-object values a parameter can be constrained to."""

	BOOL = "bool"
	INT = "int"
	FLOAT = "float"
	STRING = "string"
	ARRAY = "array"
	RESOURCE = "resource"


# Spellings accepted wherever a primitive kind is named by text.
PRIMITIVE_NAMES = {
	"bool": PrimitiveKind.BOOL,
	"int": PrimitiveKind.INT,
	"float": PrimitiveKind.FLOAT,
	"string": PrimitiveKind.STRING,
	"str": PrimitiveKind.STRING,
	"bytes": PrimitiveKind.STRING,
	"array": PrimitiveKind.ARRAY,
	"list": PrimitiveKind.ARRAY,
	"tuple": PrimitiveKind.ARRAY,
	"dict": PrimitiveKind.ARRAY,
	"resource": PrimitiveKind.RESOURCE,
}

# Builtin classes that stand for a primitive kind rather than a class constraint.
PRIMITIVE_TYPES = {
	bool: PrimitiveKind.BOOL,
	int: PrimitiveKind.INT,
	float: PrimitiveKind.FLOAT,
	str: PrimitiveKind.STRING,
	bytes: PrimitiveKind.STRING,
	list: PrimitiveKind.ARRAY,
	tuple: PrimitiveKind.ARRAY,
	dict: PrimitiveKind.ARRAY,
}

# Classes whose instances are opaque handles (resource category).
RESOURCE_TYPES = (io.IOBase, socket.socket, mmap.mmap)


@dataclass(frozen=True)
class ClassConstraint:
	"""Object-category constraint: the value must be an instance of `cls`."""

	cls: type

	@property
	def name(self) -> str:
		return f"{self.cls.__module__}.{self.cls.__qualname__}"

	def __str__(self) -> str:
		return self.cls.__qualname__


@dataclass(frozen=True)
class PrimitiveConstraint:
	"""Non-object constraint: the value's category must equal `kind` exactly."""

	kind: PrimitiveKind

	def __str__(self) -> str:
		return self.kind.value


TypeConstraint = Optional[Union[ClassConstraint, PrimitiveConstraint]]


def primitive(kind: Union[PrimitiveKind, str]) -> PrimitiveConstraint:
	"""Build a primitive constraint from a kind or one of its spellings."""
	if isinstance(kind, PrimitiveKind):
		return PrimitiveConstraint(kind)
	try:
		return PrimitiveConstraint(PRIMITIVE_NAMES[kind])
	except KeyError:
		raise ValueError(f"unknown primitive kind {kind!r}") from None


def constraint_for_type(cls: type) -> Union[ClassConstraint, PrimitiveConstraint]:
	"""Map a Python class to a constraint (builtin primitives and handle classes map to their kind)."""
	kind = PRIMITIVE_TYPES.get(cls)
	if kind is not None:
		return PrimitiveConstraint(kind)
	if issubclass(cls, RESOURCE_TYPES):
		return PrimitiveConstraint(PrimitiveKind.RESOURCE)
	return ClassConstraint(cls)


def describe(constraint: TypeConstraint) -> str:
	return "any" if constraint is None else str(constraint)


__all__ = [
	"PrimitiveKind",
	"PRIMITIVE_NAMES",
	"PRIMITIVE_TYPES",
	"RESOURCE_TYPES",
	"ClassConstraint",
	"PrimitiveConstraint",
	"TypeConstraint",
	"primitive",
	"constraint_for_type",
	"describe",
]
