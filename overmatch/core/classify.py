# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Argument classification.

Runtime values fall into exactly one `ValueCategory`. Object values are
matched against class constraints with isinstance; every other category only
matches the primitive constraint of the same kind. There is no widening: an
int never satisfies `float`, a bool never satisfies `int`.
"""

from __future__ import annotations

import builtins
import importlib
from enum import Enum, auto
from typing import Any, Iterable, Optional, Union

from overmatch.core.constraints import (
	PRIMITIVE_NAMES,
	RESOURCE_TYPES,
	ClassConstraint,
	PrimitiveConstraint,
	PrimitiveKind,
	TypeConstraint,
	constraint_for_type,
)


class ValueCategory(Enum):
	"""Closed set of categories a runtime value can belong to."""

	ABSENT = auto()
	BOOL = auto()
	INT = auto()
	FLOAT = auto()
	STRING = auto()
	ARRAY = auto()
	RESOURCE = auto()
	OBJECT = auto()


_KIND_BY_CATEGORY = {
	ValueCategory.BOOL: PrimitiveKind.BOOL,
	ValueCategory.INT: PrimitiveKind.INT,
	ValueCategory.FLOAT: PrimitiveKind.FLOAT,
	ValueCategory.STRING: PrimitiveKind.STRING,
	ValueCategory.ARRAY: PrimitiveKind.ARRAY,
	ValueCategory.RESOURCE: PrimitiveKind.RESOURCE,
}

def categorize(value: Any) -> ValueCategory:
	"""Return the single category `value` belongs to."""
	if value is None:
		return ValueCategory.ABSENT
	# bool before int: bool subclasses int.
	if isinstance(value, bool):
		return ValueCategory.BOOL
	if isinstance(value, int):
		return ValueCategory.INT
	if isinstance(value, float):
		return ValueCategory.FLOAT
	if isinstance(value, (str, bytes)):
		return ValueCategory.STRING
	if isinstance(value, (list, tuple, dict)):
		return ValueCategory.ARRAY
	if isinstance(value, RESOURCE_TYPES):
		return ValueCategory.RESOURCE
	return ValueCategory.OBJECT


def is_object(value: Any) -> bool:
	return categorize(value) is ValueCategory.OBJECT


def matches_object(value: Any, cls: type) -> bool:
	"""True iff `value` is an object-category instance of `cls` (or a subclass / implementer)."""
	if not is_object(value):
		return False
	return isinstance(value, cls)


def matches_primitive(value: Any, kind: PrimitiveKind) -> bool:
	"""True iff `value` is a non-object value of exactly `kind`."""
	return _KIND_BY_CATEGORY.get(categorize(value)) is kind


def matches(value: Any, constraint: TypeConstraint) -> bool:
	"""Decide whether one runtime value satisfies one constraint."""
	if constraint is None:
		return True
	if isinstance(constraint, ClassConstraint):
		return matches_object(value, constraint.cls)
	if isinstance(constraint, PrimitiveConstraint):
		return matches_primitive(value, constraint.kind)
	raise TypeError(f"unsupported constraint {constraint!r}")


def lookup_class(type_name: str) -> Optional[type]:
	"""Resolve a builtin or dotted class name; None when it does not name a class."""
	if not all(type_name.split(".")):
		return None
	module_name, _, attr = type_name.rpartition(".")
	if not module_name:
		found = getattr(builtins, type_name, None)
		return found if isinstance(found, type) else None
	try:
		module = importlib.import_module(module_name)
	except (ImportError, TypeError, ValueError):
		return None
	found = getattr(module, attr, None)
	return found if isinstance(found, type) else None


def constraint_from_name(type_name: Union[str, type]) -> Union[ClassConstraint, PrimitiveConstraint, None]:
	"""
	Resolve a type name once, as either class-like or primitive-like.

	Primitive spellings win over builtin classes of the same name (`int` is
	the int category, not `builtins.int`). Returns None for a string that names
	neither, which callers treat as "matches nothing".
	"""
	if isinstance(type_name, type):
		return constraint_for_type(type_name)
	kind = PRIMITIVE_NAMES.get(type_name)
	if kind is not None:
		return PrimitiveConstraint(kind)
	cls = lookup_class(type_name)
	if cls is None:
		return None
	return constraint_for_type(cls)


def all_same_type(values: Iterable[Any], type_name: Union[str, type]) -> bool:
	"""True iff every value independently satisfies the constraint named by `type_name`."""
	constraint = constraint_from_name(type_name)
	for value in values:
		if constraint is None or not matches(value, constraint):
			return False
	return True


__all__ = [
	"ValueCategory",
	"categorize",
	"is_object",
	"matches",
	"matches_object",
	"matches_primitive",
	"constraint_from_name",
	"lookup_class",
	"all_same_type",
]
