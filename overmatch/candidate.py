# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Candidate actions and context binding.

A candidate pairs a target callable with its declared signature. Candidates
that take a context receive it as an explicit leading argument; binding makes
a new candidate and never touches the original.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Callable

from overmatch.core.classify import is_object
from overmatch.errors import InvalidBindTarget
from overmatch.signature import CandidateSignature

_UNBOUND = object()


@dataclass(frozen=True, eq=False)
class Candidate:
	"""A registered choice: target callable, its signature and optional bound context."""

	target: Callable[..., Any]
	signature: CandidateSignature
	name: str = ""
	takes_context: bool = False
	context: Any = dataclasses.field(default=_UNBOUND, repr=False)

	def __post_init__(self) -> None:
		if not self.name:
			object.__setattr__(self, "name", getattr(self.target, "__qualname__", repr(self.target)))

	@property
	def is_bound(self) -> bool:
		return self.context is not _UNBOUND

	def __call__(self, *args: Any) -> Any:
		if not self.takes_context:
			return self.target(*args)
		if not self.is_bound:
			raise TypeError(f"candidate '{self.name}' takes a context but none is bound")
		return self.target(self.context, *args)

	def __str__(self) -> str:
		return f"{self.name}{self.signature}"


def bind_context(action: Candidate, context: Any) -> Candidate:
	"""
	Return `action` bound to `context`.

	Fails with InvalidBindTarget unless `context` is an object-category value.
	Candidates that take no context are returned unchanged.
	"""
	if not is_object(context):
		raise InvalidBindTarget(context)
	if not action.takes_context:
		return action
	return dataclasses.replace(action, context=context)


__all__ = ["Candidate", "bind_context"]
