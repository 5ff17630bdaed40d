# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Error taxonomy for dispatch resolution.

Every error is a `TypeError` subclass: a failed dispatch is, from the caller's
point of view, a call made with arguments no candidate accepts.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence


class MatchError(TypeError):
	"""Base class for all overmatch errors."""


class InvalidSignature(MatchError):
	"""
	A candidate's declared parameter list cannot be registered.

	Raised at registry-build (or declaration/introspection) time; `candidate`
	names the offending candidate when known.
	"""

	def __init__(self, message: str, *, candidate: Optional[str] = None) -> None:
		if candidate:
			message = f"{candidate}: {message}"
		super().__init__(message)
		self.candidate = candidate


class DeclarationError(InvalidSignature):
	"""User-facing error for a malformed signature declaration string."""

	def __init__(self, message: str, *, text: str, column: Optional[int] = None) -> None:
		super().__init__(message)
		self.text = text
		self.column = column


class NoMatch(MatchError):
	"""No candidate matched and no fallback was configured."""

	def __init__(self, args: Sequence[Any]) -> None:
		super().__init__("no matching candidate found for given values")
		self.offending_args: List[Any] = list(args)


class InvalidBindTarget(MatchError):
	"""Only object-category values can be bound as a candidate's context."""

	def __init__(self, value: Any) -> None:
		super().__init__(f'only objects can be bound to candidates; "{type(value).__name__}" given')
		self.offending_value = value


__all__ = [
	"MatchError",
	"InvalidSignature",
	"DeclarationError",
	"NoMatch",
	"InvalidBindTarget",
]
