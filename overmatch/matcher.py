# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Top-level dispatch entry point.

	area = Matcher.of(
		lambda r: 3.14159 * r * r,
		lambda w, h: w * h,
	).fail_with(lambda *args: None)

	area(2.0)      # first candidate
	area(2, 3)     # second candidate

A matcher wraps one registry. Calling it resolves the candidate for the given
positional arguments and invokes it. When nothing matches, the configured
fallback is invoked; without one, NoMatch is raised carrying the arguments.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from overmatch.candidate import Candidate, bind_context
from overmatch.config import MatchConfig
from overmatch.core.classify import is_object
from overmatch.errors import InvalidBindTarget, NoMatch
from overmatch.registry import CandidateRegistry, build_registry
from overmatch.resolver import Resolution, explain, resolve

_NO_CONTEXT = object()


class Matcher:
	"""Callable multiple-dispatch wrapper over an ordered set of candidates."""

	def __init__(
		self,
		registry: CandidateRegistry,
		*,
		fallback: Optional[Callable[..., Any]] = None,
		context: Any = _NO_CONTEXT,
	) -> None:
		self._registry = registry
		self._fallback = fallback
		self._context = context

	@classmethod
	def of(cls, *candidates: Any, config: Optional[MatchConfig] = None) -> "Matcher":
		"""Build a matcher from candidates or plain callables, in priority order."""
		return cls(build_registry(candidates, config=config))

	@property
	def registry(self) -> CandidateRegistry:
		return self._registry

	@property
	def fallback(self) -> Optional[Callable[..., Any]]:
		return self._fallback

	def fail_with(self, fallback: Callable[..., Any]) -> "Matcher":
		"""Set the callable used when no candidate matches; returns the matcher."""
		self._fallback = fallback
		return self

	def bind_to(self, context: Any) -> "Matcher":
		"""
		Return a matcher sharing this registry whose candidates receive `context`.

		The original matcher is left unbound.
		"""
		if not is_object(context):
			raise InvalidBindTarget(context)
		return Matcher(self._registry, fallback=self._fallback, context=context)

	def resolve(self, *args: Any) -> Optional[Candidate]:
		"""The candidate `args` would dispatch to, or None; never invokes anything."""
		return resolve(args, self._registry, None)

	def explain(self, *args: Any) -> Resolution:
		return explain(args, self._registry)

	def __call__(self, *args: Any) -> Any:
		chosen = resolve(args, self._registry, None)
		if chosen is None:
			if self._fallback is None:
				raise NoMatch(args)
			return self._fallback(*args)
		if self._context is not _NO_CONTEXT:
			chosen = bind_context(chosen, self._context)
		return chosen(*args)

	def __getstate__(self):
		raise TypeError(f"{type(self).__name__} can't be pickled")

	def __copy__(self):
		raise TypeError(f"{type(self).__name__} can't be copied; use bind_to() for a rebound view")

	def __deepcopy__(self, memo):
		raise TypeError(f"{type(self).__name__} can't be copied; use bind_to() for a rebound view")

	def __repr__(self) -> str:
		bound = "" if self._context is _NO_CONTEXT else f" bound to {type(self._context).__name__}"
		return f"<Matcher {len(self._registry.candidates)} candidates{bound}>"


__all__ = ["Matcher"]
