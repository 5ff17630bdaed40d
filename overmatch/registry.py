# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Candidate registry.

Holds every expanded variant paired with its originating candidate. Order is
registration order: candidates in the order supplied, each contributing its
full variant followed by its reduced variants in decreasing effective count.
The resolver relies on this order as the tie-break of last resort, so the
registry never reorders or mutates entries after expansion.

Expansion happens when the registry is built, or lazily on first use behind a
lock so concurrent first dispatches expand exactly once.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Optional, Sequence, Tuple

from overmatch.candidate import Candidate
from overmatch.config import MatchConfig
from overmatch.introspect import candidate_from
from overmatch.scoring import precompute_weights
from overmatch.signature import SignatureVariant, expand_variants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistryEntry:
	"""One (variant, candidate) pair."""

	variant: SignatureVariant
	candidate: Candidate


class CandidateRegistry:
	"""
	Ordered, immutable collection of expanded candidate variants.

	Only the per-variant weight memo changes after expansion, and it has no
	observable effect on iteration or resolution results.
	"""

	def __init__(self, candidates: Sequence[Candidate], *, config: Optional[MatchConfig] = None) -> None:
		self._config = config or MatchConfig()
		self._candidates: Tuple[Candidate, ...] = tuple(candidates)
		self._entries: Optional[Tuple[RegistryEntry, ...]] = None
		self._lock = threading.Lock()
		if self._config.eager_expansion:
			self._expand()

	@property
	def config(self) -> MatchConfig:
		return self._config

	@property
	def candidates(self) -> Tuple[Candidate, ...]:
		return self._candidates

	@property
	def is_expanded(self) -> bool:
		return self._entries is not None

	def _expand(self) -> Tuple[RegistryEntry, ...]:
		entries = self._entries
		if entries is not None:
			return entries
		with self._lock:
			if self._entries is not None:
				return self._entries
			built: List[RegistryEntry] = []
			for candidate in self._candidates:
				for variant in expand_variants(candidate.signature):
					if self._config.precompute_weights:
						precompute_weights(variant, self._config.precompute_weights)
					built.append(RegistryEntry(variant, candidate))
			self._entries = tuple(built)
			logger.debug(
				"expanded %d candidates into %d variants", len(self._candidates), len(self._entries)
			)
			return self._entries

	@property
	def entries(self) -> Tuple[RegistryEntry, ...]:
		return self._expand()

	def __iter__(self) -> Iterator[RegistryEntry]:
		return iter(self._expand())

	def __len__(self) -> int:
		return len(self._expand())

	def __bool__(self) -> bool:
		return bool(self._candidates)

	def __repr__(self) -> str:
		state = f"{len(self._entries)} variants" if self._entries is not None else "unexpanded"
		return f"<CandidateRegistry {len(self._candidates)} candidates, {state}>"


def build_registry(candidates: Iterable[Any], *, config: Optional[MatchConfig] = None) -> CandidateRegistry:
	"""
	Build a registry from candidates or plain callables, in the given order.

	Fails with InvalidSignature when a candidate's parameter list cannot be
	registered. Errors raised while introspecting a callable name it; a
	Candidate built by hand was already validated when it was constructed.
	"""
	prepared = [candidate_from(obj) for obj in candidates]
	return CandidateRegistry(prepared, config=config)


__all__ = ["RegistryEntry", "CandidateRegistry", "build_registry"]
