# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Candidate resolution atop CandidateRegistry.

Rules:
- Every registry entry is scored for the argument tuple, in registration order.
- Entries scoring specificity 0 are skipped.
- Remaining entries fill a (specificity, weight) table; the first entry to
  claim a slot keeps it, later entries with the same pair are discarded.
- The winner has the highest specificity, then the highest weight within it.
- No match returns the caller's fallback. The resolver never raises for it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from overmatch.candidate import Candidate
from overmatch.registry import CandidateRegistry, RegistryEntry
from overmatch.scoring import specificity, weight

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredEntry:
	"""A registry entry with its scores for one argument tuple."""

	entry: RegistryEntry
	specificity: int
	weight: Optional[int]  # None when specificity is 0
	kept: bool = False  # claimed its (specificity, weight) slot first

	@property
	def candidate(self) -> Candidate:
		return self.entry.candidate


@dataclass(frozen=True)
class Resolution:
	"""Full account of one resolution: every score plus the winner."""

	args: Tuple[Any, ...]
	scored: Tuple[ScoredEntry, ...] = field(default_factory=tuple)
	winner: Optional[ScoredEntry] = None

	@property
	def matched(self) -> bool:
		return self.winner is not None


def _slots(args: Sequence[Any], registry: CandidateRegistry) -> Tuple[Dict[int, Dict[int, ScoredEntry]], List[ScoredEntry]]:
	table: Dict[int, Dict[int, ScoredEntry]] = {}
	scored: List[ScoredEntry] = []
	arg_count = len(args)
	for entry in registry:
		score = specificity(entry.variant, args)
		if score == 0:
			scored.append(ScoredEntry(entry, 0, None))
			continue
		w = weight(entry.variant, arg_count)
		by_weight = table.setdefault(score, {})
		kept = w not in by_weight
		item = ScoredEntry(entry, score, w, kept)
		if kept:
			by_weight[w] = item
		scored.append(item)
	return table, scored


def _pick(table: Dict[int, Dict[int, ScoredEntry]]) -> Optional[ScoredEntry]:
	if not table:
		return None
	by_weight = table[max(table)]
	return by_weight[max(by_weight)]


def explain(args: Sequence[Any], registry: CandidateRegistry) -> Resolution:
	"""Score every entry and report the winner (if any) without choosing a fallback."""
	args = tuple(args)
	table, scored = _slots(args, registry)
	return Resolution(args=args, scored=tuple(scored), winner=_pick(table))


def resolve(args: Sequence[Any], registry: CandidateRegistry, fallback: Any) -> Any:
	"""
	Return the most specific candidate for `args`, or `fallback`.

	Pure with respect to the registry: the only state touched is the weight memo.
	"""
	if not registry:
		return fallback
	table, _ = _slots(args, registry)
	winner = _pick(table)
	if winner is None:
		if logger.isEnabledFor(logging.DEBUG):
			logger.debug("no candidate matched %d args; using fallback", len(args))
		return fallback
	if logger.isEnabledFor(logging.DEBUG):
		logger.debug(
			"resolved %d args to %s (specificity=%d weight=%d)",
			len(args),
			winner.candidate.name,
			winner.specificity,
			winner.weight,
		)
	return winner.candidate


__all__ = ["ScoredEntry", "Resolution", "explain", "resolve"]
