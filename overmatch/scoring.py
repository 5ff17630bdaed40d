# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Specificity and weight scoring of one variant against one argument tuple.

Specificity counts satisfied constraints (plus a baseline of 1 for any
arity-valid variant); 0 means "no match". A single mismatched constrained
argument scores the whole variant 0: there is no partial credit.

Weight only breaks ties between equally specific variants. Exact arity beats
skipped optionals, which beat variadic absorption:

	base   = 0 if the signature is variadic else arg_count
	diff   = signature parameter count - arg_count
	weight = base - |diff| - (arg_count if diff > 0 else 0)

The polynomial is reproduced as-is, including its steep negative slope for
many skipped optionals at large argument counts.
"""

from __future__ import annotations

from typing import Any, Sequence

from overmatch.core.classify import matches
from overmatch.signature import ParameterDescriptor, SignatureVariant


def _applicable_param(variant: SignatureVariant, index: int) -> ParameterDescriptor:
	params = variant.effective_params
	if index < len(params):
		return params[index]
	# Only reachable when the variant absorbs surplus args; its last param is variadic.
	return params[-1]


def specificity(variant: SignatureVariant, args: Sequence[Any]) -> int:
	"""Non-negative match score of `variant` for `args`; 0 means no match."""
	arg_count = len(args)
	absorbs = variant.can_absorb(arg_count)
	if not (absorbs or arg_count == variant.effective_count):
		return 0
	if arg_count == 0:
		return 1

	score = 1
	for index, value in enumerate(args):
		if index >= variant.effective_count and not absorbs:
			return 0
		param = _applicable_param(variant, index)
		if param.constraint is None:
			continue
		if not matches(value, param.constraint):
			return 0
		score += 1
	return score


def compute_weight(variant: SignatureVariant, arg_count: int) -> int:
	weight = 0 if variant.signature.is_variadic else arg_count
	diff = variant.signature.param_count - arg_count
	if diff != 0:
		weight -= abs(diff)
		if diff > 0:
			weight -= arg_count
	return weight


def weight(variant: SignatureVariant, arg_count: int) -> int:
	"""Tie-break score, memoized on the variant per argument count."""
	cached = variant.cached_weight(arg_count)
	if cached is not None:
		return cached
	value = compute_weight(variant, arg_count)
	variant.store_weight(arg_count, value)
	return value


def precompute_weights(variant: SignatureVariant, up_to: int) -> None:
	"""Populate the weight table for arities 0..up_to so dispatch only reads it."""
	for arg_count in range(up_to + 1):
		weight(variant, arg_count)


__all__ = ["specificity", "weight", "compute_weight", "precompute_weights"]
