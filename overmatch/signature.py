# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Candidate signatures and their fixed-arity variants.

A `CandidateSignature` is the ordered parameter list of one candidate. The
expander turns it into `SignatureVariant`s: the full view first, then one
reduced view per trailing optional parameter, each advertising one fewer
effective parameter. Reduced variants keep the whole parameter list for
constraint lookups but never absorb extra arguments variadically.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from overmatch.core.constraints import TypeConstraint, describe
from overmatch.errors import InvalidSignature


@dataclass(frozen=True)
class ParameterDescriptor:
	"""One declared parameter: position, constraint and arity flags."""

	position: int
	constraint: TypeConstraint = None
	optional: bool = False
	variadic: bool = False
	name: Optional[str] = None

	def render(self) -> str:
		label = self.name or f"arg{self.position}"
		text = f"{'*' if self.variadic else ''}{label}"
		if self.constraint is not None:
			text += f": {describe(self.constraint)}"
		if self.optional:
			text += " = ..."
		return text


@dataclass(frozen=True)
class CandidateSignature:
	"""
	Ordered parameter descriptors of one candidate.

	At most one descriptor may be variadic, and only the last one.
	"""

	params: Tuple[ParameterDescriptor, ...]

	def __post_init__(self) -> None:
		params = tuple(self.params)
		object.__setattr__(self, "params", params)
		for idx, param in enumerate(params):
			if param.position != idx:
				raise InvalidSignature(f"parameter at index {idx} declares position {param.position}")
			if param.variadic and idx != len(params) - 1:
				raise InvalidSignature(f"variadic parameter '{param.render()}' must be the last parameter")

	@property
	def param_count(self) -> int:
		return len(self.params)

	@property
	def is_variadic(self) -> bool:
		return bool(self.params) and self.params[-1].variadic

	def render(self) -> str:
		return ", ".join(p.render() for p in self.params)

	def __str__(self) -> str:
		return f"({self.render()})"


def make_signature(*params: Union[TypeConstraint, ParameterDescriptor]) -> CandidateSignature:
	"""
	Convenience builder used by tests and declarations.

	Each item is either a ready ParameterDescriptor or a constraint; positions
	are assigned left to right.
	"""
	descriptors: List[ParameterDescriptor] = []
	for idx, item in enumerate(params):
		if isinstance(item, ParameterDescriptor):
			descriptors.append(ParameterDescriptor(idx, item.constraint, item.optional, item.variadic, item.name))
		else:
			descriptors.append(ParameterDescriptor(idx, item))
	return CandidateSignature(tuple(descriptors))


@dataclass(frozen=True, eq=False)
class SignatureVariant:
	"""
	One fixed-arity view of a signature.

	`effective_count` never exceeds the signature's parameter count. Weights
	are memoized per argument count; the computation is pure, so concurrent
	first writes store the same value.
	"""

	signature: CandidateSignature
	effective_count: int
	is_full: bool
	_weights: Dict[int, int] = field(default_factory=dict, repr=False)

	def __post_init__(self) -> None:
		if not 0 <= self.effective_count <= self.signature.param_count:
			raise InvalidSignature(
				f"variant count {self.effective_count} outside 0..{self.signature.param_count}"
			)

	@property
	def params(self) -> Tuple[ParameterDescriptor, ...]:
		return self.signature.params

	@property
	def effective_params(self) -> Tuple[ParameterDescriptor, ...]:
		return self.signature.params[: self.effective_count]

	def can_absorb(self, arg_count: int) -> bool:
		"""Variadic eligibility: only the full view of a variadic signature, and only for surplus args."""
		return self.is_full and self.signature.is_variadic and arg_count > self.effective_count

	def accepts_arity(self, arg_count: int) -> bool:
		return self.can_absorb(arg_count) or arg_count == self.effective_count

	def cached_weight(self, arg_count: int) -> Optional[int]:
		return self._weights.get(arg_count)

	def store_weight(self, arg_count: int, weight: int) -> None:
		self._weights[arg_count] = weight

	def describe(self) -> str:
		shown = self.effective_params if not self.is_full else self.params
		suffix = "" if self.is_full else f" [{self.effective_count}/{self.signature.param_count}]"
		return "(" + ", ".join(p.render() for p in shown) + ")" + suffix


def trailing_optional_run(signature: CandidateSignature) -> int:
	"""
	Count trailing optional-or-variadic parameters.

	A required parameter after optional ones resets the run: it pulls every
	parameter before it back into required status.
	"""
	run = 0
	for param in signature.params:
		if param.optional or param.variadic:
			run += 1
		elif run > 0:
			run = 0
	return run


def expand_variants(signature: CandidateSignature) -> List[SignatureVariant]:
	"""Full variant first, then reduced variants in strictly decreasing effective count."""
	total = signature.param_count
	variants = [SignatureVariant(signature, total, True)]
	for dropped in range(1, trailing_optional_run(signature) + 1):
		variants.append(SignatureVariant(signature, total - dropped, False))
	return variants


__all__ = [
	"ParameterDescriptor",
	"CandidateSignature",
	"SignatureVariant",
	"make_signature",
	"trailing_optional_run",
	"expand_variants",
]
