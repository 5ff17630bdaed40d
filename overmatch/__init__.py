# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
overmatch: ad-hoc multiple dispatch by most-specific signature match.

Given an ordered set of candidates and a tuple of positional arguments, pick
the candidate whose declared signature matches those values most
specifically; ties go to the exact-arity shape, then to registration order.
"""

from overmatch.candidate import Candidate, bind_context
from overmatch.config import MatchConfig, load_match_config
from overmatch.core.classify import all_same_type, categorize, matches
from overmatch.core.constraints import ClassConstraint, PrimitiveConstraint, PrimitiveKind
from overmatch.errors import (
	DeclarationError,
	InvalidBindTarget,
	InvalidSignature,
	MatchError,
	NoMatch,
)
from overmatch.introspect import candidate_from, declare, signature_of
from overmatch.matcher import Matcher
from overmatch.parser import parse_declaration
from overmatch.registry import CandidateRegistry, build_registry
from overmatch.resolver import Resolution, explain, resolve
from overmatch.signature import CandidateSignature, ParameterDescriptor, SignatureVariant, expand_variants

__all__ = [
	"Candidate",
	"CandidateRegistry",
	"CandidateSignature",
	"ClassConstraint",
	"DeclarationError",
	"InvalidBindTarget",
	"InvalidSignature",
	"MatchConfig",
	"MatchError",
	"Matcher",
	"NoMatch",
	"ParameterDescriptor",
	"PrimitiveConstraint",
	"PrimitiveKind",
	"Resolution",
	"SignatureVariant",
	"all_same_type",
	"bind_context",
	"build_registry",
	"candidate_from",
	"categorize",
	"declare",
	"expand_variants",
	"explain",
	"load_match_config",
	"matches",
	"parse_declaration",
	"resolve",
	"signature_of",
]
