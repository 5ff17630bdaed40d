# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Resolution configuration sourced from keyword arguments or the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _flag(name: str, default: bool = False) -> bool:
	raw = os.getenv(name)
	if raw is None:
		return default
	return raw.strip().lower() in {"1", "true", "yes", "on"}


def _int(name: str, default: int) -> int:
	raw = os.getenv(name)
	if raw is None:
		return default
	try:
		return int(raw)
	except ValueError:
		return default


@dataclass(frozen=True)
class MatchConfig:
	"""
	Immutable registry/resolver configuration.

	eager_expansion: expand candidate variants when the registry is built
	  (otherwise on first use, behind a lock).
	precompute_weights: fill every variant's weight table for arities
	  0..N at expansion time; 0 leaves weights to be memoized on demand.
	"""

	eager_expansion: bool = True
	precompute_weights: int = 0
	log_level: str = "WARNING"


def resolve_log_level_name(default: str = "WARNING") -> str:
	"""Resolve the log level with a package-prefixed override."""
	value = os.getenv("OVERMATCH_LOG_LEVEL")
	if value is None:
		value = os.getenv("LOG_LEVEL", default)
	return value.strip().upper()


def load_match_config() -> MatchConfig:
	"""Load configuration from OVERMATCH_* environment variables."""
	return MatchConfig(
		eager_expansion=_flag("OVERMATCH_EAGER", True),
		precompute_weights=max(0, _int("OVERMATCH_PRECOMPUTE_WEIGHTS", 0)),
		log_level=resolve_log_level_name(),
	)


__all__ = ["MatchConfig", "load_match_config", "resolve_log_level_name"]
