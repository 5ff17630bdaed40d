# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Command-line driver: explain how a set of declared signatures dispatches.

	python -m overmatch explain -c "a: int" -c "*rest: str" -- 1
	python -m overmatch check -c "a: int, *b: str"

Arguments are Python literals (`1`, `"'text'"`, `"[1, 2]"`, `None`).
Exit codes: 0 matched (or fell back with --fallback), 1 no match,
2 invalid declaration or argument.
"""

from __future__ import annotations

import argparse
import ast
import dataclasses
import json
import logging
import sys
from typing import Any, List, Optional

from overmatch.candidate import Candidate
from overmatch.config import MatchConfig, load_match_config
from overmatch.core.diagnostics import Diagnostic
from overmatch.errors import MatchError
from overmatch.log import configure_logging
from overmatch.parser import parse_declaration
from overmatch.registry import CandidateRegistry
from overmatch.resolver import Resolution, explain
from overmatch.signature import expand_variants

logger = logging.getLogger(__name__)

EXIT_MATCH = 0
EXIT_NO_MATCH = 1
EXIT_INVALID = 2


def _label(name: str):
	def target(*_args: Any) -> str:
		return name

	return target


def _candidates(declarations: List[str]) -> List[Candidate]:
	out: List[Candidate] = []
	for idx, text in enumerate(declarations):
		name = f"#{idx} ({text})"
		out.append(Candidate(target=_label(name), signature=parse_declaration(text), name=name))
	return out


def _parse_values(raw: List[str]) -> List[Any]:
	values = []
	for item in raw:
		try:
			values.append(ast.literal_eval(item))
		except (ValueError, SyntaxError, TypeError) as exc:
			raise ValueError(f"argument {item!r} is not a Python literal") from exc
	return values


def _emit_failure(diags: List[Diagnostic], *, as_json: bool, exit_code: int) -> int:
	if as_json:
		print(json.dumps({"exit_code": exit_code, "diagnostics": [d.to_json() for d in diags]}))
	else:
		for diag in diags:
			print(diag.render(), file=sys.stderr)
	return exit_code


def _resolution_payload(resolution: Resolution, winner: Optional[str]) -> dict:
	return {
		"args": [repr(a) for a in resolution.args],
		"winner": winner,
		"scored": [
			{
				"candidate": item.candidate.name,
				"variant": item.entry.variant.describe(),
				"specificity": item.specificity,
				"weight": item.weight,
				"kept": item.kept,
			}
			for item in resolution.scored
		],
	}


def _print_table(resolution: Resolution) -> None:
	rows = [("candidate", "variant", "specificity", "weight", "")]
	for item in resolution.scored:
		mark = "<-" if resolution.winner is item else ""
		rows.append(
			(
				item.candidate.name,
				item.entry.variant.describe(),
				str(item.specificity),
				"-" if item.weight is None else str(item.weight),
				mark,
			)
		)
	widths = [max(len(row[col]) for row in rows) for col in range(4)]
	for row in rows:
		print("  ".join(cell.ljust(widths[col]) for col, cell in enumerate(row[:4])) + ("  " + row[4] if row[4] else ""))


def _cmd_explain(args: argparse.Namespace, config: MatchConfig) -> int:
	try:
		candidates = _candidates(args.candidate)
	except MatchError as err:
		return _emit_failure([Diagnostic.from_error(err, phase="declaration")], as_json=args.json, exit_code=EXIT_INVALID)
	try:
		values = _parse_values(args.values)
	except ValueError as err:
		return _emit_failure(
			[Diagnostic(message=str(err), code="E-ARG", phase="arguments")], as_json=args.json, exit_code=EXIT_INVALID
		)

	registry = CandidateRegistry(candidates, config=config)
	resolution = explain(values, registry)
	if resolution.matched:
		winner, exit_code = resolution.winner.candidate.name, EXIT_MATCH
	elif args.fallback:
		winner, exit_code = "fallback", EXIT_MATCH
	else:
		winner, exit_code = None, EXIT_NO_MATCH
	logger.info("explained %d values against %d candidates", len(values), len(candidates))

	if args.json:
		payload = _resolution_payload(resolution, winner)
		payload["exit_code"] = exit_code
		payload["diagnostics"] = []
		if winner is None:
			payload["diagnostics"].append(
				Diagnostic(message="no matching candidate found for given values", code="E-NOMATCH", phase="resolve").to_json()
			)
		print(json.dumps(payload))
		return exit_code

	_print_table(resolution)
	print(f"winner: {winner}" if winner else "winner: none (no match)")
	return exit_code


def _cmd_check(args: argparse.Namespace) -> int:
	diags: List[Diagnostic] = []
	report = []
	for text in args.candidate:
		try:
			signature = parse_declaration(text)
		except MatchError as err:
			diags.append(Diagnostic.from_error(err, phase="declaration"))
			continue
		report.append((text, [v.describe() for v in expand_variants(signature)]))
	if diags:
		return _emit_failure(diags, as_json=args.json, exit_code=EXIT_INVALID)
	if args.json:
		print(json.dumps({"exit_code": 0, "candidates": [{"declaration": t, "variants": v} for t, v in report], "diagnostics": []}))
		return EXIT_MATCH
	for text, variants in report:
		print(text)
		for variant in variants:
			print(f"  {variant}")
	return EXIT_MATCH


def main(argv: list[str] | None = None) -> int:
	"""
	Parse declarations and arguments, then explain or check them.

	With --json, prints a structured payload (scores, winner, diagnostics,
	exit_code); otherwise prints a table and human-readable diagnostics.
	"""
	parser = argparse.ArgumentParser(prog="overmatch", description="Explain multiple-dispatch resolution")
	parser.add_argument("--lazy", action="store_true", help="Expand variants on first use instead of up front")
	parser.add_argument(
		"--precompute-weights",
		type=int,
		default=None,
		metavar="N",
		help="Precompute weight tables for arities 0..N",
	)
	parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (repeatable)")
	parser.add_argument("--log-format", choices=("text", "json"), default="text")
	sub = parser.add_subparsers(dest="command", required=True)

	explain_p = sub.add_parser("explain", help="Score every candidate variant for the given values")
	explain_p.add_argument(
		"-c", "--candidate", action="append", required=True, help="Signature declaration (repeatable, in priority order)"
	)
	explain_p.add_argument("--fallback", action="store_true", help="Treat no match as dispatching to a fallback")
	explain_p.add_argument("--json", action="store_true", help="Emit a JSON payload")
	explain_p.add_argument("values", nargs="*", help="Argument values as Python literals")

	check_p = sub.add_parser("check", help="Validate declarations and list their variants")
	check_p.add_argument("-c", "--candidate", action="append", required=True, help="Signature declaration (repeatable)")
	check_p.add_argument("--json", action="store_true", help="Emit a JSON payload")

	args = parser.parse_args(argv)

	config = load_match_config()
	if args.lazy:
		config = dataclasses.replace(config, eager_expansion=False)
	if args.precompute_weights is not None:
		config = dataclasses.replace(config, precompute_weights=max(0, args.precompute_weights))
	level = config.log_level
	if args.verbose:
		level = "DEBUG" if args.verbose > 1 else "INFO"
	configure_logging(level, args.log_format)

	if args.command == "explain":
		return _cmd_explain(args, config)
	return _cmd_check(args)


__all__ = ["main"]
