# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Diagnostic records for the command-line driver.

A message plus optional code, phase and notes; `from_error` maps the error
taxonomy onto codes so JSON output stays stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from overmatch.errors import DeclarationError, InvalidBindTarget, InvalidSignature, MatchError, NoMatch


@dataclass
class Diagnostic:
	"""Represents a driver diagnostic (error/warning/note)."""

	message: str
	code: Optional[str] = None
	phase: Optional[str] = None
	severity: str = "error"
	column: Optional[int] = None
	notes: list[str] = field(default_factory=list)

	@classmethod
	def from_error(cls, err: MatchError, *, phase: str) -> "Diagnostic":
		if isinstance(err, DeclarationError):
			return cls(message=str(err), code="E-DECL", phase=phase, column=err.column, notes=[err.text])
		if isinstance(err, InvalidSignature):
			return cls(message=str(err), code="E-SIG", phase=phase)
		if isinstance(err, NoMatch):
			return cls(message=str(err), code="E-NOMATCH", phase=phase, notes=[repr(a) for a in err.offending_args])
		if isinstance(err, InvalidBindTarget):
			return cls(message=str(err), code="E-BIND", phase=phase)
		return cls(message=str(err), phase=phase)

	def to_json(self) -> Dict[str, Any]:
		return {
			"phase": self.phase,
			"code": self.code,
			"message": self.message,
			"severity": self.severity,
			"column": self.column,
			"notes": self.notes,
		}

	def render(self) -> str:
		where = f"{self.phase}: " if self.phase else ""
		code = f"[{self.code}] " if self.code else ""
		lines = [f"{self.severity}: {where}{code}{self.message}"]
		lines.extend(f"  note: {note}" for note in self.notes)
		return "\n".join(lines)


__all__ = ["Diagnostic"]
