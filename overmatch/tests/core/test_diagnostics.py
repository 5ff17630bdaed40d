# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from overmatch.core.diagnostics import Diagnostic
from overmatch.errors import DeclarationError, InvalidBindTarget, InvalidSignature, NoMatch


def test_from_error_codes() -> None:
	decl = Diagnostic.from_error(DeclarationError("bad", text="a b", column=3), phase="declaration")
	assert (decl.code, decl.column, decl.notes) == ("E-DECL", 3, ["a b"])
	assert Diagnostic.from_error(InvalidSignature("bad", candidate="f"), phase="build").code == "E-SIG"
	no_match = Diagnostic.from_error(NoMatch(["x", 1]), phase="resolve")
	assert (no_match.code, no_match.notes) == ("E-NOMATCH", ["'x'", "1"])
	assert Diagnostic.from_error(InvalidBindTarget(1), phase="bind").code == "E-BIND"


def test_render_and_json() -> None:
	diag = Diagnostic(message="boom", code="E-ARG", phase="arguments", notes=["hint"])
	assert diag.render() == "error: arguments: [E-ARG] boom\n  note: hint"
	assert diag.to_json() == {
		"phase": "arguments",
		"code": "E-ARG",
		"message": "boom",
		"severity": "error",
		"column": None,
		"notes": ["hint"],
	}
