# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Matcher facade: invocation, fallback, NoMatch, binding."""

import collections.abc
import copy
import io
import pickle
import socket

import pytest

from overmatch import Matcher, NoMatch
from overmatch.candidate import bind_context
from overmatch.errors import InvalidBindTarget, MatchError


class Items(collections.abc.Sequence):
	"""Object-category sequence (unlike list, which is an array)."""

	def __init__(self, *items):
		self._items = list(items)

	def __getitem__(self, idx):
		return self._items[idx]

	def __len__(self) -> int:
		return len(self._items)


def _matcher() -> Matcher:
	return Matcher.of(
		lambda string, a, b: "string, a, b",
		lambda string, a, iterable: "string, a, Iterable",
		lambda string, integer, iterable: "string, int, Iterable",
		lambda string: "string",
		lambda integer: "int",
		lambda string, integer: "string, int",
		lambda a, b, *cc: "a, b, *cc",
		lambda a, b, *cc: "a, b, *cc: list",
		lambda a, *bb: "a, *bb",
		lambda seq: "Sequence",
		lambda *aa: "*aa",
		lambda a: "a",
	)


def _typed_matcher() -> Matcher:
	def string_a_b(string: str, a, b):
		return "string, a, b"

	def string_a_iterable(string: str, a, iterable: collections.abc.Iterable):
		return "string, a, Iterable"

	def string_int_iterable(string: str, integer: int, iterable: collections.abc.Iterable):
		return "string, int, Iterable"

	def string(string: str):
		return "string"

	def integer(integer: int):
		return "int"

	def string_int(string: str, integer: int):
		return "string, int"

	def a_b_cc(a, b, *cc):
		return "a, b, *cc"

	def a_b_cc_list(a, b, *cc: list):
		return "a, b, *cc: list"

	def a_bb(a, *bb):
		return "a, *bb"

	def sequence(seq: collections.abc.Sequence):
		return "Sequence"

	def aa(*aa):
		return "*aa"

	def a(a):
		return "a"

	return Matcher.of(
		string_a_b,
		string_a_iterable,
		string_int_iterable,
		string,
		integer,
		string_int,
		a_b_cc,
		a_b_cc_list,
		a_bb,
		sequence,
		aa,
		a,
	)


@pytest.mark.parametrize(
	"args, expected",
	[
		(("foo", "bar"), "a, *bb"),
		(("foo", 1), "string, int"),
		(("foo", 1, iter([])), "string, int, Iterable"),
		(("foo", [], Items()), "string, a, Iterable"),
		(("foo",), "string"),
		((10,), "int"),
		(([],), "a"),
		(([], []), "a, *bb"),
		(([], 1, []), "a, b, *cc: list"),
		(([], [], 1), "a, b, *cc"),
		(([], [], 1, []), "a, b, *cc"),
		((Items(),), "Sequence"),
		(("test", [], []), "string, a, b"),
		((), "*aa"),
	],
)
def test_most_specific_candidate_is_invoked(args, expected) -> None:
	assert _typed_matcher()(*args) == expected


def test_unannotated_lambdas_fall_to_first_registered() -> None:
	# Without annotations every shape scores 1; weight and order decide.
	matcher = _matcher()
	assert matcher("foo") == "string"
	assert matcher(1, 2) == "string, int"
	assert matcher(1, 2, 3, 4) == "a, b, *cc"
	assert matcher() == "*aa"


def _from_numbers(*numbers: int):
	return list(numbers)


def _from_list(numbers: list):
	return [n for n in numbers if type(n) is int]


def _from_any(number):
	try:
		return [int(float(number))]
	except (TypeError, ValueError):
		return [0]


def _empty():
	return [0]


@pytest.mark.parametrize(
	"args, index, expected",
	[
		((0,), 0, 0),
		((1,), 0, 1),
		((1, 2, 3), 0, 1),
		((1, 2, 3), 1, 2),
		((1, 2, 3), 2, 3),
		(([1, 2, 3],), 0, 1),
		(([1, 2, 3],), 2, 3),
		((), 0, 0),
		(("foo",), 0, 0),
		(("123",), 0, 123),
		((123.123,), 0, 123),
		((["foo", 1, "bar"],), 0, 1),
		(("a", 1, True), 0, -1),
	],
)
def test_as_factory(args, index, expected) -> None:
	factory = Matcher.of(_from_numbers, _from_list, _from_any, _empty).fail_with(lambda *a: [-1])
	assert factory(*args)[index] == expected


class FactoryTarget:
	def __init__(self, things):
		self.things = list(things)

	@classmethod
	def from_variadic(cls, *things: str) -> "FactoryTarget":
		return cls(things)

	@classmethod
	def from_list(cls, things: list) -> "FactoryTarget":
		return cls.from_variadic(*things)

	@classmethod
	def from_mapping(cls, things: collections.abc.Mapping) -> "FactoryTarget":
		return cls.from_list(list(things.values()))

	@classmethod
	def from_string(cls, thing: str) -> "FactoryTarget":
		return cls.from_list([thing])


class Record(collections.abc.Mapping):
	def __init__(self, **fields):
		self._fields = fields

	def __getitem__(self, key):
		return self._fields[key]

	def __iter__(self):
		return iter(self._fields)

	def __len__(self) -> int:
		return len(self._fields)


def test_as_factory_with_classmethods() -> None:
	factory = Matcher.of(
		FactoryTarget.from_string,
		FactoryTarget.from_mapping,
		FactoryTarget.from_list,
		FactoryTarget.from_variadic,
	).fail_with(lambda *a: FactoryTarget.from_string("Failed!!"))

	assert factory("foo").things == ["foo"]
	assert factory(["foo", "bar"]).things == ["foo", "bar"]
	assert factory("a", "b", "c").things == ["a", "b", "c"]
	assert factory(Record(a="X", b="Y")).things == ["X", "Y"]
	assert factory("a", [], "x").things == ["Failed!!"]


def _set_string(self, string: str):
	self.string = string
	self.number = 0


def _set_number(self, number: int):
	self.string = "default"
	self.number = number


def _set_from_dict(self, args: dict):
	string = args.get("string")
	number = args.get("number")
	self.string = string if isinstance(string, str) else "default"
	self.number = number if type(number) is int else 0


def _set_error(self, *stuff):
	self.string = "error"
	self.number = -1


class MultiConstructor:
	_matcher = Matcher.of(_set_string, _set_number, _set_from_dict, _set_error)

	def __init__(self, *args):
		self._matcher.bind_to(self)(*args)


def test_as_multi_constructor() -> None:
	from_int = MultiConstructor(42)
	assert (from_int.number, from_int.string) == (42, "default")

	from_string = MultiConstructor("foo")
	assert (from_string.number, from_string.string) == (0, "foo")

	from_dict = MultiConstructor({"string": "Hi", "number": 3})
	assert (from_dict.number, from_dict.string) == (3, "Hi")

	from_mixed = MultiConstructor("foo", 2, [])
	assert (from_mixed.number, from_mixed.string) == (-1, "error")


def test_no_match_without_fallback_carries_args() -> None:
	def needs_int(number: int):
		return number

	matcher = Matcher.of(needs_int)
	with pytest.raises(NoMatch) as excinfo:
		matcher("foo")
	assert excinfo.value.offending_args == ["foo"]
	assert isinstance(excinfo.value, MatchError)
	assert isinstance(excinfo.value, TypeError)


def test_fallback_receives_arguments() -> None:
	def needs_int(number: int):
		return number

	seen = []
	matcher = Matcher.of(needs_int).fail_with(lambda *a: seen.append(a) or "fallback")
	assert matcher("foo", 2) == "fallback"
	assert seen == [("foo", 2)]


def test_empty_matcher_uses_fallback() -> None:
	assert Matcher.of().fail_with(lambda *a: "nothing")(1, 2) == "nothing"
	with pytest.raises(NoMatch):
		Matcher.of()()


def test_resolve_and_explain_do_not_invoke() -> None:
	calls = []

	def record(number: int):
		calls.append(number)

	matcher = Matcher.of(record)
	chosen = matcher.resolve(1)
	assert chosen is not None and chosen.target is record
	assert matcher.resolve("x") is None
	assert matcher.explain(1).winner.candidate is chosen
	assert calls == []


def test_bind_to_rejects_non_objects() -> None:
	matcher = Matcher.of(_set_number)
	with pytest.raises(InvalidBindTarget) as excinfo:
		matcher.bind_to(42)
	assert excinfo.value.offending_value == 42


def test_bind_context_rejects_non_objects() -> None:
	candidate = Matcher.of(_set_number).resolve(1)
	with pytest.raises(InvalidBindTarget) as excinfo:
		bind_context(candidate, 42)
	assert excinfo.value.offending_value == 42
	assert not candidate.is_bound


def test_bind_to_is_a_new_view() -> None:
	class Target:
		pass

	matcher = Matcher.of(_set_number)
	target = Target()
	bound = matcher.bind_to(target)
	assert bound is not matcher
	assert bound.registry is matcher.registry
	bound(7)
	assert target.number == 7
	# The unbound matcher still has no context to hand the candidate.
	with pytest.raises(TypeError):
		matcher(7)


def test_unbound_context_candidate_call_fails() -> None:
	candidate = Matcher.of(_set_number).resolve(1)
	assert candidate.takes_context
	with pytest.raises(TypeError):
		candidate(1)


def test_binding_leaves_plain_candidates_alone() -> None:
	def plain(number: int):
		return number * 2

	candidate = Matcher.of(plain).resolve(1)
	assert bind_context(candidate, object()) is candidate
	assert Matcher.of(plain).bind_to(object())(4) == 8


def test_matcher_cannot_be_pickled_or_copied() -> None:
	matcher = Matcher.of(lambda: None)
	with pytest.raises(TypeError):
		pickle.dumps(matcher)
	with pytest.raises(TypeError):
		copy.copy(matcher)
	with pytest.raises(TypeError):
		copy.deepcopy(matcher)


def test_handle_annotations_dispatch_on_handles() -> None:
	def on_socket(sock: socket.socket):
		return "socket"

	def on_stream(stream: io.StringIO):
		return "stream"

	matcher = Matcher.of(on_socket, on_stream).fail_with(lambda *a: "fallback")
	with socket.socket() as sock:
		assert matcher(sock) == "socket"
	# Handles share one category, so the first registered handle candidate wins.
	assert matcher(io.StringIO()) == "socket"
	assert matcher("text") == "fallback"
