"""Typed atoms: values plain JSON cannot carry.

Each kind pairs a predicate and an encoder producing builder arguments with a
constructor that rebuilds the value from those arguments. The set of kinds is
closed; decoding only ever calls one of the constructors below, never an
arbitrary name looked up at runtime.
"""

from __future__ import annotations

import datetime as dt
import math
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from resurrect.errors import UnknownEncodingError
from resurrect.nodes import ElementTreeNodeCodec, NodeCodec
from resurrect.values import MAX_SAFE_INTEGER, PlainJSON


@dataclass(frozen=True, slots=True)
class AtomKind:
	name: str
	check: Callable[[Any], bool]
	encode: Callable[[Any], list[PlainJSON]]
	build: Callable[..., Any]


# Number


def _is_non_finite(value: Any) -> bool:
	return isinstance(value, float) and not math.isfinite(value)


def _number_to_args(value: float) -> list[PlainJSON]:
	if math.isnan(value):
		return ["NaN"]
	return ["Infinity" if value > 0 else "-Infinity"]


def _build_number(text: str | float | int = 0) -> float:
	if isinstance(text, (int, float)) and not isinstance(text, bool):
		return float(text)
	if not isinstance(text, str):
		raise UnknownEncodingError(f"Invalid Number argument: {text!r}")
	try:
		return float(text.strip())
	except ValueError as exc:
		raise UnknownEncodingError(f"Invalid Number argument: {text!r}") from exc


# BigInt


def _is_big_integer(value: Any) -> bool:
	return (
		isinstance(value, int)
		and not isinstance(value, bool)
		and not -MAX_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER
	)


def _build_big_integer(text: str | int) -> int:
	if isinstance(text, bool):
		raise UnknownEncodingError(f"Invalid BigInt argument: {text!r}")
	if isinstance(text, int):
		return text
	try:
		return int(text, 10)
	except ValueError as exc:
		raise UnknownEncodingError(f"Invalid BigInt argument: {text!r}") from exc


# Date


def _date_to_args(value: dt.datetime) -> list[PlainJSON]:
	if value.tzinfo is None:
		value = value.replace(tzinfo=dt.UTC)
	value = value.astimezone(dt.UTC)
	return [value.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"]


def _build_date(text: str) -> dt.datetime:
	try:
		parsed = dt.datetime.fromisoformat(text)
	except (TypeError, ValueError) as exc:
		raise UnknownEncodingError(f"Invalid Date argument: {text!r}") from exc
	if parsed.tzinfo is None:
		return parsed.replace(tzinfo=dt.UTC)
	return parsed.astimezone(dt.UTC)


# RegExp

_FLAG_LETTERS: dict[str, re.RegexFlag] = {
	"i": re.IGNORECASE,
	"m": re.MULTILINE,
	"s": re.DOTALL,
	"x": re.VERBOSE,
	"a": re.ASCII,
}
# JavaScript flags with no Python counterpart
_IGNORED_FLAGS = frozenset("guy")


def _is_pattern(value: Any) -> bool:
	return isinstance(value, re.Pattern) and isinstance(value.pattern, str)


def _pattern_to_args(value: re.Pattern[str]) -> list[PlainJSON]:
	flags = "".join(
		letter for letter, flag in _FLAG_LETTERS.items() if value.flags & flag
	)
	return [value.pattern, flags]


def _build_pattern(source: str, flags: str = "") -> re.Pattern[str]:
	compiled = 0
	for letter in flags:
		if letter in _IGNORED_FLAGS:
			continue
		flag = _FLAG_LETTERS.get(letter)
		if flag is None:
			raise UnknownEncodingError(f"Unknown RegExp flag {letter!r}")
		compiled |= flag
	try:
		return re.compile(source, compiled)
	except re.error as exc:
		raise UnknownEncodingError(f"Invalid RegExp source {source!r}: {exc}") from exc


class AtomRegistry:
	"""The closed table of typed atom kinds, keyed by builder name."""

	__slots__: tuple[str, ...] = ("_kinds", "node_codec")

	_kinds: dict[str, AtomKind]
	node_codec: NodeCodec

	def __init__(self, node_codec: NodeCodec | None = None) -> None:
		self.node_codec = node_codec or ElementTreeNodeCodec()
		codec = self.node_codec
		kinds = [
			AtomKind("Number", _is_non_finite, _number_to_args, _build_number),
			AtomKind("BigInt", _is_big_integer, lambda v: [str(v)], _build_big_integer),
			AtomKind("Date", lambda v: isinstance(v, dt.datetime), _date_to_args, _build_date),
			AtomKind("RegExp", _is_pattern, _pattern_to_args, _build_pattern),
			AtomKind(
				"Resurrect.Node",
				codec.is_node,
				lambda v: [codec.serialize(v)],
				codec.parse,
			),
		]
		self._kinds = {kind.name: kind for kind in kinds}

	def __iter__(self) -> Iterator[AtomKind]:
		return iter(self._kinds.values())

	def __contains__(self, name: object) -> bool:
		return name in self._kinds

	def classify(self, value: Any) -> AtomKind | None:
		for kind in self._kinds.values():
			if kind.check(value):
				return kind
		return None

	def build(self, name: str, args: list[Any]) -> Any:
		kind = self._kinds.get(name)
		if kind is None:
			raise UnknownEncodingError(f"Unknown builder {name!r}")
		try:
			return kind.build(*args)
		except (TypeError, SyntaxError) as exc:
			# SyntaxError: markup the node codec cannot parse
			raise UnknownEncodingError(
				f"Invalid arguments for builder {name!r}: {args!r}"
			) from exc


__all__ = ["AtomKind", "AtomRegistry"]
