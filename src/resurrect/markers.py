from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from resurrect.errors import UnknownEncodingError
from resurrect.values import ABSENT, PlainJSON

DEFAULT_PREFIX = "#"


@dataclass(frozen=True, slots=True)
class Markers:
	"""Reserved key names derived from a single prefix.

	The same key (the bare prefix) carries a reference id on reference records
	and a type name on object table entries. The two never meet: table entries
	only appear at the top level of the table, records only as field values.
	"""

	prefix: str = DEFAULT_PREFIX
	tag: str = field(init=False)
	build: str = field(init=False)
	value: str = field(init=False)
	pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)

	def __post_init__(self) -> None:
		if not self.prefix:
			raise ValueError("Marker prefix must be a non-empty string")
		object.__setattr__(self, "tag", self.prefix)
		object.__setattr__(self, "build", self.prefix + ".")
		object.__setattr__(self, "value", self.prefix + "v")
		object.__setattr__(self, "pattern", re.compile("^" + re.escape(self.prefix)))

	def is_reserved(self, key: str) -> bool:
		return self.pattern.match(key) is not None

	def ref(self, ident: int) -> dict[str, PlainJSON]:
		return {self.tag: ident}

	def builder(self, name: str, args: list[PlainJSON]) -> dict[str, PlainJSON]:
		return {self.build: name, self.value: args}

	def is_reference(self, record: Any) -> bool:
		return isinstance(record, dict) and self.tag in record

	def is_builder(self, record: Any) -> bool:
		return isinstance(record, dict) and self.build in record

	def reference_id(self, record: dict[str, Any], size: int) -> int:
		"""Validate a reference record's id against a table of ``size`` entries."""
		ident = record[self.tag]
		if isinstance(ident, bool) or not isinstance(ident, int):
			raise UnknownEncodingError(f"Reference id must be an integer, got {ident!r}")
		if ident != ABSENT and not 0 <= ident < size:
			raise UnknownEncodingError(
				f"Dangling reference {ident} (table has {size} entries)"
			)
		return ident

	def builder_parts(self, record: dict[str, Any]) -> tuple[str, list[Any]]:
		name = record[self.build]
		if not isinstance(name, str):
			raise UnknownEncodingError(f"Builder name must be a string, got {name!r}")
		args = record.get(self.value, [])
		# A bare value is treated as a single argument
		if not isinstance(args, list):
			args = [args]
		return name, args


__all__ = ["DEFAULT_PREFIX", "Markers"]
