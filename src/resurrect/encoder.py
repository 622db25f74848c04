"""Graph linearization.

The encoder walks the caller's graph depth-first, in field order, and gives
every distinct dict/list/object an identifier equal to its position in a flat
reference table. Each table entry is a shallow copy of its node in which
composite children are replaced by reference records and typed atoms by
builder records, so no entry nests deeper than one level.

Identity is tracked in a side table keyed by ``id()``; the caller's objects
are never written to. The side table also holds a strong reference to each
visited node so that ids of temporaries (e.g. values produced by a replacer)
cannot be recycled mid-walk.
"""

from __future__ import annotations

import logging
import types
from collections.abc import Callable
from dataclasses import fields, is_dataclass
from typing import Any, Literal

from resurrect.atoms import AtomRegistry
from resurrect.errors import UnserializableValueError
from resurrect.markers import Markers
from resurrect.resolver import Named, Resolver, type_tag
from resurrect.values import ABSENT, UNDEFINED, OmitType, PlainJSON, is_plain_atom

logger = logging.getLogger(__name__)

ReplacerFn = Callable[[str, Any], Any | OmitType]
TableEntry = dict[str, PlainJSON] | list[PlainJSON]
NodeKind = Literal["atom", "object", "array"]

# (entry being filled, key or index, raw child value, child is an object field)
_Pending = tuple[TableEntry, Any, Any, bool]


def _object_fields(value: Any) -> list[tuple[str, Any]]:
	if isinstance(value, dict):
		items: dict[str, Any] = {}
		for key, item in value.items():
			name = key if isinstance(key, str) else str(key)
			if name in items:
				raise UnserializableValueError(
					f"Key {key!r} collides with another key once converted to {name!r}"
				)
			items[name] = item
		return list(items.items())
	if hasattr(value, "__dict__"):
		return list(vars(value).items())
	# slotted dataclasses
	return [(f.name, getattr(value, f.name)) for f in fields(value)]


class Encoder:
	"""Single-use encoder; create one per ``encode`` call."""

	__slots__: tuple[str, ...] = (
		"markers",
		"atoms",
		"resolver",
		"replacer",
		"table",
		"_seen",
		"_warned",
	)

	markers: Markers
	atoms: AtomRegistry
	resolver: Resolver | None
	replacer: ReplacerFn | None
	table: list[TableEntry]
	_seen: dict[int, tuple[int, Any]]
	_warned: bool

	def __init__(
		self,
		markers: Markers,
		atoms: AtomRegistry,
		*,
		resolver: Resolver | None = None,
		replacer: ReplacerFn | None = None,
	) -> None:
		self.markers = markers
		self.atoms = atoms
		# No resolver means type names are not recorded
		self.resolver = resolver
		self.replacer = replacer
		self.table = []
		self._seen = {}
		self._warned = False

	def encode(self, root: Any) -> PlainJSON:
		"""Return the JSON-ready payload for ``root``.

		An atom root is returned as a single value or record; anything else
		yields the reference table, with the root's own entry at index 0.
		"""
		if self.kind(root) == "atom":
			return self.encode_atom(root)
		stack: list[_Pending] = []
		self._encode_child(root, stack)
		while stack:
			entry, key, value, is_field = stack.pop()
			if is_field and self.replacer is not None:
				if not self.markers.is_reserved(key):
					value = self.replacer(key, value)
					if isinstance(value, OmitType):
						continue
			entry[key] = self._encode_child(value, stack)
		logger.debug("Encoded graph into %d table entries", len(self.table))
		return self.table

	def kind(self, value: Any) -> NodeKind:
		if value is UNDEFINED or is_plain_atom(value):
			return "atom"
		if self.atoms.classify(value) is not None:
			return "atom"
		if callable(value) or isinstance(value, (type, types.ModuleType)):
			raise UnserializableValueError(
				f"Can't serialize functions or types: {value!r}"
			)
		if isinstance(value, dict):
			return "object"
		if isinstance(value, (list, tuple)):
			return "array"
		if hasattr(value, "__dict__") or is_dataclass(value):
			return "object"
		raise UnserializableValueError(
			f"Unsupported value in serialization: {type(value)!r}"
		)

	def encode_atom(self, value: Any) -> PlainJSON:
		if value is UNDEFINED:
			return self.markers.ref(ABSENT)
		if is_plain_atom(value):
			return value
		kind = self.atoms.classify(value)
		if kind is None:
			raise UnserializableValueError(
				f"Unsupported value in serialization: {type(value)!r}"
			)
		return self.markers.builder(kind.name, kind.encode(value))

	def clear(self) -> None:
		self.table = []
		self._seen.clear()

	def _encode_child(self, value: Any, stack: list[_Pending]) -> PlainJSON:
		kind = self.kind(value)
		if kind == "atom":
			return self.encode_atom(value)

		seen = self._seen.get(id(value))
		if seen is not None:
			return self.markers.ref(seen[0])

		ident = len(self.table)
		# Registered before the children are queued so cycles resolve to refs
		self._seen[id(value)] = (ident, value)

		if kind == "array":
			items: list[PlainJSON] = [None] * len(value)
			self.table.append(items)
			for index in reversed(range(len(value))):
				stack.append((items, index, value[index], False))
			return self.markers.ref(ident)

		entry: dict[str, PlainJSON] = {}
		if self.resolver is not None:
			tag = type_tag(self.resolver, value)
			if isinstance(tag, Named):
				entry[self.markers.tag] = tag.name
		self.table.append(entry)
		for key, item in reversed(_object_fields(value)):
			if self.markers.is_reserved(key) and not self._warned:
				self._warned = True
				logger.warning(
					"Field %r uses the reserved marker prefix %r; it may be misread on decode",
					key,
					self.markers.prefix,
				)
			stack.append((entry, key, item, True))
		return self.markers.ref(ident)


__all__ = ["Encoder", "ReplacerFn", "TableEntry"]
