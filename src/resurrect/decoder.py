"""Graph reconstruction from a reference table.

Decoding runs two flat passes over the table:

1. revival - each object entry carrying a type name is swapped for a bare
   instance of the class the resolver returns (when revival is enabled); the
   type marker is stripped either way.
2. resolution - every non-atom field of every entry is a reference or builder
   record and is replaced by the node it points to or the atom it builds.

Since every composite sits in the table, each entry only needs resolving one
level deep and cycles need no special handling.
"""

from __future__ import annotations

import logging
from typing import Any

from resurrect.atoms import AtomRegistry
from resurrect.errors import UnknownEncodingError
from resurrect.markers import Markers
from resurrect.resolver import Resolver
from resurrect.values import ABSENT, UNDEFINED

logger = logging.getLogger(__name__)


def _is_json_atom(value: Any) -> bool:
	return value is None or isinstance(value, (bool, int, float, str))


def _revive(cls: type) -> Any:
	# Bypass __init__: state comes from the payload, not constructor arguments
	return cls.__new__(cls)


def _assign(node: Any, key: str, value: Any) -> None:
	if isinstance(node, dict):
		node[key] = value
		return
	try:
		object.__setattr__(node, key, value)
	except AttributeError as exc:
		raise UnknownEncodingError(
			f"Cannot restore field {key!r} on {type(node).__qualname__}"
		) from exc


class Decoder:
	"""Single-use decoder; create one per ``decode`` call."""

	__slots__: tuple[str, ...] = ("markers", "atoms", "resolver", "nodes")

	markers: Markers
	atoms: AtomRegistry
	resolver: Resolver | None
	nodes: list[Any]

	def __init__(
		self,
		markers: Markers,
		atoms: AtomRegistry,
		*,
		resolver: Resolver | None = None,
	) -> None:
		self.markers = markers
		self.atoms = atoms
		# No resolver means objects come back as plain dicts
		self.resolver = resolver
		self.nodes = []

	def decode(self, data: Any) -> Any:
		"""Rebuild a value from parsed JSON ``data``."""
		if isinstance(data, list):
			return self._decode_table(data)
		if isinstance(data, dict):
			return self.resolve(data)
		if not _is_json_atom(data):
			raise UnknownEncodingError(f"Unknown encoding: {data!r}")
		return data

	def resolve(self, record: Any) -> Any:
		"""Dereference or build the value a record encodes."""
		if self.markers.is_reference(record):
			ident = self.markers.reference_id(record, len(self.nodes))
			if ident == ABSENT:
				return UNDEFINED
			return self.nodes[ident]
		if self.markers.is_builder(record):
			name, args = self.markers.builder_parts(record)
			return self.atoms.build(name, args)
		raise UnknownEncodingError(f"Unknown encoding: {record!r}")

	def clear(self) -> None:
		self.nodes = []

	def _decode_table(self, table: list[Any]) -> Any:
		if not table:
			raise UnknownEncodingError("Reference table is empty")

		nodes: list[Any] = []
		for index, entry in enumerate(table):
			if isinstance(entry, list):
				nodes.append(entry)
				continue
			if not isinstance(entry, dict):
				raise UnknownEncodingError(
					f"Malformed table entry at index {index}: {entry!r}"
				)
			name = entry.pop(self.markers.tag, None)
			if name is None or self.resolver is None:
				nodes.append(entry)
				continue
			if not isinstance(name, str):
				raise UnknownEncodingError(
					f"Type name must be a string at index {index}, got {name!r}"
				)
			nodes.append(_revive(self.resolver.get_behavior(name)))
		self.nodes = nodes

		for entry, node in zip(table, nodes):
			if isinstance(entry, list):
				for position, child in enumerate(entry):
					if not _is_json_atom(child):
						entry[position] = self.resolve(child)
				continue
			for key, child in entry.items():
				value = child if _is_json_atom(child) else self.resolve(child)
				if node is entry:
					entry[key] = value
				else:
					_assign(node, key, value)

		logger.debug("Decoded reference table with %d entries", len(nodes))
		return nodes[0]


__all__ = ["Decoder"]
