"""Public entry points.

Example::

	from resurrect import Resurrect, register

	@register
	class Foo:
		def greet(self) -> str:
			return "hello"

	necromancer = Resurrect()
	foo = necromancer.resurrect(necromancer.stringify(Foo()))
	foo.greet()  # "hello"

	pair = necromancer.resurrect(necromancer.stringify([foo, foo]))
	pair[0] is pair[1]  # True
"""

from __future__ import annotations

import json
import re
from collections.abc import Sequence
from typing import Any, override

from resurrect.atoms import AtomRegistry
from resurrect.config import ResurrectOptions
from resurrect.decoder import Decoder
from resurrect.encoder import Encoder, ReplacerFn
from resurrect.errors import MalformedPayloadError
from resurrect.markers import DEFAULT_PREFIX, Markers
from resurrect.nodes import NodeCodec
from resurrect.resolver import Resolver, default_registry
from resurrect.values import OMIT, PlainJSON

Replacer = ReplacerFn | Sequence[str]


def _accept_keys(keys: Sequence[str]) -> ReplacerFn:
	accepted = frozenset(keys)

	def replacer(key: str, value: Any) -> Any:
		return value if key in accepted else OMIT

	return replacer


def _as_replacer(replacer: Replacer | None) -> ReplacerFn | None:
	if replacer is None or callable(replacer):
		return replacer
	if isinstance(replacer, str):
		raise TypeError("replacer must be a callable or a sequence of keys, not str")
	return _accept_keys(replacer)


class Resurrect:
	"""A configured codec. Instances hold settings only and may be shared."""

	__slots__: tuple[str, ...] = ("options", "markers", "atoms", "resolver")

	options: ResurrectOptions
	markers: Markers
	atoms: AtomRegistry
	resolver: Resolver

	def __init__(
		self,
		*,
		prefix: str = DEFAULT_PREFIX,
		cleanup: bool = False,
		revive: bool = True,
		resolver: Resolver | None = None,
		node_codec: NodeCodec | None = None,
	) -> None:
		self.options = ResurrectOptions(prefix=prefix, cleanup=cleanup, revive=revive)
		self.markers = Markers(prefix)
		self.atoms = AtomRegistry(node_codec)
		self.resolver = resolver if resolver is not None else default_registry

	@classmethod
	def from_options(
		cls,
		options: ResurrectOptions,
		*,
		resolver: Resolver | None = None,
		node_codec: NodeCodec | None = None,
	) -> "Resurrect":
		return cls(
			prefix=options.prefix,
			cleanup=options.cleanup,
			revive=options.revive,
			resolver=resolver,
			node_codec=node_codec,
		)

	@property
	def prefix(self) -> str:
		return self.options.prefix

	@property
	def cleanup(self) -> bool:
		return self.options.cleanup

	@property
	def revive(self) -> bool:
		return self.options.revive

	def stringify(
		self,
		obj: Any,
		replacer: Replacer | None = None,
		indent: int | str | None = None,
	) -> str:
		"""Serialize ``obj``, preserving shared references, cycles and types.

		``replacer`` is called as ``replacer(key, value)`` for each field of each
		object (never for list items or marker keys) and may return ``OMIT`` to
		drop the field. A sequence of keys keeps only those keys.
		"""
		encoder = Encoder(
			self.markers,
			self.atoms,
			resolver=self.resolver if self.revive else None,
			replacer=_as_replacer(replacer),
		)
		try:
			payload = encoder.encode(obj)
			return json.dumps(payload, indent=indent, allow_nan=False)
		finally:
			if self.cleanup:
				encoder.clear()

	def resurrect(self, text: str | bytes) -> Any:
		"""Deserialize a payload produced by ``stringify``."""
		try:
			data = json.loads(text)
		except json.JSONDecodeError as exc:
			raise MalformedPayloadError(f"Invalid payload: {exc}") from exc
		decoder = Decoder(
			self.markers,
			self.atoms,
			resolver=self.resolver if self.revive else None,
		)
		try:
			return decoder.decode(data)
		finally:
			if self.cleanup:
				decoder.clear()

	def ref(self, ident: int) -> dict[str, PlainJSON]:
		return self.markers.ref(ident)

	def builder(self, name: str, args: list[PlainJSON]) -> dict[str, PlainJSON]:
		return self.markers.builder(name, args)

	def is_reference(self, record: Any) -> bool:
		return self.markers.is_reference(record)

	def is_builder(self, record: Any) -> bool:
		return self.markers.is_builder(record)

	def escape_prefix(self) -> re.Pattern[str]:
		"""Pattern matching keys that collide with the reserved markers."""
		return self.markers.pattern

	@override
	def __repr__(self) -> str:
		opts = self.options
		return (
			f"Resurrect(prefix={opts.prefix!r}, cleanup={opts.cleanup}, "
			+ f"revive={opts.revive}, resolver={self.resolver!r})"
		)


def encode(
	obj: Any,
	*,
	replacer: Replacer | None = None,
	indent: int | str | None = None,
	**options: Any,
) -> str:
	"""Shortcut for ``Resurrect(**options).stringify(obj, replacer, indent)``."""
	return Resurrect(**options).stringify(obj, replacer, indent)


def decode(text: str | bytes, **options: Any) -> Any:
	"""Shortcut for ``Resurrect(**options).resurrect(text)``."""
	return Resurrect(**options).resurrect(text)


__all__ = ["Replacer", "Resurrect", "decode", "encode"]
